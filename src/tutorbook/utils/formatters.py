"""
Display formatting for amounts, times and dates.
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Optional, Union

from ..scheduling.calendar_math import DateLike, as_date


CURRENCY_SYMBOLS = {
    "EUR": "€",
    "GBP": "£",
    "USD": "$",
    "JPY": "¥",
}


def format_currency(amount: Union[Decimal, int, float], currency: str = "EUR") -> str:
    """
    Format an amount with its currency symbol and two decimals.

    Examples:
        >>> format_currency(Decimal("52.5"))
        '€52.50'
        >>> format_currency(-10, "CHF")
        '-CHF 10.00'
    """
    value = Decimal(str(amount))
    sign = "-" if value < 0 else ""
    symbol = CURRENCY_SYMBOLS.get(currency.upper())
    number = f"{abs(value):,.2f}"
    if symbol:
        return f"{sign}{symbol}{number}"
    return f"{sign}{currency.upper()} {number}"


def format_time(time: Optional[str]) -> str:
    """
    Convert HH:MM to 12-hour clock.

    Examples:
        >>> format_time("16:00")
        '4:00 PM'
        >>> format_time("00:30")
        '12:30 AM'
    """
    if not time:
        return ""
    hours, minutes = time.split(":")[:2]
    h = int(hours)
    suffix = "PM" if h >= 12 else "AM"
    return f"{h % 12 or 12}:{minutes} {suffix}"


def format_date(value: DateLike) -> str:
    """
    Format a date as "Jan 3, 2024".
    """
    d = as_date(value)
    return f"{d.strftime('%b')} {d.day}, {d.year}"


def format_upcoming_date(value: DateLike, today: date) -> str:
    """
    Label an upcoming date relative to today.

    Examples:
        >>> format_upcoming_date("2024-01-02", today=date(2024, 1, 1))
        'Tomorrow'
        >>> format_upcoming_date("2024-01-05", today=date(2024, 1, 1))
        'Fri, Jan 5'
    """
    d = as_date(value)
    if d == today:
        return "Today"
    if d == today + timedelta(days=1):
        return "Tomorrow"
    return f"{d.strftime('%a, %b')} {d.day}"


def format_month(month: str) -> str:
    """
    Format YYYY-MM as "January 2024".
    """
    year, month_number = month.split("-")
    return date(int(year), int(month_number), 1).strftime("%B %Y")
