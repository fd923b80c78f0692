"""
Calendar-day utilities for schedule expansion.

All functions work on naive calendar dates. Weeks start on Monday.
No time-of-day or timezone conversion happens anywhere in here.
"""

from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Union


# Indexed by Python's date.weekday() (Monday == 0)
DAY_NAMES = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

# Recurrence anchor for records that never stored a creation timestamp
LEGACY_ANCHOR = date(1970, 1, 5)

DateLike = Union[date, datetime, str]


def string_to_date(value: str) -> date:
    """
    Parse a YYYY-MM-DD string.

    Raises:
        ValueError: If value is not a valid YYYY-MM-DD date

    Examples:
        >>> string_to_date("2024-01-31")
        datetime.date(2024, 1, 31)
    """
    return datetime.strptime(value, "%Y-%m-%d").date()


def date_to_string(value: date) -> str:
    """
    Format a date as YYYY-MM-DD.

    Examples:
        >>> date_to_string(date(2024, 1, 3))
        '2024-01-03'
    """
    return value.strftime("%Y-%m-%d")


def as_date(value: DateLike) -> date:
    """Coerce a date, datetime or YYYY-MM-DD string to a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return string_to_date(value)


def parse_anchor(created_at: Optional[DateLike]) -> date:
    """
    Calendar date of a creation timestamp.

    Only the leading YYYY-MM-DD of an ISO 8601 string is used, so
    "2024-01-01T23:30:00Z" is 2024-01-01 whatever the local zone is.
    A missing timestamp falls back to LEGACY_ANCHOR.
    """
    if not created_at:
        return LEGACY_ANCHOR
    if isinstance(created_at, (date, datetime)):
        return as_date(created_at)
    return string_to_date(created_at[:10])


def day_name(value: date) -> str:
    """
    Lowercase weekday name.

    Examples:
        >>> day_name(date(2024, 1, 3))
        'wednesday'
    """
    return DAY_NAMES[value.weekday()]


def monday_of(value: date) -> date:
    """
    Monday of the week containing value.

    Sunday belongs to the week that started six days earlier.

    Examples:
        >>> monday_of(date(2024, 1, 7))
        datetime.date(2024, 1, 1)
    """
    return value - timedelta(days=value.weekday())


def weeks_between_mondays(start: date, end: date) -> int:
    """
    Whole weeks from the Monday of start to the Monday of end.

    Negative when end lies in an earlier week than start.

    Raises:
        ValueError: If the Monday-to-Monday distance is not a whole
            number of weeks

    Examples:
        >>> weeks_between_mondays(date(2024, 1, 1), date(2024, 1, 17))
        2
    """
    days = (monday_of(end) - monday_of(start)).days
    weeks, remainder = divmod(days, 7)
    if remainder:
        raise ValueError(
            f"Monday difference is not a whole number of weeks: {days} days "
            f"({start} -> {end})"
        )
    return weeks


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yield every date from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)
