"""
Currency helpers for hourly rates and payment amounts.

Amounts are held as Decimal in memory and written to the JSON
store as plain numbers.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional, Union

Number = Union[int, float, str, Decimal]

CENT = Decimal("0.01")


def to_decimal(value: Any, default: Optional[Number] = None) -> Optional[Decimal]:
    """
    Convert a stored number to Decimal.

    Floats are converted through str() so 35.5 stays 35.5 and does not
    pick up binary noise.

    Args:
        value: Number, numeric string, Decimal or None
        default: Value used when value is None or empty

    Returns:
        Decimal value, or None when both value and default are None

    Raises:
        ValueError: If value is not numeric
    """
    if value is None or value == "":
        if default is None:
            return None
        value = default

    if isinstance(value, Decimal):
        return value

    if isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")

    try:
        return Decimal(str(value))
    except Exception as e:
        raise ValueError(f"Not a number: {value!r}") from e


def money_to_json(value: Optional[Decimal]) -> Optional[Union[int, float]]:
    """Render a Decimal as the int/float the JSON store expects."""
    if value is None:
        return None
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def lesson_amount(hourly_rate: Decimal, duration_minutes: int) -> Decimal:
    """
    Amount owed for a lesson.

    Examples:
        >>> lesson_amount(Decimal("35"), 90)
        Decimal('52.50')
    """
    amount = hourly_rate * Decimal(duration_minutes) / Decimal(60)
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)
