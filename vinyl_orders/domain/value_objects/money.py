"""
Money helpers.

Every money field in the engine is an integer amount of MINOR currency
units (cents). Major-unit decimals only exist at the display boundary.

CRITICAL: Never use float for money.
"""
from decimal import Decimal

from ..exceptions import ValidationError

MINOR_UNITS_PER_MAJOR = 100


def ensure_minor_units(value: object, field_name: str = "amount") -> int:
    """
    Validate a money amount expressed in minor units.

    Raises:
        ValidationError: If value is not a non-negative integer
            (floats, NaN, booleans and negatives are rejected).
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"{field_name} must be an integer amount of minor currency units, "
            f"got {value!r}"
        )
    if value < 0:
        raise ValidationError(f"{field_name} must not be negative, got {value}")
    return value


def to_major_units(amount: int) -> Decimal:
    """Convert minor units to a two-decimal major-unit Decimal (2000 -> 20.00)."""
    return (Decimal(amount) / MINOR_UNITS_PER_MAJOR).quantize(Decimal("0.01"))


def format_amount(amount: int, currency_symbol: str = "") -> str:
    """Format minor units for display: format_amount(48000, "€") -> "€480.00"."""
    return f"{currency_symbol}{to_major_units(amount)}"
