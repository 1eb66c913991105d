"""Domain value objects."""

from .money import MINOR_UNITS_PER_MAJOR, ensure_minor_units, format_amount, to_major_units
from .order_number import DEFAULT_ORDER_PREFIX, OrderNumber

__all__ = [
    "DEFAULT_ORDER_PREFIX",
    "MINOR_UNITS_PER_MAJOR",
    "OrderNumber",
    "ensure_minor_units",
    "format_amount",
    "to_major_units",
]
