"""Order number value object."""
import re
from dataclasses import dataclass

from ..exceptions import ValidationError

DEFAULT_ORDER_PREFIX = "ORD"
COUNTER_WIDTH = 5

_ORDER_NUMBER_RE = re.compile(r"^([A-Za-z0-9]+)-(\d{5,})$")


@dataclass(frozen=True)
class OrderNumber:
    """
    Human-facing, distributor-scoped order identifier.

    Format: <PREFIX>-<counter zero-padded to 5 digits>
    Examples:
    - ORD-00001
    - VNL-00042
    - ORD-123456 (counters past 99999 simply grow wider)
    """
    value: str

    def __post_init__(self):
        if not self.value:
            raise ValidationError("Order number cannot be empty")
        match = _ORDER_NUMBER_RE.match(self.value)
        if not match:
            raise ValidationError(
                f"Invalid order number format (expected PREFIX-00000): {self.value}"
            )
        if int(match.group(2)) <= 0:
            raise ValidationError(f"Order number counter must be positive: {self.value}")

    @classmethod
    def from_counter(cls, prefix: str, counter: int) -> "OrderNumber":
        """Build the order number for the given distributor prefix and counter."""
        if counter <= 0:
            raise ValidationError(f"Order counter must be positive, got {counter}")
        return cls(value=f"{prefix or DEFAULT_ORDER_PREFIX}-{counter:0{COUNTER_WIDTH}d}")

    @property
    def prefix(self) -> str:
        return self.value.rsplit("-", 1)[0]

    @property
    def counter(self) -> int:
        return int(self.value.rsplit("-", 1)[1])

    def __str__(self) -> str:
        return self.value
