"""Domain enums."""

from .order_status import OrderStatus, PaymentStatus, TimelineStatus, UserRole

__all__ = [
    "OrderStatus",
    "PaymentStatus",
    "TimelineStatus",
    "UserRole",
]
