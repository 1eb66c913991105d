"""
Order lifecycle enums.

Values are stored verbatim in the document store and the database,
so they must never be renamed.
"""
from enum import Enum


class OrderStatus(str, Enum):
    """Lifecycle status of an order."""

    PENDING = "pending"
    AWAITING_PAYMENT = "awaiting_payment"
    PAID = "paid"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    ON_HOLD = "on_hold"
    CANCELLED = "cancelled"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


class PaymentStatus(str, Enum):
    """Payment gateway outcome, independent of OrderStatus."""

    PAID = "paid"
    FAILED = "failed"


class UserRole(str, Enum):
    """Roles an acting user can hold."""

    MASTER = "master"
    WORKER = "worker"
    VIEWER = "viewer"
    SUPERADMIN = "superadmin"


class TimelineStatus(str, Enum):
    """Display status of a reconstructed timeline milestone."""

    COMPLETED = "completed"
    IN_PROGRESS = "in_progress"
    PENDING = "pending"
    FAILED = "failed"
    AWAITING = "awaiting"
