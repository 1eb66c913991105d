"""Application services."""

from .notification_handler import OrderNotificationHandler
from .order_lifecycle_service import OrderLifecycleService

__all__ = ["OrderLifecycleService", "OrderNotificationHandler"]
