"""
Logging Notification Service Implementation.

Logs notifications instead of actually sending them. Used until an
e-mail provider is wired in, and in tests.
"""
from typing import Any, Dict, List, Optional
import logging

from vinyl_orders.application.interfaces import INotificationService


logger = logging.getLogger(__name__)


class LoggingNotificationService(INotificationService):
    """Records and logs every notification it is asked to send."""

    def __init__(self):
        self.notifications_sent: List[Dict[str, Any]] = []
        logger.info("LoggingNotificationService initialized (console logging)")

    async def send_payment_confirmation(self, order_id: str) -> None:
        self.notifications_sent.append({"type": "payment_confirmed", "order_id": order_id})
        logger.info(f"Payment confirmation queued for order {order_id}")

    async def send_shipping_notification(
        self,
        order_id: str,
        viewer_email: str,
        carrier: Optional[str],
        tracking_number: Optional[str],
    ) -> None:
        self.notifications_sent.append({
            "type": "shipped",
            "order_id": order_id,
            "viewer_email": viewer_email,
            "carrier": carrier,
            "tracking_number": tracking_number,
        })
        if tracking_number:
            logger.info(f"Shipping notification for order {order_id} sent to {viewer_email} ({tracking_number})")
        else:
            logger.warning(f"Shipping notification for order {order_id} sent to {viewer_email} without tracking")
