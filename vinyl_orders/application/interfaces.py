"""Application layer interfaces."""
from abc import ABC, abstractmethod
from typing import Optional


class INotificationService(ABC):
    """
    Interface for order notification delivery.

    Implementations (e-mail, Slack, webhook, ...) live in the
    infrastructure layer; the engine never waits on delivery.
    """

    @abstractmethod
    async def send_payment_confirmation(self, order_id: str) -> None:
        """
        Tell buyer and distributor that payment for an order was confirmed.

        Args:
            order_id: Order ID
        """
        pass

    @abstractmethod
    async def send_shipping_notification(
        self,
        order_id: str,
        viewer_email: str,
        carrier: Optional[str],
        tracking_number: Optional[str],
    ) -> None:
        """
        Tell the buyer their order shipped.

        Args:
            order_id: Order ID
            viewer_email: Buyer e-mail address
            carrier: Carrier name, if known
            tracking_number: Tracking number, if known
        """
        pass
