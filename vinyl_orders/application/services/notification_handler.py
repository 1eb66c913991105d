"""Reacts to persisted order events by dispatching notifications."""
import logging

from vinyl_orders.application.interfaces import INotificationService
from vinyl_orders.domain.enums import OrderStatus
from vinyl_orders.domain.events import DomainEvent, OrderShippedEvent, OrderStatusChangedEvent

logger = logging.getLogger(__name__)


class OrderNotificationHandler:
    """
    Event bus subscriber for order notifications.

    Register with `event_bus.subscribe(handler.handle)`.
    """

    def __init__(self, notification_service: INotificationService):
        self._notifications = notification_service

    async def handle(self, event: DomainEvent) -> None:
        if isinstance(event, OrderStatusChangedEvent) and event.new_status == OrderStatus.PAID.value:
            await self._notifications.send_payment_confirmation(event.order_id)
        elif isinstance(event, OrderShippedEvent):
            await self._notifications.send_shipping_notification(
                order_id=event.order_id,
                viewer_email=event.viewer_email,
                carrier=event.carrier,
                tracking_number=event.tracking_number,
            )
