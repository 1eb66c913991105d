"""
Order activity timeline.

Two projections producing the same TimelineEvent shape:

* TimelineReconstructor infers the milestones an order must have gone
  through from its current field values (no stored log needed). Given the
  same order + distributor snapshot it always yields the same list.
* timeline_from_events() formats the order's persisted event log.

Both are pure: no I/O, no clock.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional

from ..entities.distributor import Distributor
from ..entities.order import Order
from ..enums import OrderStatus, PaymentStatus, TimelineStatus
from ..events.base import DomainEvent
from ..events.order_events import (
    OrderShippedEvent,
    OrderStatusChangedEvent,
    SettlementRecordedEvent,
    TrackingUpdatedEvent,
)
from ..value_objects import format_amount

DEFAULT_CURRENCY_SYMBOL = "€"


@dataclass(frozen=True)
class TimelineEvent:
    """One milestone in an order's history."""
    id: str
    title: str
    description: str
    timestamp: Optional[datetime]
    status: TimelineStatus
    details: Optional[str] = None


def _truncate(reference: str, length: int = 20) -> str:
    return reference if len(reference) <= length else f"{reference[:length]}..."


class TimelineReconstructor:
    """
    Infers an order's milestones from a snapshot.

    Milestones are emitted in a fixed order; a step whose condition does
    not hold is skipped, never padded with a placeholder.
    """

    def __init__(self, currency_symbol: str = DEFAULT_CURRENCY_SYMBOL):
        self._currency = currency_symbol

    def _money(self, amount: int) -> str:
        return format_amount(amount, self._currency)

    def reconstruct(self, order: Order, distributor: Optional[Distributor]) -> List[TimelineEvent]:
        """
        Build the timeline for an order.

        Args:
            order: Order snapshot
            distributor: Owning distributor snapshot (None if it no longer resolves)

        Returns:
            Ordered list of TimelineEvent

        Raises:
            ValidationError: If the order's totals do not reconcile
        """
        order.ensure_reconciled()

        events: List[TimelineEvent] = []
        paid = order.is_payment_confirmed
        distributor_name = distributor.name if distributor else "distributor"

        # 1. Order placed
        events.append(TimelineEvent(
            id="order_created",
            title="Order Placed",
            description=f"Customer {order.customer_name} placed order #{order.order_number or order.id}",
            timestamp=order.created_at,
            status=TimelineStatus.COMPLETED,
            details=f"{len(order.items)} item(s) - Total: {self._money(order.total_amount)}",
        ))

        # 2. Checkout session
        if order.stripe_checkout_session_id:
            events.append(TimelineEvent(
                id="checkout_created",
                title="Checkout Session Created",
                description="Stripe checkout session initiated",
                timestamp=order.created_at,
                status=TimelineStatus.COMPLETED,
                details=f"Session: {_truncate(order.stripe_checkout_session_id)}",
            ))

        # 3. Payment outcome
        if paid:
            events.append(TimelineEvent(
                id="payment_completed",
                title="Payment Successful",
                description="Customer payment completed via Stripe",
                timestamp=order.paid_at,
                status=TimelineStatus.COMPLETED,
                details=(
                    f"Payment Intent: {_truncate(order.stripe_payment_intent_id)}"
                    if order.stripe_payment_intent_id else None
                ),
            ))
        elif order.payment_status == PaymentStatus.FAILED:
            events.append(TimelineEvent(
                id="payment_failed",
                title="Payment Failed",
                description="Customer payment was declined or failed",
                timestamp=None,
                status=TimelineStatus.FAILED,
            ))
        elif order.stripe_checkout_session_id:
            events.append(TimelineEvent(
                id="payment_pending",
                title="Awaiting Payment",
                description="Waiting for customer to complete payment",
                timestamp=None,
                status=TimelineStatus.AWAITING,
            ))

        # 4. Platform fee
        if paid and order.platform_fee_amount is not None:
            events.append(TimelineEvent(
                id="platform_fee",
                title="Platform Fee Collected",
                description="Platform fee deducted from order",
                timestamp=order.paid_at,
                status=TimelineStatus.COMPLETED,
                details=f"Fee Amount: {self._money(order.platform_fee_amount)}",
            ))

        # 5-7. Payout and notifications
        if paid:
            payout = order.total_amount - (order.platform_fee_amount or 0)
            connected = distributor is not None and distributor.can_receive_payouts
            events.append(TimelineEvent(
                id="distributor_payout",
                title="Distributor Payout",
                description=(
                    f"Payout transferred to {distributor_name} via Stripe Connect"
                    if connected else "Payout pending - Distributor needs to connect Stripe"
                ),
                timestamp=order.paid_at if connected else None,
                status=TimelineStatus.COMPLETED if connected else TimelineStatus.AWAITING,
                details=f"Payout Amount: {self._money(payout)}",
            ))
            events.append(TimelineEvent(
                id="customer_email",
                title="Order Confirmation Email",
                description=f"Confirmation email sent to {order.viewer_email}",
                timestamp=order.paid_at,
                status=TimelineStatus.COMPLETED,
                details="Automated email triggered on payment success",
            ))
            events.append(TimelineEvent(
                id="distributor_notification",
                title="Distributor Notified",
                description=f"New order notification sent to {distributor_name}",
                timestamp=order.paid_at,
                status=TimelineStatus.COMPLETED,
                details=f"Sent to: {distributor.contact_email}" if distributor and distributor.contact_email else None,
            ))

        # 8. Processing
        if order.status in (OrderStatus.PROCESSING, OrderStatus.SHIPPED):
            events.append(TimelineEvent(
                id="order_processing",
                title="Order Processing",
                description="Distributor is preparing the order for shipment",
                timestamp=order.updated_at,
                status=TimelineStatus.COMPLETED,
            ))
        elif paid and order.status == OrderStatus.PAID:
            events.append(TimelineEvent(
                id="order_processing",
                title="Awaiting Processing",
                description="Order is waiting for distributor to begin processing",
                timestamp=None,
                status=TimelineStatus.AWAITING,
            ))

        # 9. Shipment
        if order.status == OrderStatus.SHIPPED:
            events.append(TimelineEvent(
                id="order_shipped",
                title="Order Shipped",
                description=f"Shipped via {order.carrier.upper()}" if order.carrier else "Order has been shipped",
                timestamp=order.shipped_at,
                status=TimelineStatus.COMPLETED,
                details=f"Tracking: {order.tracking_number}" if order.tracking_number else None,
            ))
            events.append(TimelineEvent(
                id="shipping_email",
                title="Shipping Notification Email",
                description=f"Tracking information sent to {order.viewer_email}",
                timestamp=order.shipped_at if order.tracking_number else None,
                status=TimelineStatus.COMPLETED if order.tracking_number else TimelineStatus.PENDING,
                details="Email includes tracking link" if order.tracking_number else "No tracking number provided",
            ))
        elif paid and order.status != OrderStatus.CANCELLED:
            events.append(TimelineEvent(
                id="order_shipped",
                title="Shipment Pending",
                description="Order has not been shipped yet",
                timestamp=None,
                status=TimelineStatus.PENDING,
            ))

        # 10. Cancelled
        if order.status == OrderStatus.CANCELLED:
            events.append(TimelineEvent(
                id="order_cancelled",
                title="Order Cancelled",
                description="This order has been cancelled",
                timestamp=order.updated_at,
                status=TimelineStatus.FAILED,
            ))

        return events

    def from_events(self, events: Iterable[DomainEvent]) -> List[TimelineEvent]:
        """Format a persisted order event log, oldest first."""
        timeline: List[TimelineEvent] = []
        for event in events:
            formatted = self._format_event(event)
            if formatted is not None:
                timeline.append(formatted)
        return timeline

    def _format_event(self, event: DomainEvent) -> Optional[TimelineEvent]:
        if isinstance(event, OrderStatusChangedEvent):
            new_status = OrderStatus(event.new_status)
            return TimelineEvent(
                id=event.event_id,
                title=f"Status changed to {new_status.label}",
                description=f"{OrderStatus(event.previous_status).label} -> {new_status.label}",
                timestamp=event.occurred_at,
                status=TimelineStatus.FAILED if new_status == OrderStatus.CANCELLED else TimelineStatus.COMPLETED,
                details=f"By: {event.actor_id}" if event.actor_id else None,
            )
        if isinstance(event, SettlementRecordedEvent):
            return TimelineEvent(
                id=event.event_id,
                title="Settlement Recorded",
                description=f"Platform fee {self._money(event.platform_fee_amount)} stamped on order",
                timestamp=event.occurred_at,
                status=TimelineStatus.COMPLETED,
                details=f"Payout Amount: {self._money(event.distributor_payout)}",
            )
        if isinstance(event, OrderShippedEvent):
            return TimelineEvent(
                id=event.event_id,
                title="Order Shipped",
                description=f"Shipped via {event.carrier.upper()}" if event.carrier else "Order has been shipped",
                timestamp=event.occurred_at,
                status=TimelineStatus.COMPLETED,
                details=f"Tracking: {event.tracking_number}" if event.tracking_number else None,
            )
        if isinstance(event, TrackingUpdatedEvent):
            return TimelineEvent(
                id=event.event_id,
                title="Tracking Updated",
                description=f"Carrier: {event.carrier.upper()}" if event.carrier else "Tracking details updated",
                timestamp=event.occurred_at,
                status=TimelineStatus.COMPLETED,
                details=f"Tracking: {event.tracking_number}" if event.tracking_number else None,
            )
        return None


def reconstruct_timeline(
    order: Order,
    distributor: Optional[Distributor],
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> List[TimelineEvent]:
    """Infer the order's timeline from its snapshot."""
    return TimelineReconstructor(currency_symbol).reconstruct(order, distributor)


def timeline_from_events(
    events: Iterable[DomainEvent],
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> List[TimelineEvent]:
    """Format a persisted order event log into timeline entries."""
    return TimelineReconstructor(currency_symbol).from_events(events)
