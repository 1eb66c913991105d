"""
Order state machine.

States:   pending, awaiting_payment, paid, processing, shipped, on_hold, cancelled
Terminal: shipped, cancelled

    pending ──────────┐
                      ├──> paid ──> processing ──> shipped
    awaiting_payment ─┘

    {pending, awaiting_payment, paid, processing, on_hold} ──> cancelled

on_hold has no inbound edge; orders found in it can only be cancelled.
"""
import logging
from datetime import datetime
from typing import Dict, FrozenSet, Optional

from ..entities.order import Order
from ..enums import OrderStatus
from ..events.order_events import (
    OrderShippedEvent,
    OrderStatusChangedEvent,
    SettlementRecordedEvent,
)
from ..exceptions import InvalidTransition
from .settlement import SettlementCalculator

logger = logging.getLogger(__name__)

TERMINAL_STATUSES: FrozenSet[OrderStatus] = frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED})

ALLOWED_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PAID, OrderStatus.CANCELLED}),
    OrderStatus.AWAITING_PAYMENT: frozenset({OrderStatus.PAID, OrderStatus.CANCELLED}),
    OrderStatus.PAID: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.ON_HOLD: frozenset({OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


class OrderStateMachine:
    """
    Validates and applies status transitions to an Order.

    apply() mutates the order it is given, so callers hand it a working
    copy and only persist that copy once apply() has returned.
    """

    def __init__(self, settlement_calculator: Optional[SettlementCalculator] = None):
        self._settlement = settlement_calculator or SettlementCalculator()

    @staticmethod
    def is_allowed(current: OrderStatus, requested: OrderStatus) -> bool:
        return requested in ALLOWED_TRANSITIONS[OrderStatus(current)]

    @staticmethod
    def allowed_targets(current: OrderStatus) -> FrozenSet[OrderStatus]:
        return ALLOWED_TRANSITIONS[OrderStatus(current)]

    def ensure_allowed(self, current: OrderStatus, requested: OrderStatus) -> None:
        """
        Raises:
            InvalidTransition: For self-transitions, exits from terminal
                states and any edge missing from ALLOWED_TRANSITIONS
        """
        current = OrderStatus(current)
        requested = OrderStatus(requested)
        if current == requested:
            raise InvalidTransition(current.value, requested.value, f"Order is already '{current.value}'")
        if current in TERMINAL_STATUSES:
            raise InvalidTransition(
                current.value,
                requested.value,
                f"Order is '{current.value}', which is terminal",
            )
        if not self.is_allowed(current, requested):
            raise InvalidTransition(current.value, requested.value)

    def apply(
        self,
        order: Order,
        requested: OrderStatus,
        now: datetime,
        actor_id: Optional[str] = None,
    ) -> Order:
        """
        Move the order to `requested`.

        Sets status and updated_at; entering 'paid' stamps the platform fee
        (when not already set) and paid_at; entering 'shipped' stamps
        shipped_at. Records the matching domain events on the order.

        Raises:
            InvalidTransition: If the edge is not allowed
            ValidationError: If the order's totals do not reconcile
        """
        requested = OrderStatus(requested)
        previous = order.status
        self.ensure_allowed(previous, requested)
        order.ensure_reconciled()

        # Compute everything that can fail before touching the order
        settlement = None
        if requested == OrderStatus.PAID and order.platform_fee_amount is None:
            settlement = self._settlement.compute(order.total_amount)

        order.status = requested
        order.updated_at = now
        order.record_event(
            OrderStatusChangedEvent(
                order_id=order.id,
                previous_status=previous.value,
                new_status=requested.value,
                actor_id=actor_id,
                occurred_at=now,
            )
        )

        if requested == OrderStatus.PAID:
            if settlement is not None:
                order.platform_fee_amount = settlement.platform_fee_amount
                order.record_event(
                    SettlementRecordedEvent(
                        order_id=order.id,
                        total_amount=settlement.total_amount,
                        platform_fee_amount=settlement.platform_fee_amount,
                        distributor_payout=settlement.distributor_payout,
                        actor_id=actor_id,
                        occurred_at=now,
                    )
                )
            if order.paid_at is None:
                order.paid_at = now

        if requested == OrderStatus.SHIPPED:
            if order.shipped_at is None:
                order.shipped_at = now
            order.record_event(
                OrderShippedEvent(
                    order_id=order.id,
                    viewer_email=order.viewer_email,
                    carrier=order.carrier,
                    tracking_number=order.tracking_number,
                    actor_id=actor_id,
                    occurred_at=now,
                )
            )

        logger.info(f"Order {order.id}: {previous.value} -> {requested.value}")
        return order
