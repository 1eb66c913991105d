"""
Order aggregate root.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from ..enums import OrderStatus, PaymentStatus
from ..events.base import DomainEvent
from ..exceptions import ValidationError
from ..value_objects import OrderNumber, ensure_minor_units


@dataclass(frozen=True)
class OrderItem:
    """
    Line item within an order.

    price_at_time_of_order is a snapshot in minor units, independent of
    later catalog price changes.
    """
    record_id: str
    title: str
    artist: str
    quantity: int
    price_at_time_of_order: int
    cover_url: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int) or self.quantity <= 0:
            raise ValidationError(
                f"Item {self.record_id}: quantity must be a positive integer, got {self.quantity!r}"
            )
        ensure_minor_units(self.price_at_time_of_order, f"Item {self.record_id} price")

    @property
    def line_total(self) -> int:
        return self.price_at_time_of_order * self.quantity


@dataclass
class Order:
    """
    Order aggregate root.

    A buyer's purchase against one distributor's catalog. Mutated only
    through the order state machine (and the tracking update); every
    mutation records a domain event on the aggregate, which the
    repository persists together with the order.
    """
    id: str
    distributor_id: str
    viewer_id: str
    customer_name: str
    viewer_email: str
    shipping_address: str
    items: List[OrderItem]
    total_amount: int
    status: OrderStatus
    created_at: datetime
    updated_at: datetime
    order_number: Optional[OrderNumber] = None
    phone_number: Optional[str] = None
    billing_address: Optional[str] = None
    total_weight: Optional[int] = None  # grams

    # Payment
    payment_status: Optional[PaymentStatus] = None
    platform_fee_amount: Optional[int] = None
    stripe_checkout_session_id: Optional[str] = None
    stripe_payment_intent_id: Optional[str] = None
    paid_at: Optional[datetime] = None

    # Fulfillment
    carrier: Optional[str] = None
    tracking_number: Optional[str] = None
    tracking_url: Optional[str] = None
    shipped_at: Optional[datetime] = None

    # Optimistic concurrency token, bumped by the repository on every save
    version: int = 0

    _domain_events: List[DomainEvent] = field(default_factory=list, init=False, repr=False, compare=False)

    def __post_init__(self):
        self.status = OrderStatus(self.status)
        if self.payment_status is not None:
            self.payment_status = PaymentStatus(self.payment_status)
        ensure_minor_units(self.total_amount, "total_amount")
        if self.platform_fee_amount is not None:
            ensure_minor_units(self.platform_fee_amount, "platform_fee_amount")

    # =========================================================================
    # INVARIANTS
    # =========================================================================

    def items_total(self) -> int:
        """Sum of price snapshot x quantity over all items."""
        return sum(item.line_total for item in self.items)

    def ensure_reconciled(self) -> None:
        """
        Verify total_amount == sum(items).

        Raises:
            ValidationError: If the stored total does not match the items
        """
        calculated = self.items_total()
        if calculated != self.total_amount:
            raise ValidationError(
                f"Order {self.id}: total_amount {self.total_amount} does not "
                f"reconcile with items sum {calculated}"
            )

    @property
    def is_payment_confirmed(self) -> bool:
        return self.payment_status == PaymentStatus.PAID

    # =========================================================================
    # EVENT COLLECTION
    # =========================================================================

    def record_event(self, event: DomainEvent) -> None:
        """Record domain event."""
        self._domain_events.append(event)

    def get_domain_events(self) -> List[DomainEvent]:
        """
        Get all domain events collected by this aggregate.

        Returns:
            Copy of the pending events list
        """
        return list(self._domain_events)

    def clear_domain_events(self) -> None:
        """Clear collected domain events (after persistence)."""
        self._domain_events.clear()
