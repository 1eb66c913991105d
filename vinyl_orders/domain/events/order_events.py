"""
Order Domain Events.

Recorded by the order state machine on every successful mutation and
persisted in the same write as the order itself. Together they form the
append-only activity log of an order.
"""
from dataclasses import dataclass
from typing import Dict, Optional, Type

from .base import DomainEvent


@dataclass
class OrderStatusChangedEvent(DomainEvent):
    """
    Order status changed.

    Recorded once per successful transition.
    """

    order_id: str = ""
    previous_status: str = ""
    new_status: str = ""

    def __post_init__(self):
        if not self.aggregate_id and self.order_id:
            object.__setattr__(self, "aggregate_id", self.order_id)
        super().__post_init__()


@dataclass
class SettlementRecordedEvent(DomainEvent):
    """
    Platform fee stamped on the order when it entered 'paid'.

    Amounts are minor currency units.
    """

    order_id: str = ""
    total_amount: int = 0
    platform_fee_amount: int = 0
    distributor_payout: int = 0

    def __post_init__(self):
        if not self.aggregate_id and self.order_id:
            object.__setattr__(self, "aggregate_id", self.order_id)
        super().__post_init__()


@dataclass
class OrderShippedEvent(DomainEvent):
    """Order left the warehouse."""

    order_id: str = ""
    viewer_email: str = ""
    carrier: Optional[str] = None
    tracking_number: Optional[str] = None

    def __post_init__(self):
        if not self.aggregate_id and self.order_id:
            object.__setattr__(self, "aggregate_id", self.order_id)
        super().__post_init__()


@dataclass
class TrackingUpdatedEvent(DomainEvent):
    """Fulfillment tracking details changed (not a status change)."""

    order_id: str = ""
    carrier: Optional[str] = None
    tracking_number: Optional[str] = None
    tracking_url: Optional[str] = None

    def __post_init__(self):
        if not self.aggregate_id and self.order_id:
            object.__setattr__(self, "aggregate_id", self.order_id)
        super().__post_init__()


ORDER_EVENT_TYPES: Dict[str, Type[DomainEvent]] = {
    cls.__name__: cls
    for cls in (
        OrderStatusChangedEvent,
        SettlementRecordedEvent,
        OrderShippedEvent,
        TrackingUpdatedEvent,
    )
}


def order_event_from_dict(data: dict) -> DomainEvent:
    """Rebuild a stored order event using its event_type tag."""
    try:
        event_cls = ORDER_EVENT_TYPES[data["event_type"]]
    except KeyError:
        raise ValueError(f"Unknown order event type: {data.get('event_type')}")
    return event_cls.from_dict(data)
