"""Domain events."""

from .base import DomainEvent
from .order_events import (
    ORDER_EVENT_TYPES,
    OrderShippedEvent,
    OrderStatusChangedEvent,
    SettlementRecordedEvent,
    TrackingUpdatedEvent,
    order_event_from_dict,
)

__all__ = [
    "DomainEvent",
    "ORDER_EVENT_TYPES",
    "OrderShippedEvent",
    "OrderStatusChangedEvent",
    "SettlementRecordedEvent",
    "TrackingUpdatedEvent",
    "order_event_from_dict",
]
