from .order_dto import (
    DomainEventDTO,
    OrderDTO,
    OrderItemDTO,
    PlatformFeeStatsDTO,
    SettlementDTO,
    TimelineEventDTO,
    TrackingUpdateRequest,
    TransitionRequest,
)

__all__ = [
    "DomainEventDTO",
    "OrderDTO",
    "OrderItemDTO",
    "PlatformFeeStatsDTO",
    "SettlementDTO",
    "TimelineEventDTO",
    "TrackingUpdateRequest",
    "TransitionRequest",
]
