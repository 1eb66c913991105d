"""Domain services - pure order engine components."""

from .authorization import TransitionAuthorizer
from .revenue import PlatformFeeStats, compute_platform_fee_stats
from .settlement import DEFAULT_PLATFORM_FEE_RATE, Settlement, SettlementCalculator, compute_settlement
from .state_machine import ALLOWED_TRANSITIONS, TERMINAL_STATUSES, OrderStateMachine
from .timeline import (
    TimelineEvent,
    TimelineReconstructor,
    reconstruct_timeline,
    timeline_from_events,
)

__all__ = [
    "ALLOWED_TRANSITIONS",
    "DEFAULT_PLATFORM_FEE_RATE",
    "OrderStateMachine",
    "PlatformFeeStats",
    "Settlement",
    "SettlementCalculator",
    "TERMINAL_STATUSES",
    "TimelineEvent",
    "TimelineReconstructor",
    "TransitionAuthorizer",
    "compute_platform_fee_stats",
    "compute_settlement",
    "reconstruct_timeline",
    "timeline_from_events",
]
