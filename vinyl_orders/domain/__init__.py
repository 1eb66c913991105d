"""Domain layer - pure domain models, services and interfaces."""

from .entities import Actor, Distributor, Order, OrderItem, WorkerPermissions
from .enums import OrderStatus, PaymentStatus, TimelineStatus, UserRole
from .exceptions import (
    ConcurrencyConflict,
    Forbidden,
    InvalidTransition,
    NotFound,
    OrderEngineError,
    ValidationError,
)
from .repositories import DistributorRepository, OrderRepository

__all__ = [
    "Actor",
    "ConcurrencyConflict",
    "Distributor",
    "DistributorRepository",
    "Forbidden",
    "InvalidTransition",
    "NotFound",
    "Order",
    "OrderEngineError",
    "OrderItem",
    "OrderRepository",
    "OrderStatus",
    "PaymentStatus",
    "TimelineStatus",
    "UserRole",
    "ValidationError",
    "WorkerPermissions",
]
