"""Domain entities."""

from .actor import Actor, WorkerPermissions
from .distributor import Distributor
from .order import Order, OrderItem

__all__ = [
    "Actor",
    "Distributor",
    "Order",
    "OrderItem",
    "WorkerPermissions",
]
