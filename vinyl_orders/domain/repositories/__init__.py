"""Repository interfaces."""

from .distributor_repository import DistributorRepository
from .order_repository import OrderRepository

__all__ = ["DistributorRepository", "OrderRepository"]
