"""SQLAlchemy persistence adapter."""

from .config import close_database, create_engine, get_engine, get_session_factory, init_database
from .models import Base, DistributorModel, OrderEventModel, OrderItemModel, OrderModel
from .repositories import SqlAlchemyDistributorRepository, SqlAlchemyOrderRepository

__all__ = [
    "Base",
    "DistributorModel",
    "OrderEventModel",
    "OrderItemModel",
    "OrderModel",
    "SqlAlchemyDistributorRepository",
    "SqlAlchemyOrderRepository",
    "close_database",
    "create_engine",
    "get_engine",
    "get_session_factory",
    "init_database",
]
