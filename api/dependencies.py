"""
FastAPI Dependencies.

Provides dependency injection for the order lifecycle service and the
acting user.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from fastapi import Header, HTTPException, status

# Load environment variables ONCE before any settings objects are created
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=_PROJECT_ROOT / ".env")

from vinyl_orders.application.services import OrderLifecycleService, OrderNotificationHandler
from vinyl_orders.domain.entities import Actor, WorkerPermissions
from vinyl_orders.domain.enums import UserRole
from vinyl_orders.domain.services import OrderStateMachine, SettlementCalculator
from vinyl_orders.infrastructure.adapters.notifications import LoggingNotificationService
from vinyl_orders.infrastructure.database import (
    SqlAlchemyDistributorRepository,
    SqlAlchemyOrderRepository,
    get_session_factory,
)
from vinyl_orders.infrastructure.database import config as database_config
from vinyl_orders.infrastructure.event_bus import get_event_bus
from vinyl_orders.settings import AppSettings, get_app_settings

logger = logging.getLogger(__name__)


# =============================================================================
# SINGLETON INSTANCES
# =============================================================================

_notification_service = None
_notification_handler = None
_lifecycle_service = None


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_settings() -> AppSettings:
    return get_app_settings()


def get_database_engine():
    if database_config.engine is None:
        database_config.engine = database_config.create_engine(get_settings().database)
    return database_config.engine


def get_settlement_calculator() -> SettlementCalculator:
    return SettlementCalculator(get_settings().engine.platform_fee_rate)


def get_notification_service() -> LoggingNotificationService:
    global _notification_service, _notification_handler
    if _notification_service is None:
        _notification_service = LoggingNotificationService()
        _notification_handler = OrderNotificationHandler(_notification_service).handle
        get_event_bus().subscribe(_notification_handler)
        logger.info("Created LoggingNotificationService instance")
    return _notification_service


def get_lifecycle_service() -> OrderLifecycleService:
    global _lifecycle_service

    if _lifecycle_service is None:
        settings = get_settings()
        session_factory = get_session_factory(get_database_engine())
        get_notification_service()

        _lifecycle_service = OrderLifecycleService(
            order_repository=SqlAlchemyOrderRepository(session_factory),
            distributor_repository=SqlAlchemyDistributorRepository(session_factory),
            event_bus=get_event_bus(),
            state_machine=OrderStateMachine(get_settlement_calculator()),
            currency_symbol=settings.engine.currency_symbol,
        )
        logger.info("Created OrderLifecycleService instance")

    return _lifecycle_service


def get_actor(
    x_user_id: Optional[str] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None),
    x_distributor_id: Optional[str] = Header(default=None),
    x_can_manage_orders: bool = Header(default=False),
) -> Actor:
    """
    Build the acting user from gateway headers.

    Identity is verified upstream; requests without a known role are
    rejected as unauthenticated.
    """
    if not x_user_id or not x_user_role:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id / X-User-Role headers",
        )
    try:
        role = UserRole(x_user_role.lower())
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Unknown role: {x_user_role}",
        )

    return Actor(
        user_id=x_user_id,
        role=role,
        distributor_id=x_distributor_id,
        permissions=WorkerPermissions(can_manage_orders=x_can_manage_orders),
    )


# =============================================================================
# RESET (for testing)
# =============================================================================

def reset_dependencies():
    global _notification_service, _notification_handler, _lifecycle_service

    if _notification_handler is not None:
        get_event_bus().unsubscribe(_notification_handler)

    _notification_service = None
    _notification_handler = None
    _lifecycle_service = None
    get_app_settings.cache_clear()

    logger.info("Dependencies reset")
