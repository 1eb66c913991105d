"""
Database configuration.

Manages engine creation and the async session factory.
"""
from typing import Optional
import logging

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from vinyl_orders.settings import DatabaseSettings

from .models import Base


logger = logging.getLogger(__name__)


# =============================================================================
# ENGINE CREATION
# =============================================================================

def create_engine(settings: Optional[DatabaseSettings] = None) -> AsyncEngine:
    """
    Create async SQLAlchemy engine.

    Args:
        settings: Database settings (loaded from the environment when omitted)

    Returns:
        Configured async engine
    """
    settings = settings or DatabaseSettings()
    logger.info(f"Creating database engine: {settings.database_url}")

    return create_async_engine(
        settings.database_url,
        echo=settings.echo_sql,
        pool_pre_ping=True,
    )


# Global engine instance
engine: Optional[AsyncEngine] = None


def get_engine() -> AsyncEngine:
    """
    Get or create global engine instance.

    Returns:
        Global async engine
    """
    global engine

    if engine is None:
        engine = create_engine()

    return engine


# =============================================================================
# SESSION FACTORY
# =============================================================================

def get_session_factory(bind: Optional[AsyncEngine] = None) -> async_sessionmaker:
    """
    Get session factory.

    Returns:
        Session factory for creating sessions
    """
    return async_sessionmaker(
        bind=bind or get_engine(),
        expire_on_commit=False,
        autoflush=False,
    )


# =============================================================================
# DATABASE INITIALIZATION
# =============================================================================

async def init_database(bind: Optional[AsyncEngine] = None) -> None:
    """
    Initialize database.

    Creates all tables if they don't exist.
    """
    logger.info("Initializing database...")

    async with (bind or get_engine()).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database initialized successfully")


async def close_database() -> None:
    """Close database connections."""
    global engine

    if engine:
        logger.info("Closing database connections...")
        await engine.dispose()
        engine = None
        logger.info("Database connections closed")
