from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict

from vinyl_orders.settings.database_settings import DatabaseSettings
from vinyl_orders.settings.engine_settings import EngineSettings


class AppSettings(BaseModel):
    """Application settings aggregator."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore")

    engine: EngineSettings
    database: DatabaseSettings


@lru_cache()
def get_app_settings() -> AppSettings:
    """Return cached global settings for the entire app."""
    return AppSettings(
        engine=EngineSettings(),
        database=DatabaseSettings(),
    )
