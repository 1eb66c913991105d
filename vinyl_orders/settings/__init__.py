# Settings package
from vinyl_orders.settings.app_settings import AppSettings, get_app_settings
from vinyl_orders.settings.database_settings import DatabaseSettings
from vinyl_orders.settings.engine_settings import EngineSettings

__all__ = ["AppSettings", "DatabaseSettings", "EngineSettings", "get_app_settings"]
