from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """
    Database configuration settings.

    Loaded from environment variables or .env file (DB_ prefix).
    """

    database_url: str = "sqlite+aiosqlite:///./vinyl_orders.db"

    # Echo SQL (for debugging)
    echo_sql: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="DB_",
        extra="ignore",
    )
