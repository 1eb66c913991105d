from decimal import Decimal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from vinyl_orders.domain.services.settlement import DEFAULT_PLATFORM_FEE_RATE


class EngineSettings(BaseSettings):
    """
    Order engine settings.
    Loaded from environment / .env with exact variable name matching.
    """

    platform_fee_rate: Decimal = Field(
        default=DEFAULT_PLATFORM_FEE_RATE, alias="VINYL_ORDERS_PLATFORM_FEE_RATE"
    )
    currency_symbol: str = Field(default="€", alias="VINYL_ORDERS_CURRENCY_SYMBOL")
    log_level: str = Field(default="INFO", alias="VINYL_ORDERS_LOG_LEVEL")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @field_validator("platform_fee_rate")
    @classmethod
    def _fee_rate_in_range(cls, value: Decimal) -> Decimal:
        if value < 0 or value >= 1:
            raise ValueError(f"platform fee rate must be in [0, 1), got {value}")
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()
