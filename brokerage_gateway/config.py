"""Configuration management using Pydantic Settings"""

from decimal import Decimal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "brokerage-gateway"
    log_level: str = "INFO"

    # API limits
    portfolio_max_deals: int = 10_000

    # Commission advisor
    default_target_gross_profit_percentage: Decimal = Decimal("1.5")


settings = Settings()
