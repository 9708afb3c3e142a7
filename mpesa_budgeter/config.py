"""Configuration management using Pydantic Settings"""

from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "mpesa-budgeter"
    log_level: str = "INFO"

    # Analytics
    default_monthly_budget: Decimal = Decimal("25000")  # sum of default category limits
    cashflow_window_days: int = 7

    # Ingestion
    max_batch_messages: int = 500


settings = Settings()
