"""Configuration management using Pydantic Settings"""

from decimal import Decimal
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # External Services
    entity_store_base: str = "http://localhost:8001"
    advisor_url: str = "http://localhost:8002/advice"

    # Service
    service_name: str = "wealth-gateway"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0
    advisor_timeout_seconds: float = 30.0
    advisor_max_retries: int = 3
    advisor_backoff_base: float = 1.0  # Exponential backoff base in seconds

    # Metrics engine
    default_annual_return_pct: Decimal = Decimal("7")
    default_inflation_pct: Decimal = Decimal("2")
    budget_alert_threshold_pct: Decimal = Decimal("80")
    upcoming_window_days: int = 7
    goal_calendar_months: bool = False  # 30-day months unless enabled
    forecast_horizons_years: List[int] = [1, 5, 10]


settings = Settings()
