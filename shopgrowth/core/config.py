"""Application configuration managed via environment variables."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "ShopGrowth Backend"
    debug: bool = False
    log_level: str = "INFO"
    database_url: str = "postgresql+psycopg2://shopgrowth@localhost:5432/shopgrowth"
    opik_enabled: bool = False
    opik_api_key: str | None = None
    opik_project: str = "shopgrowth"
    plan_processing_delay_ms: int = 0
    notifications_enabled: bool = False
    notifications_provider: str = "noop"
    notification_destination: str = "shop-owner"
    reminders_enabled: bool = False
    reminder_hour: int = 8
    reminder_minute: int = 0
    scheduler_timezone: str = "Asia/Kolkata"


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()


settings = get_settings()
