"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./finance_calendar.db"

    # Guest mode key-value store
    local_store_path: str = "./local_storage.json"

    # Service
    service_name: str = "finance-calendar"
    log_level: str = "INFO"

    # Calendar window
    calendar_past_months: int = 3
    calendar_future_months: int = 3
    calendar_include_cards: bool = True
    recompute_debounce_seconds: float = 0.1  # Coalesces bursts of store updates

    # Notifications
    reminder_days_before: int = 3


settings = Settings()
