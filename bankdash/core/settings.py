"""Configuration and environment settings for the Student Bank Dashboard."""

from decimal import Decimal
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings for the Student Bank Dashboard."""

    store_backend: Literal["memory", "sql"] = "memory"
    database_url: str = "sqlite:///bankdash.db"
    opening_balance: Decimal = Decimal("0")
    rolling_window_days: int = 30
    history_visible_days: int = 7
    seed_sample_data: bool = False
    sample_seed: int = 123456
    sample_days: int = 90
    log_level: str = "INFO"
    log_file: str = "logs/bankdash.log"
    server_host: str = "127.0.0.1"
    server_port: int = 8000

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


def get_settings() -> "Settings":
    """Return an instance of the application settings."""
    return Settings()
