"""
Application configuration using Pydantic settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    # App
    app_name: str = "Recurring Ledger"
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./data/ledger.sqlite"

    # Ledger
    default_currency: str = "USD"
    projection_horizon_months: int = 24  # How far unbounded series are projected

    # Identity
    user_header: str = "X-User-Id"
    default_user_id: Optional[str] = None  # Single-user installs skip the header

    # Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    frontend_url: str = "http://localhost:5173"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LEDGER_",
        case_sensitive=False
    )


# Global settings instance
settings = Settings()
