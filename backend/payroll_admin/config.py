"""
Configuration settings for the payroll admin backend.
"""

from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from typing import Optional
import logging


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Payroll Admin API"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./payroll_admin.db"

    # Security
    secret_key: str = "change-this-to-a-random-secret-key-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 30
    refresh_token_expire_days: int = 7

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Admin defaults
    default_admin_username: str = "admin"
    default_admin_password: str = "admin123"
    default_admin_email: str = "admin@example.com"

    # Pay rules
    working_days_per_month: int = 22
    hours_per_day: int = 8
    default_overtime_multiplier: float = 1.25

    model_config = ConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


# Global settings instance
settings = Settings()


def configure_logging(level: Optional[str] = None):
    """Configure root logging for the API and the command line tool."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
