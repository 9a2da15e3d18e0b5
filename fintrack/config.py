"""
Application configuration using Pydantic Settings.
"""

import os
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings


def get_env_file() -> str:
    """Determine which env file to use based on environment."""
    env = os.getenv("APP_ENV", "development")
    if env == "production":
        return ".env.production"
    return ".env.development"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite:///./fintrack.db"

    # App settings
    app_name: str = "FinTrack"
    debug: bool = False
    log_level: str = "INFO"
    app_env: str = "development"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # JWT Configuration
    jwt_secret_key: str = "CHANGE-ME-IN-PRODUCTION-USE-LONG-RANDOM-STRING"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 30
    jwt_refresh_token_expire_days: int = 7

    # Token Expiration
    password_reset_token_expire_hours: int = 24

    # SendGrid Email
    sendgrid_api_key: str = ""
    sendgrid_from_email: str = "noreply@example.com"
    sendgrid_from_name: str = "FinTrack"

    # Frontend URL (for email links)
    frontend_url: str = "http://localhost:5173"

    # Browser origins allowed to call the API with credentials
    cors_origins: List[str] = ["http://localhost:5173"]

    # Load the financial tips library when the app starts
    seed_tips_on_startup: bool = True

    # Dashboard
    recent_transactions_limit: int = 5
    dashboard_goals_limit: int = 3
    trend_days: int = 7
    trend_months: int = 6

    class Config:
        env_file = get_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
