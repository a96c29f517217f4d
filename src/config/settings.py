"""
Application settings - pydantic-settings configuration.

This module defines application configuration using pydantic-settings
for environment variable loading with validation and defaults.

DATABASE_URL and JWT_SECRET have no defaults: constructing Settings
without them raises, which aborts startup.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database configuration
    database_url: str = Field(..., min_length=1)
    pool_min_size: int = 2  # Minimum connections in pool
    pool_max_size: int = 10  # Maximum connections in pool

    # Session settings
    jwt_secret: str = Field(..., min_length=1)
    jwt_algorithm: str = "HS256"
    session_ttl_seconds: int = 24 * 60 * 60
    cookie_secure: bool = False  # Enable when served over HTTPS

    # Verification settings
    verification_ttl_seconds: int = 24 * 60 * 60
    bcrypt_cost: int = 12

    # Public URLs used to build links and redirects
    api_base_url: str = "http://localhost:8000"
    frontend_url: str = "http://localhost:5173"

    # Email delivery (console logging when smtp_host is unset)
    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_username: str | None = None
    smtp_password: str | None = None
    smtp_use_tls: bool = True
    email_from: str = "Acceleott <no-reply@acceleott.com>"
    admin_email: str | None = None
    email_workers: int = 4

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
