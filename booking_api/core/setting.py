"""
Configuration Settings

This module defines application configuration using Pydantic Settings.
All configuration is loaded from environment variables or .env file.

Design Decisions:
- Uses pydantic-settings for type-safe configuration
- Defaults to SQLite (file-based) for easy local development
- Datastore credentials are kept apart from the connection string and
  merged into it at engine creation time
- The token signing secret has no usable default; the application refuses
  to start without one
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url

__all__ = ["Settings", "settings"]


class EnvSettingsOptions(Enum):
    """Environment options for deployment."""
    production = "production"
    staging = "staging"
    development = "dev"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Project Configuration
    ENV_SETTING: EnvSettingsOptions = Field(
        default=EnvSettingsOptions.development,
        description="Environment setting (production, staging, dev)"
    )
    PROJECT_NAME: str = Field(
        default="Car Service Booking API",
        description="Title used in the API documentation and the root banner"
    )
    LOG_LEVEL: str = Field(default="INFO", description="Root logging level")

    # Datastore Configuration
    # For SQLite: sqlite+aiosqlite:///./car_service.db (default)
    # For a server database, credentials may be supplied separately through
    # DB_USER / DB_PASS instead of embedding them in the URL.
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./car_service.db",
        description="Datastore connection string"
    )
    DB_USER: Optional[str] = Field(default=None, description="Datastore user name")
    DB_PASS: Optional[str] = Field(default=None, description="Datastore password")
    SERVICES_SEED_FILE: Optional[str] = Field(
        default=None,
        description="JSON file with service documents loaded when the services collection is empty"
    )

    # Session Token Configuration
    ACCESS_TOKEN_SECRET: str = Field(
        default="",
        description="Secret used to sign session tokens (required)"
    )
    TOKEN_ALGORITHM: str = Field(default="HS256", description="JWT signing algorithm")
    TOKEN_EXPIRE_MINUTES: int = Field(default=60, description="Session token lifetime in minutes")
    COOKIE_NAME: str = Field(default="token", description="Cookie carrying the session token")
    COOKIE_SECURE: bool = Field(
        default=False,
        description="Set the Secure attribute on the session cookie (off for local development)"
    )
    OWNERSHIP_MISMATCH_STATUS: int = Field(
        default=402,
        description="Status returned when the token identity does not own the requested bookings"
    )

    # HTTP Configuration
    CORS_ORIGINS: str = Field(default="*", description="Comma-separated list of allowed origins")
    HOST: str = Field(default="0.0.0.0", description="Listening interface")
    PORT: int = Field(default=8000, description="Listening port")

    @property
    def database_url(self) -> str:
        """Connection string with DB_USER / DB_PASS merged in when they are set."""
        if not self.DB_USER and not self.DB_PASS:
            return self.DATABASE_URL
        url = make_url(self.DATABASE_URL)
        if self.DB_USER:
            url = url.set(username=self.DB_USER)
        if self.DB_PASS:
            url = url.set(password=self.DB_PASS)
        return url.render_as_string(hide_password=False)

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


settings = Settings()
