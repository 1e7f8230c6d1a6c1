"""
Configuration Settings

This module defines application configuration using Pydantic Settings.
All configuration is loaded from environment variables or .env file.

Design Decisions:
- Uses pydantic-settings for type-safe configuration
- Supports multiple environments (production, staging, dev)
- Defaults to SQLite (file-based) for easy local development
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

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
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Log level for the clipbin loggers"
    )

    # Database Configuration
    # For SQLite: sqlite+aiosqlite:///./clipbin.db (default)
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./clipbin.db",
        description="Database connection string"
    )
    DATABASE_TIMEOUT: float = Field(
        default=5.0,
        description="Seconds a connection waits on a locked database before failing"
    )
    CREATE_TABLES_ON_STARTUP: bool = Field(
        default=True,
        description="Create missing tables on startup (use alembic in production)"
    )

    # Application Configuration
    BASE_URL: str = Field(
        default="http://localhost:8000",
        description="Base URL for generating clip links"
    )
    SHORTCODE_LENGTH: int = Field(
        default=7,
        ge=1,
        description="Fixed length of generated shortcodes"
    )
    API_KEY_HEADER: str = Field(
        default="X-API-Key",
        description="Request header carrying the API key for programmatic writes"
    )


settings = Settings()
