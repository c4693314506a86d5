"""Application configuration."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from typing import Any, Literal

import structlog
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Database
    DATABASE_URL: str = "sqlite:///./salonhub.db"

    SECRET_KEY: str = ""

    # API (constants, not from env)
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "SalonHub API"
    VERSION: str = "0.1.0"

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    # Admin setup (for first-time initialization)
    ADMIN_EMAIL: str | None = None
    ADMIN_PASSWORD: str | None = None

    # Auth
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    SESSION_EXPIRE_DAYS: int = 30
    REFRESH_TOKEN_SECRET_KEY: str = ""
    COOKIE_SECURE: bool = True
    PASSWORD_PEPPER: str = ""

    # Registration
    ALLOW_USER_REGISTRATIONS: bool = True

    # Bookings
    ALLOW_ONLINE_BOOKING: bool = True
    DEFAULT_CURRENCY: str = "USD"

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True

    @field_validator("ADMIN_PASSWORD", mode="after")
    @classmethod
    def strip_admin_password(cls, value: str | None) -> str | None:
        """Strip whitespace from admin password."""
        return value.strip() if value else value

    @field_validator("DEFAULT_CURRENCY", mode="after")
    @classmethod
    def upper_currency(cls, value: str) -> str:
        value = value.strip().upper()
        if len(value) != 3:
            raise ValueError("DEFAULT_CURRENCY must be a three letter ISO code")
        return value


# Libraries that are chatty at DEBUG level in development
NOISY_LOGGERS = ("sqlalchemy.engine", "multipart", "httpx")


def configure_logging(environment: str = "development") -> None:
    """
    Route stdlib and structlog records through one stdout handler.

    Development gets coloured console lines; production and test get one
    JSON object per line.
    """
    level = logging.DEBUG if environment == "development" else logging.INFO
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    renderer: Callable[..., Any] = (
        structlog.dev.ConsoleRenderer()
        if environment == "development"
        else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
