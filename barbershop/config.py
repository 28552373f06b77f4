# barbershop/config.py

"""
Centralized configuration with environment variable overrides.

Values are read once at import time (after ``load_dotenv``) into frozen
dataclasses. Nothing in the booking engine reads the environment directly.
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(f"Invalid integer for {env_var}: {raw!r}") from None


@dataclass(frozen=True)
class DatabaseConfig:
    url: str = os.getenv("DATABASE_URL", "sqlite:///./barber.db")
    echo: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"


@dataclass(frozen=True)
class AuthConfig:
    """Bearer token settings for the customer and operator routes."""

    secret_key: str = os.getenv("SECRET_KEY", "change-me-later")
    algorithm: str = os.getenv("JWT_ALGORITHM", "HS256")
    access_token_expire_minutes: int = _safe_int("ACCESS_TOKEN_EXPIRE_MINUTES", "30")


@dataclass(frozen=True)
class ShopConfig:
    """Shop-wide scheduling settings."""

    name: str = os.getenv("SHOP_NAME", "Clean Cutz")
    timezone: str = os.getenv("SHOP_TIMEZONE", "America/New_York")
    upcoming_days: int = _safe_int("UPCOMING_DAYS", "7")
    upcoming_preview_slots: int = _safe_int("UPCOMING_PREVIEW_SLOTS", "8")


@dataclass(frozen=True)
class EmailConfig:
    """SMTP settings. Notifications are only logged when no host is set."""

    smtp_host: Optional[str] = os.getenv("SMTP_HOST") or None
    smtp_port: int = _safe_int("SMTP_PORT", "587")
    smtp_user: Optional[str] = os.getenv("SMTP_USER") or None
    smtp_password: Optional[str] = os.getenv("SMTP_PASSWORD") or None
    from_address: str = os.getenv("EMAIL_FROM", "bookings@cleancutz.local")
    operator_address: Optional[str] = os.getenv("OPERATOR_EMAIL") or None


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    shop: ShopConfig = field(default_factory=ShopConfig)
    email: EmailConfig = field(default_factory=EmailConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if config.auth.access_token_expire_minutes < 1:
        raise ValueError(
            "ACCESS_TOKEN_EXPIRE_MINUTES must be >= 1, "
            f"got {config.auth.access_token_expire_minutes}"
        )
    if not 1 <= config.shop.upcoming_days <= 60:
        raise ValueError(
            f"UPCOMING_DAYS must be between 1 and 60, got {config.shop.upcoming_days}"
        )
    if config.shop.upcoming_preview_slots < 1:
        raise ValueError(
            "UPCOMING_PREVIEW_SLOTS must be >= 1, "
            f"got {config.shop.upcoming_preview_slots}"
        )
    if not 1 <= config.email.smtp_port <= 65535:
        raise ValueError(f"SMTP_PORT must be a valid port, got {config.email.smtp_port}")
    try:
        ZoneInfo(config.shop.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"Unknown SHOP_TIMEZONE: {config.shop.timezone!r}") from None


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info("Configuration loaded for '%s'", config.shop.name)
    return config


def shop_now(config: Optional[AppConfig] = None) -> datetime:
    """Current wall-clock time in the shop's timezone, as a naive datetime.

    Slot times are stored as naive local ``HH:MM`` strings, so the value
    handed to the availability filter must be naive local time too.
    """
    config = config or settings
    return datetime.now(ZoneInfo(config.shop.timezone)).replace(tzinfo=None)


# Singleton instance
settings = load_config()
