"""Environment-based configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def resolve_database_url() -> str:
    """Resolve DB connection string.

    Priority:
      1) DATABASE_URL (explicit)
      2) Fallback to local sqlite
    """

    return os.getenv("DATABASE_URL") or "sqlite:///./xsmb.db"


def resolve_gemini_api_key() -> str:
    """GEMINI_API_KEY, falling back to the plain API_KEY name."""

    return (os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or "").strip()


@dataclass(frozen=True)
class BaseConfig:
    """Base configuration shared by all environments."""

    APP_ENV: str = os.getenv("APP_ENV", "development")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret")
    DATABASE_URL: str = resolve_database_url()
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Gemini (result lookup + prediction)
    GEMINI_API_KEY: str = resolve_gemini_api_key()
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    GEMINI_BASE_URL: str = os.getenv(
        "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
    )
    GEMINI_TIMEOUT_SECONDS: float = _env_float("GEMINI_TIMEOUT_SECONDS", 60.0)
    GEMINI_HTTP_RETRIES: int = _env_int("GEMINI_HTTP_RETRIES", 2)

    # Result acquisition
    LOOKUP_MAX_ATTEMPTS: int = _env_int("LOOKUP_MAX_ATTEMPTS", 3)
    LOOKUP_RETRY_DELAY_SECONDS: float = _env_float("LOOKUP_RETRY_DELAY_SECONDS", 1.5)

    # Live board
    POLL_INTERVAL_SECONDS: float = _env_float("POLL_INTERVAL_SECONDS", 30.0)
    DRAW_TIMEZONE: str = os.getenv("DRAW_TIMEZONE", "Asia/Ho_Chi_Minh")
    BOARD_AUTOLOAD: bool = _env_bool("BOARD_AUTOLOAD", False)


@dataclass(frozen=True)
class DevelopmentConfig(BaseConfig):
    """Development configuration."""

    DEBUG: bool = True


@dataclass(frozen=True)
class ProductionConfig(BaseConfig):
    """Production configuration."""

    DEBUG: bool = False


def get_config() -> type[BaseConfig]:
    """Resolve configuration class based on APP_ENV."""

    env = os.getenv("APP_ENV", "development").lower().strip()
    if env == "production":
        return ProductionConfig
    return DevelopmentConfig
