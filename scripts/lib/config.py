"""
Runtime configuration for the Sales Monitor.
Values come from the environment (a .env file at the project root is loaded first).

Usage:
    from scripts.lib.config import load_settings
    settings = load_settings()
    settings.webhook_timeout_seconds
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from scripts.lib.errors import ConfigError

BASE_DIR = Path(__file__).resolve().parent.parent.parent

load_dotenv(BASE_DIR / ".env")

DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:8001"


class Settings(BaseModel):
    """Resolved settings. Build with load_settings()."""
    webhook_url: str = ""
    webhook_timeout_seconds: float = 15.0
    webhook_max_retries: int = 3
    unknown_advisor_label: str = "Unknown"
    no_program_label: str = "No Program"
    dashboard_port: int = 8001
    cors_origins: List[str] = Field(
        default_factory=lambda: DEFAULT_CORS_ORIGINS.split(",")
    )
    log_level: str = "INFO"
    debug: bool = False


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}", setting=name)
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}", setting=name)
    return value


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}", setting=name)
    if value < 1:
        raise ConfigError(f"{name} must be at least 1, got {raw!r}", setting=name)
    return value


def load_settings() -> Settings:
    """Read settings from the environment."""
    origins = os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return Settings(
        webhook_url=os.getenv("WEBHOOK_URL", "").strip(),
        webhook_timeout_seconds=_get_float("WEBHOOK_TIMEOUT_SECONDS", 15.0),
        webhook_max_retries=_get_int("WEBHOOK_MAX_RETRIES", 3),
        unknown_advisor_label=os.getenv("UNKNOWN_ADVISOR_LABEL", "").strip() or "Unknown",
        no_program_label=os.getenv("NO_PROGRAM_LABEL", "").strip() or "No Program",
        dashboard_port=_get_int("DASHBOARD_PORT", 8001),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        debug=os.getenv("DEBUG", "false").lower() == "true",
    )
