"""Environment-sourced settings for the Tower launcher."""
from __future__ import annotations

from typing import Optional

from pydantic_settings import BaseSettings

from .config import (
    LOG_FORMAT,
    LOG_LEVEL,
    POLL_INTERVAL_SECONDS,
    POLL_TIMEOUT_SECONDS,
    REQUEST_TIMEOUT_SECONDS,
    TOWER_URL,
    VERIFY_TLS,
)


class TowerSettings(BaseSettings):
    """Immutable settings loaded from environment / .env file."""

    url: str = TOWER_URL
    username: Optional[str] = None
    password: Optional[str] = None
    verify_tls: bool = VERIFY_TLS
    request_timeout: Optional[float] = REQUEST_TIMEOUT_SECONDS
    poll_interval: float = POLL_INTERVAL_SECONDS
    poll_timeout: Optional[float] = POLL_TIMEOUT_SECONDS
    log_level: str = LOG_LEVEL
    log_format: str = LOG_FORMAT

    model_config = {"env_prefix": "TOWER_", "env_file": ".env", "frozen": True, "extra": "ignore"}
