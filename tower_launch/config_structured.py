"""
Structured configuration for tower_launch using typed dataclasses.

This is the AUTHORITATIVE source of default values.  ``config.py`` exposes
them as flat constants for the stage modules.

Usage:
    from tower_launch.config_structured import get_config
    cfg = get_config()
    cfg.polling.interval_seconds
    cfg.extraction.output_name
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class JobStatus(Enum):
    """Job status values the poller treats specially."""
    SUCCESSFUL = "successful"
    FAILED = "failed"
    ERROR = "error"


class LogFormat(Enum):
    """Operator log rendering."""
    TEXT = "text"
    JSON = "json"


# ── Server / request ─────────────────────────────────────────────────


@dataclass
class TowerConfig:
    """Orchestration server endpoint and transport defaults."""
    url: str = "https://tower.000ukso.sbp.eyclienthub.com/"
    launch_path: str = "api/v2/job_templates/{template_id}/launch/"
    verify_tls: bool = False
    # None leaves the transport default (no timeout).
    request_timeout_seconds: Optional[float] = None

    def __post_init__(self):
        if not str(self.url).strip():
            raise ValueError("Tower URL must not be empty")
        if "{template_id}" not in self.launch_path:
            raise ValueError(
                f"launch_path must contain '{{template_id}}', got {self.launch_path!r}"
            )
        if self.request_timeout_seconds is not None and self.request_timeout_seconds <= 0:
            raise ValueError(
                f"request_timeout_seconds must be positive, got {self.request_timeout_seconds}"
            )


# ── Extra vars ───────────────────────────────────────────────────────


@dataclass
class ExtraVarsConfig:
    """Key names of the auto-derived extra variables."""
    subscription_key: str = "var_azure_rm_subid"
    client_id_key: str = "AZURE_RM_CLIENTID"
    client_secret_key: str = "AZURE_RM_SECRET"
    certificate_key: str = "var_applicationGatewayFrontEndSslCertData"
    mask: str = "*************"


# ── Polling ──────────────────────────────────────────────────────────


@dataclass
class PollingConfig:
    """Constant-interval status polling.

    ``timeout_seconds=None`` polls until a terminal status is observed.
    """
    interval_seconds: float = 10.0
    timeout_seconds: Optional[float] = None
    terminal_statuses: Tuple[str, ...] = tuple(s.value for s in JobStatus)

    def __post_init__(self):
        if self.interval_seconds < 0:
            raise ValueError(f"interval_seconds must be >= 0, got {self.interval_seconds}")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be positive, got {self.timeout_seconds}")


# ── Output extraction ────────────────────────────────────────────────


@dataclass
class ExtractionConfig:
    """Resource-name extraction from job output."""
    pattern: str = r'/(\w+)\\|/(\w+)"'
    output_name: str = "RESOURCE_NAME"
    artifact_key: str = "resource_name"
    stdout_format: str = "txt"


# ── Logging ──────────────────────────────────────────────────────────


@dataclass
class LoggingConfig:
    """Operator log stream settings."""
    level: str = "INFO"
    fmt: LogFormat = LogFormat.TEXT

    def __post_init__(self):
        if isinstance(self.fmt, str):
            self.fmt = LogFormat(self.fmt.lower())
        if self.level.upper() not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level {self.level!r}")


@dataclass
class SystemConfig:
    """Top-level container for every subsystem config."""
    tower: TowerConfig = field(default_factory=TowerConfig)
    extra_vars: ExtraVarsConfig = field(default_factory=ExtraVarsConfig)
    polling: PollingConfig = field(default_factory=PollingConfig)
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# ── Module-level singleton ──────────────────────────────────────────

_CONFIG: Optional[SystemConfig] = None


def get_config() -> SystemConfig:
    """Return the singleton SystemConfig instance.

    On first call, instantiates the default SystemConfig. Subsequent
    calls return the same instance so all callers share one source of
    truth.
    """
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = SystemConfig()
    return _CONFIG
