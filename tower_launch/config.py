"""
Central configuration for tower_launch.

Flat-constant interface over ``config_structured.py`` so the stage modules
can import plain names.  Values that callers may override at runtime
(URL, credentials, polling timeout) travel through ``settings.py`` and
the command line instead of being patched here.
"""
from typing import Dict, List

from .config_structured import JobStatus, get_config as _get_config

_cfg = _get_config()

# ── Server ────────────────────────────────────────────────────────────
TOWER_URL = _cfg.tower.url                              # default orchestration server
LAUNCH_PATH_TEMPLATE = _cfg.tower.launch_path           # formatted with template_id
VERIFY_TLS = _cfg.tower.verify_tls                      # self-signed certs on the tower host
REQUEST_TIMEOUT_SECONDS = _cfg.tower.request_timeout_seconds

# ── Extra vars ────────────────────────────────────────────────────────
SUBSCRIPTION_VAR = _cfg.extra_vars.subscription_key
CLIENT_ID_VAR = _cfg.extra_vars.client_id_key
CLIENT_SECRET_VAR = _cfg.extra_vars.client_secret_key
CERTIFICATE_VAR = _cfg.extra_vars.certificate_key
CERTIFICATE_MASK = _cfg.extra_vars.mask

# ── Polling ───────────────────────────────────────────────────────────
POLL_INTERVAL_SECONDS = _cfg.polling.interval_seconds
POLL_TIMEOUT_SECONDS = _cfg.polling.timeout_seconds     # None = poll forever
TERMINAL_STATUSES = frozenset(_cfg.polling.terminal_statuses)
STATUS_SUCCESSFUL = JobStatus.SUCCESSFUL.value
STATUS_FAILED = JobStatus.FAILED.value
STATUS_ERROR = JobStatus.ERROR.value

# ── Output ────────────────────────────────────────────────────────────
RESOURCE_NAME_PATTERN = _cfg.extraction.pattern
RESOURCE_NAME_OUTPUT = _cfg.extraction.output_name
RESOURCE_NAME_ARTIFACT = _cfg.extraction.artifact_key
STDOUT_FORMAT = _cfg.extraction.stdout_format

# ── Logging ───────────────────────────────────────────────────────────
LOG_LEVEL = _cfg.logging.level
LOG_FORMAT = _cfg.logging.fmt.value


def validate_config(
    url: str = TOWER_URL,
    verify_tls: bool = VERIFY_TLS,
    poll_interval: float = POLL_INTERVAL_SECONDS,
) -> List[Dict[str, str]]:
    """Check runtime settings for common misconfigurations.

    Returns a list of dicts: [{"level": "WARNING"|"ERROR", "message": str}].
    Called by the entry point before the first request is sent.
    """
    issues: List[Dict[str, str]] = []

    if not str(url).lower().startswith(("http://", "https://")):
        issues.append({
            "level": "ERROR",
            "message": f"Tower URL {url!r} has no http:// or https:// scheme.",
        })
    elif str(url).lower().startswith("http://"):
        issues.append({
            "level": "WARNING",
            "message": f"Tower URL {url} is plain http; credentials are sent unencrypted.",
        })

    if not verify_tls:
        issues.append({
            "level": "WARNING",
            "message": "TLS certificate verification is disabled for the Tower server.",
        })

    if poll_interval < 0:
        issues.append({
            "level": "ERROR",
            "message": f"Poll interval {poll_interval}s is negative.",
        })
    elif poll_interval < 1:
        issues.append({
            "level": "WARNING",
            "message": (
                f"Poll interval {poll_interval}s is below 1s; the Tower API "
                "may throttle status requests."
            ),
        })

    return issues
