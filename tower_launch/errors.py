"""Error kinds raised by the launch / poll / report stages."""
from __future__ import annotations

from typing import Optional


INVALID_EXTRA_VARS_MESSAGE = "Extra vars invalid format, please provide a valid JSON."


class TowerError(Exception):
    """Base class for every failure reported back to the CI harness."""


class InvalidInputError(TowerError):
    """Additional variables text is not a valid JSON object."""

    def __init__(self, message: str = INVALID_EXTRA_VARS_MESSAGE):
        super().__init__(message)


class ConfigurationError(TowerError):
    """Settings or command-line values the run cannot proceed with."""


class TowerRequestError(TowerError):
    """Transport-level failure talking to the orchestration server."""


class LaunchRejectedError(TowerError):
    """Server returned an explicit ``detail`` for the launch request."""


class LaunchUnavailableError(TowerError):
    """Launch response carried neither a job id nor a detail."""


class StatusRejectedError(TowerError):
    """Server returned an explicit ``detail`` while polling."""


class StatusUnavailableError(TowerError):
    """Polling response carried neither a status nor a detail."""


class PollTimeoutError(TowerError):
    """Job did not reach a terminal status within the configured timeout."""


class PollCancelledError(TowerError):
    """Polling was cancelled by the caller before a terminal status."""


class JobOutcomeError(TowerError):
    """Terminal job outcome reported by the server itself."""

    def __init__(self, message: str, job_id: Optional[object] = None):
        super().__init__(message)
        self.job_id = job_id


class JobFailedError(JobOutcomeError):
    """Job finished with status ``failed``."""


class JobErroredError(JobOutcomeError):
    """Job finished with status ``error``."""
