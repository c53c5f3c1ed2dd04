"""
Constant-interval job status polling.

Polling repeats until the job reports a terminal status.  There is no
retry cap and no backoff; ``timeout_seconds`` and ``cancel_event`` are
opt-in escape hatches and both default to off.
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Dict, Optional

from .client import TowerClient
from .config import POLL_INTERVAL_SECONDS, POLL_TIMEOUT_SECONDS, TERMINAL_STATUSES
from .errors import (
    PollCancelledError,
    PollTimeoutError,
    StatusRejectedError,
    StatusUnavailableError,
)

logger = logging.getLogger(__name__)

STATUS_UNAVAILABLE_MESSAGE = "Failed to get job status from Ansible Tower."


def fetch_job_status(client: TowerClient, job_url: str) -> Dict[str, object]:
    """Fetch one status record, raising if it carries no status."""
    response = client.get_json(job_url)

    if isinstance(response, dict) and response.get("status"):
        return response

    if isinstance(response, dict) and response.get("detail"):
        logger.info(STATUS_UNAVAILABLE_MESSAGE)
        raise StatusRejectedError(str(response["detail"]))

    logger.info("%s", response)
    raise StatusUnavailableError(STATUS_UNAVAILABLE_MESSAGE)


def poll_until_terminal(
    client: TowerClient,
    job_url: str,
    interval_seconds: float = POLL_INTERVAL_SECONDS,
    timeout_seconds: Optional[float] = POLL_TIMEOUT_SECONDS,
    cancel_event: Optional[threading.Event] = None,
    sleep: Optional[Callable[[float], None]] = None,
    clock: Callable[[], float] = time.monotonic,
) -> Dict[str, object]:
    """Poll ``job_url`` until its status is terminal and return that record.

    Parameters
    ----------
    interval_seconds : float
        Fixed wait between fetches.
    timeout_seconds : float, optional
        Give up with ``PollTimeoutError`` rather than start a wait that
        would end past this many seconds.  ``None`` polls forever.
    cancel_event : threading.Event, optional
        When set, polling stops with ``PollCancelledError``.  The wait is
        interrupted immediately.
    sleep : callable, optional
        Replaces the wait (tests).  Defaults to ``cancel_event.wait`` when
        an event is given, else ``time.sleep``.
    """
    if sleep is None:
        sleep = cancel_event.wait if cancel_event is not None else time.sleep

    started = clock()
    while True:
        if cancel_event is not None and cancel_event.is_set():
            raise PollCancelledError(f"Polling of {job_url} was cancelled.")

        record = fetch_job_status(client, job_url)
        status = record["status"]
        if status in TERMINAL_STATUSES:
            return record

        if timeout_seconds is not None and clock() - started + interval_seconds > timeout_seconds:
            raise PollTimeoutError(
                f"Job at {job_url} still '{status}' after {clock() - started:.0f}s "
                f"(timeout {timeout_seconds:.0f}s)."
            )

        logger.info("Validating Job status...")
        sleep(interval_seconds)
        logger.info("Job status: %s.", status)
