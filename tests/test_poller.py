"""Tests for constant-interval status polling."""
from __future__ import annotations

import threading

import pytest

from tower_launch.errors import (
    PollCancelledError,
    PollTimeoutError,
    StatusRejectedError,
    StatusUnavailableError,
)
from tower_launch.poller import poll_until_terminal

JOB_URL = "/api/v2/jobs/7/"


class _Clock:
    """Monotonic clock advanced by the fake sleep."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


def test_polls_until_terminal_with_fixed_delay(client, session, queue_responses, response, successful_job):
    clock = _Clock()
    queue_responses(
        response(json_body={"status": "running"}),
        response(json_body={"status": "running"}),
        response(json_body=successful_job),
    )

    record = poll_until_terminal(client, JOB_URL, sleep=clock.sleep, clock=clock)

    assert record == successful_job
    assert session.request.call_count == 3
    assert clock.sleeps == [10.0, 10.0]


@pytest.mark.parametrize("status", ["successful", "failed", "error"])
def test_terminal_status_returns_without_waiting(client, queue_responses, response, status):
    clock = _Clock()
    queue_responses(response(json_body={"id": 1, "status": status}))
    assert poll_until_terminal(client, JOB_URL, sleep=clock.sleep, clock=clock)["status"] == status
    assert clock.sleeps == []


def test_unknown_status_keeps_polling(client, queue_responses, response):
    clock = _Clock()
    queue_responses(
        response(json_body={"status": "canceled"}),
        response(json_body={"status": "waiting"}),
        response(json_body={"status": "failed", "id": 2}),
    )
    assert poll_until_terminal(client, JOB_URL, interval_seconds=3, sleep=clock.sleep, clock=clock)["id"] == 2
    assert clock.sleeps == [3, 3]


def test_detail_raises_status_rejected(client, queue_responses, response):
    queue_responses(response(status_code=404, json_body={"detail": "Not found."}))
    with pytest.raises(StatusRejectedError, match="Not found."):
        poll_until_terminal(client, JOB_URL, sleep=lambda s: None)


def test_unrecognised_response_raises_status_unavailable(client, queue_responses, response):
    queue_responses(response(json_body={"unexpected": True}))
    with pytest.raises(StatusUnavailableError, match="Failed to get job status"):
        poll_until_terminal(client, JOB_URL, sleep=lambda s: None)


def test_error_mid_poll_aborts(client, session, queue_responses, response):
    clock = _Clock()
    queue_responses(
        response(json_body={"status": "running"}),
        response(status_code=401, json_body={"detail": "Authentication credentials were not provided."}),
    )
    with pytest.raises(StatusRejectedError):
        poll_until_terminal(client, JOB_URL, sleep=clock.sleep, clock=clock)
    assert session.request.call_count == 2


def test_timeout_stops_polling(client, session, queue_responses, response):
    clock = _Clock()
    queue_responses(*[response(json_body={"status": "running"}) for _ in range(5)])
    with pytest.raises(PollTimeoutError):
        poll_until_terminal(client, JOB_URL, interval_seconds=10, timeout_seconds=25, sleep=clock.sleep, clock=clock)
    # Fetches at t=0 and t=10 wait; at t=20 another wait would pass 25s.
    assert session.request.call_count == 3
    assert clock.sleeps == [10, 10]


def test_cancel_event_stops_polling(client, session, queue_responses, response):
    cancel = threading.Event()
    queue_responses(*[response(json_body={"status": "pending"}) for _ in range(3)])

    def _sleep(seconds):
        cancel.set()

    with pytest.raises(PollCancelledError):
        poll_until_terminal(client, JOB_URL, cancel_event=cancel, sleep=_sleep)
    assert session.request.call_count == 1


def test_cancel_event_interrupts_wait(client, queue_responses, response):
    cancel = threading.Event()
    cancel.set()
    queue_responses(response(json_body={"status": "pending"}))
    # Already-set event: no fetch, no hour-long wait.
    with pytest.raises(PollCancelledError):
        poll_until_terminal(client, JOB_URL, interval_seconds=3600, cancel_event=cancel)
