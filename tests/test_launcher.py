"""Tests for the job launcher."""
from __future__ import annotations

import logging

import pytest

from tower_launch.errors import LaunchRejectedError, LaunchUnavailableError
from tower_launch.launcher import launch_job
from tower_launch.request_builder import LaunchRequest


@pytest.fixture
def request_42():
    return LaunchRequest(template_id="42", extra_vars={"env": "staging"})


def test_successful_launch_returns_job_url(client, session, queue_responses, response, request_42, caplog):
    caplog.set_level(logging.INFO, logger="tower_launch")
    queue_responses(response(status_code=201, json_body={"job": 7, "status": "pending", "url": "u"}))

    assert launch_job(client, request_42) == "u"

    kwargs = session.request.call_args.kwargs
    assert kwargs["method"] == "POST"
    assert kwargs["url"].endswith("/api/v2/job_templates/42/launch/")
    assert kwargs["json"] == {"extra_vars": {"env": "staging"}}
    assert "Job 7 was created on Ansible Tower: Status pending." in caplog.text


def test_detail_raises_launch_rejected(client, queue_responses, response, request_42):
    queue_responses(response(status_code=403, json_body={"detail": "no permission"}))
    with pytest.raises(LaunchRejectedError) as exc_info:
        launch_job(client, request_42)
    assert str(exc_info.value) == "no permission"


def test_unrecognised_response_raises_unavailable(client, queue_responses, response, request_42, caplog):
    caplog.set_level(logging.INFO, logger="tower_launch")
    queue_responses(response(status_code=500, text="Internal Server Error"))
    with pytest.raises(LaunchUnavailableError, match="Template ID 42 couldn't be launched"):
        launch_job(client, request_42)
    # Raw body is logged for diagnosis.
    assert "Internal Server Error" in caplog.text


def test_job_without_url_raises_unavailable(client, session, queue_responses, response, request_42):
    queue_responses(response(status_code=201, json_body={"job": 7, "status": "pending"}))
    with pytest.raises(LaunchUnavailableError):
        launch_job(client, request_42)
    assert session.request.call_count == 1
