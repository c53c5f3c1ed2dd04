"""Shared test fixtures for the tower_launch test suite."""
from __future__ import annotations

import json
import logging
from typing import Callable, List, Optional
from unittest.mock import MagicMock

import pytest
import requests

from tower_launch.client import ClientConfig, TowerClient

BASE_URL = "https://tower.example.test/"


def make_response(
    status_code: int = 200,
    json_body: object = None,
    text: Optional[str] = None,
    url: str = BASE_URL,
) -> requests.Response:
    """Build a real ``requests.Response`` with the given body."""
    resp = requests.Response()
    resp.status_code = status_code
    resp.url = url
    resp.reason = "OK" if status_code < 400 else "Error"
    resp.encoding = "utf-8"
    if json_body is not None:
        resp._content = json.dumps(json_body).encode("utf-8")
        resp.headers["Content-Type"] = "application/json"
    else:
        resp._content = (text or "").encode("utf-8")
        resp.headers["Content-Type"] = "text/plain"
    return resp


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers configure_logging attached so they never outlive a test."""
    yield
    logger = logging.getLogger("tower_launch")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def session():
    """A requests.Session stand-in; set ``session.request.side_effect`` per test."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session):
    cfg = ClientConfig(base_url=BASE_URL, username="deploy", password="s3cret")
    return TowerClient(cfg, session=session)


@pytest.fixture
def queue_responses(session) -> Callable[..., List[requests.Response]]:
    """Queue responses to be returned by successive session.request calls."""

    def _queue(*responses: requests.Response) -> List[requests.Response]:
        session.request.side_effect = list(responses)
        return list(responses)

    return _queue


@pytest.fixture
def successful_job():
    return {
        "id": 7,
        "status": "successful",
        "url": "/api/v2/jobs/7/",
        "related": {"stdout": "/api/v2/jobs/7/stdout/"},
        "result_traceback": "",
    }


@pytest.fixture
def response():
    """Factory fixture around :func:`make_response`."""
    return make_response
