"""
Ansible Tower HTTP client bound to one server and one set of credentials.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

import requests
import urllib3

from .config import REQUEST_TIMEOUT_SECONDS, TOWER_URL, VERIFY_TLS
from .errors import TowerRequestError

JsonPayload = Union[Dict[str, object], list, str, None]


@dataclass(frozen=True)
class ClientConfig:
    """Read-only connection settings shared by every stage."""
    base_url: str = TOWER_URL
    username: str = ""
    password: str = ""
    verify_tls: bool = VERIFY_TLS
    timeout_seconds: Optional[float] = REQUEST_TIMEOUT_SECONDS

    @property
    def auth(self) -> Tuple[str, str]:
        """Basic-auth pair."""
        return (self.username, self.password)

    def __repr__(self) -> str:
        return (
            f"ClientConfig(base_url={self.base_url!r}, username={self.username!r}, "
            f"password='***', verify_tls={self.verify_tls}, timeout_seconds={self.timeout_seconds})"
        )


class TowerClient:
    """
    Thin requests wrapper with:
      - base URL joining for relative API paths (absolute URLs pass through)
      - basic auth sent on every request
      - JSON content negotiation, with a plain-text variant for job stdout
    """

    def __init__(
        self,
        config: ClientConfig,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize TowerClient."""
        self.config = config
        self.session = session or requests.Session()
        self.logger = logger or logging.getLogger(__name__)
        if not config.verify_tls:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @staticmethod
    def _join_url(base_url: str, path: str) -> str:
        """Internal helper for join url."""
        p = str(path)
        if p.startswith("http://") or p.startswith("https://"):
            return p
        base = str(base_url).rstrip("/")
        return f"{base}/{p.lstrip('/')}"

    def _send(
        self,
        method: str,
        path: str,
        headers: Dict[str, str],
        params: Optional[Dict[str, object]] = None,
        json_body: Optional[Dict[str, object]] = None,
    ) -> requests.Response:
        """Internal helper for send."""
        url = self._join_url(self.base_url, path)
        try:
            resp = self.session.request(
                method=method.upper(),
                url=url,
                headers=headers,
                params=params,
                json=json_body,
                auth=self.config.auth,
                verify=self.config.verify_tls,
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise TowerRequestError(f"{method.upper()} {url} failed: {exc}") from exc
        self.logger.debug("Tower %s %s -> %s", method.upper(), url, resp.status_code)
        return resp

    def request_json(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, object]] = None,
        json_body: Optional[Dict[str, object]] = None,
    ) -> JsonPayload:
        """Send a request and return the decoded body.

        The body is decoded whatever the status code, because Tower reports
        rejections as JSON ``{"detail": ...}`` on 4xx responses.  A body
        that is not JSON comes back as text so callers can log it.
        """
        resp = self._send(
            method,
            path,
            headers={"Accept": "application/json", "Content-Type": "application/json"},
            params=params,
            json_body=json_body,
        )
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            return resp.text

    def get_json(self, path: str, params: Optional[Dict[str, object]] = None) -> JsonPayload:
        """get json."""
        return self.request_json("GET", path, params=params)

    def post_json(self, path: str, body: Dict[str, object]) -> JsonPayload:
        """post json."""
        return self.request_json("POST", path, json_body=body)

    def get_text(self, path: str, params: Optional[Dict[str, object]] = None) -> str:
        """GET a plain-text resource; non-2xx responses raise TowerRequestError."""
        resp = self._send("GET", path, headers={"Accept": "text/plain"}, params=params)
        try:
            resp.raise_for_status()
        except requests.HTTPError as exc:
            raise TowerRequestError(f"{exc}: {resp.text}") from exc
        return resp.text
