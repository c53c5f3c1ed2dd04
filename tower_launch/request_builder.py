"""
Build the immutable launch request and the client bound to the Tower server.
"""
from __future__ import annotations

import base64
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

import requests

from .client import ClientConfig, TowerClient
from .config import (
    CERTIFICATE_MASK,
    CERTIFICATE_VAR,
    CLIENT_ID_VAR,
    CLIENT_SECRET_VAR,
    REQUEST_TIMEOUT_SECONDS,
    SUBSCRIPTION_VAR,
    TOWER_URL,
    VERIFY_TLS,
)
from .errors import InvalidInputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LaunchInputs:
    """Raw values handed over by the harness (step inputs or CLI flags)."""
    username: str
    password: str
    template_id: str
    url: str = TOWER_URL
    subscription: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    certificate_path: Optional[str] = None
    additional_vars: Optional[str] = None
    verify_tls: bool = VERIFY_TLS
    request_timeout: Optional[float] = REQUEST_TIMEOUT_SECONDS


@dataclass(frozen=True)
class LaunchRequest:
    """Template id plus the merged extra variables; read-only once built."""
    template_id: str
    extra_vars: Mapping[str, object] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self):
        # Detach from the caller's dict so later edits cannot leak in.
        object.__setattr__(self, "extra_vars", MappingProxyType(dict(self.extra_vars)))

    def body(self) -> Dict[str, object]:
        """JSON body for the launch endpoint."""
        return {"extra_vars": dict(self.extra_vars)}


def parse_additional_vars(text: Optional[str]) -> Dict[str, object]:
    """Parse the caller's extra-vars JSON object; blank text is not valid JSON."""
    try:
        parsed = json.loads(text if text is not None else "")
    except json.JSONDecodeError as exc:
        logger.error("%s", exc)
        raise InvalidInputError() from exc
    if not isinstance(parsed, dict):
        logger.error("additional vars must be a JSON object, got %s", type(parsed).__name__)
        raise InvalidInputError()
    return parsed


def encode_certificate(path: str) -> str:
    """Return the file's bytes as base64 text."""
    return base64.b64encode(Path(path).read_bytes()).decode("ascii")


def merge_extra_vars(
    subscription: Optional[str] = None,
    client_id: Optional[str] = None,
    client_secret: Optional[str] = None,
    certificate_b64: Optional[str] = None,
    additional: Optional[Mapping[str, object]] = None,
) -> Dict[str, object]:
    """Merge credential-derived vars with the caller's; the caller's win."""
    merged: Dict[str, object] = {}
    if subscription is not None:
        merged[SUBSCRIPTION_VAR] = subscription
    if client_id is not None:
        merged[CLIENT_ID_VAR] = client_id
    if client_secret is not None:
        merged[CLIENT_SECRET_VAR] = client_secret
    if certificate_b64 is not None:
        merged[CERTIFICATE_VAR] = certificate_b64
    merged.update(additional or {})
    return merged


def redact_extra_vars(extra_vars: Mapping[str, object], certificate_supplied: bool) -> Dict[str, object]:
    """Copy of ``extra_vars`` safe to print."""
    printable = dict(extra_vars)
    if certificate_supplied:
        printable[CERTIFICATE_VAR] = CERTIFICATE_MASK
    return printable


def build_launch_request(
    inputs: LaunchInputs,
    session: Optional[requests.Session] = None,
) -> Tuple[LaunchRequest, TowerClient]:
    """Validate inputs and return the launch request with its bound client.

    Raises
    ------
    InvalidInputError
        ``additional_vars`` is not a JSON object.  Raised before any client
        is created, so no request can have been sent.
    OSError
        The certificate file cannot be read.
    """
    additional = parse_additional_vars(inputs.additional_vars)

    certificate_b64 = None
    if inputs.certificate_path:
        certificate_b64 = encode_certificate(inputs.certificate_path)

    extra_vars = merge_extra_vars(
        subscription=inputs.subscription,
        client_id=inputs.client_id,
        client_secret=inputs.client_secret,
        certificate_b64=certificate_b64,
        additional=additional,
    )
    request = LaunchRequest(template_id=str(inputs.template_id), extra_vars=extra_vars)

    client = TowerClient(
        ClientConfig(
            base_url=inputs.url,
            username=inputs.username,
            password=inputs.password,
            verify_tls=inputs.verify_tls,
            timeout_seconds=inputs.request_timeout,
        ),
        session=session,
    )

    logger.info("Ansible Tower: %s", inputs.url)
    logger.info("extra-vars: ")
    logger.info(
        "%s",
        json.dumps(
            redact_extra_vars(request.extra_vars, bool(inputs.certificate_path)),
            indent=2,
            default=str,
        ),
    )
    return request, client
