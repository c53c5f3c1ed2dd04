"""
Resource-name extraction from job output.

The text heuristic keys off incidental formatting of the playbook's log
lines, so it is only a fallback: a ``resource_name`` artifact published by
the playbook (``set_stats``) takes precedence when present.
"""
from __future__ import annotations

import logging
import re
from typing import Dict, Optional

from .config import RESOURCE_NAME_ARTIFACT, RESOURCE_NAME_PATTERN

logger = logging.getLogger(__name__)

_RESOURCE_NAME_RE = re.compile(RESOURCE_NAME_PATTERN)


def extract_resource_name(output: Optional[str]) -> Optional[str]:
    """Return the last ``/name\\`` or ``/name"`` token, without delimiters."""
    if not output:
        return None
    found = [m.group(0) for m in _RESOURCE_NAME_RE.finditer(output)]
    if not found:
        return None
    return found[-1][1:-1]


def artifact_resource_name(record: Dict[str, object]) -> Optional[str]:
    """Structured resource name from the job's artifacts, if published."""
    artifacts = record.get("artifacts")
    if not isinstance(artifacts, dict):
        return None
    value = artifacts.get(RESOURCE_NAME_ARTIFACT)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def resolve_resource_name(record: Dict[str, object], output: Optional[str]) -> Optional[str]:
    """Artifact value when available, else the last match in ``output``."""
    name = artifact_resource_name(record)
    if name is not None:
        logger.debug("Resource name taken from job artifacts.")
        return name
    return extract_resource_name(output)
