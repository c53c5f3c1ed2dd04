"""
Operator logging for tower_launch.

Provides:
    - StructuredFormatter: JSON formatter for machine-parseable log output.
    - configure_logging: Attach one stderr handler to the package logger.
    - get_logger: Factory for loggers configured the same way.
"""
from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO

PACKAGE_LOGGER = "tower_launch"
TEXT_FORMAT = "%(message)s"


class StructuredFormatter(logging.Formatter):
    """JSON formatter for machine-parseable log output.

    Each log record is serialised as a single JSON line containing at minimum:
        timestamp, level, module, message.
    If the record carries a ``job`` attribute (set via ``extra={"job": {...}}``),
    it is included under the ``"job"`` key.
    """

    def format(self, record: logging.LogRecord) -> str:
        """format."""
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.module,
            "message": record.getMessage(),
        }
        if hasattr(record, "job"):
            log_entry["job"] = record.job
        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


class ActionsTextFormatter(logging.Formatter):
    """Plain message text; warnings and errors get a ``[level]:`` prefix."""

    def format(self, record: logging.LogRecord) -> str:
        """format."""
        message = super().format(record)
        if record.levelno >= logging.WARNING:
            return f"[{record.levelname.lower()}]: {message}"
        return message


def _make_formatter(fmt: str) -> logging.Formatter:
    if str(fmt).lower() == "json":
        return StructuredFormatter()
    return ActionsTextFormatter(TEXT_FORMAT)


def get_logger(
    name: str = PACKAGE_LOGGER,
    level: str = "INFO",
    fmt: str = "text",
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Get a configured logger.

    Parameters
    ----------
    name : str
        Logger name.  Module loggers under ``tower_launch`` propagate to
        the package logger, so configuring that one covers every stage.
    level : str
        Minimum log level.  One of DEBUG, INFO, WARNING, ERROR, CRITICAL.
    fmt : str
        ``"text"`` for the CI log, ``"json"`` for one JSON object per line.
    stream : file-like, optional
        Destination; defaults to ``sys.stderr``.

    Returns
    -------
    logging.Logger
        If the logger already has handlers (e.g. from a previous call),
        no duplicate handler is added; the existing ones are reformatted.
    """
    logger = logging.getLogger(name)
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(numeric_level)

    if not logger.handlers:
        handler = logging.StreamHandler(stream or sys.stderr)
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(_make_formatter(fmt))

    return logger


def configure_logging(level: str = "INFO", fmt: str = "text") -> logging.Logger:
    """Configure the package logger used by every stage module."""
    return get_logger(PACKAGE_LOGGER, level=level, fmt=fmt)
