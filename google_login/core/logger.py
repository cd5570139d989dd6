"""Logging setup for google_login.

Handlers attach to the ``google_login`` logger rather than the root logger,
so an embedding application keeps control of its own logging. Token values
passed as ``extra`` fields are masked before any handler formats them.
"""
from __future__ import annotations

import json
import logging
import sys
from typing import Any

from google_login.core.config import BaseAppSettings, get_settings

PACKAGE_LOGGER = "google_login"
HANDLER_NAME = "google_login.stdout"

_RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({})).keys()) | {"message", "asctime"}
_SENSITIVE_FIELDS = ("access_token", "refresh_token", "id_token", "code", "client_secret")


class RedactTokensFilter(logging.Filter):
    """Mask credential-bearing ``extra`` fields."""

    def filter(self, record: logging.LogRecord) -> bool:
        for field in _SENSITIVE_FIELDS:
            if getattr(record, field, None):
                setattr(record, field, "[redacted]")
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        for key, value in record.__dict__.items():
            if key.startswith("_") or key in _RESERVED_ATTRS or key in payload:
                continue
            payload.setdefault("extra", {})[key] = value
        return json.dumps(payload, default=str)


def init_logging(
    level: int | None = None,
    app_settings: BaseAppSettings | None = None,
) -> logging.Logger:
    """
    Attach a stdout handler to the package logger, once.

    Args:
        level: Overrides ``LOG_LEVEL``
        app_settings: Settings to read; the cached application settings by default

    Returns:
        The ``google_login`` logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    if any(h.get_name() == HANDLER_NAME for h in logger.handlers):
        return logger

    cfg = app_settings or get_settings()
    effective_level = level or getattr(logging, cfg.LOG_LEVEL.upper(), logging.INFO)
    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.addFilter(RedactTokensFilter())
    if cfg.LOG_FORMAT == "json":
        handler.setFormatter(JsonFormatter())
    else:
        fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
        handler.setFormatter(logging.Formatter(fmt))
    logger.setLevel(effective_level)
    logger.addHandler(handler)
    return logger


def set_debug(enabled: bool, name: str = PACKAGE_LOGGER) -> None:
    """Force DEBUG on one logger, or hand its level back to its parent."""
    logging.getLogger(name).setLevel(logging.DEBUG if enabled else logging.NOTSET)
