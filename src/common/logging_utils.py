"""Centralized logging helpers.

Provides a single place to configure the root logger plus small utilities
used for structured DEBUG traces across modules:

- configure_logging: install the stderr handler once, level from environment
- extra_context: build the ``extra=`` mapping for structured events
- is_debug_enabled: cheap guard around expensive DEBUG payloads
- safe_url: strip credentials and sensitive query values before logging
- Timer: measure a block in milliseconds
"""
from __future__ import annotations

import logging
import os
import sys
import time
from typing import Any, Dict, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from constants import Constants

_SENSITIVE_KEYS = ("token", "key", "secret", "password", "auth")
_HANDLER_MARKER = "_apkpin_handler"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure the root logger for CLI use.

    Level precedence: explicit argument, then APKPIN_LOG_LEVEL, then INFO.
    Calling this more than once replaces the handler installed previously.
    """
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "INFO").upper()
    level_value = getattr(logging, level_name, logging.INFO)
    if not isinstance(level_value, int):
        level_value = logging.INFO

    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
    setattr(handler, _HANDLER_MARKER, True)
    root.addHandler(handler)
    root.setLevel(level_value)


def add_file_handler(path: str) -> logging.Handler:
    """Mirror log output to a file with timestamps."""
    file_handler = logging.FileHandler(path, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(Constants.LOG_FILE_FORMAT))
    setattr(file_handler, _HANDLER_MARKER, True)
    logging.getLogger().addHandler(file_handler)
    return file_handler


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Return an ``extra`` mapping for structured log records.

    None values are dropped so records only carry what was known.
    """
    return {k: v for k, v in fields.items() if v is not None}


def is_debug_enabled(logger: logging.Logger) -> bool:
    return logger.isEnabledFor(logging.DEBUG)


def redact(value: str) -> str:
    if not value:
        return value
    return "***"


def safe_url(url: str) -> str:
    """Return url with userinfo removed and sensitive query values redacted."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return "<unparseable url>"
    netloc = parts.hostname or ""
    if parts.port:
        netloc = f"{netloc}:{parts.port}"
    query = [
        (k, redact(v) if any(s in k.lower() for s in _SENSITIVE_KEYS) else v)
        for k, v in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit((parts.scheme, netloc, parts.path, urlencode(query), ""))


class Timer:
    """Context manager measuring elapsed wall time."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        self._end = None
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> float:
        end = self._end if self._end is not None else time.perf_counter()
        return round((end - self._start) * 1000.0, 2)
