"""Centralized logging helpers.

Provides a single place to configure the root logger, build structured
``extra=`` payloads for DEBUG traces, and time operations. Modules obtain
their own logger via ``logging.getLogger(__name__)`` and use these helpers
only around the traces that need structure.
"""
from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, Optional

from constants import Constants

_CONFIGURED_HANDLER_ATTR = "_runtime_locator_handler"


def _level_from_env() -> int:
    """Return the log level named by the environment, defaulting to INFO."""
    name = os.environ.get(Constants.ENV_LOG_LEVEL, "INFO").strip().upper()
    level = logging.getLevelName(name)
    if isinstance(level, int):
        return level
    return logging.INFO


def configure_logging(level: Optional[int] = None) -> None:
    """Configure the root logger once with the project format.

    Repeated calls only adjust the level; handlers are not duplicated.
    """
    root = logging.getLogger()
    effective = level if level is not None else _level_from_env()
    if not any(getattr(h, _CONFIGURED_HANDLER_ATTR, False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        setattr(handler, _CONFIGURED_HANDLER_ATTR, True)
        root.addHandler(handler)
    root.setLevel(effective)


def add_file_handler(path: str) -> logging.Handler:
    """Attach a file handler with the detailed file format to the root logger."""
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(Constants.FILE_LOG_FORMAT))
    logging.getLogger().addHandler(handler)
    return handler


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records from this logger would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra=`` mapping, dropping fields whose value is None.

    Keys are namespaced under ``ctx_`` so they never collide with the
    attributes of ``logging.LogRecord``.
    """
    return {f"ctx_{key}": value for key, value in fields.items() if value is not None}


class Timer:
    """Context manager measuring wall-clock duration in milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        self._end = None
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        """Elapsed milliseconds; measured up to now while still running."""
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
