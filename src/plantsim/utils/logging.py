"""Structured JSON logging for plantsim.

Every record is emitted as one JSON line so simulation runs can be grepped or
ingested by a test harness without a custom parser. Plant elements never log
from ``step``; only construction from configuration and the simulation
runner emit records.

Simulation values are often numpy scalars or arrays and element metadata is
carried in ``str`` enums (``ElementKind``, ``Branch``); the encoder writes
both as plain JSON numbers, lists and strings instead of their ``repr``.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from enum import Enum
from typing import Any

import numpy as np


# Attributes present on every LogRecord; everything else came in via ``extra``.
_STANDARD_RECORD_ATTRS: frozenset[str] = frozenset({
    "args", "asctime", "created", "exc_info", "exc_text", "filename",
    "funcName", "id", "levelname", "levelno", "lineno", "module",
    "msecs", "message", "msg", "name", "pathname", "process",
    "processName", "relativeCreated", "stack_info", "thread",
    "threadName", "taskName",
})


def _json_default(value: Any) -> Any:
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, Enum):
        return value.value
    return str(value)


class _JSONFormatter(logging.Formatter):
    """Formats log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_"):
                log_obj[key] = value

        if record.exc_info:
            log_obj["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(log_obj, default=_json_default)


class StructuredLogger:
    """Thin wrapper around stdlib Logger that emits JSON-formatted records.

    Usage::

        logger = get_logger("plantsim.analysis")
        logger.info("Simulation complete", element="PT1", samples=100)

        plant_log = logger.bind(plant="heater_loop")
        plant_log.debug("Built element", element="heater")

    Keyword arguments, and any context attached with :meth:`bind`, are merged
    into the JSON output alongside the standard timestamp / level / name /
    message fields. Per-call keywords win over bound context.
    """

    def __init__(
        self,
        name: str,
        level: int = logging.INFO,
        context: dict[str, Any] | None = None,
    ) -> None:
        self._logger = logging.getLogger(name)
        if not self._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(_JSONFormatter())
            self._logger.addHandler(handler)
            self._logger.propagate = False
        self._logger.setLevel(level)
        self._context: dict[str, Any] = dict(context or {})

    def bind(self, **context: Any) -> StructuredLogger:
        """Return a logger sharing this one's handler and level, with extra fixed fields."""
        bound = StructuredLogger.__new__(StructuredLogger)
        bound._logger = self._logger
        bound._context = {**self._context, **context}
        return bound

    def _log(self, level: int, msg: str, extra: dict[str, Any], exc_info: bool = False) -> None:
        fields = {**self._context, **extra}
        self._logger.log(level, msg, extra=fields or None, exc_info=exc_info)

    def debug(self, msg: str, **extra: Any) -> None:
        self._log(logging.DEBUG, msg, extra)

    def info(self, msg: str, **extra: Any) -> None:
        self._log(logging.INFO, msg, extra)

    def warning(self, msg: str, **extra: Any) -> None:
        self._log(logging.WARNING, msg, extra)

    def error(self, msg: str, **extra: Any) -> None:
        self._log(logging.ERROR, msg, extra)

    def exception(self, msg: str, **extra: Any) -> None:
        self._log(logging.ERROR, msg, extra, exc_info=True)

    def set_level(self, level: int) -> None:
        """Set the level of the underlying logger (shared with bound loggers)."""
        self._logger.setLevel(level)

    @property
    def name(self) -> str:
        return self._logger.name

    @property
    def context(self) -> dict[str, Any]:
        return dict(self._context)


_loggers: dict[str, StructuredLogger] = {}


def get_logger(name: str, level: int = logging.INFO) -> StructuredLogger:
    """Return a named StructuredLogger, creating it if it does not yet exist.

    Args:
        name: Logger name, typically the module's ``__name__``.
        level: Logging level applied when the logger is first created.

    Returns:
        A StructuredLogger instance.
    """
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name, level=level)
    return _loggers[name]
