"""Structured logging for patient registry operations.

structlog builds the event (context variables, level, timestamp, JSON
rendering) and hands the rendered line to loguru, which owns the sink.
"""

from __future__ import annotations

import logging
import sys
import uuid
from contextlib import contextmanager
from typing import Any, Iterator

import structlog
from loguru import logger as loguru_logger

__all__ = ["configure_logging", "get_logger", "operation_context"]

_LINE_FORMAT = "{time:YYYY-MM-DDTHH:mm:ss.SSSZZ} | {level: <8} | {extra[service]} | {message}"

_configured = False


class _LoguruLogger:
    """structlog output logger that forwards rendered events to loguru."""

    def __init__(self, name: str | None = None) -> None:
        self._target = loguru_logger.bind(logger=name or "-")

    def _log(self, level: str, message: str) -> None:
        self._target.log(level, message)

    def debug(self, message: str) -> None:
        self._log("DEBUG", message)

    def info(self, message: str) -> None:
        self._log("INFO", message)

    def warning(self, message: str) -> None:
        self._log("WARNING", message)

    def error(self, message: str) -> None:
        self._log("ERROR", message)

    def critical(self, message: str) -> None:
        self._log("CRITICAL", message)

    msg = info
    exception = error
    fatal = critical


def _loguru_logger_factory(*args: Any) -> _LoguruLogger:
    return _LoguruLogger(args[0] if args else None)


def _level_number(level: str | int) -> int:
    if isinstance(level, int):
        return level
    number = logging.getLevelName(level.upper())
    if not isinstance(number, int):
        raise ValueError(f"Unknown log level: {level}")
    return number


def configure_logging(*, service_name: str | None = None, level: str | int = "INFO") -> None:
    """Route registry events to a loguru sink on stderr at ``level``.

    Repeat calls only update the level and the bound ``service_name``.
    """

    global _configured

    threshold = _level_number(level)

    if not _configured:
        loguru_logger.remove()
        loguru_logger.configure(extra={"service": "-"})
        loguru_logger.add(sys.stderr, level=threshold, format=_LINE_FORMAT, diagnose=False)
        _configured = True

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        logger_factory=_loguru_logger_factory,
        wrapper_class=structlog.make_filtering_bound_logger(threshold),
    )

    if service_name:
        loguru_logger.configure(extra={"service": service_name})
        structlog.contextvars.bind_contextvars(service=service_name)


def get_logger(name: str | None = None):
    if name is None:
        return structlog.get_logger()
    return structlog.get_logger(name)


@contextmanager
def operation_context(
    operation: str,
    *,
    patient_id: str | None = None,
    **extra: Any,
) -> Iterator[str]:
    """Bind ``operation``, ``patient_id`` and a fresh ``operation_id`` for the block.

    Keys bound before entering are restored on exit. Yields the operation id.
    """

    operation_id = uuid.uuid4().hex
    values: dict[str, Any] = {"operation": operation, "operation_id": operation_id, **extra}
    if patient_id:
        values["patient_id"] = patient_id

    with structlog.contextvars.bound_contextvars(**values):
        yield operation_id
