"""Observability utilities shared across patient registry services."""

from .logger import configure_logging, get_logger, operation_context

__all__ = [
    "configure_logging",
    "get_logger",
    "operation_context",
]
