"""Context management for structured logging.

Request-scoped fields (``correlation_id``, ``operation_name``, ...) are kept
in a ``ContextVar`` so every coroutine resolving a GraphQL request logs them
without passing them around explicitly.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any

_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})


def set_log_context(**kwargs: Any) -> None:
    """Add fields to the logging context of the current task.

    Example:
        set_log_context(correlation_id="abc-123", operation_name="GetDroid")
        logger.info("Resolving droid")  # record carries both fields
    """
    current = _log_context.get().copy()
    current.update(kwargs)
    _log_context.set(current)


def get_log_context() -> dict[str, Any]:
    """Return a copy of the current logging context."""
    return _log_context.get().copy()


def clear_log_context() -> None:
    """Drop every field from the current logging context."""
    _log_context.set({})


def remove_from_log_context(*keys: str) -> None:
    """Remove specific keys from the logging context."""
    current = _log_context.get().copy()
    for key in keys:
        current.pop(key, None)
    _log_context.set(current)


class ContextInjectingFilter(logging.Filter):
    """Copy the contextvars log context onto every ``LogRecord``.

    Installed on the root queue handler by ``configure_logging`` so formatters
    (``JSONFormatter`` in particular) see the fields as record attributes.
    Existing record attributes are never overwritten.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _log_context.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


__all__ = [
    "ContextInjectingFilter",
    "clear_log_context",
    "get_log_context",
    "remove_from_log_context",
    "set_log_context",
]
