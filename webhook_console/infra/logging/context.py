"""Context management for structured logging.

Provides automatic context injection into log records using contextvars, so
request IDs and the authenticated console username appear in every log line
without being passed around explicitly.

Each async task gets its own copy of the context, so concurrent requests
never see each other's values.
"""

from __future__ import annotations

from contextvars import ContextVar
import logging
from typing import Any

_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})


def set_log_context(**kwargs: Any) -> None:
    """Set logging context for the current async task.

    Example:
        ```python
        # In middleware
        set_log_context(request_id="abc-123")

        # In the session dependency
        set_log_context(username="operator")

        logger.info("Listing applications")  # Includes request_id and username
        ```
    """
    current = _log_context.get().copy()
    current.update(kwargs)
    _log_context.set(current)


def get_log_context() -> dict[str, Any]:
    """Get a copy of the current logging context."""
    return _log_context.get().copy()


def clear_log_context() -> None:
    """Clear all logging context for the current async task."""
    _log_context.set({})


def remove_from_log_context(*keys: str) -> None:
    """Remove specific keys from logging context."""
    current = _log_context.get().copy()
    for key in keys:
        current.pop(key, None)
    _log_context.set(current)


class ContextInjectingFilter(logging.Filter):
    """Logging filter that copies the contextvars log context onto each record.

    Attached to the root QueueHandler so records from every logger pass
    through it, on the emitting task, before they are queued.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _log_context.get().items():
            # Explicit extra= values win over context
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
