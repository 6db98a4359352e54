"""Logging infrastructure: JSONL formatting, queued handlers and log context.

Usage:
    from webhook_console.infra.logging import set_log_context, setup_logging

    setup_logging()
    set_log_context(request_id="abc-123")
"""

from __future__ import annotations

from webhook_console.infra.logging.config import (
    complete,
    configure_logging,
    setup_logging,
    shutdown,
)
from webhook_console.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    remove_from_log_context,
    set_log_context,
)
from webhook_console.infra.logging.formatters import JSONFormatter

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "clear_log_context",
    "complete",
    "configure_logging",
    "get_log_context",
    "remove_from_log_context",
    "set_log_context",
    "setup_logging",
    "shutdown",
]
