"""Reusable validators and converters for console query parameters.

Usage:
    from webhook_console.core.validators import time_window

    params = time_window(start_date, end_date)  # {"after": "...", "before": "..."}
"""

from __future__ import annotations

from webhook_console.core.validators.filters import (
    AttemptStatus,
    time_window,
    to_upstream_timestamp,
    upstream_attempt_status,
)

__all__ = [
    "AttemptStatus",
    "time_window",
    "to_upstream_timestamp",
    "upstream_attempt_status",
]
