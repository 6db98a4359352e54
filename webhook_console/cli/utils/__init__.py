"""CLI utilities for running async operations and formatting output."""

from webhook_console.cli.utils.async_runner import coro
from webhook_console.cli.utils.formatters import (
    echo_json,
    error,
    header,
    info,
    mask_secret,
    success,
    warning,
)

__all__ = [
    "coro",
    "echo_json",
    "error",
    "header",
    "info",
    "mask_secret",
    "success",
    "warning",
]
