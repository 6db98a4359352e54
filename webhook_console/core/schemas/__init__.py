"""Shared response schemas."""

from __future__ import annotations

from webhook_console.core.schemas.error import (
    ProblemDetail,
    ValidationError,
    ValidationProblemDetail,
)

__all__ = ["ProblemDetail", "ValidationError", "ValidationProblemDetail"]
