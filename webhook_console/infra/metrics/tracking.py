"""Helper functions for tracking business and operational metrics."""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging
import time
from typing import TYPE_CHECKING, Any

from webhook_console.core.exceptions import (
    UpstreamError,
    UpstreamNotFoundError,
    UpstreamRejectedError,
)
from webhook_console.infra.metrics import business

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


# ============================================================================
# Error Tracking
# ============================================================================


def track_error(
    error_type: str,
    endpoint: str,
    status_code: int,
    extra: dict[str, Any] | None = None,
) -> None:
    """Track an error occurrence.

    Args:
        error_type: Type of error (e.g., 'upstream-error', 'session-expired')
        endpoint: API endpoint where error occurred
        status_code: HTTP status code
        extra: Additional context for logging

    Example:
            track_error("upstream-error", "/api/applications", 502)
    """
    business.errors_total.labels(
        error_type=error_type,
        endpoint=endpoint,
        status_code=str(status_code),
    ).inc()

    logger.debug(
        f"Tracked error: {error_type}",
        extra={"endpoint": endpoint, "status_code": status_code, **(extra or {})},
    )


def track_validation_error(endpoint: str, field: str) -> None:
    """Track a validation error for a specific field.

    Example:
            track_validation_error("/api/messages/msg_1/resend", "endpointId")
    """
    business.validation_errors_total.labels(
        endpoint=endpoint,
        field=field,
    ).inc()


def track_unhandled_exception(exception_type: str, endpoint: str) -> None:
    """Track an unhandled exception."""
    business.exceptions_unhandled_total.labels(
        exception_type=exception_type,
        endpoint=endpoint,
    ).inc()


# ============================================================================
# Authentication Tracking
# ============================================================================


def track_auth_attempt(method: str, success: bool) -> None:
    """Track a console login attempt.

    Args:
        method: Authentication method (password)
        success: Whether authentication succeeded
    """
    result = "success" if success else "failure"
    business.auth_attempts_total.labels(
        method=method,
        result=result,
    ).inc()


def track_session_validation(result: str) -> None:
    """Track a session cookie validation (valid, missing, invalid, expired)."""
    business.session_validations_total.labels(result=result).inc()


# ============================================================================
# Upstream API Tracking
# ============================================================================


def _outcome(exc: UpstreamError) -> str:
    if isinstance(exc, UpstreamNotFoundError):
        return "not_found"
    if isinstance(exc, UpstreamRejectedError):
        return "rejected"
    if exc.type in ("upstream-timeout", "upstream-unreachable"):
        return exc.type.removeprefix("upstream-")
    return "error"


@asynccontextmanager
async def track_upstream_call(operation: str) -> AsyncIterator[None]:
    """Time one upstream call and count it by outcome.

    Failures must already be mapped to ``UpstreamError`` inside the block;
    anything else is counted as ``error`` and re-raised.

    Example:
        async with track_upstream_call("list_messages"):
            response = await self.client.request("GET", path)
    """
    start = time.perf_counter()
    outcome = "ok"
    try:
        yield
    except UpstreamError as exc:
        outcome = _outcome(exc)
        raise
    except Exception:
        outcome = "error"
        raise
    finally:
        business.upstream_calls_total.labels(operation=operation, outcome=outcome).inc()
        business.upstream_call_duration_seconds.labels(operation=operation).observe(
            time.perf_counter() - start
        )


# ============================================================================
# Console Operations
# ============================================================================


def track_resend(kind: str, result: str) -> None:
    """Track a resend request.

    Args:
        kind: 'message' for a single resend, 'bulk' for an endpoint bulk resend
        result: success, not_found, rejected or error
    """
    business.resend_requests_total.labels(kind=kind, result=result).inc()
