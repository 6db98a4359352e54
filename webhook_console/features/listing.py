"""Response helpers shared by the listing routers.

Listings never surface an upstream failure as an exception:

- Full drain: the body is always a JSON array; on failure it is ``[]`` with
  a 502 (404 when the owning resource is missing) and the reason in the
  ``X-Console-Error`` header.
- Passthrough: on failure the body is an exhausted, empty page with an
  ``error`` message and the same status mapping.

An upstream 400 carries the upstream's own wording, which is only passed on
by the resend routes; listings and detail views replace it with the generic
upstream failure message.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse

from webhook_console.core.exceptions import (
    UpstreamError,
    UpstreamNotFoundError,
    UpstreamRejectedError,
)
from webhook_console.core.pagination import DrainResult, IteratorPage

logger = logging.getLogger(__name__)

ERROR_HEADER = "X-Console-Error"


def public_error(exc: UpstreamError) -> UpstreamError:
    """The error as shown to clients: rejections lose the upstream wording."""
    if isinstance(exc, UpstreamRejectedError):
        return UpstreamError(path=exc.path)
    return exc


def failure_status(exc: UpstreamError) -> int:
    """Status code for a listing whose upstream fetch failed."""
    if isinstance(exc, UpstreamNotFoundError):
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_502_BAD_GATEWAY


def drain_response(result: DrainResult, resource: str) -> list[Any] | JSONResponse:
    """Render a full-drain result as a JSON array."""
    if result.error is None:
        return result.items

    logger.warning(
        "Returning empty listing after upstream failure",
        extra={
            "resource": resource,
            "pages": result.pages,
            "error": result.error.detail,
            "upstream_status": result.error.upstream_status,
        },
    )
    return JSONResponse(
        content=[],
        status_code=failure_status(result.error),
        headers={ERROR_HEADER: public_error(result.error).detail},
    )


def iterator_failure(exc: UpstreamError, resource: str) -> JSONResponse:
    """Render a failed passthrough fetch as an empty, exhausted page."""
    logger.warning(
        "Returning empty page after upstream failure",
        extra={
            "resource": resource,
            "error": exc.detail,
            "upstream_status": exc.upstream_status,
        },
    )
    return JSONResponse(
        content=IteratorPage.failed(public_error(exc).detail).model_dump(),
        status_code=failure_status(exc),
    )


__all__ = [
    "ERROR_HEADER",
    "drain_response",
    "failure_status",
    "iterator_failure",
    "public_error",
]
