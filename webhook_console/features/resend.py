"""Resend request handling shared by message and endpoint routes.

The upstream only accepts or rejects a resend; delivery happens later on its
side. Outcomes map to console responses as follows:

- 2xx -> success
- 404 -> 404 with the given not-found message
- 400 -> 400 with the upstream's explanation
- anything else -> 502
"""

from __future__ import annotations

from collections.abc import Awaitable
import logging
from typing import Any

from webhook_console.core.exceptions import (
    BadRequestException,
    NotFoundException,
    UpstreamError,
    UpstreamNotFoundError,
    UpstreamRejectedError,
)
from webhook_console.infra.metrics.tracking import track_resend

logger = logging.getLogger(__name__)


async def run_resend(kind: str, call: Awaitable[Any], *, not_found: str) -> Any:
    """Await an upstream resend call and translate its failures.

    Args:
        kind: Metric label, ``message`` or ``bulk``.
        call: The pending upstream call.
        not_found: Message returned when the upstream answers 404.

    Returns:
        The decoded upstream body (None when empty).

    Raises:
        NotFoundException: Upstream answered 404.
        BadRequestException: Upstream answered 400.
        UpstreamError: Any other upstream failure (rendered as 502).
    """
    try:
        result = await call
    except UpstreamNotFoundError as exc:
        track_resend(kind, "not_found")
        raise NotFoundException(
            detail=not_found,
            type="resend-not-found",
            extra={"notFound": True},
        ) from exc
    except UpstreamRejectedError as exc:
        track_resend(kind, "rejected")
        raise BadRequestException(detail=exc.detail, type="resend-rejected") from exc
    except UpstreamError:
        track_resend(kind, "error")
        raise

    track_resend(kind, "success")
    logger.info("Resend accepted by upstream", extra={"kind": kind})
    return result


__all__ = ["run_resend"]
