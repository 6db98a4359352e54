"""API router for delivery attempts of an endpoint."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Query

from webhook_console.core.dependencies import UpstreamDep, UpstreamSettingsDep
from webhook_console.core.exceptions import UpstreamError
from webhook_console.core.pagination import IteratorPage, passthrough
from webhook_console.core.validators import AttemptStatus, time_window, upstream_attempt_status
from webhook_console.features.listing import iterator_failure

router = APIRouter(prefix="/attempts", tags=["attempts"])


@router.get(
    "",
    response_model=IteratorPage,
    summary="List endpoint attempts",
    description=(
        "One page of the delivery attempts made to an endpoint, optionally "
        "filtered by outcome and time window."
    ),
    responses={
        404: {"description": "Endpoint not found; body is an empty page with error"},
        502: {"description": "Upstream failure; body is an empty page with error"},
    },
)
async def list_endpoint_attempts(
    app_id: Annotated[str, Query(alias="appId", min_length=1)],
    endpoint_id: Annotated[str, Query(alias="endpointId", min_length=1)],
    client: UpstreamDep,
    settings: UpstreamSettingsDep,
    attempt_status: Annotated[AttemptStatus | None, Query(alias="status")] = None,
    iterator: Annotated[str | None, Query()] = None,
    limit: Annotated[int | None, Query(ge=1)] = None,
    start_date: Annotated[datetime | None, Query(alias="startDate")] = None,
    end_date: Annotated[datetime | None, Query(alias="endDate")] = None,
):
    """Fetch one page of attempts.

    ``status=success`` and ``status=failed`` are sent upstream as the numeric
    codes ``0`` and ``2``.
    """
    filters: dict[str, str | None] = {
        **time_window(start_date, end_date),
        "status": upstream_attempt_status(attempt_status),
    }
    fetch_page = client.endpoint_attempts(
        app_id,
        endpoint_id,
        limit=settings.clamp_limit(limit, settings.attempts_default_limit),
        filters=filters,
    )
    try:
        return await passthrough(fetch_page, iterator, resource="endpoint_attempts")
    except UpstreamError as exc:
        return iterator_failure(exc, "endpoint_attempts")
