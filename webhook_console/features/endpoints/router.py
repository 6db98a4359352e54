"""API router for endpoints of an application."""

from __future__ import annotations

from datetime import datetime
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from webhook_console.core.dependencies import UpstreamDep, UpstreamSettingsDep
from webhook_console.core.exceptions import (
    NotFoundException,
    UpstreamError,
    UpstreamNotFoundError,
    UpstreamRejectedError,
)
from webhook_console.core.pagination import drain
from webhook_console.core.validators import time_window
from webhook_console.features.endpoints.schemas import (
    BulkResendRequest,
    DataResponse,
    EndpointDetailResponse,
)
from webhook_console.features.listing import drain_response, public_error
from webhook_console.features.resend import run_resend

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/endpoints", tags=["endpoints"])

AppIdQuery = Annotated[str, Query(alias="appId", min_length=1, description="Application id")]


@router.get(
    "",
    response_model=list[dict[str, Any]],
    summary="List endpoints",
    description="Every endpoint of an application, fetched across all upstream pages.",
    responses={
        404: {"description": "Application not found; body is an empty list"},
        502: {"description": "Upstream failure; body is an empty list"},
    },
)
async def list_endpoints(
    app_id: AppIdQuery,
    client: UpstreamDep,
    settings: UpstreamSettingsDep,
):
    result = await drain(
        client.endpoints(app_id, limit=settings.drain_page_size),
        max_pages=settings.max_drain_pages,
        resource="endpoints",
    )
    return drain_response(result, "endpoints")


@router.get(
    "/{endpoint_id}",
    response_model=EndpointDetailResponse,
    summary="Get endpoint",
    description="Fetch one endpoint and its custom headers.",
    responses={
        404: {"description": "Endpoint not found; body is {data: null, notFound: true}"},
        502: {"description": "Upstream failure"},
    },
)
async def get_endpoint(endpoint_id: str, app_id: AppIdQuery, client: UpstreamDep):
    """Fetch an endpoint, then its headers.

    A missing endpoint is reported as ``notFound`` with status 404. A failure
    of the headers call does not fail the request; the endpoint is returned
    with ``headers`` null and an ``error`` message.
    """
    try:
        endpoint = await client.get_endpoint(app_id, endpoint_id)
    except UpstreamNotFoundError:
        return JSONResponse(
            content={"data": None, "notFound": True},
            status_code=status.HTTP_404_NOT_FOUND,
        )
    except UpstreamRejectedError as exc:
        raise public_error(exc) from exc

    try:
        headers = await client.get_endpoint_headers(app_id, endpoint_id)
    except UpstreamError as exc:
        logger.warning(
            "Endpoint headers unavailable",
            extra={"endpoint_id": endpoint_id, "error": exc.detail},
        )
        return EndpointDetailResponse(
            data=endpoint,
            headers=None,
            error="Failed to fetch endpoint headers",
        )

    return EndpointDetailResponse(data=endpoint, headers=headers)


@router.get(
    "/{endpoint_id}/stats",
    response_model=DataResponse,
    summary="Endpoint statistics",
    description="Delivery statistics of an endpoint, optionally limited to a time window.",
    responses={
        404: {"description": "Endpoint not found"},
        502: {"description": "Upstream failure"},
    },
)
async def get_endpoint_stats(
    endpoint_id: str,
    app_id: AppIdQuery,
    client: UpstreamDep,
    start_date: Annotated[datetime | None, Query(alias="startDate")] = None,
    end_date: Annotated[datetime | None, Query(alias="endDate")] = None,
) -> DataResponse:
    window = time_window(start_date, end_date, lower="since", upper="until")
    try:
        stats = await client.get_endpoint_stats(app_id, endpoint_id, window=window or None)
    except UpstreamNotFoundError as exc:
        raise NotFoundException(
            detail="Endpoint not found",
            type="endpoint-not-found",
            extra={"notFound": True},
        ) from exc
    except UpstreamRejectedError as exc:
        raise public_error(exc) from exc
    return DataResponse(data=stats)


@router.post(
    "/{endpoint_id}/bulk-resend",
    response_model=DataResponse,
    status_code=status.HTTP_200_OK,
    summary="Resend failed attempts",
    description="Ask the upstream to resend the endpoint's failed attempts.",
    responses={
        400: {"description": "Upstream rejected the request"},
        404: {"description": "Endpoint not found"},
        502: {"description": "Upstream failure"},
    },
)
async def bulk_resend(
    endpoint_id: str,
    body: BulkResendRequest,
    client: UpstreamDep,
) -> DataResponse:
    window = time_window(body.since, body.until, lower="since", upper="until")
    result = await run_resend(
        "bulk",
        client.bulk_resend(body.app_id, endpoint_id, window=window or None),
        not_found="Endpoint not found",
    )
    logger.info(
        "Bulk resend requested",
        extra={"app_id": body.app_id, "endpoint_id": endpoint_id, **window},
    )
    return DataResponse(data=result)
