"""API router for messages of an application.

Message and attempt listings are unbounded, so they are paged through one
upstream call at a time: the response carries the cursor and the caller
decides whether to ask for the next page.
"""

from __future__ import annotations

from datetime import datetime
import logging
from typing import Annotated

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from webhook_console.core.dependencies import UpstreamDep, UpstreamSettingsDep
from webhook_console.core.exceptions import UpstreamError
from webhook_console.core.pagination import IteratorPage, passthrough
from webhook_console.core.validators import time_window
from webhook_console.features.auth.schemas import SuccessResponse
from webhook_console.features.listing import iterator_failure
from webhook_console.features.messages.schemas import MessageDetailResponse, ResendRequest
from webhook_console.features.messages.service import MessageService
from webhook_console.features.resend import run_resend

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/messages", tags=["messages"])

AppIdQuery = Annotated[str, Query(alias="appId", min_length=1, description="Application id")]
IteratorQuery = Annotated[
    str | None, Query(description="Cursor returned by the previous page")
]
LimitQuery = Annotated[int | None, Query(ge=1, description="Page size")]


@router.get(
    "",
    response_model=IteratorPage,
    summary="List messages",
    description="One page of an application's messages.",
    responses={
        404: {"description": "Application not found; body is an empty page with error"},
        502: {"description": "Upstream failure; body is an empty page with error"},
    },
)
async def list_messages(
    app_id: AppIdQuery,
    client: UpstreamDep,
    settings: UpstreamSettingsDep,
    iterator: IteratorQuery = None,
    limit: LimitQuery = None,
    start_date: Annotated[datetime | None, Query(alias="startDate")] = None,
    end_date: Annotated[datetime | None, Query(alias="endDate")] = None,
):
    fetch_page = client.messages(
        app_id,
        limit=settings.clamp_limit(limit, settings.messages_default_limit),
        filters=time_window(start_date, end_date),
    )
    try:
        return await passthrough(fetch_page, iterator, resource="messages")
    except UpstreamError as exc:
        return iterator_failure(exc, "messages")


@router.get(
    "/{message_id}",
    response_model=MessageDetailResponse,
    summary="Get message",
    description="Fetch a message together with the first page of its delivery attempts.",
    responses={
        404: {"description": "Message not found; body is {data: null, notFound: true}"},
        502: {"description": "Both fetches failed"},
    },
)
async def get_message(
    message_id: str,
    app_id: AppIdQuery,
    client: UpstreamDep,
    settings: UpstreamSettingsDep,
):
    service = MessageService(client, attempts_limit=settings.message_attempts_default_limit)
    detail, status_code = await service.get_detail(app_id, message_id)
    if status_code == status.HTTP_200_OK:
        return detail
    return JSONResponse(
        content=detail.model_dump(by_alias=True),
        status_code=status_code,
    )


@router.get(
    "/{message_id}/attempts",
    response_model=IteratorPage,
    summary="List message attempts",
    description="One page of the delivery attempts of a message.",
    responses={
        404: {"description": "Message not found; body is an empty page with error"},
        502: {"description": "Upstream failure; body is an empty page with error"},
    },
)
async def list_message_attempts(
    message_id: str,
    app_id: AppIdQuery,
    client: UpstreamDep,
    settings: UpstreamSettingsDep,
    iterator: IteratorQuery = None,
    limit: LimitQuery = None,
):
    fetch_page = client.message_attempts(
        app_id,
        message_id,
        limit=settings.clamp_limit(limit, settings.message_attempts_default_limit),
    )
    try:
        return await passthrough(fetch_page, iterator, resource="message_attempts")
    except UpstreamError as exc:
        return iterator_failure(exc, "message_attempts")


@router.post(
    "/{message_id}/resend",
    response_model=SuccessResponse,
    summary="Resend message",
    description=(
        "Ask the upstream to redeliver a message to one endpoint. "
        "Success means the request was accepted, not that delivery succeeded."
    ),
    responses={
        400: {"description": "Upstream rejected the request"},
        404: {"description": "Message not found"},
        422: {"description": "appId or endpointId missing"},
        502: {"description": "Upstream failure"},
    },
)
async def resend_message(
    message_id: str,
    body: ResendRequest,
    client: UpstreamDep,
) -> SuccessResponse:
    await run_resend(
        "message",
        client.resend_message(body.app_id, message_id, body.endpoint_id),
        not_found="Message not found",
    )
    logger.info(
        "Message resend requested",
        extra={
            "app_id": body.app_id,
            "message_id": message_id,
            "endpoint_id": body.endpoint_id,
        },
    )
    return SuccessResponse()
