"""API router for applications."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from webhook_console.core.dependencies import UpstreamDep, UpstreamSettingsDep
from webhook_console.core.pagination import drain
from webhook_console.features.listing import drain_response

router = APIRouter(prefix="/applications", tags=["applications"])


@router.get(
    "",
    response_model=list[dict[str, Any]],
    summary="List applications",
    description="Every application of the tenant, fetched across all upstream pages.",
    responses={502: {"description": "Upstream failure; body is an empty list"}},
)
async def list_applications(client: UpstreamDep, settings: UpstreamSettingsDep):
    result = await drain(
        client.applications(limit=settings.drain_page_size),
        max_pages=settings.max_drain_pages,
        resource="applications",
    )
    return drain_response(result, "applications")
