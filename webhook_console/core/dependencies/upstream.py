"""Upstream client dependencies.

A client is created per request for the authenticated tenant and closed
when the request finishes.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends
import httpx

from webhook_console.core.dependencies.auth import TenantDep
from webhook_console.core.settings import UpstreamSettings, get_upstream_settings
from webhook_console.infra.upstream.webhooks_api import WebhookAPIClient

UpstreamSettingsDep = Annotated[UpstreamSettings, Depends(get_upstream_settings)]


def get_upstream_transport() -> httpx.AsyncBaseTransport | None:
    """Transport used by upstream clients; None selects the default network transport.

    Tests override this dependency with an ``httpx.MockTransport``.
    """
    return None


async def get_upstream_client(
    tenant: TenantDep,
    settings: UpstreamSettingsDep,
    transport: Annotated[httpx.AsyncBaseTransport | None, Depends(get_upstream_transport)],
) -> AsyncIterator[WebhookAPIClient]:
    """Yield an upstream client bound to the tenant of the current session."""
    async with WebhookAPIClient(
        tenant,
        timeout=settings.timeout_seconds,
        connect_timeout=settings.connect_timeout_seconds,
        transport=transport,
    ) as client:
        yield client


UpstreamDep = Annotated[WebhookAPIClient, Depends(get_upstream_client)]


__all__ = [
    "UpstreamDep",
    "UpstreamSettingsDep",
    "get_upstream_client",
    "get_upstream_transport",
]
