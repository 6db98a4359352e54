"""Resource-level calls against the webhook-delivery API.

Path layout of the upstream (all relative to the tenant base URL):

    /api/v1/app                                            applications
    /api/v1/app/{app}/endpoint                             endpoints
    /api/v1/app/{app}/endpoint/{ep}                        endpoint detail
    /api/v1/app/{app}/endpoint/{ep}/headers                endpoint headers
    /api/v1/app/{app}/endpoint/{ep}/stats                  endpoint statistics
    /api/v1/app/{app}/endpoint/{ep}/bulk-resend            resend failed attempts
    /api/v1/app/{app}/msg                                  messages
    /api/v1/app/{app}/msg/{msg}                            message detail
    /api/v1/app/{app}/msg/{msg}/endpoint/{ep}/resend       resend one message
    /api/v1/app/{app}/attempt/msg/{msg}                    attempts of a message
    /api/v1/app/{app}/attempt/endpoint/{ep}                attempts of an endpoint
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from webhook_console.infra.upstream.client import UpstreamClient

if TYPE_CHECKING:
    from webhook_console.core.pagination.aggregators import PageFetcher

API_ROOT = "/api/v1/app"


def _seg(value: str) -> str:
    """Quote one identifier as a single path segment."""
    return quote(value, safe="")


class WebhookAPIClient(UpstreamClient):
    """Typed access to the upstream resources the console uses.

    Listing methods return page fetchers so the caller chooses the
    aggregation strategy (full drain or passthrough).
    """

    # ──────────────────────────────────────────────────────────────
    # Paths
    # ──────────────────────────────────────────────────────────────

    @staticmethod
    def app_path(app_id: str) -> str:
        return f"{API_ROOT}/{_seg(app_id)}"

    def endpoint_path(self, app_id: str, endpoint_id: str) -> str:
        return f"{self.app_path(app_id)}/endpoint/{_seg(endpoint_id)}"

    def message_path(self, app_id: str, message_id: str) -> str:
        return f"{self.app_path(app_id)}/msg/{_seg(message_id)}"

    # ──────────────────────────────────────────────────────────────
    # Listings
    # ──────────────────────────────────────────────────────────────

    def applications(self, *, limit: int) -> PageFetcher:
        return self.page_fetcher(API_ROOT, limit=limit, operation="list_applications")

    def endpoints(self, app_id: str, *, limit: int) -> PageFetcher:
        return self.page_fetcher(
            f"{self.app_path(app_id)}/endpoint",
            limit=limit,
            operation="list_endpoints",
        )

    def messages(
        self,
        app_id: str,
        *,
        limit: int,
        filters: dict[str, Any] | None = None,
    ) -> PageFetcher:
        return self.page_fetcher(
            f"{self.app_path(app_id)}/msg",
            limit=limit,
            filters=filters,
            operation="list_messages",
        )

    def message_attempts(self, app_id: str, message_id: str, *, limit: int) -> PageFetcher:
        return self.page_fetcher(
            f"{self.app_path(app_id)}/attempt/msg/{_seg(message_id)}",
            limit=limit,
            operation="list_message_attempts",
        )

    def endpoint_attempts(
        self,
        app_id: str,
        endpoint_id: str,
        *,
        limit: int,
        filters: dict[str, Any] | None = None,
    ) -> PageFetcher:
        return self.page_fetcher(
            f"{self.app_path(app_id)}/attempt/endpoint/{_seg(endpoint_id)}",
            limit=limit,
            filters=filters,
            operation="list_endpoint_attempts",
        )

    # ──────────────────────────────────────────────────────────────
    # Details
    # ──────────────────────────────────────────────────────────────

    async def get_endpoint(self, app_id: str, endpoint_id: str) -> Any:
        return await self.get_json(
            self.endpoint_path(app_id, endpoint_id), operation="get_endpoint"
        )

    async def get_endpoint_headers(self, app_id: str, endpoint_id: str) -> Any:
        return await self.get_json(
            f"{self.endpoint_path(app_id, endpoint_id)}/headers",
            operation="get_endpoint_headers",
        )

    async def get_endpoint_stats(
        self,
        app_id: str,
        endpoint_id: str,
        *,
        window: dict[str, str] | None = None,
    ) -> Any:
        return await self.get_json(
            f"{self.endpoint_path(app_id, endpoint_id)}/stats",
            window,
            operation="get_endpoint_stats",
        )

    async def get_message(self, app_id: str, message_id: str) -> Any:
        return await self.get_json(
            self.message_path(app_id, message_id), operation="get_message"
        )

    # ──────────────────────────────────────────────────────────────
    # Resend
    # ──────────────────────────────────────────────────────────────

    async def resend_message(self, app_id: str, message_id: str, endpoint_id: str) -> Any:
        """Ask the upstream to redeliver a message to one endpoint.

        Delivery itself is asynchronous; a 2xx only means the request was
        accepted.
        """
        return await self.post_json(
            f"{self.message_path(app_id, message_id)}/endpoint/{_seg(endpoint_id)}/resend",
            operation="resend_message",
        )

    async def bulk_resend(
        self,
        app_id: str,
        endpoint_id: str,
        *,
        window: dict[str, str] | None = None,
    ) -> Any:
        """Ask the upstream to resend an endpoint's failed attempts."""
        return await self.post_json(
            f"{self.endpoint_path(app_id, endpoint_id)}/bulk-resend",
            window,
            operation="bulk_resend",
        )


__all__ = ["API_ROOT", "WebhookAPIClient"]
