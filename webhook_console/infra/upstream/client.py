"""HTTP client for the upstream webhook-delivery API.

Provides:
- One pooled ``httpx.AsyncClient`` per tenant request scope
- Bearer authentication and ``Cache-Control: no-store`` on every call
- A bounded per-call timeout and a single attempt (no retry)
- Mapping of every failure to the ``UpstreamError`` family
- The paginated fetch operation shared by all listings
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError

from webhook_console.core.exceptions import (
    UpstreamError,
    UpstreamNotFoundError,
    UpstreamRejectedError,
)
from webhook_console.core.pagination.schemas import UpstreamPage
from webhook_console.infra.metrics.tracking import track_upstream_call

if TYPE_CHECKING:
    from webhook_console.core.pagination.aggregators import PageFetcher
    from webhook_console.core.settings.tenants import TenantConfig

logger = logging.getLogger(__name__)


class UpstreamClient:
    """Async client bound to one tenant's upstream API.

    Example:
        ```python
        async with UpstreamClient(tenant_config, timeout=10.0) as client:
            page = await client.fetch_page("/api/v1/app", limit=250)
        ```
    """

    def __init__(
        self,
        config: TenantConfig,
        *,
        timeout: float = 15.0,
        connect_timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Upstream base URL and bearer token of the tenant.
            timeout: Total timeout per call in seconds.
            connect_timeout: Connection timeout per call in seconds.
            transport: Optional transport override (tests use MockTransport).
        """
        self.base_url = config.api_url
        self.client = httpx.AsyncClient(
            base_url=config.api_url,
            timeout=httpx.Timeout(timeout, connect=connect_timeout),
            headers={
                "Authorization": f"Bearer {config.api_token.get_secret_value()}",
                "Accept": "application/json",
                "Cache-Control": "no-store",
            },
            transport=transport,
        )

    async def close(self) -> None:
        """Close the HTTP client and release connections."""
        await self.client.aclose()

    async def __aenter__(self) -> UpstreamClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        operation: str = "request",
    ) -> httpx.Response:
        """Send one request and map failures to upstream exceptions.

        Args:
            method: HTTP method.
            path: Path relative to the tenant base URL.
            params: Query parameters; None values are dropped.
            json: Optional JSON body.
            operation: Low-cardinality label for metrics and logs.

        Returns:
            The successful (2xx) response.

        Raises:
            UpstreamNotFoundError: On 404.
            UpstreamRejectedError: On 400, with the upstream detail.
            UpstreamError: On any other status, transport failure or timeout.
        """
        query = {k: v for k, v in (params or {}).items() if v is not None}
        start = time.perf_counter()

        async with track_upstream_call(operation):
            try:
                response = await self.client.request(method, path, params=query, json=json)
            except httpx.TimeoutException as exc:
                logger.warning(
                    "Upstream request timed out",
                    extra={"method": method, "path": path, "operation": operation},
                )
                raise UpstreamError(
                    "Upstream request timed out", path=path, type="upstream-timeout"
                ) from exc
            except httpx.TransportError as exc:
                logger.warning(
                    "Upstream request failed",
                    extra={
                        "method": method,
                        "path": path,
                        "operation": operation,
                        "error": str(exc),
                    },
                )
                raise UpstreamError(
                    "Upstream service unavailable", path=path, type="upstream-unreachable"
                ) from exc

            duration_ms = (time.perf_counter() - start) * 1000
            logger.info(
                f"{method} response from upstream",
                extra={
                    "method": method,
                    "path": path,
                    "operation": operation,
                    "status_code": response.status_code,
                    "duration_ms": round(duration_ms, 2),
                },
            )

            if response.is_success:
                return response
            raise self._error_for(response, path)

    def _error_for(self, response: httpx.Response, path: str) -> UpstreamError:
        status = response.status_code
        if status == 404:
            return UpstreamNotFoundError(path=path)
        if status == 400:
            return UpstreamRejectedError(_extract_detail(response) or "Bad request", path=path)

        logger.warning(
            "Upstream returned an error status",
            extra={"path": path, "status_code": status, "body": response.text[:500]},
        )
        return UpstreamError.from_status(status, response.reason_phrase, path)

    @staticmethod
    def _decode(response: httpx.Response, path: str) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            logger.warning(
                "Upstream returned a body that is not JSON",
                extra={"path": path, "status_code": response.status_code},
            )
            raise UpstreamError("Upstream returned an invalid response", path=path) from exc

    async def get_json(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        *,
        operation: str = "get",
    ) -> Any:
        """GET a path and decode the JSON body."""
        response = await self.request("GET", path, params=params, operation=operation)
        return self._decode(response, path)

    async def post_json(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
        *,
        operation: str = "post",
    ) -> Any:
        """POST to a path and decode the JSON body (None when empty)."""
        response = await self.request("POST", path, params=params, json=json, operation=operation)
        return self._decode(response, path)

    async def fetch_page(
        self,
        path: str,
        *,
        limit: int,
        iterator: str | None = None,
        filters: dict[str, Any] | None = None,
        operation: str = "list",
    ) -> UpstreamPage:
        """Fetch one page of a cursor-paginated listing.

        Args:
            path: Listing path.
            limit: Page-size bound sent upstream.
            iterator: Opaque cursor from the previous page.
            filters: Resource-specific query filters.
            operation: Label for metrics and logs.

        Returns:
            Normalized page (missing data is empty, missing done is done).

        Raises:
            UpstreamError: On any failure, including an undecodable body.
        """
        params: dict[str, Any] = {"limit": limit, **(filters or {})}
        if iterator:
            params["iterator"] = iterator

        body = await self.get_json(path, params, operation=operation)
        try:
            return UpstreamPage.model_validate(body)
        except ValidationError as exc:
            logger.warning(
                "Upstream listing has an unexpected shape",
                extra={"path": path, "errors": exc.error_count()},
            )
            raise UpstreamError("Upstream returned an invalid response", path=path) from exc

    def page_fetcher(
        self,
        path: str,
        *,
        limit: int,
        filters: dict[str, Any] | None = None,
        operation: str = "list",
    ) -> PageFetcher:
        """Bind path, limit and filters into a fetcher for the aggregators."""

        async def fetch(iterator: str | None) -> UpstreamPage:
            return await self.fetch_page(
                path,
                limit=limit,
                iterator=iterator,
                filters=filters,
                operation=operation,
            )

        return fetch


def _extract_detail(response: httpx.Response) -> str | None:
    """Pull a human-readable ``detail`` out of an upstream error body."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        detail = body.get("detail")
        if isinstance(detail, str) and detail:
            return detail
    return None


__all__ = ["UpstreamClient"]
