"""Prometheus metrics endpoint.

Endpoints:
    GET /metrics - Prometheus scrape endpoint

Metrics Exposed:
    HTTP Request Metrics:
        - http_requests_total - Request count by method, route and status
        - http_request_duration_seconds - Request latency histogram with exemplars
        - http_requests_in_progress - Requests currently being handled

    Upstream Metrics:
        - upstream_calls_total - Calls by operation and outcome
        - upstream_call_duration_seconds - Upstream latency by operation
        - pagination_pages_fetched_total - Pages fetched by strategy
        - pagination_drain_limit_total - Full drains stopped by the page cap

    Console Metrics:
        - auth_attempts_total / session_validations_total
        - resend_requests_total - Resend requests by kind and outcome
        - errors_total / validation_errors_total / exceptions_unhandled_total

    Application Info:
        - application_info - Service name, version and environment
        - configured_tenants - Number of configured console tenants
"""

from __future__ import annotations

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from webhook_console.infra.metrics.prometheus import REGISTRY

router = APIRouter(tags=["observability"])


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Expose the service registry in the Prometheus text format."""
    return Response(
        content=generate_latest(REGISTRY),
        media_type=CONTENT_TYPE_LATEST,
        headers={"Cache-Control": "no-cache, no-store, must-revalidate"},
    )
