"""Health check endpoints.

- Liveness: /health
- Readiness: /health/ready (503 until tenants are configured)
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from webhook_console.core.dependencies.auth import TenantRegistryDep
from webhook_console.core.settings import AppSettings, get_app_settings
from webhook_console.features.health.schemas import HealthResponse, ReadinessResponse

router = APIRouter(prefix="/health", tags=["health"])


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check",
    description="Liveness probe with service name and version.",
)
async def health_check(
    settings: Annotated[AppSettings, Depends(get_app_settings)],
) -> HealthResponse:
    return HealthResponse(
        service=settings.service_name,
        version=settings.version,
        timestamp=datetime.now(UTC),
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    status_code=status.HTTP_200_OK,
    responses={503: {"description": "Service not ready"}},
    summary="Readiness probe",
    description="Returns 200 when console tenants are configured, 503 otherwise.",
)
async def readiness_check(
    registry: TenantRegistryDep,
    response: Response,
) -> ReadinessResponse:
    """Readiness probe.

    Does not call the upstream API; it only checks that the console can
    route a logged-in operator to one.
    """
    checks = {
        "tenants_configured": len(registry) > 0,
        "upstream_urls": all(tenant.config.api_url for tenant in registry),
    }
    ready = all(checks.values())
    if not ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return ReadinessResponse(ready=ready, checks=checks, timestamp=datetime.now(UTC))
