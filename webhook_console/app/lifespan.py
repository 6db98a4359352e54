"""Application lifespan management.

Startup:
1. Logging and application metrics
2. Tenant registry (parsed from the environment, validated once)
3. Session key check

Shutdown flushes and stops the queued logging listener.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import TYPE_CHECKING

from webhook_console.core.settings import (
    get_app_settings,
    get_auth_settings,
    get_logging_settings,
    get_tenant_registry,
)
from webhook_console.infra.logging.config import setup_logging, shutdown as shutdown_logging
from webhook_console.infra.metrics.prometheus import application_info, configured_tenants

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


async def _startup_core() -> None:
    """Configure logging and publish application info."""
    app = get_app_settings()

    setup_logging(log_settings=get_logging_settings(), force=True)
    logger.info(
        "Application starting",
        extra={"service": app.service_name, "environment": app.environment},
    )

    application_info.labels(
        version=app.version,
        service=app.service_name,
        environment=app.environment,
    ).set(1)


async def _startup_tenants() -> None:
    """Load tenants and warn about configurations that cannot serve requests."""
    registry = get_tenant_registry()
    configured_tenants.set(len(registry))

    if not len(registry):
        logger.warning("No console tenants configured; every login will fail")
    else:
        logger.info("Console tenants loaded", extra={"tenant_count": len(registry)})

    for tenant in registry:
        if not tenant.config.api_url:
            logger.warning(
                "Tenant has no upstream API URL configured",
                extra={"username": tenant.username},
            )


async def _startup_auth() -> None:
    auth = get_auth_settings()
    if auth.uses_generated_key:
        logger.warning(
            "AUTH_SECRET_KEY not set; using a per-process key. "
            "Sessions will not survive restarts or span workers."
        )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    _ = app

    await _startup_core()
    await _startup_tenants()
    await _startup_auth()

    yield

    logger.info("Application shutting down")
    shutdown_logging()
