"""Router registry and setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from webhook_console.core.settings import get_app_settings
from webhook_console.features.applications.router import router as applications_router
from webhook_console.features.attempts.router import router as attempts_router
from webhook_console.features.auth.router import router as auth_router
from webhook_console.features.endpoints.router import router as endpoints_router
from webhook_console.features.health.router import router as health_router
from webhook_console.features.messages.router import router as messages_router
from webhook_console.features.metrics.router import router as metrics_router

if TYPE_CHECKING:
    from fastapi import FastAPI

    from webhook_console.core.settings.app import AppSettings

logger = logging.getLogger(__name__)


def setup_routers(app: FastAPI, app_settings: AppSettings | None = None) -> None:
    """Register all feature routers with the application.

    Args:
        app: FastAPI application instance.
        app_settings: Optional application settings override for the API prefix.
    """
    app_settings = app_settings or get_app_settings()
    api_prefix = app_settings.api_prefix

    # Probes and scraping stay outside the API prefix
    app.include_router(metrics_router)
    app.include_router(health_router)

    app.include_router(auth_router, prefix=api_prefix)
    app.include_router(applications_router, prefix=api_prefix)
    app.include_router(endpoints_router, prefix=api_prefix)
    app.include_router(messages_router, prefix=api_prefix)
    app.include_router(attempts_router, prefix=api_prefix)

    logger.debug("Routers registered", extra={"api_prefix": api_prefix})
