"""FastAPI application factory for the webhook console."""

from __future__ import annotations

from fastapi import FastAPI

from webhook_console.app.exception_handlers import configure_exception_handlers
from webhook_console.app.lifespan import lifespan
from webhook_console.app.middleware import configure_middleware
from webhook_console.app.router import setup_routers
from webhook_console.core.settings import get_app_settings

OPENAPI_TAGS = [
    {"name": "auth", "description": "Console login and session cookie"},
    {"name": "applications", "description": "Applications of the signed-in tenant"},
    {"name": "endpoints", "description": "Endpoints, their headers, statistics and bulk resend"},
    {"name": "messages", "description": "Messages, their attempts and single resend"},
    {"name": "attempts", "description": "Delivery attempts of an endpoint"},
    {"name": "health", "description": "Liveness and readiness probes"},
]


def create_app() -> FastAPI:
    """Build the console API.

    Console routes are mounted under the API prefix and require a session;
    health and metrics stay at the root for probes and scrapers.
    """
    app_settings = get_app_settings()

    app = FastAPI(
        title=app_settings.title,
        description=app_settings.description,
        version=app_settings.version,
        openapi_tags=OPENAPI_TAGS,
        docs_url=app_settings.get_docs_url(),
        redoc_url=app_settings.get_redoc_url(),
        openapi_url=app_settings.get_openapi_url(),
        root_path=app_settings.root_path,
        debug=app_settings.debug,
        lifespan=lifespan,
    )

    # Handlers first so middleware errors are rendered as problem details
    configure_exception_handlers(app)
    configure_middleware(app)
    setup_routers(app, app_settings)

    return app


app = create_app()
