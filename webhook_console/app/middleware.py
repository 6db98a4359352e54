"""Middleware configuration for the FastAPI application.

Order on the way in: request id, then CORS (when origins are configured),
then request metrics and the access log line.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any
import uuid

from fastapi.middleware.cors import CORSMiddleware
from opentelemetry import trace
from starlette.middleware.base import BaseHTTPMiddleware

from webhook_console.core.settings import get_app_settings, get_logging_settings
from webhook_console.infra.logging.context import clear_log_context, set_log_context
from webhook_console.infra.metrics.prometheus import (
    http_request_duration_seconds,
    http_requests_in_progress,
    http_requests_total,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from fastapi import FastAPI, Request, Response

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time"

# Probes and scrapes are counted but not logged
QUIET_PATHS = frozenset({"/health", "/health/ready", "/metrics"})


def _route_template(request: Request) -> str:
    """Matched route path (``/api/messages/{message_id}``), else the raw path."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def _trace_exemplar() -> dict[str, str] | None:
    context = trace.get_current_span().get_span_context()
    if not context.is_valid:
        return None
    return {"trace_id": format(context.trace_id, "032x")}


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Propagate ``X-Request-ID`` (or a new UUID) into state, logs and the response."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        clear_log_context()
        set_log_context(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            clear_log_context()

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class RequestMetricsMiddleware(BaseHTTPMiddleware):
    """Count and time requests per route template and log one line per request."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        method = request.method
        in_progress = http_requests_in_progress.labels(method=method)
        in_progress.inc()

        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers[PROCESS_TIME_HEADER] = f"{time.perf_counter() - start:.6f}"
            return response
        finally:
            duration = time.perf_counter() - start
            in_progress.dec()
            endpoint = _route_template(request)
            exemplar = _trace_exemplar()

            http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(
                duration, exemplar=exemplar
            )
            http_requests_total.labels(
                method=method, endpoint=endpoint, status=status_code
            ).inc(exemplar=exemplar)

            if request.url.path not in QUIET_PATHS:
                fields: dict[str, Any] = {
                    "method": method,
                    "endpoint": endpoint,
                    "status_code": status_code,
                    "duration_ms": round(duration * 1000, 2),
                }
                level = logging.WARNING if status_code >= 500 else logging.INFO
                logger.log(level, f"{method} {endpoint} {status_code}", extra=fields)


def configure_middleware(app: FastAPI) -> None:
    """Add middleware; Starlette runs the last added one first."""
    app_settings = get_app_settings()
    log_settings = get_logging_settings()

    app.add_middleware(RequestMetricsMiddleware)

    if app_settings.cors_origins:
        logger.info("Configuring CORS", extra={"origins": app_settings.cors_origins})
        app.add_middleware(
            CORSMiddleware,
            allow_origins=app_settings.cors_origins,
            allow_credentials=app_settings.cors_allow_credentials,
            allow_methods=app_settings.cors_allow_methods,
            allow_headers=app_settings.cors_allow_headers,
            max_age=3600,
        )

    if log_settings.include_request_id:
        app.add_middleware(RequestIDMiddleware)
