"""Exception handlers rendering every console error as RFC 7807 problem details.

All bodies carry ``error`` (a copy of ``detail``, which is what the console
frontend reads) and the request id. Upstream failures only expose their safe
message; the upstream path and status go to the log.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from webhook_console.core.exceptions import AppException, SessionError, UpstreamError
from webhook_console.core.schemas.error import (
    ProblemDetail,
    ValidationError,
    ValidationProblemDetail,
)
from webhook_console.core.settings import get_app_settings, get_auth_settings
from webhook_console.infra.metrics import tracking

logger = logging.getLogger(__name__)

INTERNAL_ERROR_DETAIL = "An unexpected error occurred while processing your request"


def _request_fields(request: Request) -> dict[str, Any]:
    return {
        "request_id": getattr(request.state, "request_id", None),
        "path": request.url.path,
        "method": request.method,
    }


def _problem_response(
    request: Request,
    problem: ProblemDetail,
    extra: dict[str, Any] | None = None,
) -> JSONResponse:
    body = problem.model_dump(exclude_none=True)
    body.setdefault("instance", str(request.url))
    if extra:
        body.update(extra)
    return JSONResponse(status_code=problem.status, content=jsonable_encoder(body))


def _expire_session_cookie(response: JSONResponse) -> None:
    auth_settings = get_auth_settings()
    response.delete_cookie(
        auth_settings.cookie_name,
        path="/",
        httponly=True,
        samesite="strict",
        secure=auth_settings.is_cookie_secure(get_app_settings().is_production),
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render an AppException; session failures also expire the cookie."""
    fields = _request_fields(request)

    tracking.track_error(
        error_type=exc.type,
        endpoint=request.url.path,
        status_code=exc.status_code,
        extra={"detail": exc.detail},
    )

    if isinstance(exc, UpstreamError):
        logger.warning(
            "Upstream call failed",
            extra={
                **fields,
                "exception_type": exc.type,
                "detail": exc.detail,
                "upstream_status": exc.upstream_status,
                "upstream_path": exc.path,
            },
        )
    else:
        logger.info(
            f"Request rejected with {exc.status_code}",
            extra={**fields, "exception_type": exc.type, "detail": exc.detail},
        )

    problem = ProblemDetail(
        type=exc.type,
        title=exc.title or ProblemDetail.default_title(exc.status_code),
        status=exc.status_code,
        detail=exc.detail,
        instance=exc.instance,
        error=exc.detail,
        request_id=fields["request_id"],
    )
    response = _problem_response(request, problem, exc.extra)
    if isinstance(exc, SessionError):
        _expire_session_cookie(response)
    return response


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """422 with one entry per invalid field (``body.appId``, ``query.limit``...)."""
    fields = _request_fields(request)

    errors = [
        ValidationError(
            field=".".join(str(part) for part in error["loc"]),
            message=error["msg"],
            type=error["type"],
            value=error.get("input"),
        )
        for error in exc.errors()
    ]
    for error in errors:
        tracking.track_validation_error(request.url.path, error.field)

    logger.info(
        "Request validation failed",
        extra={**fields, "fields": [error.field for error in errors]},
    )

    detail = f"Request validation failed for {len(errors)} field(s)"
    problem = ValidationProblemDetail(
        type="validation-error",
        title="Validation Error",
        status=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=detail,
        error=detail,
        request_id=fields["request_id"],
        errors=errors,
    )
    return _problem_response(request, problem)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all 500; the exception message never reaches the client."""
    fields = _request_fields(request)
    exception_type = type(exc).__name__

    tracking.track_unhandled_exception(exception_type=exception_type, endpoint=request.url.path)
    logger.error(
        "Unhandled exception",
        extra={**fields, "exception_type": exception_type},
        exc_info=exc,
    )

    problem = ProblemDetail(
        type="internal-error",
        title="Internal Server Error",
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=INTERNAL_ERROR_DETAIL,
        error=INTERNAL_ERROR_DETAIL,
        request_id=fields["request_id"],
    )
    return _problem_response(request, problem)


def configure_exception_handlers(app: FastAPI) -> None:
    """Register the problem-details handlers on the app."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
