"""Console login, logout and session endpoints.

Login checks the submitted credentials against the configured tenants and
sets a signed session cookie. Every other console route validates that
cookie before talking to the upstream API.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Response, status

from webhook_console.core.dependencies import SessionDep
from webhook_console.core.dependencies.auth import (
    AuthSettingsDep,
    SessionCodecDep,
    TenantRegistryDep,
)
from webhook_console.core.exceptions import InternalServerException, UnauthorizedException
from webhook_console.core.settings import get_app_settings
from webhook_console.features.auth.schemas import (
    LoginRequest,
    SessionResponse,
    SuccessResponse,
)
from webhook_console.infra.logging.context import set_log_context
from webhook_console.infra.metrics.tracking import track_auth_attempt

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=SuccessResponse,
    summary="Log in",
    description="Validate operator credentials and set the session cookie.",
    responses={
        401: {"description": "Invalid username or password"},
        500: {"description": "No console credentials configured"},
    },
)
async def login(
    body: LoginRequest,
    response: Response,
    settings: AuthSettingsDep,
    codec: SessionCodecDep,
    registry: TenantRegistryDep,
) -> SuccessResponse:
    """Authenticate an operator.

    Args:
        body: Submitted credentials.
        response: Response the session cookie is set on.
        settings: Session cookie settings.
        codec: Signs the session payload.
        registry: Configured tenants.

    Returns:
        ``{"success": true}`` with the session cookie set.

    Raises:
        InternalServerException: No tenant is configured.
        UnauthorizedException: Credentials do not match any tenant.
    """
    if not len(registry):
        logger.error("Login attempted but no console credentials are configured")
        raise InternalServerException(
            detail="Console credentials not configured",
            type="configuration-error",
        )

    tenant = registry.authenticate(body.username, body.password)
    if tenant is None:
        track_auth_attempt("password", success=False)
        logger.warning("Failed console login", extra={"username": body.username})
        raise UnauthorizedException(
            detail="Invalid username or password",
            type="invalid-credentials",
        )

    track_auth_attempt("password", success=True)
    set_log_context(username=tenant.username)

    session = codec.issue(tenant.username)
    response.set_cookie(
        key=settings.cookie_name,
        value=codec.encode(session),
        max_age=settings.session_ttl_seconds,
        path="/",
        httponly=True,
        samesite="strict",
        secure=settings.is_cookie_secure(get_app_settings().is_production),
    )
    logger.info("Console login", extra={"username": tenant.username})
    return SuccessResponse()


@router.delete(
    "/login",
    response_model=SuccessResponse,
    summary="Log out",
    description="Expire the session cookie.",
)
async def logout(response: Response, settings: AuthSettingsDep) -> SuccessResponse:
    response.delete_cookie(key=settings.cookie_name, path="/", httponly=True, samesite="strict")
    return SuccessResponse()


@router.get(
    "/session",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
    summary="Current session",
    description="Return the session carried by the request cookie.",
    responses={401: {"description": "Missing, invalid or expired session"}},
)
async def current_session(session: SessionDep) -> SessionResponse:
    return SessionResponse(
        authenticated=session.authenticated,
        username=session.username,
        expires_at=session.expires_at,
    )
