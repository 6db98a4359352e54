"""Session and tenant dependencies.

Every console route except login, health and metrics depends on
``TenantDep``. Resolution happens before any upstream call:

    cookie -> SessionCodec.decode -> SessionData -> TenantRegistry -> TenantConfig

Usage:
    from webhook_console.core.dependencies.auth import SessionDep, TenantDep

    @router.get("/applications")
    async def list_applications(tenant: TenantDep):
        ...
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, Request

from webhook_console.core.exceptions import SessionError, SessionInvalidError
from webhook_console.core.settings import (
    AuthSettings,
    TenantConfig,
    TenantRegistry,
    get_auth_settings,
    get_tenant_registry,
)
from webhook_console.infra.auth.session import SessionCodec, SessionData
from webhook_console.infra.logging.context import set_log_context
from webhook_console.infra.metrics.tracking import track_session_validation

logger = logging.getLogger(__name__)

AuthSettingsDep = Annotated[AuthSettings, Depends(get_auth_settings)]
TenantRegistryDep = Annotated[TenantRegistry, Depends(get_tenant_registry)]


def get_session_codec(settings: AuthSettingsDep) -> SessionCodec:
    """Build the cookie codec from the session settings."""
    return SessionCodec(
        settings.secret_key.get_secret_value(),
        ttl_seconds=settings.session_ttl_seconds,
    )


SessionCodecDep = Annotated[SessionCodec, Depends(get_session_codec)]


def get_current_session(
    request: Request,
    settings: AuthSettingsDep,
    codec: SessionCodecDep,
    registry: TenantRegistryDep,
) -> SessionData:
    """Validate the session cookie of the request.

    Raises:
        MissingSessionError: No session cookie.
        SessionInvalidError: Tampered, malformed, or for an unknown operator.
        SessionExpiredError: Session past its expiry.
    """
    try:
        session = codec.decode(request.cookies.get(settings.cookie_name))
    except SessionError as exc:
        track_session_validation(exc.type.removeprefix("session-"))
        logger.info("Rejected console session", extra={"reason": exc.type, **exc.extra})
        raise

    if registry.get(session.username) is None:
        track_session_validation("invalid")
        logger.warning(
            "Session refers to an operator that is no longer configured",
            extra={"username": session.username},
        )
        raise SessionInvalidError(reason="unknown-user")

    track_session_validation("valid")
    set_log_context(username=session.username)
    return session


SessionDep = Annotated[SessionData, Depends(get_current_session)]


def get_tenant_config(session: SessionDep, registry: TenantRegistryDep) -> TenantConfig:
    """Resolve the upstream configuration of the authenticated operator."""
    tenant = registry.get(session.username)
    if tenant is None:
        raise SessionInvalidError(reason="unknown-user")
    return tenant.config


TenantDep = Annotated[TenantConfig, Depends(get_tenant_config)]


__all__ = [
    "AuthSettingsDep",
    "SessionCodecDep",
    "SessionDep",
    "TenantDep",
    "TenantRegistryDep",
    "get_current_session",
    "get_session_codec",
    "get_tenant_config",
]
