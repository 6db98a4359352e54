"""FastAPI dependencies shared by the feature routers."""

from __future__ import annotations

from webhook_console.core.dependencies.auth import (
    SessionDep,
    TenantDep,
    get_current_session,
    get_tenant_config,
)
from webhook_console.core.dependencies.upstream import (
    UpstreamDep,
    UpstreamSettingsDep,
    get_upstream_client,
    get_upstream_transport,
)

__all__ = [
    "SessionDep",
    "TenantDep",
    "UpstreamDep",
    "UpstreamSettingsDep",
    "get_current_session",
    "get_tenant_config",
    "get_upstream_client",
    "get_upstream_transport",
]
