"""Modular Pydantic Settings v2 configuration.

Settings are split by domain (app, logging, upstream, auth, tenants), loaded
from environment variables (and an optional .env file), validated once and
cached.

Import settings via cached loaders:
    from webhook_console.core.settings import get_upstream_settings

    settings = get_upstream_settings()
    print(settings.drain_page_size)

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables
    3. .env file (development only)
"""

from __future__ import annotations

from .app import AppSettings
from .auth import AuthSettings
from .loader import (
    clear_settings_cache,
    get_app_settings,
    get_auth_settings,
    get_logging_settings,
    get_tenant_registry,
    get_upstream_settings,
)
from .logs import LoggingSettings
from .tenants import TenantConfig, TenantCredentials, TenantRegistry
from .upstream import UpstreamSettings

__all__ = [
    "AppSettings",
    "AuthSettings",
    "LoggingSettings",
    "TenantConfig",
    "TenantCredentials",
    "TenantRegistry",
    "UpstreamSettings",
    "clear_settings_cache",
    "get_app_settings",
    "get_auth_settings",
    "get_logging_settings",
    "get_tenant_registry",
    "get_upstream_settings",
]
