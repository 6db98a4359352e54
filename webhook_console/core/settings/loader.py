"""LRU-cached settings loaders.

Settings are loaded and validated once, then cached for the lifetime of the process.

Usage:
    from webhook_console.core.settings.loader import get_app_settings

    settings = get_app_settings()  # First call: loads and validates
    settings = get_app_settings()  # Subsequent calls: returns cached instance

Testing:
    In tests, clear the cache to force reload:
    get_app_settings.cache_clear()

    Or clear every loader at once:
    clear_settings_cache()
"""

from __future__ import annotations

from functools import lru_cache
import os

from .app import AppSettings
from .auth import AuthSettings
from .logs import LoggingSettings
from .tenants import TenantRegistry
from .upstream import UpstreamSettings


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """Get cached application settings.

    Returns:
        Validated and frozen AppSettings instance.
    """
    return AppSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings.

    Returns:
        Validated and frozen LoggingSettings instance.
    """
    return LoggingSettings()


@lru_cache(maxsize=1)
def get_upstream_settings() -> UpstreamSettings:
    """Get cached upstream API settings.

    Returns:
        Validated and frozen UpstreamSettings instance.
    """
    return UpstreamSettings()


@lru_cache(maxsize=1)
def get_auth_settings() -> AuthSettings:
    """Get cached session settings.

    Returns:
        Validated and frozen AuthSettings instance.
    """
    return AuthSettings()


@lru_cache(maxsize=1)
def get_tenant_registry() -> TenantRegistry:
    """Get cached tenant registry parsed from the environment.

    Returns:
        Read-only TenantRegistry instance.
    """
    return TenantRegistry.from_environ(os.environ)


def clear_settings_cache() -> None:
    """Clear every cached loader (tests, configuration reload)."""
    get_app_settings.cache_clear()
    get_logging_settings.cache_clear()
    get_upstream_settings.cache_clear()
    get_auth_settings.cache_clear()
    get_tenant_registry.cache_clear()
