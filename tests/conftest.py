"""Pytest configuration and shared fixtures.

Organization:
    - Environment: one default tenant and a fixed session key
    - Upstream Fixtures: scripted webhook-delivery API
    - Application Fixtures: FastAPI app, HTTP client and session cookie
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
import os

from httpx import ASGITransport, AsyncClient
import pytest

from tests.utils import PASSWORD, USERNAME, FakeUpstream

# Tests never reach a real upstream or read a developer's .env tenants
os.environ["APP_ENVIRONMENT"] = "test"
os.environ["CONSOLE_USERNAME"] = USERNAME
os.environ["CONSOLE_PASSWORD"] = PASSWORD
os.environ["SVIX_API_URL"] = "https://upstream.test"
os.environ["SVIX_API_TOKEN"] = "tok_test_123456"
os.environ["AUTH_SECRET_KEY"] = "test-session-secret-key-0123456789"


@pytest.fixture(autouse=True)
def _reset_settings():
    """Reload settings and tenants from the environment for every test."""
    from webhook_console.core.settings import clear_settings_cache
    from webhook_console.infra.logging import clear_log_context

    clear_settings_cache()
    yield
    clear_settings_cache()
    clear_log_context()


# ============================================================================
# Upstream Fixtures
# ============================================================================


@pytest.fixture
def upstream() -> FakeUpstream:
    """Scripted upstream API shared by the app and the test.

    Example:
        async def test_list(authed_client, upstream):
            upstream.add("GET", "/api/v1/app", page([{"id": "app_1"}]))
            response = await authed_client.get("/api/applications")
    """
    return FakeUpstream()


@pytest.fixture
def tenant_config():
    from webhook_console.core.settings import get_tenant_registry

    return get_tenant_registry().get(USERNAME).config


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def app(upstream: FakeUpstream):
    """Create the FastAPI application with the upstream transport replaced."""
    from webhook_console.app.main import create_app
    from webhook_console.core.dependencies import get_upstream_transport

    application = create_app()
    application.dependency_overrides[get_upstream_transport] = lambda: upstream.transport
    return application


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing (no session cookie)."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def session_cookie() -> tuple[str, str]:
    """A valid signed session cookie for the default tenant."""
    from webhook_console.core.settings import get_auth_settings
    from webhook_console.infra.auth import SessionCodec

    settings = get_auth_settings()
    codec = SessionCodec(
        settings.secret_key.get_secret_value(),
        ttl_seconds=settings.session_ttl_seconds,
    )
    return settings.cookie_name, codec.encode(codec.issue(USERNAME))


@pytest.fixture
async def authed_client(client: AsyncClient, session_cookie: tuple[str, str]) -> AsyncClient:
    """HTTP client carrying a valid session cookie."""
    name, value = session_cookie
    client.cookies.set(name, value)
    return client
