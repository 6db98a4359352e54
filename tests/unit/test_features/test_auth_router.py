"""Tests for login, logout and the session boundary."""

from __future__ import annotations

import pytest

from tests.utils import PASSWORD, USERNAME

COOKIE = "webhook-console-auth"


class TestLogin:
    @pytest.mark.asyncio
    async def test_valid_credentials_set_session_cookie(self, client):
        response = await client.post(
            "/api/auth/login", json={"username": USERNAME, "password": PASSWORD}
        )

        assert response.status_code == 200
        assert response.json() == {"success": True}
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith(f"{COOKIE}=")
        assert "HttpOnly" in set_cookie
        assert "SameSite=strict" in set_cookie
        assert "Max-Age=3600" in set_cookie
        assert "Secure" not in set_cookie

    @pytest.mark.asyncio
    async def test_cookie_is_secure_in_production(self, client, monkeypatch):
        from webhook_console.core.settings import clear_settings_cache

        monkeypatch.setenv("APP_ENVIRONMENT", "production")
        clear_settings_cache()

        response = await client.post(
            "/api/auth/login", json={"username": USERNAME, "password": PASSWORD}
        )

        assert "Secure" in response.headers["set-cookie"]

    @pytest.mark.asyncio
    async def test_wrong_password_is_401(self, client):
        response = await client.post(
            "/api/auth/login", json={"username": USERNAME, "password": "wrong"}
        )

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid username or password"
        assert "set-cookie" not in response.headers

    @pytest.mark.asyncio
    async def test_unknown_user_is_401(self, client):
        response = await client.post(
            "/api/auth/login", json={"username": "nobody", "password": PASSWORD}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_no_configured_tenants_is_500(self, client, monkeypatch):
        from webhook_console.core.settings import clear_settings_cache

        monkeypatch.delenv("CONSOLE_USERNAME")
        monkeypatch.delenv("CONSOLE_PASSWORD")
        clear_settings_cache()

        response = await client.post(
            "/api/auth/login", json={"username": USERNAME, "password": PASSWORD}
        )

        assert response.status_code == 500
        assert response.json()["error"] == "Console credentials not configured"

    @pytest.mark.asyncio
    async def test_missing_fields_is_422(self, client):
        response = await client.post("/api/auth/login", json={"username": USERNAME})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_login_then_session_round_trip(self, client):
        await client.post("/api/auth/login", json={"username": USERNAME, "password": PASSWORD})

        response = await client.get("/api/auth/session")

        body = response.json()
        assert response.status_code == 200
        assert body["authenticated"] is True
        assert body["username"] == USERNAME
        assert isinstance(body["expiresAt"], int)


@pytest.mark.asyncio
async def test_logout_expires_cookie(authed_client):
    response = await authed_client.delete("/api/auth/login")

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert "Max-Age=0" in response.headers["set-cookie"]


class TestSessionBoundary:
    @pytest.mark.asyncio
    async def test_missing_cookie_is_401_before_upstream(self, client, upstream):
        response = await client.get("/api/applications")

        assert response.status_code == 401
        assert response.json()["type"] == "session-missing"
        assert upstream.requests == []

    @pytest.mark.asyncio
    async def test_tampered_cookie_is_401_and_cleared(self, client, upstream, session_cookie):
        name, value = session_cookie
        client.cookies.set(name, value[:-2] + "xx")

        response = await client.get("/api/messages", params={"appId": "app_1"})

        assert response.status_code == 401
        assert response.json()["reason"] == "bad-signature"
        assert "Max-Age=0" in response.headers["set-cookie"]
        assert upstream.requests == []

    @pytest.mark.asyncio
    async def test_expired_cookie_is_401(self, client, upstream):
        from webhook_console.core.settings import get_auth_settings
        from webhook_console.infra.auth import SessionCodec

        settings = get_auth_settings()
        codec = SessionCodec(settings.secret_key.get_secret_value(), ttl_seconds=60)
        client.cookies.set(settings.cookie_name, codec.encode(codec.issue(USERNAME, now_ms=0)))

        response = await client.post(
            "/api/messages/msg_1/resend", json={"appId": "app_1", "endpointId": "ep_1"}
        )

        assert response.status_code == 401
        assert response.json()["type"] == "session-expired"
        assert upstream.requests == []

    @pytest.mark.asyncio
    async def test_session_for_removed_tenant_is_401(self, client, upstream):
        from webhook_console.core.settings import get_auth_settings
        from webhook_console.infra.auth import SessionCodec

        settings = get_auth_settings()
        codec = SessionCodec(settings.secret_key.get_secret_value())
        client.cookies.set(settings.cookie_name, codec.encode(codec.issue("ghost")))

        response = await client.get("/api/applications")

        assert response.status_code == 401
        assert response.json()["reason"] == "unknown-user"
        assert upstream.requests == []

    @pytest.mark.asyncio
    async def test_session_endpoint_requires_cookie(self, client):
        response = await client.get("/api/auth/session")

        assert response.status_code == 401
