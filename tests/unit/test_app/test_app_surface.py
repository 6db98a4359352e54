"""Tests for middleware, routing, health and metrics."""

from __future__ import annotations

import logging

import pytest

from tests.utils import page


@pytest.mark.asyncio
async def test_request_id_is_generated_and_returned(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.headers["X-Request-ID"]
    assert "X-Process-Time" in response.headers


@pytest.mark.asyncio
async def test_request_id_is_propagated(client):
    response = await client.get("/health", headers={"X-Request-ID": "abc-123"})

    assert response.headers["X-Request-ID"] == "abc-123"


@pytest.mark.asyncio
async def test_problem_details_carry_request_id(client):
    response = await client.get("/api/applications", headers={"X-Request-ID": "req-42"})

    assert response.status_code == 401
    assert response.json()["request_id"] == "req-42"


@pytest.mark.asyncio
async def test_health_reports_service_and_version(client):
    body = (await client.get("/health")).json()

    assert body["status"] == "healthy"
    assert body["service"] == "webhook-console"
    assert body["version"] == "0.1.0"
    assert "timestamp" in body


@pytest.mark.asyncio
async def test_readiness_with_tenant(client):
    response = await client.get("/health/ready")

    assert response.status_code == 200
    assert response.json()["checks"] == {"tenants_configured": True, "upstream_urls": True}


@pytest.mark.asyncio
async def test_readiness_without_tenants(client, monkeypatch: pytest.MonkeyPatch):
    from webhook_console.core.settings import clear_settings_cache

    monkeypatch.delenv("CONSOLE_USERNAME")
    clear_settings_cache()

    response = await client.get("/health/ready")

    assert response.status_code == 503
    assert response.json()["ready"] is False


@pytest.mark.asyncio
async def test_metrics_exposes_registry(client):
    await client.get("/health")

    response = await client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "no-store" in response.headers["cache-control"]
    assert "http_requests_total" in response.text


@pytest.mark.asyncio
async def test_metrics_use_route_template(authed_client, upstream):
    upstream.add("GET", "/api/v1/app/app_1/msg/msg_1", (200, {"id": "msg_1"}))
    upstream.add("GET", "/api/v1/app/app_1/attempt/msg/msg_1", page([]))

    await authed_client.get("/api/messages/msg_1", params={"appId": "app_1"})
    text = (await authed_client.get("/metrics")).text

    assert 'endpoint="/api/messages/{message_id}"' in text
    assert 'upstream_calls_total{operation="get_message",outcome="ok"}' in text


def test_console_routes_live_under_api_prefix(app):
    paths = {route.path for route in app.routes}

    assert {
        "/api/auth/login",
        "/api/auth/session",
        "/api/applications",
        "/api/endpoints",
        "/api/endpoints/{endpoint_id}",
        "/api/endpoints/{endpoint_id}/stats",
        "/api/endpoints/{endpoint_id}/bulk-resend",
        "/api/messages",
        "/api/messages/{message_id}",
        "/api/messages/{message_id}/attempts",
        "/api/messages/{message_id}/resend",
        "/api/attempts",
        "/health",
        "/health/ready",
        "/metrics",
    } <= paths


@pytest.mark.asyncio
async def test_access_log_names_route_and_skips_probes(authed_client, upstream, caplog):
    upstream.add("GET", "/api/v1/app/app_1/attempt/msg/msg_1", page([]))

    with caplog.at_level(logging.INFO, logger="webhook_console.app.middleware"):
        await authed_client.get("/api/messages/msg_1/attempts", params={"appId": "app_1"})
        await authed_client.get("/health")

    lines = [
        record.getMessage()
        for record in caplog.records
        if record.name == "webhook_console.app.middleware"
    ]
    assert lines == ["GET /api/messages/{message_id}/attempts 200"]
