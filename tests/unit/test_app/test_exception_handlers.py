"""Tests for application exception handlers."""

from __future__ import annotations

import json
from typing import Any

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel
import pytest
from starlette.requests import Request

from webhook_console.app.exception_handlers import (
    app_exception_handler,
    configure_exception_handlers,
    generic_exception_handler,
)
from webhook_console.core.exceptions import (
    AppException,
    MissingSessionError,
    NotFoundException,
    UpstreamError,
)


def _build_request(path: str = "/test") -> Request:
    """Create a minimal ASGI request for handler tests."""
    scope = {
        "type": "http",
        "method": "GET",
        "scheme": "http",
        "path": path,
        "headers": [],
        "query_string": b"",
        "client": ("test", 1234),
        "server": ("test", 80),
    }
    return Request(scope, lambda: None)


@pytest.mark.asyncio
async def test_app_exception_renders_problem_details(monkeypatch: pytest.MonkeyPatch) -> None:
    tracked: dict[str, Any] = {}

    def fake_track_error(**payload: Any) -> None:
        tracked.update(payload)

    monkeypatch.setattr(
        "webhook_console.app.exception_handlers.tracking.track_error",
        fake_track_error,
    )
    request = _build_request()
    request.state.request_id = "req-123"

    response = await app_exception_handler(
        request,
        NotFoundException("Message not found", extra={"notFound": True}),
    )

    assert response.status_code == 404
    body = json.loads(response.body)
    assert body["detail"] == "Message not found"
    assert body["error"] == "Message not found"
    assert body["title"] == "Not Found"
    assert body["request_id"] == "req-123"
    assert body["notFound"] is True
    assert tracked["error_type"] == "not-found"
    assert tracked["status_code"] == 404


@pytest.mark.asyncio
async def test_upstream_error_is_502_with_safe_message() -> None:
    response = await app_exception_handler(
        _build_request("/api/applications"),
        UpstreamError.from_status(503, "Service Unavailable", path="/api/v1/app"),
    )

    body = json.loads(response.body)
    assert response.status_code == 502
    assert body["error"] == "Upstream error: 503 Service Unavailable"
    assert "/api/v1/app" not in response.body.decode()


@pytest.mark.asyncio
async def test_session_error_clears_cookie() -> None:
    response = await app_exception_handler(_build_request(), MissingSessionError())

    assert response.status_code == 401
    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith("webhook-console-auth=")
    assert "Max-Age=0" in set_cookie


@pytest.mark.asyncio
async def test_other_errors_keep_cookie() -> None:
    response = await app_exception_handler(
        _build_request(), AppException(status_code=400, detail="nope")
    )

    assert "set-cookie" not in response.headers


@pytest.mark.asyncio
async def test_generic_exception_returns_500(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, str]] = []
    monkeypatch.setattr(
        "webhook_console.app.exception_handlers.tracking.track_unhandled_exception",
        lambda exception_type, endpoint: calls.append((exception_type, endpoint)),
    )

    response = await generic_exception_handler(_build_request("/boom"), RuntimeError("secret"))

    body = json.loads(response.body)
    assert response.status_code == 500
    assert body["type"] == "internal-error"
    assert "secret" not in body["detail"]
    assert calls == [("RuntimeError", "/boom")]


class _Body(BaseModel):
    count: int


@pytest.mark.asyncio
async def test_validation_errors_are_422_problem_details() -> None:
    app = FastAPI()
    configure_exception_handlers(app)

    @app.post("/items")
    async def create(body: _Body) -> dict[str, int]:
        return {"count": body.count}

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post("/items", json={"count": "many"})

    body = response.json()
    assert response.status_code == 422
    assert body["type"] == "validation-error"
    assert body["detail"] == "Request validation failed for 1 field(s)"
    assert body["errors"][0]["field"] == "body.count"


@pytest.mark.asyncio
async def test_unhandled_exception_in_route_returns_500() -> None:
    app = FastAPI()
    configure_exception_handlers(app)

    @app.get("/boom")
    async def boom() -> None:
        raise RuntimeError("kaboom")

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/boom")

    assert response.status_code == 500
    assert response.json()["title"] == "Internal Server Error"
