"""Tests for the application exception hierarchy."""

from __future__ import annotations

import pytest

from webhook_console.core.exceptions import (
    AppException,
    BadGatewayException,
    MissingSessionError,
    PaginationLimitExceeded,
    SessionExpiredError,
    SessionInvalidError,
    UnauthorizedException,
    UpstreamError,
    UpstreamNotFoundError,
    UpstreamRejectedError,
)


def test_app_exception_defaults_title_from_status():
    exc = AppException(status_code=404, detail="Endpoint not found")

    assert exc.title == "Not Found"
    assert exc.type == "about:blank"
    assert exc.extra == {}
    assert str(exc) == "Endpoint not found"


def test_upstream_error_message_derived_from_status():
    exc = UpstreamError.from_status(503, "Service Unavailable", path="/api/v1/app")

    assert exc.detail == "Upstream error: 503 Service Unavailable"
    assert exc.upstream_status == 503
    assert exc.path == "/api/v1/app"
    assert exc.status_code == 502
    assert isinstance(exc, BadGatewayException)


def test_upstream_error_without_reason():
    assert UpstreamError.from_status(599, "").detail == "Upstream error: 599"


@pytest.mark.parametrize(
    ("exc", "status_code"),
    [
        (UpstreamNotFoundError(path="/x"), 404),
        (UpstreamRejectedError("endpoint disabled"), 400),
        (PaginationLimitExceeded(200), 502),
    ],
)
def test_upstream_subclasses_are_upstream_errors(exc: UpstreamError, status_code: int):
    assert isinstance(exc, UpstreamError)
    assert exc.status_code == status_code


def test_pagination_limit_reports_cap():
    exc = PaginationLimitExceeded(5)

    assert exc.detail == "Upstream pagination did not complete within 5 pages"
    assert exc.extra == {"max_pages": 5}


@pytest.mark.parametrize(
    ("exc", "type_"),
    [
        (MissingSessionError(), "session-missing"),
        (SessionExpiredError(), "session-expired"),
        (SessionInvalidError(reason="bad-signature"), "session-invalid"),
    ],
)
def test_session_errors_are_unauthorized(exc: UnauthorizedException, type_: str):
    assert isinstance(exc, UnauthorizedException)
    assert exc.status_code == 401
    assert exc.type == type_


def test_invalid_session_carries_reason():
    assert SessionInvalidError(reason="malformed").extra == {"reason": "malformed"}
