"""Exception hierarchy rendered as RFC 7807 problem details.

Subclasses only pick a status code, a default ``type`` and, where useful, a
default message; construction is shared by ``AppException``.
"""

from __future__ import annotations

from typing import Any

from webhook_console.core.schemas.error import ProblemDetail


class AppException(Exception):
    """Base application exception.

    Attributes:
        status_code: HTTP status code of the response.
        detail: Human-readable message, safe to show to console users.
        type: Problem type identifier.
        title: Short summary; derived from the status code when omitted.
        instance: URI of this occurrence, defaults to the request URL.
        extra: Fields merged into the problem body (e.g. ``notFound``).

    Example:
        raise NotFoundException(
            "Endpoint not found",
            type="endpoint-not-found",
            extra={"notFound": True},
        )
    """

    status_code: int = 500
    default_type: str = "about:blank"
    default_detail: str = "Request failed"
    default_title: str | None = None

    def __init__(
        self,
        detail: str | None = None,
        type: str | None = None,
        title: str | None = None,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
        *,
        status_code: int | None = None,
    ) -> None:
        if status_code is not None:
            self.status_code = status_code
        self.detail = detail or self.default_detail
        self.type = type or self.default_type
        self.title = title or self.default_title or ProblemDetail.default_title(self.status_code)
        self.instance = instance
        self.extra = extra or {}
        super().__init__(self.detail)


class BadRequestException(AppException):
    status_code = 400
    default_type = "bad-request"


class UnauthorizedException(AppException):
    status_code = 401
    default_type = "unauthorized"
    default_detail = "Authentication required"


class NotFoundException(AppException):
    status_code = 404
    default_type = "not-found"
    default_detail = "Resource not found"


class InternalServerException(AppException):
    """Server-side misconfiguration, e.g. no console tenants configured."""

    status_code = 500
    default_type = "internal-error"


class BadGatewayException(AppException):
    status_code = 502
    default_type = "bad-gateway"


# ============================================================================
# Session Exceptions
# ============================================================================
# Raised by the session cookie dependency. The exception handler expires the
# session cookie whenever one of these reaches the client.


class SessionError(UnauthorizedException):
    """Base class for console session failures."""


class MissingSessionError(SessionError):
    default_type = "session-missing"


class SessionExpiredError(SessionError):
    default_type = "session-expired"
    default_detail = "Session has expired"


class SessionInvalidError(SessionError):
    """Malformed, tampered or unknown-user session; ``reason`` says which."""

    default_type = "session-invalid"
    default_detail = "Session is invalid"

    def __init__(self, detail: str | None = None, reason: str | None = None) -> None:
        super().__init__(detail, extra={"reason": reason} if reason else None)
        self.reason = reason


# ============================================================================
# Upstream Exceptions
# ============================================================================
# Raised by the upstream client for every failed call. Transport, timeout and
# decoding failures are folded into UpstreamError so callers only ever handle
# this family. Messages are safe to show to clients; the underlying cause is
# logged server side.


class UpstreamError(BadGatewayException):
    """A call to the webhook-delivery API did not succeed.

    Attributes:
        upstream_status: Status code returned by the upstream, or None when
            the request never produced a response (transport/timeout) or the
            response could not be decoded.
        path: Upstream path that was requested.
    """

    default_type = "upstream-error"
    default_detail = "Upstream request failed"

    def __init__(
        self,
        detail: str | None = None,
        upstream_status: int | None = None,
        path: str | None = None,
        type: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(detail, type=type, extra=extra)
        self.upstream_status = upstream_status
        self.path = path

    @classmethod
    def from_status(
        cls, status_code: int, reason: str, path: str | None = None
    ) -> UpstreamError:
        """Build an error whose message is derived from the response status."""
        message = f"Upstream error: {status_code}"
        if reason:
            message = f"{message} {reason}"
        return cls(detail=message, upstream_status=status_code, path=path)


class UpstreamNotFoundError(UpstreamError):
    """The upstream answered 404 for the requested resource."""

    status_code = 404
    default_type = "upstream-not-found"
    default_detail = "Resource not found"

    def __init__(self, path: str | None = None, detail: str | None = None) -> None:
        super().__init__(detail, upstream_status=404, path=path)


class UpstreamRejectedError(UpstreamError):
    """The upstream answered 400; ``detail`` carries the upstream explanation."""

    status_code = 400
    default_type = "upstream-rejected"
    default_detail = "Bad request"

    def __init__(self, detail: str | None = None, path: str | None = None) -> None:
        super().__init__(detail, upstream_status=400, path=path)


class PaginationLimitExceeded(UpstreamError):
    """A full drain hit its page cap before the upstream reported completion."""

    default_type = "pagination-limit-exceeded"

    def __init__(self, max_pages: int, path: str | None = None) -> None:
        super().__init__(
            f"Upstream pagination did not complete within {max_pages} pages",
            path=path,
            extra={"max_pages": max_pages},
        )
        self.max_pages = max_pages
