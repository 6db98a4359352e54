"""Signed console session cookies.

Cookie value format:

    base64url(json payload) "." base64url(HMAC-SHA256(secret, encoded payload))

Payload:

    {"authenticated": true, "username": "operator", "expiresAt": 1735689600000}

``expiresAt`` is epoch milliseconds. Padding is stripped from both parts.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
import time

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from webhook_console.core.exceptions import (
    MissingSessionError,
    SessionExpiredError,
    SessionInvalidError,
)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64decode(value: str) -> bytes:
    padded = value + "=" * (-len(value) % 4)
    return base64.urlsafe_b64decode(padded.encode("utf-8"))


class SessionData(BaseModel):
    """Authenticated console session carried in the cookie."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    authenticated: bool = True
    username: str = Field(min_length=1)
    expires_at: int = Field(alias="expiresAt", description="Expiry, epoch milliseconds")

    def is_expired(self, now_ms: int | None = None) -> bool:
        return self.expires_at <= (now_ms if now_ms is not None else _now_ms())


class SessionCodec:
    """Issue, sign and verify session cookie values.

    Example:
        codec = SessionCodec(secret_key, ttl_seconds=3600)
        value = codec.encode(codec.issue("operator"))
        session = codec.decode(value)  # raises SessionError subclasses
    """

    def __init__(self, secret_key: str, *, ttl_seconds: int = 3600) -> None:
        if not secret_key:
            raise ValueError("Session secret key must not be empty")
        self._key = secret_key.encode("utf-8")
        self.ttl_seconds = ttl_seconds

    def issue(self, username: str, *, now_ms: int | None = None) -> SessionData:
        """Create a fresh session for a username."""
        now = now_ms if now_ms is not None else _now_ms()
        return SessionData(
            authenticated=True,
            username=username,
            expires_at=now + self.ttl_seconds * 1000,
        )

    def _sign(self, payload: str) -> str:
        digest = hmac.new(self._key, payload.encode("utf-8"), hashlib.sha256).digest()
        return _b64encode(digest)

    def encode(self, session: SessionData) -> str:
        """Serialize and sign a session as a cookie value."""
        body = json.dumps(
            session.model_dump(by_alias=True),
            separators=(",", ":"),
            sort_keys=True,
        )
        payload = _b64encode(body.encode("utf-8"))
        return f"{payload}.{self._sign(payload)}"

    def decode(self, value: str | None, *, now_ms: int | None = None) -> SessionData:
        """Verify a cookie value and return its session.

        Raises:
            MissingSessionError: No cookie value.
            SessionInvalidError: Malformed, unsigned or tampered value.
            SessionExpiredError: Valid signature but past its expiry.
        """
        if not value:
            raise MissingSessionError()

        payload, sep, signature = value.partition(".")
        if not sep or not payload or not signature:
            raise SessionInvalidError(reason="malformed")

        if not hmac.compare_digest(
            self._sign(payload).encode("ascii"), signature.encode("utf-8")
        ):
            raise SessionInvalidError(reason="bad-signature")

        try:
            data = json.loads(_b64decode(payload))
            session = SessionData.model_validate(data)
        except (binascii.Error, UnicodeDecodeError, ValueError, ValidationError) as exc:
            raise SessionInvalidError(reason="bad-payload") from exc

        if not session.authenticated:
            raise SessionInvalidError(reason="not-authenticated")
        if session.is_expired(now_ms):
            raise SessionExpiredError()
        return session


__all__ = ["SessionCodec", "SessionData"]
