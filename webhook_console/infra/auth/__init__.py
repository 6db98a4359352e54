"""Console session authentication."""

from __future__ import annotations

from webhook_console.infra.auth.session import SessionCodec, SessionData

__all__ = ["SessionCodec", "SessionData"]
