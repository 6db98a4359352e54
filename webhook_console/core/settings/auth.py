"""Console session settings."""

from __future__ import annotations

import secrets

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


def _generate_secret_key() -> SecretStr:
    return SecretStr(secrets.token_urlsafe(32))


class AuthSettings(BaseSettings):
    """Session cookie configuration.

    Environment variables use AUTH_ prefix.
    Example: AUTH_SECRET_KEY=..., AUTH_SESSION_TTL_SECONDS=3600

    When AUTH_SECRET_KEY is unset a random key is generated per process, so
    sessions do not survive a restart and are not shared between workers.
    """

    secret_key: SecretStr = Field(
        default_factory=_generate_secret_key,
        description="HMAC key used to sign session cookies",
    )
    cookie_name: str = Field(
        default="webhook-console-auth",
        min_length=1,
        max_length=100,
        pattern=r"^[A-Za-z0-9_\-]+$",
        description="Name of the session cookie",
    )
    session_ttl_seconds: int = Field(
        default=3600,
        ge=60,
        le=7 * 24 * 3600,
        description="Lifetime of a console session (seconds)",
    )
    cookie_secure: bool | None = Field(
        default=None,
        description="Set the Secure cookie flag. If None, enabled in production only.",
    )

    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @property
    def uses_generated_key(self) -> bool:
        """True when no secret key was configured and one was generated."""
        return "secret_key" not in self.model_fields_set

    def is_cookie_secure(self, is_production: bool) -> bool:
        """Resolve the Secure flag for the session cookie."""
        if self.cookie_secure is None:
            return is_production
        return self.cookie_secure


__all__ = ["AuthSettings"]
