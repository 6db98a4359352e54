"""Upstream webhook-delivery API client settings.

Controls per-call timeouts and the page sizes used when paginating over the
upstream listing endpoints.

Environment variables use UPSTREAM_ prefix.
Example: UPSTREAM_TIMEOUT_SECONDS=10, UPSTREAM_MAX_DRAIN_PAGES=200
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class UpstreamSettings(BaseSettings):
    """Configuration for calls to the webhook-delivery API.

    Every upstream call is a single attempt bounded by ``timeout_seconds``;
    a timeout is reported as an upstream failure.
    """

    # HTTP settings
    timeout_seconds: float = Field(
        default=15.0,
        gt=0,
        le=300,
        description="Total timeout for one upstream HTTP call (seconds)",
    )
    connect_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        le=60,
        description="Connection timeout for upstream HTTP calls (seconds)",
    )

    # Full-drain listings (applications, endpoints)
    drain_page_size: int = Field(
        default=250,
        ge=1,
        le=250,
        description="Page size requested on every call of a full drain",
    )
    max_drain_pages: int = Field(
        default=200,
        ge=1,
        le=10_000,
        description="Hard cap on pages fetched by one full drain",
    )

    # Iterator-passthrough listings (messages, attempts)
    messages_default_limit: int = Field(
        default=50,
        ge=1,
        description="Default page size for message listings",
    )
    attempts_default_limit: int = Field(
        default=25,
        ge=1,
        description="Default page size for endpoint attempt listings",
    )
    message_attempts_default_limit: int = Field(
        default=10,
        ge=1,
        description="Default page size for a message's attempt listing",
    )
    max_limit: int = Field(
        default=250,
        ge=1,
        le=1000,
        description="Maximum page size a caller may request",
    )

    @model_validator(mode="after")
    def validate_limits(self) -> UpstreamSettings:
        """Default limits must not exceed the maximum limit."""
        for name in (
            "messages_default_limit",
            "attempts_default_limit",
            "message_attempts_default_limit",
        ):
            if getattr(self, name) > self.max_limit:
                msg = f"{name} cannot exceed max_limit ({self.max_limit})"
                raise ValueError(msg)
        return self

    def clamp_limit(self, limit: int | None, default: int) -> int:
        """Resolve a caller-supplied page size against the default and the cap."""
        if limit is None:
            return default
        return max(1, min(limit, self.max_limit))

    model_config = SettingsConfigDict(
        env_prefix="UPSTREAM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )


__all__ = ["UpstreamSettings"]
