"""Pydantic schemas for the endpoints API."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EndpointDetailResponse(BaseModel):
    """An endpoint with its custom headers.

    ``headers`` is None and ``error`` is set when the headers could not be
    fetched; the endpoint itself is still returned.
    """

    data: Any = Field(None, description="Upstream endpoint object")
    headers: Any = Field(None, description="Upstream endpoint headers object")
    error: str | None = Field(None, description="Failure message for the headers fetch")


class DataResponse(BaseModel):
    """Wraps an upstream object."""

    data: Any = None


class BulkResendRequest(BaseModel):
    """Resend an endpoint's failed attempts in an optional time window.

    Example:
        ```json
        {"appId": "app_1", "since": "2025-01-01T00:00:00Z"}
        ```
    """

    model_config = ConfigDict(populate_by_name=True)

    app_id: str = Field(..., alias="appId", min_length=1, description="Application id")
    since: datetime | None = Field(None, description="Resend attempts after this time")
    until: datetime | None = Field(None, description="Resend attempts before this time")
