"""Pydantic schemas for the messages API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class MessageDetailResponse(BaseModel):
    """A message with the first page of its delivery attempts.

    Either half may be missing when its fetch failed; ``error`` then says
    which. ``attemptsIterator`` continues the attempt listing through
    ``GET /messages/{id}/attempts``.

    Example:
        ```json
        {
            "data": {"id": "msg_1", "eventType": "invoice.paid"},
            "attempts": [{"id": "atmpt_1", "status": 0}],
            "attemptsIterator": null,
            "attemptsDone": true
        }
        ```
    """

    model_config = ConfigDict(populate_by_name=True)

    data: Any = Field(None, description="Upstream message object")
    attempts: list[Any] = Field(default_factory=list, description="First page of attempts")
    attempts_iterator: str | None = Field(None, alias="attemptsIterator")
    attempts_done: bool = Field(True, alias="attemptsDone")
    not_found: bool | None = Field(None, alias="notFound")
    error: str | None = Field(None, description="Failure message for either fetch")


class ResendRequest(BaseModel):
    """Target of a single-message resend.

    Example:
        ```json
        {"appId": "app_1", "endpointId": "ep_1"}
        ```
    """

    model_config = ConfigDict(populate_by_name=True)

    app_id: str = Field(..., alias="appId", min_length=1, description="Application id")
    endpoint_id: str = Field(..., alias="endpointId", min_length=1, description="Endpoint id")
