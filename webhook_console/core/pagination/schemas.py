"""Page schemas for the upstream cursor pagination contract.

The upstream webhook-delivery API pages its listings with an opaque cursor:

    GET /api/v1/app/?limit=250&iterator=<cursor>
    {"data": [...], "iterator": "<next cursor>", "done": false}

Two shapes are defined here:

1. UpstreamPage:
   - One normalized upstream response
   - Missing ``data`` means an empty page, missing ``done`` means done

2. IteratorPage:
   - What the console returns to a caller that pages interactively
   - The cursor is cleared once the lineage is exhausted
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class UpstreamPage(BaseModel):
    """One page of an upstream listing.

    The cursor is treated as an opaque token: it is never parsed, only
    passed back to the next call.

    Attributes:
        data: Items of this page in upstream order.
        iterator: Cursor for the next page, if any.
        done: Whether the upstream reports the listing as complete.
        count: Optional item count reported by the upstream.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    data: list[Any] = Field(default_factory=list, description="Items of this page")
    iterator: str | None = Field(default=None, description="Opaque next-page cursor")
    done: bool = Field(default=True, description="True when no further pages exist")
    count: int | None = Field(default=None, ge=0, description="Upstream-reported item count")

    @model_validator(mode="before")
    @classmethod
    def normalize_body(cls, value: Any) -> Any:
        """Accept a bare list as a page and treat explicit nulls as missing."""
        if value is None:
            return {}
        if isinstance(value, list):
            return {"data": value}
        if isinstance(value, dict):
            normalized = dict(value)
            if normalized.get("data") is None:
                normalized.pop("data", None)
            if normalized.get("done") is None:
                normalized.pop("done", None)
            return normalized
        return value


class IteratorPage(BaseModel):
    """Response body for iterator-passthrough listings.

    Usage:
        @router.get("/messages", response_model=IteratorPage)
        async def list_messages(iterator: str | None = None, ...):
            return await passthrough(client.page_fetcher(path, limit=50), iterator)

    Client navigation:
        # First page
        GET /api/messages?appId=app_1

        # Next page (using iterator from the previous response)
        GET /api/messages?appId=app_1&iterator=<cursor>

    Attributes:
        data: Items of this page.
        iterator: Cursor for the next page; None once done.
        done: Whether the lineage is exhausted.
        count: Number of items (upstream count, or len(data) when omitted).
        error: Safe failure message when the fetch failed.
    """

    data: list[Any] = Field(default_factory=list, description="Items of this page")
    iterator: str | None = Field(default=None, description="Cursor for the next page")
    done: bool = Field(default=True, description="Whether more pages exist")
    count: int = Field(default=0, ge=0, description="Item count")
    error: str | None = Field(default=None, description="Failure message, if any")

    @classmethod
    def failed(cls, message: str) -> IteratorPage:
        """Build the body returned when the upstream fetch failed."""
        return cls(data=[], iterator=None, done=True, count=0, error=message)


__all__ = ["IteratorPage", "UpstreamPage"]
