"""Aggregation strategies over the upstream cursor pagination contract.

Full drain:
    Follow the cursor until the upstream reports ``done`` and return every
    item at once. Used for listings that are small enough to show whole
    (applications, endpoints). Capped at ``max_pages`` calls.

Iterator passthrough:
    Make exactly one upstream call and hand the cursor back to the caller,
    who decides whether to continue. Used for unbounded listings
    (messages, attempts).

Both strategies take a ``PageFetcher``: an async callable that fetches one
page for a given cursor. The fetcher owns the path, limit and filters, so the
same filters apply to every page of one lineage.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
import logging
from typing import Any

from webhook_console.core.exceptions import PaginationLimitExceeded, UpstreamError
from webhook_console.core.pagination.schemas import IteratorPage, UpstreamPage
from webhook_console.infra.metrics.business import (
    pagination_drain_limit_total,
    pagination_pages_fetched_total,
)

logger = logging.getLogger(__name__)

PageFetcher = Callable[[str | None], Awaitable[UpstreamPage]]


@dataclass
class DrainResult:
    """Outcome of a full drain.

    On failure ``items`` is always empty and ``error`` carries the cause;
    partial results are never returned.
    """

    items: list[Any] = field(default_factory=list)
    pages: int = 0
    error: UpstreamError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def drain(
    fetch_page: PageFetcher,
    *,
    max_pages: int,
    resource: str = "listing",
) -> DrainResult:
    """Fetch every page of a listing sequentially.

    Each call after the first carries the cursor returned by the previous
    call. A page that is not done but carries no cursor ends the drain,
    since there is no way to continue.

    Args:
        fetch_page: Fetches one page for a cursor (None for the first page).
        max_pages: Maximum number of upstream calls.
        resource: Label used for logs and metrics.

    Returns:
        DrainResult with all items in upstream order, or empty items and the
        error when any call failed or the page cap was reached.
    """
    items: list[Any] = []
    cursor: str | None = None
    pages = 0

    while True:
        if pages >= max_pages:
            pagination_drain_limit_total.labels(resource=resource).inc()
            logger.warning(
                "Pagination cap reached before upstream completed",
                extra={"resource": resource, "max_pages": max_pages},
            )
            return DrainResult(items=[], pages=pages, error=PaginationLimitExceeded(max_pages))

        try:
            page = await fetch_page(cursor)
        except UpstreamError as exc:
            logger.warning(
                "Full drain failed",
                extra={
                    "resource": resource,
                    "pages": pages,
                    "upstream_status": exc.upstream_status,
                    "error": exc.detail,
                },
            )
            return DrainResult(items=[], pages=pages, error=exc)

        pages += 1
        pagination_pages_fetched_total.labels(resource=resource, strategy="drain").inc()
        items.extend(page.data)

        if page.done:
            break
        if not page.iterator:
            logger.warning(
                "Upstream page not done but returned no iterator; stopping",
                extra={"resource": resource, "pages": pages},
            )
            break
        cursor = page.iterator

    logger.debug(
        "Full drain complete",
        extra={"resource": resource, "pages": pages, "items": len(items)},
    )
    return DrainResult(items=items, pages=pages)


async def passthrough(
    fetch_page: PageFetcher,
    iterator: str | None = None,
    *,
    resource: str = "listing",
) -> IteratorPage:
    """Fetch a single page and return it with its continuation cursor.

    Args:
        fetch_page: Fetches one page for a cursor.
        iterator: Cursor from a previous response, or None for the first page.
        resource: Label used for metrics.

    Returns:
        IteratorPage whose ``iterator`` is None when the upstream is done.

    Raises:
        UpstreamError: If the upstream call failed.
    """
    page = await fetch_page(iterator)
    pagination_pages_fetched_total.labels(resource=resource, strategy="passthrough").inc()

    # A page without a cursor cannot be continued.
    done = page.done or not page.iterator
    return IteratorPage(
        data=list(page.data),
        iterator=None if done else page.iterator,
        done=done,
        count=page.count if page.count is not None else len(page.data),
    )


__all__ = ["DrainResult", "PageFetcher", "drain", "passthrough"]
