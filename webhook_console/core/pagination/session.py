"""Caller-side "load more" state for iterator-passthrough listings.

One session follows one cursor lineage:

    IDLE -> LOADING -> HAS_MORE -> LOADING -> ... -> EXHAUSTED

``HAS_MORE`` only moves back to ``LOADING`` when the caller asks for another
page. ``EXHAUSTED`` is terminal. A failed load leaves the session in the
state it had before the load, so the caller can retry the same cursor.
"""

from __future__ import annotations

from enum import StrEnum
import logging
from typing import Any

from webhook_console.core.pagination.aggregators import PageFetcher, passthrough
from webhook_console.core.pagination.schemas import IteratorPage

logger = logging.getLogger(__name__)


class IteratorState(StrEnum):
    """Lifecycle of an iterator session."""

    IDLE = "idle"
    LOADING = "loading"
    HAS_MORE = "has_more"
    EXHAUSTED = "exhausted"


class IteratorSession:
    """Accumulated view over successive passthrough pages.

    Example:
        session = IteratorSession(client.page_fetcher(path, limit=50))
        await session.load_more()
        while session.has_more:
            await session.load_more()
        print(len(session.items))
    """

    def __init__(self, fetch_page: PageFetcher, *, resource: str = "listing") -> None:
        self._fetch_page = fetch_page
        self._resource = resource
        self._state = IteratorState.IDLE
        self._cursor: str | None = None
        self._items: list[Any] = []
        self._pages = 0

    @property
    def state(self) -> IteratorState:
        return self._state

    @property
    def items(self) -> list[Any]:
        """Items of every page loaded so far, in order."""
        return list(self._items)

    @property
    def cursor(self) -> str | None:
        return self._cursor

    @property
    def pages(self) -> int:
        return self._pages

    @property
    def has_more(self) -> bool:
        return self._state == IteratorState.HAS_MORE

    @property
    def exhausted(self) -> bool:
        return self._state == IteratorState.EXHAUSTED

    async def load_more(self) -> IteratorPage:
        """Fetch the next page and append it to the accumulated view.

        Returns:
            The page just loaded.

        Raises:
            RuntimeError: If the session is exhausted or already loading.
            UpstreamError: If the fetch failed; the session state is unchanged.
        """
        if self._state == IteratorState.EXHAUSTED:
            raise RuntimeError("Iterator session is exhausted")
        if self._state == IteratorState.LOADING:
            raise RuntimeError("Iterator session is already loading")

        previous = self._state
        self._state = IteratorState.LOADING
        try:
            page = await passthrough(self._fetch_page, self._cursor, resource=self._resource)
        except Exception:
            self._state = previous
            raise

        self._items.extend(page.data)
        self._pages += 1
        if page.done:
            self._cursor = None
            self._state = IteratorState.EXHAUSTED
        else:
            self._cursor = page.iterator
            self._state = IteratorState.HAS_MORE

        logger.debug(
            "Iterator session advanced",
            extra={
                "resource": self._resource,
                "pages": self._pages,
                "items": len(self._items),
                "state": self._state.value,
            },
        )
        return page


__all__ = ["IteratorSession", "IteratorState"]
