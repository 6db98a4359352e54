"""Cursor pagination over the upstream webhook-delivery API.

Every upstream listing returns ``{data, iterator, done}``. Two strategies sit
on top of one page fetcher:

Full drain (applications, endpoints):
    result = await drain(client.page_fetcher(path, limit=250), max_pages=200)
    if result.error:
        ...  # empty list plus an error status

Iterator passthrough (messages, attempts):
    page = await passthrough(client.page_fetcher(path, limit=50), iterator)
    # page.iterator is None once page.done is True

The cursor is an opaque string that callers pass back unchanged.
"""

from webhook_console.core.pagination.aggregators import (
    DrainResult,
    PageFetcher,
    drain,
    passthrough,
)
from webhook_console.core.pagination.schemas import IteratorPage, UpstreamPage
from webhook_console.core.pagination.session import IteratorSession, IteratorState

__all__ = [
    "DrainResult",
    "IteratorPage",
    "IteratorSession",
    "IteratorState",
    "PageFetcher",
    "UpstreamPage",
    "drain",
    "passthrough",
]
