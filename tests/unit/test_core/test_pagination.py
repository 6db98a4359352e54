"""Unit tests for the cursor pagination aggregators."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError
import pytest

from webhook_console.core.exceptions import PaginationLimitExceeded, UpstreamError
from webhook_console.core.pagination import (
    IteratorPage,
    UpstreamPage,
    drain,
    passthrough,
)


class ScriptedFetcher:
    """Page fetcher that replays pages and records the cursors it was given."""

    def __init__(self, *pages: UpstreamPage | Exception) -> None:
        self.pages = list(pages)
        self.cursors: list[str | None] = []

    async def __call__(self, iterator: str | None) -> UpstreamPage:
        self.cursors.append(iterator)
        item = self.pages.pop(0) if len(self.pages) > 1 else self.pages[0]
        if isinstance(item, Exception):
            raise item
        return item


def _page(data: list[Any], iterator: str | None = None, done: bool = True) -> UpstreamPage:
    return UpstreamPage(data=data, iterator=iterator, done=done)


# ──────────────────────────────────────────────────────────────
# UpstreamPage / IteratorPage
# ──────────────────────────────────────────────────────────────


class TestUpstreamPage:
    def test_missing_fields_mean_empty_and_done(self):
        page = UpstreamPage.model_validate({})

        assert page.data == []
        assert page.done is True
        assert page.iterator is None
        assert page.count is None

    def test_explicit_nulls_are_treated_as_missing(self):
        page = UpstreamPage.model_validate({"data": None, "done": None, "iterator": None})

        assert page.data == []
        assert page.done is True

    def test_bare_list_is_a_single_page(self):
        page = UpstreamPage.model_validate([{"id": "a"}, {"id": "b"}])

        assert [item["id"] for item in page.data] == ["a", "b"]
        assert page.done is True

    def test_null_body_is_an_empty_page(self):
        page = UpstreamPage.model_validate(None)

        assert page.data == []
        assert page.done is True

    def test_unknown_fields_are_ignored(self):
        page = UpstreamPage.model_validate({"data": [1], "done": False, "iterator": "c", "x": 1})

        assert page.data == [1]
        assert page.done is False
        assert page.iterator == "c"

    def test_negative_count_is_rejected(self):
        with pytest.raises(ValidationError):
            UpstreamPage.model_validate({"data": [], "count": -1})


def test_failed_iterator_page_is_empty_and_exhausted():
    page = IteratorPage.failed("Upstream error: 503 Service Unavailable")

    assert page.model_dump() == {
        "data": [],
        "iterator": None,
        "done": True,
        "count": 0,
        "error": "Upstream error: 503 Service Unavailable",
    }


# ──────────────────────────────────────────────────────────────
# Full drain
# ──────────────────────────────────────────────────────────────


class TestDrain:
    @pytest.mark.asyncio
    async def test_follows_cursor_until_done(self):
        fetch = ScriptedFetcher(
            _page(["a", "b"], iterator="c1", done=False),
            _page(["c"], done=True),
        )

        result = await drain(fetch, max_pages=10)

        assert result.ok
        assert result.items == ["a", "b", "c"]
        assert result.pages == 2
        assert fetch.cursors == [None, "c1"]

    @pytest.mark.asyncio
    async def test_each_call_uses_previous_cursor(self):
        fetch = ScriptedFetcher(
            _page([1], iterator="c1", done=False),
            _page([2], iterator="c2", done=False),
            _page([3], iterator="c3", done=False),
            _page([4], done=True),
        )

        result = await drain(fetch, max_pages=10)

        assert result.items == [1, 2, 3, 4]
        assert fetch.cursors == [None, "c1", "c2", "c3"]

    @pytest.mark.asyncio
    async def test_single_done_page_makes_one_call(self):
        fetch = ScriptedFetcher(UpstreamPage.model_validate({"data": [{"id": "x"}]}))

        result = await drain(fetch, max_pages=10)

        assert result.items == [{"id": "x"}]
        assert len(fetch.cursors) == 1

    @pytest.mark.asyncio
    async def test_page_cap_returns_no_items_and_an_error(self):
        fetch = ScriptedFetcher(_page(["again"], iterator="loop", done=False))

        result = await drain(fetch, max_pages=3)

        assert not result.ok
        assert result.items == []
        assert isinstance(result.error, PaginationLimitExceeded)
        assert result.error.max_pages == 3
        assert len(fetch.cursors) == 3

    @pytest.mark.asyncio
    async def test_failure_discards_items_already_fetched(self):
        failure = UpstreamError.from_status(503, "Service Unavailable")
        fetch = ScriptedFetcher(_page(["a"], iterator="c1", done=False), failure)

        result = await drain(fetch, max_pages=10)

        assert result.items == []
        assert result.error is failure
        assert result.pages == 1

    @pytest.mark.asyncio
    async def test_not_done_without_cursor_stops(self):
        fetch = ScriptedFetcher(_page(["a"], iterator=None, done=False), _page(["never"]))

        result = await drain(fetch, max_pages=10)

        assert result.ok
        assert result.items == ["a"]
        assert len(fetch.cursors) == 1


# ──────────────────────────────────────────────────────────────
# Iterator passthrough
# ──────────────────────────────────────────────────────────────


class TestPassthrough:
    @pytest.mark.asyncio
    async def test_returns_one_page_with_its_cursor(self):
        fetch = ScriptedFetcher(_page(["a", "b"], iterator="c1", done=False))

        page = await passthrough(fetch)

        assert page.data == ["a", "b"]
        assert page.iterator == "c1"
        assert page.done is False
        assert page.count == 2
        assert fetch.cursors == [None]

    @pytest.mark.asyncio
    async def test_forwards_caller_cursor(self):
        fetch = ScriptedFetcher(_page(["c"], done=True))

        await passthrough(fetch, "c1")

        assert fetch.cursors == ["c1"]

    @pytest.mark.asyncio
    async def test_cursor_is_cleared_when_done(self):
        fetch = ScriptedFetcher(_page(["c"], iterator="stale", done=True))

        page = await passthrough(fetch, "c1")

        assert page.done is True
        assert page.iterator is None

    @pytest.mark.asyncio
    async def test_missing_cursor_means_done(self):
        fetch = ScriptedFetcher(_page(["a"], iterator=None, done=False))

        page = await passthrough(fetch)

        assert page.done is True
        assert page.iterator is None

    @pytest.mark.asyncio
    async def test_upstream_count_is_kept(self):
        fetch = ScriptedFetcher(UpstreamPage(data=["a"], done=True, count=40))

        page = await passthrough(fetch)

        assert page.count == 40

    @pytest.mark.asyncio
    async def test_failure_propagates(self):
        fetch = ScriptedFetcher(UpstreamError("Upstream service unavailable"))

        with pytest.raises(UpstreamError):
            await passthrough(fetch)


@pytest.mark.asyncio
async def test_drain_equals_concatenated_passthrough_pages():
    pages = [
        _page([1, 2], iterator="c1", done=False),
        _page([3, 4], iterator="c2", done=False),
        _page([5], done=True),
    ]

    drained = await drain(ScriptedFetcher(*pages), max_pages=10)

    fetch = ScriptedFetcher(*pages)
    collected: list[Any] = []
    cursor: str | None = None
    while True:
        page = await passthrough(fetch, cursor)
        collected.extend(page.data)
        if page.done:
            break
        cursor = page.iterator

    assert drained.items == collected == [1, 2, 3, 4, 5]
