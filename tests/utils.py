"""Test utilities and helper functions.

Usage:
    from tests.utils import FakeUpstream, page

    upstream = FakeUpstream()
    upstream.add("GET", "/api/v1/app", page([{"id": "app_1"}], iterator="c1", done=False))
    upstream.add("GET", "/api/v1/app", page([{"id": "app_2"}]))

    async with UpstreamClient(config, transport=upstream.transport) as client:
        ...
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx

USERNAME = "operator"
PASSWORD = "s3cret"

Reply = tuple[int, Any] | Callable[[httpx.Request], httpx.Response]


def _raw_path(request: httpx.Request) -> str:
    """Request path as sent, percent-encoding kept."""
    return request.url.raw_path.split(b"?", 1)[0].decode("ascii")


def page(
    data: list[Any] | None = None,
    *,
    iterator: str | None = None,
    done: bool | None = True,
    count: int | None = None,
) -> tuple[int, dict[str, Any]]:
    """Build a 200 reply carrying one upstream listing page."""
    body: dict[str, Any] = {"data": data or [], "iterator": iterator}
    if done is not None:
        body["done"] = done
    if count is not None:
        body["count"] = count
    return 200, body


def raising(exc: Exception) -> Callable[[httpx.Request], httpx.Response]:
    """Reply that fails at the transport level."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise exc

    return handler


class FakeUpstream:
    """Scripted webhook-delivery API served through ``httpx.MockTransport``.

    Replies registered for the same method and path are served in order; the
    last one repeats. Unregistered paths answer 404. Every request is
    recorded in ``requests``.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], list[Reply]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, *replies: Reply) -> FakeUpstream:
        self.routes.setdefault((method.upper(), path), []).extend(replies)
        return self

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        replies = self.routes.get((request.method, _raw_path(request)))
        if not replies:
            return httpx.Response(404, json={"detail": "Not found"})

        reply = replies.pop(0) if len(replies) > 1 else replies[0]
        if callable(reply):
            return reply(request)
        status_code, body = reply
        if body is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def calls(self, path: str, method: str = "GET") -> list[httpx.Request]:
        """Requests recorded for one method and path."""
        return [r for r in self.requests if r.method == method and _raw_path(r) == path]
