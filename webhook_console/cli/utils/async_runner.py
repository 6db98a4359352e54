"""Run async command bodies from synchronous click callbacks."""

import asyncio
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

import click

T = TypeVar("T")


def coro(f: Callable[..., Awaitable[T]]) -> Callable[..., T]:
    """Wrap an async command so click can call it.

    Each invocation gets a fresh event loop. Ctrl-C while an upstream call is
    in flight aborts the command instead of printing a traceback.

    Usage:
        @click.command()
        @coro
        async def applications(...):
            async with WebhookAPIClient(config) as client:
                ...
    """

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return asyncio.run(f(*args, **kwargs))
        except KeyboardInterrupt:
            raise click.Abort from None

    return wrapper
