"""CLI command modules."""

from webhook_console.cli.commands import server, upstream

__all__ = ["server", "upstream"]
