"""Main CLI entry point for webhook-console commands."""

import click

from webhook_console.cli.commands import server, upstream
from webhook_console.infra.logging.config import setup_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="webhook-console")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Webhook Console CLI.

    \b
    Commands:
      serve         Run the console API
      tenants       List configured tenants
      applications  List a tenant's applications
      messages      Page through an application's messages

    \b
    Quick Start:
      webhook-console tenants
      webhook-console applications --tenant operator
      webhook-console messages --tenant operator --app app_1 --pages 3
    """
    ctx.ensure_object(dict)


cli.add_command(server.serve)
cli.add_command(upstream.tenants)
cli.add_command(upstream.applications)
cli.add_command(upstream.messages)


def main() -> None:
    """Entry point for CLI."""
    setup_logging()
    cli(obj={})


if __name__ == "__main__":
    main()
