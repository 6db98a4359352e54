"""Commands that talk to a tenant's upstream API.

These run outside the web app: the tenant is picked by console username
instead of a session cookie, and results are printed as JSON on stdout.
"""

import sys

import click

from webhook_console.cli.utils import (
    coro,
    echo_json,
    error,
    header,
    info,
    mask_secret,
    success,
    warning,
)
from webhook_console.core.exceptions import UpstreamError
from webhook_console.core.pagination import IteratorSession, drain
from webhook_console.core.settings import (
    TenantConfig,
    get_tenant_registry,
    get_upstream_settings,
)
from webhook_console.infra.upstream import WebhookAPIClient


def _resolve_tenant(username: str) -> TenantConfig:
    tenant = get_tenant_registry().get(username)
    if tenant is None:
        error(f"No tenant configured for username '{username}'")
        sys.exit(1)
    return tenant.config


def _open_client(ctx: click.Context, config: TenantConfig) -> WebhookAPIClient:
    """Build a client for the tenant; ``ctx.obj["transport"]`` overrides the network."""
    settings = get_upstream_settings()
    return WebhookAPIClient(
        config,
        timeout=settings.timeout_seconds,
        connect_timeout=settings.connect_timeout_seconds,
        transport=(ctx.obj or {}).get("transport"),
    )


@click.command(name="tenants")
def tenants() -> None:
    """List configured console tenants (tokens masked)."""
    registry = get_tenant_registry()
    if not len(registry):
        warning("No tenants configured")
        return

    header(f"{len(registry)} tenant(s)")
    echo_json(
        [
            {
                "username": tenant.username,
                "api_url": tenant.config.api_url or None,
                "api_token": mask_secret(tenant.config.api_token.get_secret_value()),
            }
            for tenant in registry
        ]
    )


@click.command(name="applications")
@click.option("--tenant", "username", required=True, help="Console username of the tenant")
@click.pass_context
@coro
async def applications(ctx: click.Context, username: str) -> None:
    """Fetch every application of a tenant."""
    config = _resolve_tenant(username)
    settings = get_upstream_settings()

    async with _open_client(ctx, config) as client:
        result = await drain(
            client.applications(limit=settings.drain_page_size),
            max_pages=settings.max_drain_pages,
            resource="applications",
        )

    if result.error is not None:
        error(f"Failed to list applications: {result.error.detail}")
        sys.exit(1)

    success(f"{len(result.items)} application(s) in {result.pages} page(s)")
    echo_json(result.items)


@click.command(name="messages")
@click.option("--tenant", "username", required=True, help="Console username of the tenant")
@click.option("--app", "app_id", required=True, help="Application id")
@click.option("--limit", default=None, type=click.IntRange(min=1), help="Page size")
@click.option(
    "--pages",
    default=1,
    type=click.IntRange(min=1),
    show_default=True,
    help="Maximum number of pages to load",
)
@click.pass_context
@coro
async def messages(
    ctx: click.Context,
    username: str,
    app_id: str,
    limit: int | None,
    pages: int,
) -> None:
    """Page through an application's messages."""
    config = _resolve_tenant(username)
    settings = get_upstream_settings()

    async with _open_client(ctx, config) as client:
        session = IteratorSession(
            client.messages(
                app_id,
                limit=settings.clamp_limit(limit, settings.messages_default_limit),
            ),
            resource="messages",
        )
        try:
            await session.load_more()
            while session.has_more and session.pages < pages:
                await session.load_more()
        except UpstreamError as exc:
            error(f"Failed to list messages: {exc.detail}")
            sys.exit(1)

    success(f"{len(session.items)} message(s) in {session.pages} page(s)")
    if session.has_more:
        info(f"More messages available; next iterator: {session.cursor}")
    echo_json(session.items)
