"""Server command."""

import click
import uvicorn

from webhook_console.cli.utils import info, success
from webhook_console.core.settings import get_app_settings


@click.command(name="serve")
@click.option(
    "--host",
    default=None,
    help="Host to bind (default: APP_HOST or 0.0.0.0)",
)
@click.option(
    "--port",
    default=None,
    type=int,
    help="Port to bind (default: APP_PORT or 8000)",
)
@click.option(
    "--reload/--no-reload",
    default=False,
    help="Enable auto-reload on code changes",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["critical", "error", "warning", "info", "debug", "trace"]),
    help="Uvicorn log level",
)
def serve(host: str | None, port: int | None, reload: bool, log_level: str) -> None:
    """Run the console API with uvicorn."""
    settings = get_app_settings()
    host = host or settings.host
    port = port or settings.port

    info(f"Server will run at: http://{host}:{port}")
    info(f"Environment: {settings.environment}")
    info(f"Auto-reload: {'enabled' if reload else 'disabled'}")
    success("Starting uvicorn...")

    uvicorn.run(
        "webhook_console.app.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )
