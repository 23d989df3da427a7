"""Serve CLI command for the HTTP API."""

import logging

import typer
import uvicorn

from skillcorpus.api import create_app
from skillcorpus.core.context import SharedContext
from skillcorpus.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def server_command(
    ctx: typer.Context, host: str | None = None, port: int | None = None
) -> None:
    """Start the HTTP API server."""
    config = ctx.obj.get("config")

    setup_logging(config, console_output=True)

    host = host or config.api.host
    port = port or config.api.port

    typer.echo("Starting skillcorpus API...")
    typer.echo(f"Skills path: {config.skills_path}")
    typer.echo("Press Ctrl+C to stop")

    app = create_app(SharedContext(config))
    logger.info(f"Serving on http://{host}:{port}")
    uvicorn.run(app, host=host, port=port)
