"""
``bookshelf`` command: runs the GraphQL API under uvicorn.
"""

import os

import click
import uvicorn

from . import __version__
from .config import settings
from .logging import configure_logging

LOG_LEVELS = ["debug", "info", "warning", "error"]


@click.group()
@click.version_option(version=__version__, prog_name="bookshelf")
def cli() -> None:
    """Bookshelf GraphQL API."""


@cli.command()
@click.option("--host", default=settings.api_host, show_default=True, help="Interface to bind")
@click.option("--port", default=settings.api_port, type=int, show_default=True, help="Port to bind")
@click.option("--reload", is_flag=True, help="Restart when source files change")
@click.option("--workers", default=1, type=int, show_default=True, help="Worker processes")
@click.option("--log-level", default="info", type=click.Choice(LOG_LEVELS), show_default=True)
def serve(host: str, port: int, reload: bool, workers: int, log_level: str) -> None:
    """Serve the API until interrupted."""
    configure_logging(debug=log_level == "debug")

    # uvicorn workers import the app in fresh processes, which read settings from the environment
    if log_level == "debug":
        os.environ["BOOKSHELF_DEBUG"] = "true"
    os.environ["BOOKSHELF_LOG_LEVEL"] = log_level.upper()

    click.echo(f"Server running at http://{host}:{port}{settings.graphql_path}")
    uvicorn.run(
        "bookshelf.api.app:app",
        host=host,
        port=port,
        reload=reload,
        workers=1 if reload else workers,
        log_level=log_level,
    )


def main() -> None:
    cli()
