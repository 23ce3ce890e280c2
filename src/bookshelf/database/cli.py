"""
``bookshelf-migrate`` command: thin click wrapper over Alembic.
"""

from pathlib import Path
from typing import Any

import click

from alembic import command
from alembic.config import Config
from bookshelf import __version__
from bookshelf.logging import configure_logging, get_logger

logger = get_logger(__name__)

# Checkout root, where alembic.ini sits next to src/
REPO_ROOT = Path(__file__).resolve().parents[3]


def get_alembic_config() -> Config:
    """Load alembic.ini from the working directory, else from the checkout root."""
    for directory in (Path.cwd(), REPO_ROOT):
        ini = directory / "alembic.ini"
        if ini.exists():
            return Config(str(ini))
    raise click.ClickException(f"alembic.ini not found in {Path.cwd()} or {REPO_ROOT}")


def run_alembic(name: str, *args: Any, **kwargs: Any) -> None:
    """Run ``alembic.command.<name>`` against the project config."""
    config = get_alembic_config()
    logger.info("Running migration command", command=name, args=args, **kwargs)
    try:
        getattr(command, name)(config, *args, **kwargs)
    except Exception as e:
        logger.error("Migration command failed", command=name, error=str(e))
        raise click.ClickException(str(e)) from e


@click.group()
@click.option("--debug", is_flag=True, help="Verbose console logging")
@click.version_option(version=__version__, prog_name="bookshelf-migrate")
def main(debug: bool) -> None:
    """Manage the Bookshelf database schema."""
    configure_logging(debug=debug)


@main.command()
@click.argument("revision", default="head")
def upgrade(revision: str) -> None:
    """Apply migrations up to REVISION."""
    run_alembic("upgrade", revision)


@main.command()
@click.argument("revision", default="-1")
def downgrade(revision: str) -> None:
    """Revert migrations down to REVISION."""
    run_alembic("downgrade", revision)


@main.command()
@click.option("-m", "--message", required=True)
@click.option("--autogenerate/--no-autogenerate", default=True)
def revision(message: str, autogenerate: bool) -> None:
    """Write a new migration script."""
    run_alembic("revision", message=message, autogenerate=autogenerate)


@main.command()
def current() -> None:
    """Show the revision the database is at."""
    run_alembic("current")


@main.command()
def history() -> None:
    """List known revisions."""
    run_alembic("history")
