#!/usr/bin/env python3
"""
`eats-migrate`: Alembic commands bound to the Eats schema.

The target database is ``--database-url`` when given, else ``EATS_DATABASE_URL``
or the configured default. Alembic's env.py reads the same variable, so the
option is exported before any command runs.
"""

import os
import sys
from collections.abc import Callable
from pathlib import Path

import click

from alembic import command
from alembic.config import Config
from eats import __version__
from eats.database.connection import get_database_url, redact_url
from eats.logging import configure_logging, get_logger

logger = get_logger(__name__)

# alembic.ini sits at the project root, next to src/
PROJECT_DIR = Path(__file__).resolve().parents[3]


def get_alembic_config() -> Config:
    alembic_ini = PROJECT_DIR / "alembic.ini"
    if not alembic_ini.exists():
        raise FileNotFoundError(f"alembic.ini not found at {alembic_ini}")

    config = Config(str(alembic_ini))
    config.set_main_option("script_location", str(PROJECT_DIR / "alembic"))
    return config


def run_alembic(action: str, operation: Callable[[Config], None], **log_fields) -> None:
    """Run one Alembic operation; log and exit non-zero on failure."""
    target = redact_url(get_database_url())
    try:
        config = get_alembic_config()
        logger.info(f"{action} started", database_url=target, **log_fields)
        operation(config)
        logger.info(f"{action} completed", database_url=target)
    except Exception as e:
        logger.error(f"{action} failed", database_url=target, error=str(e))
        click.echo(f"✗ {action} failed: {e}", err=True)
        sys.exit(1)


@click.group()
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
@click.option("--database-url", default=None, help="Database to migrate (overrides EATS_DATABASE_URL)")
@click.version_option(version=__version__, prog_name="eats-migrate")
def main(log_level: str, database_url: str | None) -> None:
    """Eats database migration management."""
    configure_logging(debug=(log_level == "debug"), level=log_level)
    if database_url:
        os.environ["EATS_DATABASE_URL"] = database_url


@main.command()
@click.argument("revision", default="head")
def upgrade(revision: str) -> None:
    """Upgrade the schema to a revision (default: head)."""
    run_alembic("Upgrade", lambda config: command.upgrade(config, revision), revision=revision)


@main.command()
@click.argument("revision", default="-1")
def downgrade(revision: str) -> None:
    """Downgrade the schema to a revision (default: one step back)."""
    run_alembic(
        "Downgrade", lambda config: command.downgrade(config, revision), revision=revision
    )


@main.command()
@click.option("-m", "--message", required=True, help="Revision message")
@click.option("--autogenerate/--no-autogenerate", default=True, help="Diff models against the database")
def revision(message: str, autogenerate: bool) -> None:
    """Create a new migration revision."""
    run_alembic(
        "Revision",
        lambda config: command.revision(config, message=message, autogenerate=autogenerate),
        message=message,
    )


@main.command()
def current() -> None:
    """Show the database's current revision."""
    run_alembic("Current", command.current)


@main.command()
def history() -> None:
    """Show migration history."""
    run_alembic("History", command.history)


if __name__ == "__main__":
    main()
