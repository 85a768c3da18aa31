#!/usr/bin/env python3
"""
Main CLI entry point for the Eats backend server.
"""

import os
import sys

import click
import uvicorn

from eats import __version__
from eats.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="eats")
def cli() -> None:
    """Eats CLI - run the API server and manage categories."""
    pass


@cli.command()
@click.option(
    "--host",
    default="0.0.0.0",
    help="Host to bind to (default: 0.0.0.0)",
)
@click.option(
    "--port",
    default=8000,
    type=int,
    help="Port to bind to (default: 8000)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
@click.option(
    "--workers",
    default=1,
    type=int,
    help="Number of worker processes (default: 1)",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(
    host: str,
    port: int,
    reload: bool,
    workers: int,
    log_level: str,
) -> None:
    """Start the Eats API server."""
    configure_logging(debug=(log_level == "debug"), level=log_level)

    logger.info(
        "Starting Eats API server",
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level=log_level,
    )

    # Worker processes re-import the app, so settings travel through the environment
    if log_level == "debug":
        os.environ["EATS_DEBUG"] = "true"
        os.environ["EATS_LOG_LEVEL"] = "debug"
    else:
        os.environ.setdefault("EATS_DEBUG", "false")
        os.environ.setdefault("EATS_LOG_LEVEL", log_level)

    try:
        if reload or workers > 1:
            uvicorn.run(
                "eats.api.app:app",
                host=host,
                port=port,
                reload=reload,
                workers=(workers if not reload else 1),
                log_level=log_level,
                access_log=True,
            )
        else:
            from eats.api.app import app

            uvicorn.run(
                app,
                host=host,
                port=port,
                log_level=log_level,
                access_log=True,
            )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.group()
def category() -> None:
    """Manage restaurant categories."""
    pass


@category.command("create")
@click.option("--name", required=True, help="Category name (normalized to lower case)")
@click.option("--cover-img", default=None, help="Optional cover image URL")
def create_category(name: str, cover_img: str | None) -> None:
    """Create a category, or report the existing one with the same slug."""
    import asyncio

    from eats.database.connection import close_database, get_async_session
    from eats.stores.categories import get_or_create_category

    configure_logging()

    async def do_create():
        try:
            async with get_async_session() as db:
                category = await get_or_create_category(db, name)
                if cover_img and not category.cover_img:
                    category.cover_img = cover_img
            click.echo(f"✓ Category ready: {category.id}")
            click.echo(f"  Name: {category.name}")
            click.echo(f"  Slug: {category.slug}")
        except Exception as e:
            logger.error("Failed to create category", error=str(e))
            click.echo(f"✗ Error creating category: {e}", err=True)
            sys.exit(1)
        finally:
            await close_database()

    asyncio.run(do_create())


@category.command("list")
def list_categories() -> None:
    """List all categories with their restaurant counts."""
    import asyncio

    from eats.database.connection import close_database, get_async_session
    from eats.stores import categories

    configure_logging()

    async def do_list():
        try:
            async with get_async_session() as db:
                result = await categories.list_categories(db)
                if not result.ok:
                    click.echo(f"✗ Error listing categories: {result.message}", err=True)
                    sys.exit(1)

                if not result.value:
                    click.echo("No categories found.")
                    return

                click.echo(f"Found {len(result.value)} category(ies):")
                click.echo()
                for c in result.value:
                    count = await categories.count_restaurants(db, c.id)
                    click.echo(f"  {c.slug}: {c.name} ({count} restaurant(s))")
        finally:
            await close_database()

    asyncio.run(do_list())


if __name__ == "__main__":
    cli()
