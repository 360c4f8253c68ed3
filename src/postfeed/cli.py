#!/usr/bin/env python3
"""
CLI entry point for the postfeed server.
"""

import asyncio
import sys

import click
import uvicorn

from postfeed import __version__
from postfeed.config import settings
from postfeed.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="postfeed")
def cli() -> None:
    """postfeed CLI - run the API server and prepare a development database."""
    pass


@cli.command()
@click.option("--host", default=settings.api_host, help="Host to bind to")
@click.option("--port", default=settings.api_port, type=int, help="Port to bind to")
@click.option("--reload", is_flag=True, default=settings.api_reload, help="Enable auto-reload")
@click.option(
    "--log-level",
    default=settings.log_level.lower(),
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level",
)
def serve(host: str, port: int, reload: bool, log_level: str) -> None:
    """Start the API server."""
    configure_logging(debug=settings.debug, level=log_level)
    logger.info("Starting postfeed server", host=host, port=port, reload=reload)

    uvicorn.run(
        "postfeed.api.app:app",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )


@cli.command("init-db")
@click.option("--database-url", default=None, help="Database URL (defaults to settings)")
def init_db(database_url: str | None) -> None:
    """Create missing tables. For local development; production schemas are managed elsewhere."""
    from postfeed.database import create_tables, dispose_database, init_database

    configure_logging(debug=settings.debug, level=settings.log_level)

    async def _run() -> None:
        init_database(database_url, force_reinit=True)
        try:
            await create_tables()
        finally:
            await dispose_database()

    try:
        asyncio.run(_run())
    except Exception as e:
        logger.error("Database initialization failed", error=str(e))
        sys.exit(1)

    click.echo("Database tables are ready.")


if __name__ == "__main__":
    cli()
