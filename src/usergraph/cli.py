#!/usr/bin/env python3
"""
Main CLI entry point for the usergraph server.
"""

import os
import sys

import click
import uvicorn

from usergraph import __version__
from usergraph.config import get_graphql_url, settings
from usergraph.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="usergraph")
def cli() -> None:
    """usergraph CLI - run the GraphQL server and inspect its schema."""
    pass


@cli.command()
@click.option(
    "--host",
    default=settings.api_host,
    show_default=True,
    help="Host to bind to",
)
@click.option(
    "--port",
    default=settings.api_port,
    show_default=True,
    type=int,
    help="Port to bind to",
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
    help="Number of worker processes; each worker holds its own user store (default: 1)",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
@click.option(
    "--no-seed",
    is_flag=True,
    default=False,
    help="Start with an empty user store",
)
def serve(
    host: str,
    port: int,
    reload: bool,
    workers: int,
    log_level: str,
    no_seed: bool,
) -> None:
    """Start the usergraph API server."""
    configure_logging(debug=(log_level == "debug"), level=log_level)

    logger.info(
        "Starting usergraph API server",
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level=log_level,
    )

    # Worker and reload processes read their settings from the environment
    os.environ["USERGRAPH_DEBUG"] = "true" if log_level == "debug" else "false"
    os.environ["USERGRAPH_LOG_LEVEL"] = log_level
    # Single-process runs reuse the already loaded settings object
    settings.debug = log_level == "debug"
    settings.log_level = log_level
    if no_seed:
        os.environ["USERGRAPH_SEED_DEFAULT_USERS"] = "false"
        settings.seed_default_users = False

    click.echo(f"GraphQL server running at {get_graphql_url(host, port)}")

    try:
        uvicorn.run(
            "usergraph.api.app:create_app",
            factory=True,
            host=host,
            port=port,
            reload=reload,
            workers=(workers if not reload else 1),  # reload doesn't work with multiple workers
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command("export-schema")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write the schema to this file instead of stdout",
)
def export_schema(output: str | None) -> None:
    """Print the GraphQL schema in SDL form."""
    from usergraph.graphql.schema import export_schema as render_schema

    sdl = render_schema()
    if output:
        with open(output, "w", encoding="utf-8") as fh:
            fh.write(sdl + "\n")
        click.echo(f"✓ Schema written to {output}")
    else:
        click.echo(sdl)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()
