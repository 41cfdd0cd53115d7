#!/usr/bin/env python3
"""
Main CLI entry point for the Postboard API server.
"""

import os
import sys

import click
import uvicorn

from postboard import __version__
from postboard.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="postboard")
def cli() -> None:
    """Postboard CLI - run the API server and manage the document store."""
    pass


@cli.command()
@click.option(
    "--host",
    default="0.0.0.0",
    help="Host to bind to (default: 0.0.0.0)",
)
@click.option(
    "--port",
    default=8080,
    type=int,
    help="Port to bind to (default: 8080)",
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
    """Start the Postboard API server."""
    configure_logging(debug=(log_level == "debug"))

    logger.info(
        "Starting Postboard API server",
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level=log_level,
    )

    # Settings are read at import time in each worker
    if log_level == "debug":
        os.environ["POSTBOARD_DEBUG"] = "true"
        os.environ["POSTBOARD_LOG_LEVEL"] = "debug"
    else:
        os.environ.setdefault("POSTBOARD_DEBUG", "false")
        os.environ.setdefault("POSTBOARD_LOG_LEVEL", log_level)

    try:
        if reload or workers > 1:
            uvicorn.run(
                "postboard.api.app:app",
                host=host,
                port=port,
                reload=reload,
                workers=(workers if not reload else 1),  # reload doesn't work with multiple workers
                log_level=log_level,
                access_log=True,
            )
        else:
            from postboard.api.app import app

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


@cli.command("init-db")
@click.option(
    "--database-url",
    default=None,
    help="Database URL (defaults to POSTBOARD_DATABASE_URL)",
)
def init_db(database_url: str | None) -> None:
    """Create the posts and comments collections."""
    import asyncio

    from postboard.database.store import DocumentStore
    from postboard.errors import StoreUnavailable

    configure_logging()

    async def do_init():
        store = DocumentStore.from_url(database_url)
        try:
            ok, error = await store.ping()
            if not ok:
                click.echo(f"✗ {error}", err=True)
                sys.exit(1)
            await store.create_schema()
            click.echo("✓ Collections created")
        except StoreUnavailable as e:
            logger.error("Failed to create collections", error=str(e))
            click.echo(f"✗ Error creating collections: {e}", err=True)
            sys.exit(1)
        finally:
            await store.close()

    asyncio.run(do_init())


@cli.command("issue-token")
@click.option(
    "--user-id",
    required=True,
    help="Identity to embed in the token (the 'sub' claim)",
)
def issue_token(user_id: str) -> None:
    """Print a JWT session token for a user (requires POSTBOARD_AUTH_PROVIDER=jwt)."""
    import asyncio

    from postboard.auth.adapters.jwt import JWTAuthAdapter
    from postboard.auth.factory import get_auth_adapter

    configure_logging()

    try:
        adapter = get_auth_adapter()
    except ValueError as e:
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)

    if not isinstance(adapter, JWTAuthAdapter):
        click.echo(
            "✗ issue-token needs POSTBOARD_AUTH_PROVIDER=jwt; "
            "in no-auth mode any token signs in as the default user",
            err=True,
        )
        sys.exit(1)

    click.echo(asyncio.run(adapter.issue_token(user_id=user_id)))


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()
