from __future__ import annotations

import asyncio
import logging
from typing import Optional

import typer
import uvicorn

from docstore.app.core.logging import setup_logging
from docstore.app.settings import get_app_settings
from docstore.db.engine import DBEngine
from docstore.db.integration import initialize
from docstore.db.settings import DBSettings, get_db_settings
from docstore.exceptions import StoreInitializationError

logger = logging.getLogger("docstore.cli")

app = typer.Typer(no_args_is_help=True, add_completion=False)


def _require_db_settings() -> DBSettings:
    settings = get_db_settings()
    try:
        settings.resolved_database_url
    except ValueError as exc:
        logger.critical("FATAL ERROR: %s", exc)
        raise typer.Exit(code=1) from exc
    return settings


@app.command("serve")
def serve(
        host: Optional[str] = typer.Option(None, help="Bind address; defaults to APP_HOST"),
        port: Optional[int] = typer.Option(None, help="Listen port; defaults to PORT / APP_PORT or 3000"),
        log_level: Optional[str] = typer.Option(None, help="Override LOG_LEVEL"),
):
    """Run the HTTP API. Exits non-zero if the database cannot be initialized."""
    setup_logging(level=log_level)
    _require_db_settings()
    app_settings = get_app_settings()
    host = host or app_settings.host
    port = port or app_settings.port
    logger.info("Starting document store on %s:%s", host, port)
    uvicorn.run(
        "docstore.api.fastapi:create_app",
        factory=True,
        host=host,
        port=port,
        lifespan="on",
        log_config=None,  # keep our logging config
    )


@app.command("init-db")
def init_db(log_level: Optional[str] = typer.Option(None, help="Override LOG_LEVEL")):
    """Create the documents table if it does not exist, then exit."""
    setup_logging(level=log_level)
    engine = DBEngine(_require_db_settings())

    async def _run() -> None:
        try:
            await initialize(engine)
        finally:
            await engine.dispose()

    try:
        asyncio.run(_run())
    except StoreInitializationError as exc:
        raise typer.Exit(code=1) from exc
    typer.echo("Database initialized")


def main() -> None:
    app()
