from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError

from docstore.exceptions import StoreInitializationError

from .engine import DBEngine
from .models import Base
from .settings import get_db_settings

logger = logging.getLogger(__name__)


async def initialize(engine: DBEngine) -> None:
    """Connect once and create the documents table if it does not exist.

    Raises StoreInitializationError; callers must not serve traffic after it.
    """
    try:
        async with engine.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all, checkfirst=True)
    except (SQLAlchemyError, OSError) as exc:
        logger.critical("Error during database initialization: %s", exc)
        raise StoreInitializationError(f"could not initialize {engine.safe_url}: {exc}") from exc
    logger.info("Database initialized: %s verified/created.", ", ".join(Base.metadata.tables))


def attach_db(app: FastAPI, engine: DBEngine | None = None) -> DBEngine:
    """Bind a DBEngine to the app and compose initialization/disposal into its lifespan."""
    engine = engine or DBEngine(get_db_settings())
    app.state.db_engine = engine  # type: ignore[attr-defined]

    existing = getattr(app.router, "lifespan_context", None)  # type: ignore[attr-defined]

    @asynccontextmanager
    async def composed_lifespan(_app: FastAPI):
        try:
            settings = engine.settings
            logger.info(
                "DB attached: url=%s driver=%s pool_size=%s max_overflow=%s",
                engine.safe_url,
                engine.engine.url.get_backend_name(),
                settings.pool_size,
                settings.max_overflow,
            )
            await initialize(engine)
            if existing:
                async with existing(_app):  # type: ignore[misc]
                    yield
            else:
                yield
        finally:
            await engine.dispose()

    app.router.lifespan_context = composed_lifespan  # type: ignore[attr-defined]
    return engine
