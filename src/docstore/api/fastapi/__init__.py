import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docstore.api.fastapi.routers import register_all_routers
from docstore.api.fastapi.middleware.errors.error_handlers import register_error_handlers
from docstore.api.fastapi.middleware.errors.catchall import CatchAllExceptionMiddleware
from docstore.app.settings import get_app_settings
from docstore.app import CURRENT_ENVIRONMENT
from docstore.db.engine import DBEngine
from docstore.db.integration import attach_db

logger = logging.getLogger(__name__)


def create_app(engine: DBEngine | None = None) -> FastAPI:
    """
    Build the document store API.

    The database engine is created here (from DATABASE_URL when not given) so a
    missing connection string fails the build; table creation happens in the
    lifespan, before the first request is accepted.
    """
    app_settings = get_app_settings()

    app = FastAPI(title=app_settings.name, version=app_settings.version)

    origins = app_settings.cors_origin_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Error handling
    app.add_middleware(CatchAllExceptionMiddleware)
    register_error_handlers(app)

    register_all_routers(app, base_package="docstore.api.fastapi.routers")

    attach_db(app, engine)

    logger.info(f"{app_settings.version} version of {app_settings.name} initialized [env: {CURRENT_ENVIRONMENT}]")
    return app


__all__ = ["create_app"]
