# Public DB API exports
from .settings import DBSettings, get_db_settings
from .engine import DBEngine
from .models import Base, DocumentRecord, JsonObject, DOCUMENTS_TABLE
from .repository import DocumentRepository, upsert_statement
from .health import db_healthcheck
from .integration import attach_db, initialize
from .deps import get_engine, EngineDep

__all__ = [
    "DBSettings",
    "get_db_settings",
    "DBEngine",
    "Base",
    "DocumentRecord",
    "JsonObject",
    "DOCUMENTS_TABLE",
    "DocumentRepository",
    "upsert_statement",
    "db_healthcheck",
    "attach_db",
    "initialize",
    "get_engine",
    "EngineDep",
]
