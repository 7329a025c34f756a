from __future__ import annotations

from .engine import DBEngine
from .settings import DBSettings


def make_sqlite_memory_engine(*, echo: bool = False) -> DBEngine:
    settings = DBSettings(database_url="sqlite+aiosqlite:///:memory:", echo=echo)
    return DBEngine(settings)
