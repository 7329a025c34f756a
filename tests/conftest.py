"""
Root conftest.py for docstore tests.

Provides:
1. Marker registration
2. A fresh in-memory SQLite engine per test (same upsert statement as Postgres)
3. The FastAPI app and an async HTTPX client bound to it
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from docstore.api.fastapi import create_app
from docstore.app.settings import get_app_settings
from docstore.db.integration import initialize
from docstore.db.settings import get_db_settings
from docstore.db.testing import make_sqlite_memory_engine


def pytest_configure(config):
    # Ensure custom markers are registered even if pyproject.toml isn't picked up in some contexts
    for name, desc in [
        ("acceptance", "End-to-end HTTP scenarios"),
        ("db", "Tests that talk to a real (sqlite) database"),
    ]:
        config.addinivalue_line("markers", f"{name}: {desc}")


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    """Settings accessors are cached; every test starts from the current environment."""
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("DB_DATABASE_URL", raising=False)
    get_app_settings.cache_clear()
    get_db_settings.cache_clear()
    yield
    get_app_settings.cache_clear()
    get_db_settings.cache_clear()


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest_asyncio.fixture
async def engine():
    eng = make_sqlite_memory_engine()
    await initialize(eng)
    yield eng
    await eng.dispose()


class BrokenEngine:
    """Stands in for DBEngine when the database is unreachable."""

    def __init__(self, exc: BaseException):
        self.exc = exc
        self.sessions_opened = 0

    @asynccontextmanager
    async def session(self):
        self.sessions_opened += 1
        raise self.exc
        yield  # pragma: no cover

    transaction = session


@pytest.fixture
def broken_engine_factory():
    return BrokenEngine


# =============================================================================
# API FIXTURES
# =============================================================================


@pytest.fixture
def app(engine):
    return create_app(engine)


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as c:
        yield c


@pytest.fixture
def sample_document() -> dict[str, Any]:
    return {
        "prefix": "!",
        "welcome": {"channel": "general", "enabled": True},
        "roles": ["admin", "mod", 3, None],
        "ratio": 0.5,
    }
