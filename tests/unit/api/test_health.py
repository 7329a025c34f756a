from __future__ import annotations

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.routing import APIRoute
from sqlalchemy.exc import OperationalError

from docstore.db.deps import get_engine


def test_routes_are_registered(app):
    paths = {(r.path, m) for r in app.routes if isinstance(r, APIRoute) for m in r.methods}
    assert ("/data/{key}", "GET") in paths
    assert ("/data/{key}", "POST") in paths
    assert ("/data/{key}", "DELETE") in paths
    assert ("/ping", "GET") in paths
    assert ("/_db/health", "GET") in paths


def test_db_health_is_hidden_from_openapi(app):
    schema = app.openapi()
    assert "/_db/health" not in schema["paths"]
    assert "/data/{key}" in schema["paths"]


@pytest.mark.asyncio
async def test_ping(client):
    r = await client.get("/ping")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_db_health_ok(client):
    r = await client.get("/_db/health")
    assert r.status_code == 200

    r = await client.get("/_db/health", params={"verbose": 1})
    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is True
    assert body["driver"] == "sqlite"


@pytest.mark.asyncio
async def test_db_health_unavailable(app, client, engine):
    session = Mock()
    session.execute = AsyncMock(side_effect=OperationalError("select 1", {}, ConnectionRefusedError()))

    class _Down:
        def __init__(self):
            self.engine = engine.engine
            self.safe_url = engine.safe_url

        @asynccontextmanager
        async def session(self):
            yield session

    app.dependency_overrides[get_engine] = lambda: _Down()
    try:
        r = await client.get("/_db/health")
        assert r.status_code == 503
        r = await client.get("/_db/health", params={"verbose": 1})
        assert r.status_code == 503
        assert r.json()["ok"] is False
    finally:
        app.dependency_overrides.clear()


def test_data_operations_are_described_in_openapi(app):
    operations = app.openapi()["paths"]["/data/{key}"]
    for method in ("get", "post", "delete"):
        assert operations[method].get("description"), method
