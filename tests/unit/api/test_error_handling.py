from __future__ import annotations

import asyncio
import logging

import pytest
from sqlalchemy.exc import OperationalError, TimeoutError as PoolTimeoutError

from docstore.db.deps import get_engine


@pytest.fixture
def db_down(app, broken_engine_factory):
    cause = OperationalError(
        "SELECT data FROM bot_data", {}, ConnectionRefusedError("connection refused by 10.0.0.5:5432")
    )
    broken = broken_engine_factory(cause)
    app.dependency_overrides[get_engine] = lambda: broken
    yield broken
    app.dependency_overrides.clear()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method,kwargs,message",
    [
        ("GET", {}, "Internal server error during data retrieval"),
        ("POST", {"json": {"prefix": "!"}}, "Internal server error during data saving"),
        ("DELETE", {}, "Internal server error during data deletion"),
    ],
)
async def test_storage_failure_is_a_generic_500(client, db_down, method, kwargs, message):
    r = await client.request(method, "/data/guild-1", **kwargs)
    assert r.status_code == 500
    assert r.json() == {"message": message}
    assert "10.0.0.5" not in r.text


@pytest.mark.asyncio
async def test_storage_failure_is_logged_with_cause(client, db_down, caplog):
    with caplog.at_level(logging.ERROR, logger="docstore"):
        await client.get("/data/guild-1")
    records = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert records
    assert "10.0.0.5" in records[-1].getMessage()
    assert records[-1].exc_info is not None


@pytest.mark.asyncio
async def test_bad_body_is_rejected_even_when_storage_is_down(client, db_down):
    r = await client.post("/data/guild-1", json={})
    assert r.status_code == 400
    assert db_down.sessions_opened == 0


@pytest.mark.asyncio
async def test_not_found_is_not_logged_as_error(client, caplog):
    with caplog.at_level(logging.DEBUG, logger="docstore"):
        r = await client.get("/data/missing")
    assert r.status_code == 404
    assert not [rec for rec in caplog.records if rec.levelno >= logging.WARNING]


@pytest.mark.asyncio
async def test_unexpected_exception_does_not_leak_details(app, client):
    async def explode():
        raise RuntimeError("secret connection string postgres://u:p@h/db")

    app.add_api_route("/explode", explode)
    r = await client.get("/explode")
    assert r.status_code == 500
    assert r.json() == {"message": "Internal server error"}
    assert "secret" not in r.text


@pytest.mark.asyncio
async def test_pool_exhaustion_fails_the_request_with_500(app, client, broken_engine_factory):
    exhausted = broken_engine_factory(
        PoolTimeoutError("QueuePool limit of size 10 overflow 20 reached, connection timed out, timeout 30.00")
    )
    app.dependency_overrides[get_engine] = lambda: exhausted
    try:
        r = await asyncio.wait_for(client.get("/data/guild-1"), timeout=5)
    finally:
        app.dependency_overrides.clear()
    assert r.status_code == 500
    assert r.json() == {"message": "Internal server error during data retrieval"}
    assert "QueuePool" not in r.text
