from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from sqlalchemy.exc import SQLAlchemyError

from docstore.db.engine import DBEngine
from docstore.db.models import JsonObject
from docstore.db.repository import DocumentRepository
from docstore.exceptions import DocumentNotFoundError, InvalidDocumentError, StorageError

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def parse_document(raw: bytes) -> JsonObject:
    """Decode a request body into a payload, raising InvalidDocumentError when it is unusable."""
    if not raw.strip():
        raise InvalidDocumentError()
    try:
        payload = json.loads(raw, parse_constant=_reject_constant)
    except ValueError as exc:
        raise InvalidDocumentError(f"Request body is not valid JSON: {exc}") from exc
    return validate_document(payload)


def validate_document(payload: Any) -> JsonObject:
    # Structure is opaque; only "object with at least one member" is enforced.
    if not isinstance(payload, dict) or not payload:
        raise InvalidDocumentError()
    return payload


def _validate_key(key: str) -> str:
    if not key:
        raise InvalidDocumentError("Key must be a non-empty string.")
    return key


class DocumentStore:
    """
    Get / put / delete of JSON documents by key.

    Each call runs exactly one statement on a pooled connection. Storage failures
    are re-raised as StorageError with the driver exception chained; nothing is
    retried.
    """

    def __init__(self, engine: DBEngine):
        self._engine = engine

    @asynccontextmanager
    async def _storage(self, operation: str, key: str, *, write: bool) -> AsyncIterator[DocumentRepository]:
        scope = self._engine.transaction() if write else self._engine.session()
        try:
            async with scope as session:
                yield DocumentRepository(session)
        except (SQLAlchemyError, OSError) as exc:
            raise StorageError(operation, key) from exc

    async def get(self, key: str) -> JsonObject:
        _validate_key(key)
        async with self._storage("retrieval", key, write=False) as repo:
            data = await repo.get(key)
        if data is None:
            logger.debug("No document stored for key %s", key)
            raise DocumentNotFoundError(key)
        return data

    async def put(self, key: str, payload: Any) -> None:
        """Create or fully replace the document stored under ``key``."""
        _validate_key(key)
        document = validate_document(payload)
        async with self._storage("saving", key, write=True) as repo:
            await repo.upsert(key, document)
        logger.debug("Saved document for key %s (%d top-level fields)", key, len(document))

    async def delete(self, key: str) -> None:
        _validate_key(key)
        async with self._storage("deletion", key, write=True) as repo:
            removed = await repo.delete(key)
        if not removed:
            logger.debug("Nothing to delete for key %s", key)
            raise DocumentNotFoundError(key)
        logger.debug("Deleted document for key %s", key)
