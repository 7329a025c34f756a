from __future__ import annotations

from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from .models import DocumentRecord, JsonObject

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def upsert_statement(dialect: str, key: str, data: JsonObject):
    """INSERT ... ON CONFLICT (key) DO UPDATE SET data = excluded.data for ``dialect``."""
    try:
        insert = _UPSERT_DIALECTS[dialect]
    except KeyError:
        raise NotImplementedError(f"Atomic upsert is not supported for dialect '{dialect}'") from None
    stmt = insert(DocumentRecord).values(key=key, data=data)
    return stmt.on_conflict_do_update(
        index_elements=[DocumentRecord.key],
        set_={"data": stmt.excluded["data"]},
    )


class DocumentRepository:
    """Single-statement access to the documents table.

    Every method issues exactly one statement; committing is left to the caller
    (see ``DBEngine.transaction``).
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, key: str) -> Optional[JsonObject]:
        stmt = select(DocumentRecord.data).where(DocumentRecord.key == key)
        return await self.session.scalar(stmt)

    async def upsert(self, key: str, data: JsonObject) -> None:
        """Insert the document, or replace the whole payload if the key exists."""
        stmt = upsert_statement(self.session.bind.dialect.name, key, data)
        await self.session.execute(stmt)

    async def delete(self, key: str) -> bool:
        """Delete the document; returns False when no row matched."""
        result = await self.session.execute(delete(DocumentRecord).where(DocumentRecord.key == key))
        return result.rowcount > 0
