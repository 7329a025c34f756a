from __future__ import annotations

from typing import Any

from sqlalchemy import JSON, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

JsonObject = dict[str, Any]

# JSONB on PostgreSQL; the generic JSON type (serialized text) everywhere else.
JsonPayload = JSON().with_variant(JSONB(), "postgresql")

DOCUMENTS_TABLE = "bot_data"


class Base(DeclarativeBase):
    pass


class DocumentRecord(Base):
    """One stored document: a unique client-chosen key and its opaque JSON payload."""

    __tablename__ = DOCUMENTS_TABLE

    key: Mapped[str] = mapped_column(Text, primary_key=True)
    data: Mapped[JsonObject] = mapped_column(JsonPayload, nullable=False)

    def __repr__(self) -> str:
        return f"DocumentRecord(key={self.key!r})"
