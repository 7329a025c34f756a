from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from docstore.db.deps import EngineDep
from docstore.db.models import JsonObject
from docstore.documents import DocumentStore, parse_document

ROUTER_PREFIX = "/data"
ROUTER_TAG = "data"

router = APIRouter()


def get_store(engine: EngineDep) -> DocumentStore:
    return DocumentStore(engine)


async def read_document(request: Request) -> JsonObject:
    return parse_document(await request.body())


StoreDep = Annotated[DocumentStore, Depends(get_store)]


@router.get("/{key}")
async def get_data(key: str, store: StoreDep):
    """Return the stored JSON document for ``key`` verbatim."""
    return JSONResponse(status_code=200, content=await store.get(key))


@router.post("/{key}")
async def save_data(key: str, store: StoreDep, document: Annotated[JsonObject, Depends(read_document)]):
    """Insert or fully replace the document stored under ``key``."""
    await store.put(key, document)
    return {"message": f"Data successfully saved for key: {key}"}


@router.delete("/{key}")
async def delete_data(key: str, store: StoreDep):
    """Remove the document stored under ``key``; 404 when there is none."""
    await store.delete(key)
    return {"message": f"Data successfully deleted for key: {key}"}
