from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from docstore.exceptions import DocumentNotFoundError, InvalidDocumentError, StorageError

logger = logging.getLogger(__name__)


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


async def _invalid_document(request: Request, exc: InvalidDocumentError) -> JSONResponse:
    logger.info("Rejected document on %s: %s", request.url.path, exc.message)
    return _message(400, exc.message)


async def _not_found(request: Request, exc: DocumentNotFoundError) -> JSONResponse:
    return _message(404, str(exc))


async def _storage_error(request: Request, exc: StorageError) -> JSONResponse:
    cause = exc.__cause__ or exc
    logger.error(
        "Error during data %s for key %s: %s",
        exc.operation,
        exc.key,
        cause,
        exc_info=(type(cause), cause, cause.__traceback__),
        extra={"http_method": request.method, "path": request.url.path, "status_code": 500, "doc_key": exc.key},
    )
    return _message(500, f"Internal server error during data {exc.operation}")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidDocumentError, _invalid_document)  # type: ignore[arg-type]
    app.add_exception_handler(DocumentNotFoundError, _not_found)  # type: ignore[arg-type]
    app.add_exception_handler(StorageError, _storage_error)  # type: ignore[arg-type]
