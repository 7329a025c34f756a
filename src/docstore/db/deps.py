from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from .engine import DBEngine


def get_engine(request: Request) -> DBEngine:
    return request.app.state.db_engine  # type: ignore[attr-defined]


EngineDep = Annotated[DBEngine, Depends(get_engine)]
