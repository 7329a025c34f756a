from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Driver-less schemes handed out by hosting platforms, mapped to the async driver.
_ASYNC_SCHEMES = {
    "postgres://": "postgresql+asyncpg://",
    "postgresql://": "postgresql+asyncpg://",
    "sqlite://": "sqlite+aiosqlite://",
}


class DBSettings(BaseSettings):
    """
    Database settings.

    Env support:
      - Prefer DB_* variables:
          DB_DATABASE_URL, DB_ECHO, DB_POOL_SIZE, DB_MAX_OVERFLOW, DB_POOL_TIMEOUT, DB_SSL
      - Also accepts DATABASE_URL as a fallback, which is what most hosts inject.
    """

    database_url: Optional[str] = Field(default=None)
    echo: bool = Field(default=False)
    pool_size: int = Field(default=10)
    max_overflow: int = Field(default=20)
    pool_timeout: int = Field(default=30)  # seconds to wait for a pooled connection
    pool_recycle: Optional[int] = Field(default=None)  # seconds; None -> 1800
    statement_cache_size: int = Field(default=1000)
    ssl: Optional[str] = Field(default=None)  # e.g. "require" for hosted postgres

    model_config = SettingsConfigDict(
        env_prefix="DB_",        # DB_DATABASE_URL, DB_ECHO, ...
        env_file=".env",
        extra="ignore",
    )

    @property
    def resolved_database_url(self) -> str:
        url = self.database_url or os.getenv("DATABASE_URL")
        if not url:
            raise ValueError(
                "DATABASE_URL or DB_DATABASE_URL must be set for database connectivity"
            )
        for legacy, driver in _ASYNC_SCHEMES.items():
            if url.startswith(legacy):
                return driver + url[len(legacy):]
        return url


@lru_cache
def get_db_settings(**kwargs) -> DBSettings:
    # Only include kwargs that are not None, so defaults in DBSettings are used
    filtered = {k: v for k, v in kwargs.items() if v is not None}
    return DBSettings(**filtered)
