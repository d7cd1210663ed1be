"""
Async database access helpers (raw SQL) using asyncpg.

`Database` owns the connection pool. FastAPI creates it on startup and closes
it on shutdown (see `api/main.py`); it is built from `Settings`, never from
module globals, so tests and multiple apps can each have their own.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

Every call acquires its own pooled connection and hands it back on exit,
including when the statement fails.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import asyncpg

from .config import Settings
from .errors import ConstraintViolation, StorageUnavailable

logger = logging.getLogger(__name__)

# Failures that mean "the database is not reachable", as opposed to a bad
# statement.
_UNAVAILABLE_ERRORS = (
    OSError,
    asyncio.TimeoutError,
    asyncpg.PostgresConnectionError,
    asyncpg.CannotConnectNowError,
    asyncpg.InterfaceError,
)


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


def affected_rows(status: str) -> int:
    """
    Parse the row count out of a command status tag.

    "UPDATE 1" -> 1, "DELETE 0" -> 0, "INSERT 0 1" -> 1.
    """
    parts = (status or "").split()
    if not parts:
        return 0
    try:
        return int(parts[-1])
    except ValueError:
        return 0


class Database:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._pool: asyncpg.Pool | None = None

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    async def connect(self) -> None:
        if self._pool is not None:
            return None
        try:
            self._pool = await asyncpg.create_pool(
                dsn=self.settings.database_url,
                min_size=self.settings.pool_min_size,
                max_size=self.settings.pool_max_size,
                command_timeout=self.settings.command_timeout_s,
            )
        except _UNAVAILABLE_ERRORS as exc:
            logger.error("db_pool_open_failed error=%s", exc)
            raise StorageUnavailable("Could not connect to the database.") from exc
        logger.info(
            "db_pool_opened min_size=%s max_size=%s command_timeout_s=%s",
            self.settings.pool_min_size,
            self.settings.pool_max_size,
            self.settings.command_timeout_s,
        )

    async def close(self) -> None:
        if self._pool is None:
            return None
        await self._pool.close()
        self._pool = None
        logger.info("db_pool_closed")

    @property
    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise StorageUnavailable("DB pool is not initialized. Call connect() on startup.")
        return self._pool

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[asyncpg.Connection]:
        """
        Borrow one pooled connection for the duration of the block.
        """
        pool = self.pool
        try:
            async with pool.acquire() as conn:
                yield conn
        except asyncpg.IntegrityConstraintViolationError as exc:
            logger.error("db_constraint_violation sqlstate=%s detail=%s", exc.sqlstate, exc)
            raise ConstraintViolation(str(exc)) from exc
        except _UNAVAILABLE_ERRORS as exc:
            logger.error("db_unavailable error=%r", exc)
            raise StorageUnavailable("Database is unavailable.") from exc

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        async with self.connection() as conn:
            row = await conn.fetchrow(sql, *args)
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        async with self.connection() as conn:
            rows = await conn.fetch(sql, *args)
        return [_record_to_dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> str:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL) and return its status tag.
        """
        async with self.connection() as conn:
            return await conn.execute(sql, *args)

    async def ping(self) -> bool:
        row = await self.fetch_one("SELECT 1 AS ok")
        return row is not None and row.get("ok") == 1
