"""
Async database access helpers (raw SQL) using asyncpg.

The pool is created once per process by the application lifespan (see
`api/main.py`) and handed to repositories wrapped in a `Database`; nothing in
this module holds global state.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import asyncpg

from . import errors, settings


async def create_pool() -> asyncpg.Pool:
    try:
        return await asyncpg.create_pool(
            dsn=settings.database_url(),
            min_size=settings.db_pool_min_size(),
            max_size=settings.db_pool_max_size(),
            command_timeout=settings.db_command_timeout(),
        )
    except (asyncpg.PostgresError, OSError) as exc:
        raise errors.DataAccessError(f"Unable to create connection pool: {exc}") from exc


async def close_pool(pool: asyncpg.Pool | None) -> None:
    if pool is None:
        return None
    await pool.close()


def affected_rows(status: str | None) -> int:
    """
    Parse the row count out of a command status tag.

    "DELETE 3" -> 3, "INSERT 0 1" -> 1, "CREATE TABLE" -> 0.
    """
    if not status:
        return 0
    last = status.rsplit(" ", 1)[-1]
    return int(last) if last.isdigit() else 0


@asynccontextmanager
async def _translate_errors() -> AsyncIterator[None]:
    try:
        yield
    except asyncpg.ForeignKeyViolationError as exc:
        raise errors.ForeignKeyViolation(
            getattr(exc, "detail", None) or str(exc),
            constraint=getattr(exc, "constraint_name", None),
        ) from exc
    except (asyncpg.PostgresError, asyncpg.InterfaceError) as exc:
        raise errors.DataAccessError(f"{type(exc).__name__}: {exc}") from exc
    except (asyncio.TimeoutError, OSError) as exc:
        raise errors.DataAccessError(f"Database unavailable: {type(exc).__name__}: {exc}") from exc


class Database:
    """
    Thin query interface over an asyncpg pool or a single connection.

    Every statement is sent with `timeout` as its deadline.
    """

    def __init__(self, executor: asyncpg.Pool | asyncpg.Connection, *, timeout: float | None = None) -> None:
        self._executor = executor
        self._timeout = timeout

    @property
    def timeout(self) -> float | None:
        return self._timeout

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        async with _translate_errors():
            row = await self._executor.fetchrow(sql, *args, timeout=self._timeout)
        return dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        async with _translate_errors():
            rows = await self._executor.fetch(sql, *args, timeout=self._timeout)
        return [dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> int:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL) and return the affected row count.
        """
        async with _translate_errors():
            status = await self._executor.execute(sql, *args, timeout=self._timeout)
        return affected_rows(status)

    @asynccontextmanager
    async def transaction(self, *, readonly: bool = False) -> AsyncIterator[Database]:
        """
        Yield a `Database` bound to one connection inside a transaction.

        The transaction commits when the block exits normally and rolls back
        on any exception.
        """
        # Already bound to a connection: nest as a savepoint.
        if not hasattr(self._executor, "acquire"):
            async with _translate_errors():
                async with self._executor.transaction(readonly=readonly):
                    yield self
            return

        async with _translate_errors():
            async with self._executor.acquire(timeout=self._timeout) as conn:  # type: asyncpg.Connection
                async with conn.transaction(readonly=readonly):
                    yield Database(conn, timeout=self._timeout)
