"""
Shared fixtures.

HTTP tests drive the real application through httpx's ASGI transport. The
`get_database` dependency is overridden with `RecordingDatabase`, so handlers
and repositories run unchanged while SQL is recorded and results are replayed
from a queue.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from core.dependencies import get_database
from main import create_app


class RecordingDatabase:
    """
    Stand-in for `core.db.Database`.

    Each call pops the next queued result; queued exceptions are raised.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, tuple]] = []
        self.transactions: list[bool] = []
        self._results: list[Any] = []

    def queue(self, *results: Any) -> None:
        self._results.extend(results)

    @property
    def statements(self) -> list[str]:
        return [sql for (_, sql, _) in self.calls]

    @property
    def args(self) -> list[tuple]:
        return [args for (_, _, args) in self.calls]

    async def _next(self, method: str, sql: str, args: tuple) -> Any:
        self.calls.append((method, " ".join(sql.split()), args))
        if not self._results:
            raise AssertionError(f"Unexpected {method}: {sql}")
        result = self._results.pop(0)
        if isinstance(result, BaseException):
            raise result
        return result

    async def fetch_one(self, sql: str, *args: Any) -> dict | None:
        return await self._next("fetch_one", sql, args)

    async def fetch_all(self, sql: str, *args: Any) -> list[dict]:
        return await self._next("fetch_all", sql, args)

    async def execute(self, sql: str, *args: Any) -> int:
        return await self._next("execute", sql, args)

    @asynccontextmanager
    async def transaction(self, *, readonly: bool = False):
        self.transactions.append(readonly)
        yield self


@pytest.fixture
def fake_db() -> RecordingDatabase:
    return RecordingDatabase()


@pytest.fixture
def app(fake_db: RecordingDatabase):
    application = create_app()
    application.dependency_overrides[get_database] = lambda: fake_db
    return application


@pytest.fixture
async def client(app) -> AsyncClient:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
