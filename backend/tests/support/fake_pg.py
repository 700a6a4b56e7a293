"""Recording stand-in for a ``psycopg_pool.AsyncConnectionPool``.

Each executed statement is appended to ``pool.calls`` as ``(sql, params)``.
Result sets are consumed in order from ``pool.results``; when the queue is
empty a statement returns no rows.  Setting ``pool.error`` makes the next
statement raise it.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional


class FakeCursor:
    def __init__(self, pool: FakePool) -> None:
        self._pool = pool
        self._rows: list[dict[str, Any]] = []
        self.description: Optional[tuple] = None

    async def __aenter__(self) -> FakeCursor:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        return None

    async def execute(self, sql: str, params: tuple = ()) -> None:
        self._pool.calls.append((sql, params))
        if self._pool.error is not None:
            error, self._pool.error = self._pool.error, None
            raise error
        self._rows = self._pool.results.pop(0) if self._pool.results else []
        self.description = ("row",)

    async def fetchall(self) -> list[dict[str, Any]]:
        return list(self._rows)


class FakeConnection:
    def __init__(self, pool: FakePool) -> None:
        self._pool = pool

    def cursor(self, row_factory: Any = None) -> FakeCursor:
        return FakeCursor(self._pool)


class FakePool:
    def __init__(self, results: Optional[list[list[dict[str, Any]]]] = None) -> None:
        self.calls: list[tuple[str, tuple]] = []
        self.results: list[list[dict[str, Any]]] = list(results or [])
        self.error: Optional[Exception] = None
        self.closed = False

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[FakeConnection]:
        yield FakeConnection(self)

    async def close(self) -> None:
        self.closed = True

    @property
    def last_sql(self) -> str:
        return self.calls[-1][0]

    @property
    def last_params(self) -> tuple:
        return self.calls[-1][1]
