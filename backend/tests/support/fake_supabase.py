"""In-memory stand-in for the Supabase async query builder.

Supports the subset of the fluent API the repositories use: ``table``,
``select`` (with ``count``/``head``), ``insert``, ``update``, ``delete``,
the ``eq``/``gt``/``gte``/``lt``/``lte``/``ilike`` filters, ``order``,
``limit``, ``single`` and ``execute``.
"""

from __future__ import annotations

import copy
import operator
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from postgrest.exceptions import APIError


@dataclass
class FakeResponse:
    data: Any
    count: Optional[int] = None


def _like_to_regex(pattern: str) -> re.Pattern[str]:
    parts = [re.escape(p) for p in pattern.split("%")]
    return re.compile("^" + ".*".join(parts) + "$", re.IGNORECASE | re.DOTALL)


class FakeQuery:
    def __init__(self, client: FakeSupabaseClient, table: str) -> None:
        self._client = client
        self._table = table
        self._action = "select"
        self._columns = "*"
        self._payload: Any = None
        self._predicates: list[Callable[[dict], bool]] = []
        self._order: Optional[tuple[str, bool]] = None
        self._limit: Optional[int] = None
        self._single = False
        self._count: Optional[str] = None
        self._head = False

    # -- actions -------------------------------------------------------

    def select(self, columns: str = "*", count: Any = None, head: bool = False) -> FakeQuery:
        self._action = "select"
        self._columns = columns
        self._count = count
        self._head = head
        return self

    def insert(self, payload: dict) -> FakeQuery:
        self._action = "insert"
        self._payload = payload
        return self

    def update(self, payload: dict) -> FakeQuery:
        self._action = "update"
        self._payload = payload
        return self

    def delete(self) -> FakeQuery:
        self._action = "delete"
        return self

    # -- filters -------------------------------------------------------

    def _compare(self, column: str, value: Any, op: Callable[[Any, Any], bool]) -> FakeQuery:
        def predicate(row: dict) -> bool:
            current = row.get(column)
            if current is None:
                return False
            try:
                return op(current, value)
            except TypeError:
                return op(str(current), str(value))

        self._predicates.append(predicate)
        return self

    def eq(self, column: str, value: Any) -> FakeQuery:
        def predicate(row: dict) -> bool:
            current = row.get(column)
            return current == value or str(current) == str(value)

        self._predicates.append(predicate)
        return self

    def gt(self, column: str, value: Any) -> FakeQuery:
        return self._compare(column, value, operator.gt)

    def gte(self, column: str, value: Any) -> FakeQuery:
        return self._compare(column, value, operator.ge)

    def lt(self, column: str, value: Any) -> FakeQuery:
        return self._compare(column, value, operator.lt)

    def lte(self, column: str, value: Any) -> FakeQuery:
        return self._compare(column, value, operator.le)

    def ilike(self, column: str, pattern: str) -> FakeQuery:
        regex = _like_to_regex(pattern)
        self._predicates.append(
            lambda row: row.get(column) is not None and bool(regex.match(str(row[column])))
        )
        return self

    # -- modifiers -----------------------------------------------------

    def order(self, column: str, desc: bool = False) -> FakeQuery:
        self._order = (column, desc)
        return self

    def limit(self, size: int) -> FakeQuery:
        self._limit = size
        return self

    def single(self) -> FakeQuery:
        self._single = True
        return self

    # -- execution -----------------------------------------------------

    def _matching(self) -> list[dict]:
        rows = self._client.tables.setdefault(self._table, [])
        return [r for r in rows if all(p(r) for p in self._predicates)]

    async def execute(self) -> FakeResponse:
        self._client.executed.append((self._table, self._action))
        if self._client.fail_with is not None:
            raise APIError(self._client.fail_with)

        if self._action == "insert":
            row = self._client.insert_row(self._table, self._payload)
            return FakeResponse(data=[copy.deepcopy(row)])

        if self._action == "update":
            matched = self._matching()
            for row in matched:
                row.update(copy.deepcopy(self._payload))
            return FakeResponse(data=[copy.deepcopy(r) for r in matched])

        if self._action == "delete":
            matched = self._matching()
            rows = self._client.tables[self._table]
            self._client.tables[self._table] = [r for r in rows if r not in matched]
            return FakeResponse(data=[copy.deepcopy(r) for r in matched])

        matched = self._matching()
        if self._order is not None:
            column, desc = self._order
            matched.sort(key=lambda r: (r.get(column) is None, r.get(column)), reverse=desc)
        if self._limit is not None:
            matched = matched[: self._limit]

        count = len(matched) if self._count else None
        if self._head:
            return FakeResponse(data=[], count=count)

        if self._columns != "*":
            wanted = [c.strip() for c in self._columns.split(",")]
            matched = [{c: r.get(c) for c in wanted} for r in matched]

        if self._single:
            if len(matched) != 1:
                raise APIError(
                    {
                        "message": "JSON object requested, multiple (or no) rows returned",
                        "code": "PGRST116",
                        "details": f"The result contains {len(matched)} rows",
                        "hint": None,
                    }
                )
            return FakeResponse(data=copy.deepcopy(matched[0]), count=count)

        return FakeResponse(data=[copy.deepcopy(r) for r in matched], count=count)


class FakeSupabaseClient:
    """Holds rows per table and hands out :class:`FakeQuery` builders."""

    def __init__(self, tables: Optional[dict[str, list[dict]]] = None) -> None:
        self.tables: dict[str, list[dict]] = copy.deepcopy(tables or {})
        self.executed: list[tuple[str, str]] = []
        self.fail_with: Optional[dict[str, Any]] = None
        self._next_id = 1 + max(
            (int(r["id"]) for rows in self.tables.values() for r in rows if "id" in r),
            default=0,
        )

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def insert_row(self, table: str, payload: dict) -> dict:
        row = copy.deepcopy(payload)
        row.setdefault("id", self._next_id)
        row.setdefault("created_at", datetime.now(timezone.utc).isoformat())
        self._next_id += 1
        self.tables.setdefault(table, []).append(row)
        return row
