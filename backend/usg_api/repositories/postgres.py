from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

import psycopg
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb
from psycopg_pool import AsyncConnectionPool

from usg_api.core.exceptions import DatabaseError, RecordNotFoundError
from usg_api.repositories.base import BaseRepository, Record, RecordId, check_identifier

_SQL_OPERATORS: dict[str, str] = {
    "eq": "=",
    "gt": ">",
    "gte": ">=",
    "lt": "<",
    "lte": "<=",
    "ilike": "ILIKE",
}


def quote_identifier(name: str) -> str:
    return f'"{check_identifier(name)}"'


class PostgresRepository(BaseRepository):
    """Repository backed by raw parameterized SQL over a psycopg pool.

    Values always travel as ``%s`` parameters; table and column names are
    validated identifiers quoted into the statement text.  Driver failures
    are re-raised as :class:`DatabaseError` carrying the SQLSTATE.
    """

    def __init__(self, client: AsyncConnectionPool) -> None:
        super().__init__(client)

    @property
    def _table_sql(self) -> str:
        return quote_identifier(self.table_name)

    async def _fetch_all(self, sql: str, params: Sequence[Any] = ()) -> list[Record]:
        try:
            async with self._client.connection() as conn:
                async with conn.cursor(row_factory=dict_row) as cur:
                    await cur.execute(sql, tuple(params))
                    if cur.description is None:
                        return []
                    return list(await cur.fetchall())
        except psycopg.Error as exc:
            raise DatabaseError(str(exc), code=exc.sqlstate) from exc

    async def _fetch_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[Record]:
        rows = await self._fetch_all(sql, params)
        return rows[0] if rows else None

    def _where(self, filters: Optional[Mapping[str, Any]]) -> tuple[str, list[Any]]:
        active = self._active_filters(filters)
        if not active:
            return "", []
        conditions = [f"{quote_identifier(column)} = %s" for column in active]
        return " WHERE " + " AND ".join(conditions), list(active.values())

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def find_all(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        order_direction: str = "asc",
        limit: Optional[int] = None,
    ) -> list[Record]:
        where, params = self._where(filters)
        sql = f"SELECT * FROM {self._table_sql}{where}"

        if order_by:
            direction = self._normalize_direction(order_direction).upper()
            sql += f" ORDER BY {quote_identifier(order_by)} {direction}"

        if limit:
            sql += " LIMIT %s"
            params.append(int(limit))

        return await self._fetch_all(sql, params)

    async def find_by_id(self, id: RecordId) -> Record:
        row = await self._fetch_one(f"SELECT * FROM {self._table_sql} WHERE id = %s", (id,))
        if row is None:
            raise RecordNotFoundError(self.table_name, id)
        return row

    async def find_one(self, filters: Mapping[str, Any]) -> Record:
        where, params = self._where(filters)
        row = await self._fetch_one(f"SELECT * FROM {self._table_sql}{where} LIMIT 1", params)
        if row is None:
            raise RecordNotFoundError(self.table_name)
        return row

    async def count(self, filters: Optional[Mapping[str, Any]] = None) -> int:
        where, params = self._where(filters)
        row = await self._fetch_one(f"SELECT COUNT(*) AS count FROM {self._table_sql}{where}", params)
        return int(row["count"]) if row else 0

    async def sum(self, column: str, filters: Optional[Mapping[str, Any]] = None) -> float:
        where, params = self._where(filters)
        row = await self._fetch_one(
            f"SELECT COALESCE(SUM(ABS({quote_identifier(column)})), 0) AS total "
            f"FROM {self._table_sql}{where}",
            params,
        )
        return float(row["total"]) if row else 0.0

    async def find_by_condition(self, column: str, operator: str, value: Any) -> list[Record]:
        op = _SQL_OPERATORS[self._normalize_operator(operator)]
        return await self._fetch_all(
            f"SELECT * FROM {self._table_sql} WHERE {quote_identifier(column)} {op} %s",
            (value,),
        )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create(self, data: Mapping[str, Any]) -> Record:
        if not data:
            row = await self._fetch_one(
                f"INSERT INTO {self._table_sql} DEFAULT VALUES RETURNING *"
            )
        else:
            columns = ", ".join(quote_identifier(k) for k in data)
            placeholders = ", ".join("%s" for _ in data)
            row = await self._fetch_one(
                f"INSERT INTO {self._table_sql} ({columns}) VALUES ({placeholders}) RETURNING *",
                [_adapt(v) for v in data.values()],
            )
        if row is None:
            raise DatabaseError(f"Insert into {self.table_name} returned no row")
        return row

    async def update(self, id: RecordId, data: Mapping[str, Any]) -> Record:
        if not data:
            return await self.find_by_id(id)
        assignments = ", ".join(f"{quote_identifier(k)} = %s" for k in data)
        params = [_adapt(v) for v in data.values()]
        params.append(id)
        row = await self._fetch_one(
            f"UPDATE {self._table_sql} SET {assignments} WHERE id = %s RETURNING *",
            params,
        )
        if row is None:
            raise RecordNotFoundError(self.table_name, id)
        return row

    async def delete(self, id: RecordId) -> bool:
        rows = await self._fetch_all(
            f"DELETE FROM {self._table_sql} WHERE id = %s RETURNING id", (id,)
        )
        return bool(rows)


def _adapt(value: Any) -> Any:
    """Wrap dicts and lists so psycopg stores them as ``jsonb``."""
    if isinstance(value, (dict, list)):
        return Jsonb(value)
    return value
