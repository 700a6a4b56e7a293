from __future__ import annotations

from typing import Any, Mapping, Optional

from postgrest.exceptions import APIError
from postgrest.types import CountMethod
from supabase import AsyncClient

from usg_api.core.constants import PGRST_NO_ROWS
from usg_api.core.exceptions import DatabaseError, RecordNotFoundError
from usg_api.repositories.base import BaseRepository, Record, RecordId, check_identifier


class SupabaseRepository(BaseRepository):
    """Repository backed by the Supabase (PostgREST) query builder.

    Every operation builds one fluent query chain and awaits ``execute()``.
    PostgREST failures surface as :class:`postgrest.exceptions.APIError`;
    they are re-raised as :class:`DatabaseError` with the PostgREST code
    attached, except ``PGRST116`` (``single()`` matched no row) which becomes
    :class:`RecordNotFoundError`.
    """

    def __init__(self, client: AsyncClient) -> None:
        super().__init__(client)

    def _table(self) -> Any:
        return self._client.table(self.table_name)

    async def _execute(self, query: Any, key: Any = None) -> Any:
        try:
            return await query.execute()
        except APIError as exc:
            if exc.code == PGRST_NO_ROWS:
                raise RecordNotFoundError(self.table_name, key, code=exc.code) from exc
            raise DatabaseError(
                exc.message or str(exc), code=exc.code, details=exc.details
            ) from exc

    def _apply_filters(self, query: Any, filters: Optional[Mapping[str, Any]]) -> Any:
        for column, value in self._active_filters(filters).items():
            query = query.eq(column, value)
        return query

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
        query = self._apply_filters(self._table().select("*"), filters)

        if order_by:
            check_identifier(order_by)
            direction = self._normalize_direction(order_direction)
            query = query.order(order_by, desc=direction == "desc")

        if limit:
            query = query.limit(int(limit))

        response = await self._execute(query)
        return list(response.data or [])

    async def find_by_id(self, id: RecordId) -> Record:
        query = self._table().select("*").eq("id", id).single()
        response = await self._execute(query, key=id)
        if not response.data:
            raise RecordNotFoundError(self.table_name, id)
        return response.data

    async def find_one(self, filters: Mapping[str, Any]) -> Record:
        query = self._apply_filters(self._table().select("*"), filters).single()
        response = await self._execute(query)
        if not response.data:
            raise RecordNotFoundError(self.table_name)
        return response.data

    async def count(self, filters: Optional[Mapping[str, Any]] = None) -> int:
        query = self._apply_filters(
            self._table().select("*", count=CountMethod.exact, head=True), filters
        )
        response = await self._execute(query)
        return int(response.count or 0)

    async def sum(self, column: str, filters: Optional[Mapping[str, Any]] = None) -> float:
        check_identifier(column)
        query = self._apply_filters(self._table().select(column), filters)
        response = await self._execute(query)
        return float(
            sum(abs(float(row.get(column) or 0)) for row in (response.data or []))
        )

    async def find_by_condition(self, column: str, operator: str, value: Any) -> list[Record]:
        check_identifier(column)
        op = self._normalize_operator(operator)
        query = getattr(self._table().select("*"), op)(column, value)
        response = await self._execute(query)
        return list(response.data or [])

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create(self, data: Mapping[str, Any]) -> Record:
        response = await self._execute(self._table().insert(dict(data)))
        if not response.data:
            raise DatabaseError(f"Insert into {self.table_name} returned no row")
        return response.data[0]

    async def update(self, id: RecordId, data: Mapping[str, Any]) -> Record:
        if not data:
            return await self.find_by_id(id)
        query = self._table().update(dict(data)).eq("id", id)
        response = await self._execute(query, key=id)
        if not response.data:
            raise RecordNotFoundError(self.table_name, id)
        return response.data[0]

    async def delete(self, id: RecordId) -> bool:
        response = await self._execute(self._table().delete().eq("id", id), key=id)
        return bool(response.data)
