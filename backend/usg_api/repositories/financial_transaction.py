from __future__ import annotations

import asyncio

from usg_api.core.constants import DEFAULT_TRANSACTION_LIMIT
from usg_api.repositories.base import BaseRepository, Record


class FinancialTransactionRepository(BaseRepository):
    """Queries over the ``financial_transactions`` table."""

    table_name = "financial_transactions"

    async def get_total_budget(self) -> float:
        return await self.sum("amount")

    async def get_recent(self, limit: int = DEFAULT_TRANSACTION_LIMIT) -> list[Record]:
        return await self.find_all(
            order_by="created_at", order_direction="desc", limit=limit
        )

    async def search(self, term: str) -> list[Record]:
        """Case-insensitive substring match on description or category.

        Rows matching both columns appear once, description matches first.
        """
        pattern = f"%{term}%"
        by_description, by_category = await asyncio.gather(
            self.find_by_condition("description", "ilike", pattern),
            self.find_by_condition("category", "ilike", pattern),
        )

        seen: set = set()
        merged: list[Record] = []
        for row in [*by_description, *by_category]:
            if row.get("id") in seen:
                continue
            seen.add(row.get("id"))
            merged.append(row)
        return merged
