from __future__ import annotations

from typing import Optional

from usg_api.core.constants import DEFAULT_ISSUANCE_LIMIT
from usg_api.repositories.base import BaseRepository, Record


class IssuanceRepository(BaseRepository):
    """Queries over the ``issuances`` table."""

    table_name = "issuances"

    async def find_by_status(self, status: str) -> list[Record]:
        return await self.find_all(
            filters={"status": status},
            order_by="created_at",
            order_direction="desc",
        )

    async def get_recent(
        self,
        limit: int = DEFAULT_ISSUANCE_LIMIT,
        status: Optional[str] = None,
    ) -> list[Record]:
        return await self.find_all(
            filters={"status": status},
            order_by="created_at",
            order_direction="desc",
            limit=limit,
        )
