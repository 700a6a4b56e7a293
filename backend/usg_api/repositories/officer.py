from __future__ import annotations

from typing import Optional

from usg_api.repositories.base import BaseRepository, Record


class OfficerRepository(BaseRepository):
    """Queries over the ``officers`` table."""

    table_name = "officers"

    async def get_active(self, branch: Optional[str] = None) -> list[Record]:
        return await self.find_all(
            filters={"is_active": True, "branch": branch},
            order_by="order_index",
        )
