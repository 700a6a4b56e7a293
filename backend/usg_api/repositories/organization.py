from __future__ import annotations

from typing import Optional

from usg_api.repositories.base import BaseRepository, Record


class OrganizationRepository(BaseRepository):
    """Queries over the ``organizations`` table."""

    table_name = "organizations"

    async def get_active(
        self,
        type: Optional[str] = None,
        college: Optional[str] = None,
    ) -> list[Record]:
        return await self.find_all(
            filters={"is_active": True, "type": type, "college": college},
            order_by="order_index",
        )

    async def count_active(self) -> int:
        return await self.count({"is_active": True})
