from __future__ import annotations

from usg_api.repositories.base import BaseRepository, Record


class CommitteeRepository(BaseRepository):
    table_name = "committees"

    async def get_active(self) -> list[Record]:
        return await self.find_all(filters={"is_active": True}, order_by="order_index")
