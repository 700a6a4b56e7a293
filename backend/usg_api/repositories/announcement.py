from __future__ import annotations

from typing import Optional

from usg_api.core.constants import PublishStatus
from usg_api.repositories.base import BaseRepository, Record


class AnnouncementRepository(BaseRepository):
    """Queries over the ``announcements`` table."""

    table_name = "announcements"

    async def get_all(self, category: Optional[str] = None) -> list[Record]:
        return await self.find_all(
            filters={"category": category},
            order_by="created_at",
            order_direction="desc",
        )

    async def get_published(self, category: Optional[str] = None) -> list[Record]:
        return await self.get_by_category(category, status=PublishStatus.PUBLISHED.value)

    async def get_by_category(
        self,
        category: Optional[str],
        status: Optional[str] = PublishStatus.PUBLISHED.value,
    ) -> list[Record]:
        return await self.find_all(
            filters={"category": category, "status": status},
            order_by="created_at",
            order_direction="desc",
        )

    async def count_by_category(
        self,
        category: str,
        status: Optional[str] = PublishStatus.PUBLISHED.value,
    ) -> int:
        return await self.count({"category": category, "status": status})
