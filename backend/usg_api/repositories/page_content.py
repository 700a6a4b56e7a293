from __future__ import annotations

from usg_api.repositories.base import Record
from usg_api.repositories.content import ContentRepository


class PageContentRepository(ContentRepository):
    """Queries over the ``page_content`` table."""

    table_name = "page_content"

    async def get_all(self) -> list[Record]:
        return await self.find_all(order_by="page")

    async def get_all_active(self) -> list[Record]:
        return await self.find_all(filters={"active": True}, order_by="page")

    async def get_by_slug(self, slug: str) -> Record:
        return await self.find_one({"section_key": slug})
