from __future__ import annotations

from typing import Optional

from usg_api.repositories.base import Record
from usg_api.repositories.content import ContentRepository


class SiteContentRepository(ContentRepository):
    """Queries over the ``site_content`` table."""

    table_name = "site_content"

    async def get_all(self, section_type: Optional[str] = None) -> list[Record]:
        return await self.find_all(
            filters={"section_type": section_type}, order_by="display_order"
        )

    async def get_active(self, section_type: Optional[str] = None) -> list[Record]:
        return await self.find_all(
            filters={"section_type": section_type, "active": True},
            order_by="display_order",
        )
