from __future__ import annotations

from typing import Optional

from usg_api.repositories.base import BaseRepository, Record


class GovernanceDocumentRepository(BaseRepository):
    """Queries over the ``governance_documents`` table."""

    table_name = "governance_documents"

    async def get_active(self, document_type: Optional[str] = None) -> list[Record]:
        return await self.find_all(
            filters={"is_active": True, "document_type": document_type},
            order_by="order_index",
        )
