from __future__ import annotations

from usg_api.core.logging import get_logger
from usg_api.models.content import ContentOperation, InsertContent, UpdateContent
from usg_api.repositories.base import BaseRepository, Record

logger = get_logger(__name__)


class ContentRepository(BaseRepository):
    """Shared insert-or-update dispatch for the editable content tables."""

    async def upsert(self, operation: ContentOperation) -> Record:
        """Apply an explicit insert or update.

        An :class:`UpdateContent` whose id does not exist raises
        ``RecordNotFoundError``; it never turns into an insert.
        """
        if isinstance(operation, UpdateContent):
            logger.info("Updating %s row %s", self.table_name, operation.id)
            return await self.update(operation.id, operation.data)
        if isinstance(operation, InsertContent):
            logger.info("Creating %s row", self.table_name)
            return await self.create(operation.data)
        raise TypeError(f"Unsupported content operation: {operation!r}")
