from __future__ import annotations

import random
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from usg_api.core.constants import REFERENCE_PREFIX
from usg_api.core.logging import get_logger
from usg_api.repositories.base import BaseRepository, Record

logger = get_logger(__name__)


def generate_reference_number(
    now: Optional[datetime] = None,
    rng: random.Random | Any = random,
) -> str:
    """Build a tracking reference such as ``TNG-20240315-143007``.

    The date and time parts come from *now* in UTC; the last two digits are
    random so submissions within the same minute usually differ.
    """
    moment = now or datetime.now(timezone.utc)
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    suffix = rng.randint(0, 99)
    return f"{REFERENCE_PREFIX}-{moment:%Y%m%d}-{moment:%H%M}{suffix:02d}"


class FeedbackRepository(BaseRepository):
    """Queries over the ``feedback`` table."""

    table_name = "feedback"

    async def get_all(self) -> list[Record]:
        return await self.find_all(order_by="created_at", order_direction="desc")

    async def create_with_reference(
        self,
        data: Mapping[str, Any],
        now: Optional[datetime] = None,
    ) -> Record:
        """Insert a submission, then stamp its tracking reference number."""
        created = await self.create(data)
        reference = generate_reference_number(now)
        updated = await self.update(created["id"], {"reference_number": reference})
        logger.info("Feedback %s recorded as %s", created["id"], reference)
        return updated

    async def find_by_reference(self, reference_number: str) -> Record:
        return await self.find_one({"reference_number": reference_number})

    async def get_new_since(self, since: datetime) -> list[Record]:
        return await self.find_by_condition("created_at", "gte", since.isoformat())
