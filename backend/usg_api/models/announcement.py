from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field, HttpUrl

from usg_api.core.constants import AnnouncementCategory, PublishStatus
from usg_api.models.base import WriteModel


class AnnouncementCreate(WriteModel):
    title: str = Field(min_length=3, max_length=200)
    content: str = Field(min_length=10)
    category: AnnouncementCategory
    status: PublishStatus = PublishStatus.DRAFT
    image_url: Optional[HttpUrl] = None
    event_date: Optional[datetime] = None

    def to_record(self) -> dict:
        record = super().to_record()
        record.setdefault("status", self.status.value)
        return record


class AnnouncementUpdate(WriteModel):
    title: Optional[str] = Field(default=None, min_length=3, max_length=200)
    content: Optional[str] = Field(default=None, min_length=10)
    category: Optional[AnnouncementCategory] = None
    status: Optional[PublishStatus] = None
    image_url: Optional[HttpUrl] = None
    event_date: Optional[datetime] = None
