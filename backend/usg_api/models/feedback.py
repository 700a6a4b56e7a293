from __future__ import annotations

from typing import Optional

from pydantic import EmailStr, Field

from usg_api.core.constants import FeedbackCategory, FeedbackStatus
from usg_api.models.base import WriteModel


class FeedbackCreate(WriteModel):
    name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    category: FeedbackCategory
    message: str = Field(min_length=10, max_length=1000)
    anonymous: bool = False

    def to_record(self) -> dict:
        # ``anonymous`` always lands in the row, even when defaulted.
        record = super().to_record()
        record.setdefault("anonymous", self.anonymous)
        return record


class FeedbackUpdate(WriteModel):
    status: Optional[FeedbackStatus] = None
    admin_response: Optional[str] = Field(default=None, max_length=1000)
