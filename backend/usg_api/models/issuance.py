from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field, HttpUrl

from usg_api.core.constants import IssuanceType
from usg_api.models.base import WriteModel


class IssuanceCreate(WriteModel):
    title: str = Field(min_length=3, max_length=200)
    issuance_type: IssuanceType
    issuance_number: str = Field(max_length=50)
    content: str = Field(min_length=10)
    effective_date: datetime
    file_url: Optional[HttpUrl] = None
    status: Optional[str] = Field(default=None, max_length=50)


class IssuanceUpdate(WriteModel):
    title: Optional[str] = Field(default=None, min_length=3, max_length=200)
    issuance_type: Optional[IssuanceType] = None
    issuance_number: Optional[str] = Field(default=None, max_length=50)
    content: Optional[str] = Field(default=None, min_length=10)
    effective_date: Optional[datetime] = None
    file_url: Optional[HttpUrl] = None
    status: Optional[str] = Field(default=None, max_length=50)
