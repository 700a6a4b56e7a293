from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field, HttpUrl

from usg_api.core.constants import GovernanceDocumentType
from usg_api.models.base import WriteModel


class GovernanceDocumentCreate(WriteModel):
    title: str = Field(min_length=3, max_length=200)
    document_type: GovernanceDocumentType
    file_url: HttpUrl
    description: Optional[str] = Field(default=None, max_length=500)
    effective_date: Optional[datetime] = None
    order_index: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None


class GovernanceDocumentUpdate(WriteModel):
    title: Optional[str] = Field(default=None, min_length=3, max_length=200)
    document_type: Optional[GovernanceDocumentType] = None
    file_url: Optional[HttpUrl] = None
    description: Optional[str] = Field(default=None, max_length=500)
    effective_date: Optional[datetime] = None
    order_index: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None
