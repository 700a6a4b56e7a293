from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from pydantic import Field

from usg_api.models.base import WriteModel

RecordId = Union[int, str]


# ------------------------------------------------------------------
# Upsert operations
# ------------------------------------------------------------------


@dataclass(frozen=True)
class InsertContent:
    """Create a new content row."""

    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class UpdateContent:
    """Patch an existing content row; never falls back to an insert."""

    id: RecordId
    data: dict[str, Any] = field(default_factory=dict)


ContentOperation = Union[InsertContent, UpdateContent]


class _ContentPayload(WriteModel):
    id: Optional[RecordId] = None

    def to_operation(self) -> ContentOperation:
        record = self.to_record()
        record.pop("id", None)
        if self.id is not None:
            return UpdateContent(id=self.id, data=record)
        return InsertContent(data=record)


# ------------------------------------------------------------------
# Site content
# ------------------------------------------------------------------


class SiteContentUpsert(_ContentPayload):
    section_type: Optional[str] = Field(default=None, min_length=1, max_length=100)
    section_key: Optional[str] = Field(default=None, max_length=100)
    title: Optional[str] = Field(default=None, max_length=200)
    content: Any = None
    metadata: Optional[dict[str, Any]] = None
    display_order: Optional[int] = Field(default=None, ge=0)
    active: Optional[bool] = None


class SiteContentUpdate(WriteModel):
    section_type: Optional[str] = Field(default=None, min_length=1, max_length=100)
    section_key: Optional[str] = Field(default=None, max_length=100)
    title: Optional[str] = Field(default=None, max_length=200)
    content: Any = None
    metadata: Optional[dict[str, Any]] = None
    display_order: Optional[int] = Field(default=None, ge=0)
    active: Optional[bool] = None


# ------------------------------------------------------------------
# Page content
# ------------------------------------------------------------------


class PageContentUpsert(_ContentPayload):
    page: Optional[str] = Field(default=None, min_length=1, max_length=100)
    section_key: Optional[str] = Field(default=None, min_length=1, max_length=100)
    title: Optional[str] = Field(default=None, max_length=200)
    content: Any = None
    active: Optional[bool] = None


class PageContentUpdate(WriteModel):
    page: Optional[str] = Field(default=None, min_length=1, max_length=100)
    section_key: Optional[str] = Field(default=None, min_length=1, max_length=100)
    title: Optional[str] = Field(default=None, max_length=200)
    content: Any = None
    active: Optional[bool] = None
