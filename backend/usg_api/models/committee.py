from __future__ import annotations

from typing import Optional

from pydantic import Field

from usg_api.models.base import WriteModel


class CommitteeCreate(WriteModel):
    name: str = Field(min_length=2, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    chair_name: Optional[str] = Field(default=None, max_length=100)
    members: Optional[list[str]] = None
    order_index: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None


class CommitteeUpdate(WriteModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    chair_name: Optional[str] = Field(default=None, max_length=100)
    members: Optional[list[str]] = None
    order_index: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None
