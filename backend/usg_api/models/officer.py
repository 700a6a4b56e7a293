from __future__ import annotations

from typing import Optional

from pydantic import EmailStr, Field, HttpUrl

from usg_api.models.base import WriteModel


class OfficerCreate(WriteModel):
    name: str = Field(min_length=2, max_length=100)
    position: str = Field(min_length=2, max_length=100)
    department: Optional[str] = Field(default=None, max_length=100)
    branch: Optional[str] = Field(default=None, max_length=100)
    image_url: Optional[HttpUrl] = None
    email: Optional[EmailStr] = None
    bio: Optional[str] = Field(default=None, max_length=500)
    order_index: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None


class OfficerUpdate(WriteModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    position: Optional[str] = Field(default=None, min_length=2, max_length=100)
    department: Optional[str] = Field(default=None, max_length=100)
    branch: Optional[str] = Field(default=None, max_length=100)
    image_url: Optional[HttpUrl] = None
    email: Optional[EmailStr] = None
    bio: Optional[str] = Field(default=None, max_length=500)
    order_index: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None
