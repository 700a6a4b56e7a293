from __future__ import annotations

from typing import Optional

from pydantic import EmailStr, Field, HttpUrl

from usg_api.models.base import WriteModel


class OrganizationCreate(WriteModel):
    name: str = Field(min_length=2, max_length=200)
    type: Optional[str] = Field(default=None, max_length=100)
    college: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    logo_url: Optional[HttpUrl] = None
    website_url: Optional[HttpUrl] = None
    contact_email: Optional[EmailStr] = None
    order_index: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None


class OrganizationUpdate(WriteModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=200)
    type: Optional[str] = Field(default=None, max_length=100)
    college: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    logo_url: Optional[HttpUrl] = None
    website_url: Optional[HttpUrl] = None
    contact_email: Optional[EmailStr] = None
    order_index: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None
