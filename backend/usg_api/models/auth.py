from __future__ import annotations

from typing import Optional

from usg_api.models.base import BaseModel


class AuthUser(BaseModel):
    """Identity returned by the auth service for a verified bearer token."""

    id: str
    email: Optional[str] = None
    role: Optional[str] = None

    def has_email_suffix(self, suffix: str) -> bool:
        return bool(self.email) and self.email.lower().endswith(suffix.lower())
