from __future__ import annotations

from typing import Any

from pydantic import BaseModel as PydanticBaseModel


class BaseModel(PydanticBaseModel):
    """Project-wide base model with ``from_attributes`` enabled."""

    model_config = {"from_attributes": True}


class WriteModel(BaseModel):
    """Request body whose fields become datastore columns.

    Unknown fields are rejected so a typo never reaches the datastore as a
    column name.
    """

    model_config = {"from_attributes": True, "extra": "forbid"}

    def to_record(self) -> dict[str, Any]:
        """Return only the fields the client actually sent, JSON-ready."""
        return self.model_dump(mode="json", exclude_unset=True)
