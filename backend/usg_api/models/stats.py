from __future__ import annotations

from pydantic import ConfigDict, Field

from usg_api.models.base import BaseModel


class AutomatedStats(BaseModel):
    """Dashboard summary combined from four independent datastore reads."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    events_count: int = Field(default=0, serialization_alias="eventsCount")
    accomplishments_count: int = Field(default=0, serialization_alias="accomplishmentsCount")
    total_budget: float = Field(default=0.0, serialization_alias="totalBudget")
    organizations_count: int = Field(default=0, serialization_alias="organizationsCount")
