"""Activity request/response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from vekstloop.models.base import utcnow
from vekstloop.models.enums import ActivityType


class ActivityCreateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: ActivityType
    date: datetime = Field(default_factory=utcnow)
    description: str = Field(min_length=1, max_length=10000)
    completed: bool = False
    outcome: str | None = Field(default=None, max_length=10000)
    contact_id: str | None = None


class ActivityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    type: ActivityType
    date: datetime
    description: str
    completed: bool
    outcome: str | None = None
    business_id: str | None = None
    contact_id: str | None = None
    job_application_id: str | None = None
    user_id: str
    created_at: datetime | None = None
