"""Contact request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ContactCreateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=320)
    phone: str | None = Field(default=None, max_length=40)
    position: str | None = Field(default=None, max_length=120)
    is_primary: bool = False
    notes: str | None = Field(default=None, max_length=10000)


class ContactResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    business_id: str
    name: str
    email: str | None = None
    phone: str | None = None
    position: str | None = None
    is_primary: bool
    notes: str | None = None
