"""Support ticket request/response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from vekstloop.models.enums import TicketPriority, TicketStatus


class TicketCreateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=320)
    company_name: str | None = Field(default=None, max_length=255)
    subject: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1, max_length=20000)
    priority: TicketPriority = TicketPriority.MEDIUM


class TicketUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1, max_length=20000)
    status: TicketStatus | None = None
    priority: TicketPriority | None = None
    business_id: str | None = None
    contact_id: str | None = None
    assignee_id: str | None = None

    @model_validator(mode="after")
    def required_fields_are_not_cleared(self) -> "TicketUpdateRequest":
        for field in ("title", "description", "status", "priority"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be cleared")
        return self


class CommentCreateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    content: str = Field(min_length=1, max_length=20000)
    is_internal: bool = False


class TicketCommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    ticket_id: str
    author_id: str
    content: str
    is_internal: bool
    created_at: datetime | None = None


class TicketResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    status: TicketStatus
    priority: TicketPriority
    business_id: str | None = None
    contact_id: str | None = None
    assignee_id: str | None = None
    submitter_name: str | None = None
    submitter_email: str | None = None
    submitted_company_name: str | None = None
    resolved_at: datetime | None = None
    created_at: datetime | None = None


class TicketDetailResponse(TicketResponse):
    comments: list[TicketCommentResponse] = Field(default_factory=list)


class TicketCreatedResponse(BaseModel):
    success: bool = True
    ticket_id: str
    requires_review: bool


class BusinessSearchItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    phone: str
    website: str | None = None
    status: str
