"""Job application request/response schemas."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from vekstloop.models.enums import JobApplicationStatus
from vekstloop.schemas.activities import ActivityResponse

REQUIRED_APPLICATION_FIELDS = ("first_name", "last_name", "email", "phone", "status", "skills")


def _clean_skills(value: Any) -> Any:
    if value is None:
        return value
    return [str(item).strip().lower() for item in value if str(item).strip()]


class JobApplicationCreateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    first_name: str = Field(min_length=1, max_length=120)
    last_name: str = Field(min_length=1, max_length=120)
    email: str = Field(min_length=3, max_length=320)
    phone: str = Field(min_length=1, max_length=40)
    address: str | None = Field(default=None, max_length=255)
    postal_code: str | None = Field(default=None, max_length=20)
    city: str | None = Field(default=None, max_length=120)
    country: str | None = Field(default=None, max_length=120)
    resume: str | None = None
    cover_letter: str | None = None
    experience: int | None = Field(default=None, ge=0)
    education: str | None = Field(default=None, max_length=255)
    skills: list[str] = Field(default_factory=list)
    desired_position: str | None = Field(default=None, max_length=255)
    current_employer: str | None = Field(default=None, max_length=255)
    expected_salary: int | None = Field(default=None, ge=0)
    start_date: date | None = None
    notes: str | None = None
    source: str | None = Field(default=None, max_length=120)
    status: JobApplicationStatus = JobApplicationStatus.NEW

    _normalize_skills = field_validator("skills", mode="before")(_clean_skills)


class JobApplicationUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    first_name: str | None = Field(default=None, min_length=1, max_length=120)
    last_name: str | None = Field(default=None, min_length=1, max_length=120)
    email: str | None = Field(default=None, min_length=3, max_length=320)
    phone: str | None = Field(default=None, min_length=1, max_length=40)
    address: str | None = Field(default=None, max_length=255)
    postal_code: str | None = Field(default=None, max_length=20)
    city: str | None = Field(default=None, max_length=120)
    country: str | None = Field(default=None, max_length=120)
    resume: str | None = None
    cover_letter: str | None = None
    experience: int | None = Field(default=None, ge=0)
    education: str | None = Field(default=None, max_length=255)
    skills: list[str] | None = None
    desired_position: str | None = Field(default=None, max_length=255)
    current_employer: str | None = Field(default=None, max_length=255)
    expected_salary: int | None = Field(default=None, ge=0)
    start_date: date | None = None
    notes: str | None = None
    source: str | None = Field(default=None, max_length=120)
    status: JobApplicationStatus | None = None

    _normalize_skills = field_validator("skills", mode="before")(_clean_skills)

    @model_validator(mode="after")
    def required_fields_are_not_cleared(self) -> "JobApplicationUpdateRequest":
        for field in REQUIRED_APPLICATION_FIELDS:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be cleared")
        return self


class StatusUpdateRequest(BaseModel):
    status: JobApplicationStatus


class NoteRequest(BaseModel):
    note: str = Field(min_length=1, max_length=10000)


class JobApplicationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    address: str | None = None
    postal_code: str | None = None
    city: str | None = None
    country: str | None = None
    resume: str | None = None
    cover_letter: str | None = None
    experience: int | None = None
    education: str | None = None
    skills: list[str] = Field(default_factory=list)
    desired_position: str | None = None
    current_employer: str | None = None
    expected_salary: int | None = None
    start_date: date | None = None
    notes: str | None = None
    source: str | None = None
    status: JobApplicationStatus
    application_date: datetime

    @field_validator("skills", mode="before")
    @classmethod
    def skills_as_list(cls, value: Any) -> list[str]:
        return list(value or [])


class JobApplicationDetailResponse(JobApplicationResponse):
    activities: list[ActivityResponse] = Field(default_factory=list)
