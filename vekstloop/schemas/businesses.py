"""Business, offer and SMS request/response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from vekstloop.models.enums import BusinessStatus, CustomerStage, OfferStatus, SmsStatus
from vekstloop.schemas.activities import ActivityResponse
from vekstloop.schemas.contacts import ContactResponse

REQUIRED_BUSINESS_FIELDS = ("name", "email", "phone", "status", "stage", "bilag_count")


class BusinessCreateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=255)
    org_number: str | None = Field(default=None, max_length=40)
    address: str | None = Field(default=None, max_length=255)
    postal_code: str | None = Field(default=None, max_length=20)
    city: str | None = Field(default=None, max_length=120)
    country: str | None = Field(default=None, max_length=120)
    contact_person: str | None = Field(default=None, max_length=255)
    email: str = Field(min_length=3, max_length=320)
    phone: str = Field(min_length=1, max_length=40)
    website: str | None = Field(default=None, max_length=255)
    industry: str | None = Field(default=None, max_length=120)
    number_of_employees: int | None = Field(default=None, ge=0)
    revenue: int | None = Field(default=None, ge=0)
    notes: str | None = Field(default=None, max_length=10000)
    status: BusinessStatus = BusinessStatus.ACTIVE
    stage: CustomerStage = CustomerStage.LEAD
    potential_value: int | None = Field(default=None, ge=0)
    tags: list[str] = Field(default_factory=list)


class BusinessUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=255)
    org_number: str | None = Field(default=None, max_length=40)
    address: str | None = Field(default=None, max_length=255)
    postal_code: str | None = Field(default=None, max_length=20)
    city: str | None = Field(default=None, max_length=120)
    country: str | None = Field(default=None, max_length=120)
    contact_person: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, min_length=3, max_length=320)
    phone: str | None = Field(default=None, min_length=1, max_length=40)
    website: str | None = Field(default=None, max_length=255)
    industry: str | None = Field(default=None, max_length=120)
    number_of_employees: int | None = Field(default=None, ge=0)
    revenue: int | None = Field(default=None, ge=0)
    notes: str | None = Field(default=None, max_length=10000)
    status: BusinessStatus | None = None
    stage: CustomerStage | None = None
    bilag_count: int | None = Field(default=None, ge=0)
    potential_value: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def required_fields_are_not_cleared(self) -> "BusinessUpdateRequest":
        for field in REQUIRED_BUSINESS_FIELDS:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be cleared")
        return self


class StageUpdateRequest(BaseModel):
    stage: CustomerStage


class TagsRequest(BaseModel):
    tags: list[str] = Field(min_length=1)


class BusinessResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    workspace_id: str | None = None
    name: str
    org_number: str | None = None
    address: str | None = None
    postal_code: str | None = None
    city: str | None = None
    country: str | None = None
    contact_person: str | None = None
    email: str
    phone: str
    website: str | None = None
    industry: str | None = None
    number_of_employees: int | None = None
    revenue: int | None = None
    notes: str | None = None
    status: BusinessStatus
    stage: CustomerStage
    potential_value: int | None = None
    bilag_count: int = 0
    tags: list[str] = Field(default_factory=list, validation_alias="tag_names")
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OfferItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    description: str
    quantity: float
    unit_price: float
    discount: float | None = None
    tax: float | None = None
    total: float


class OfferResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    business_id: str
    contact_id: str | None = None
    title: str
    description: str | None = None
    status: OfferStatus
    total_amount: float
    currency: str
    expires_at: datetime | None = None
    notes: str | None = None
    items: list[OfferItemResponse] = Field(default_factory=list)
    created_at: datetime | None = None


class BusinessDetailResponse(BusinessResponse):
    contacts: list[ContactResponse] = Field(default_factory=list)
    activities: list[ActivityResponse] = Field(default_factory=list)
    offers: list[OfferResponse] = Field(default_factory=list)


class SmsSendRequest(BaseModel):
    content: str = Field(min_length=1, max_length=1600)


class SmsMessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    business_id: str
    user_id: str
    to_number: str
    content: str
    direction: str
    status: SmsStatus
    created_at: datetime | None = None
