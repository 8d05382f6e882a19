"""Pydantic schema package for validation and API contracts."""

from vekstloop.schemas.activities import ActivityCreateRequest, ActivityResponse
from vekstloop.schemas.applications import (
    JobApplicationCreateRequest,
    JobApplicationDetailResponse,
    JobApplicationResponse,
    JobApplicationUpdateRequest,
    NoteRequest,
    StatusUpdateRequest,
)
from vekstloop.schemas.businesses import (
    BusinessCreateRequest,
    BusinessDetailResponse,
    BusinessResponse,
    BusinessUpdateRequest,
    OfferResponse,
    SmsMessageResponse,
    SmsSendRequest,
    StageUpdateRequest,
    TagsRequest,
)
from vekstloop.schemas.common import APIEnvelope, ErrorEnvelope
from vekstloop.schemas.contacts import ContactCreateRequest, ContactResponse
from vekstloop.schemas.email_provider import (
    ProviderResultResponse,
    ProviderStatusResponse,
    SaveProviderRequest,
    SendEmailRequest,
)
from vekstloop.schemas.tickets import (
    BusinessSearchItem,
    CommentCreateRequest,
    TicketCommentResponse,
    TicketCreatedResponse,
    TicketCreateRequest,
    TicketDetailResponse,
    TicketResponse,
    TicketUpdateRequest,
)

__all__ = [
    "APIEnvelope",
    "ActivityCreateRequest",
    "ActivityResponse",
    "BusinessCreateRequest",
    "BusinessDetailResponse",
    "BusinessResponse",
    "BusinessSearchItem",
    "BusinessUpdateRequest",
    "CommentCreateRequest",
    "ContactCreateRequest",
    "ContactResponse",
    "ErrorEnvelope",
    "JobApplicationCreateRequest",
    "JobApplicationDetailResponse",
    "JobApplicationResponse",
    "JobApplicationUpdateRequest",
    "NoteRequest",
    "OfferResponse",
    "ProviderResultResponse",
    "ProviderStatusResponse",
    "SaveProviderRequest",
    "SendEmailRequest",
    "SmsMessageResponse",
    "SmsSendRequest",
    "StageUpdateRequest",
    "StatusUpdateRequest",
    "TagsRequest",
    "TicketCommentResponse",
    "TicketCreateRequest",
    "TicketCreatedResponse",
    "TicketDetailResponse",
    "TicketResponse",
    "TicketUpdateRequest",
]
