"""SQLAlchemy model package for the workspace-aware CRM schema."""

from vekstloop.models.account import Account, EmailProvider
from vekstloop.models.activity import Activity
from vekstloop.models.base import Base
from vekstloop.models.business import Business, Tag, business_tags
from vekstloop.models.contact import Contact
from vekstloop.models.enums import (
    ActivityType,
    BusinessStatus,
    CustomerStage,
    EmailProviderName,
    JobApplicationStatus,
    OfferStatus,
    SmsStatus,
    TicketPriority,
    TicketStatus,
    UserKind,
)
from vekstloop.models.job_application import JobApplication, JobApplicationSkill
from vekstloop.models.offer import Offer, OfferItem
from vekstloop.models.sms_message import SmsMessage
from vekstloop.models.ticket import Ticket, TicketComment, ticket_tags
from vekstloop.models.user import User, UserSession
from vekstloop.models.workspace import Workspace

__all__ = [
    "Account",
    "Activity",
    "ActivityType",
    "Base",
    "Business",
    "BusinessStatus",
    "Contact",
    "CustomerStage",
    "EmailProvider",
    "EmailProviderName",
    "JobApplication",
    "JobApplicationSkill",
    "JobApplicationStatus",
    "Offer",
    "OfferItem",
    "OfferStatus",
    "SmsMessage",
    "SmsStatus",
    "Tag",
    "Ticket",
    "TicketComment",
    "TicketPriority",
    "TicketStatus",
    "User",
    "UserKind",
    "UserSession",
    "Workspace",
    "business_tags",
    "ticket_tags",
]
