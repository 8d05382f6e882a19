"""Canonical enum values for the CRM schema."""

from __future__ import annotations

import enum


class BusinessStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    LEAD = "lead"


class CustomerStage(str, enum.Enum):
    LEAD = "lead"
    PROSPECT = "prospect"
    QUALIFIED = "qualified"
    CUSTOMER = "customer"
    CHURNED = "churned"


LEAD_STAGES = (CustomerStage.LEAD, CustomerStage.PROSPECT, CustomerStage.QUALIFIED)


class ActivityType(str, enum.Enum):
    CALL = "call"
    MEETING = "meeting"
    EMAIL = "email"
    NOTE = "note"


class OfferStatus(str, enum.Enum):
    DRAFT = "draft"
    SENT = "sent"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    EXPIRED = "expired"


class JobApplicationStatus(str, enum.Enum):
    NEW = "new"
    REVIEWING = "reviewing"
    INTERVIEWED = "interviewed"
    OFFER_EXTENDED = "offer_extended"
    HIRED = "hired"
    REJECTED = "rejected"


class TicketStatus(str, enum.Enum):
    UNASSIGNED = "unassigned"
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    WAITING_ON_CUSTOMER = "waiting_on_customer"
    WAITING_ON_THIRD_PARTY = "waiting_on_third_party"
    RESOLVED = "resolved"
    CLOSED = "closed"


class TicketPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class EmailProviderName(str, enum.Enum):
    GOOGLE = "google"
    MICROSOFT = "microsoft"


class UserKind(str, enum.Enum):
    HUMAN = "human"
    SYSTEM = "system"


class SmsStatus(str, enum.Enum):
    QUEUED = "queued"
    SENT = "sent"
    FAILED = "failed"
