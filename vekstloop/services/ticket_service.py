"""Support ticket service with business auto-matching on intake."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import selectinload

from vekstloop.auth.session import ensure_system_user
from vekstloop.core.exceptions import NotFoundError
from vekstloop.models.base import utcnow
from vekstloop.models.business import Business
from vekstloop.models.enums import TicketStatus
from vekstloop.models.ticket import Ticket, TicketComment
from vekstloop.models.user import User
from vekstloop.schemas.tickets import CommentCreateRequest, TicketCreateRequest, TicketUpdateRequest
from vekstloop.services.base_service import ScopedService
from vekstloop.services.contact_service import ContactService
from vekstloop.utils.validators import coerce_enum, parse_payload

logger = logging.getLogger(__name__)

MATCH_LIMIT = 5


@dataclass
class BusinessMatch:
    confidence: str
    business_id: str | None
    matches: list[Business] = field(default_factory=list)


@dataclass
class TicketCreation:
    ticket: Ticket
    requires_review: bool
    match: BusinessMatch | None = None


class TicketService(ScopedService):
    """Tickets belong to a workspace through their linked business.

    In workspace scope a caller sees unlinked tickets plus tickets linked to
    a business of its own workspace; anything else reads as not found.
    """

    def _businesses(self):
        return self.scoped(self.db.query(Business), Business.workspace_id)

    def _tickets(self):
        query = self.db.query(Ticket)
        if self.workspace_id is None:
            return query
        return query.outerjoin(Business, Ticket.business_id == Business.id).filter(
            or_(Ticket.business_id.is_(None), Business.workspace_id == self.workspace_id)
        )

    def _require_user(self, user_id: str) -> User:
        user = self.scoped(self.db.query(User), User.workspace_id).filter(User.id == user_id).first()
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user

    def _require(self, ticket_id: str) -> Ticket:
        ticket = self._tickets().filter(Ticket.id == ticket_id).first()
        if ticket is None:
            raise NotFoundError("Ticket not found")
        return ticket

    def find_business_match(self, email: str | None, company_name: str | None) -> BusinessMatch | None:
        """Guess the submitting business from an email domain or company name.

        One domain hit is high confidence. Several domain hits, or a single
        name-only hit, are medium confidence and need manual review.
        """
        if not email and not company_name:
            return None

        matches: list[Business] = []
        confidence = "low"

        domain = email.split("@", 1)[1].strip() if email and "@" in email else ""
        if domain:
            domain_matches = (
                self._businesses()
                .filter(
                    or_(
                        Business.email.contains(domain, autoescape=True),
                        Business.website.contains(domain, autoescape=True),
                    )
                )
                .limit(MATCH_LIMIT)
                .all()
            )
            if len(domain_matches) == 1:
                return BusinessMatch("high", domain_matches[0].id, domain_matches)
            if domain_matches:
                matches.extend(domain_matches)
                confidence = "medium"

        if company_name:
            name_matches = (
                self._businesses()
                .filter(Business.name.icontains(company_name, autoescape=True))
                .limit(MATCH_LIMIT)
                .all()
            )
            if len(name_matches) == 1 and not matches:
                return BusinessMatch("medium", name_matches[0].id, name_matches)
            known = {business.id for business in matches}
            matches.extend(business for business in name_matches if business.id not in known)

        if not matches:
            return None
        return BusinessMatch(
            confidence,
            matches[0].id if confidence == "medium" else None,
            matches,
        )

    def get_all(
        self,
        status: TicketStatus | str | None = None,
        business_id: str | None = None,
        assignee_id: str | None = None,
    ) -> list[Ticket]:
        query = self._tickets().options(selectinload(Ticket.tags))
        if status:
            query = query.filter(Ticket.status == coerce_enum(TicketStatus, status, "status"))
        if business_id:
            query = query.filter(Ticket.business_id == business_id)
        if assignee_id:
            query = query.filter(Ticket.assignee_id == assignee_id)
        return query.order_by(Ticket.created_at.desc()).all()

    def get_by_id(self, ticket_id: str) -> Ticket | None:
        return (
            self._tickets()
            .options(selectinload(Ticket.comments), selectinload(Ticket.tags))
            .filter(Ticket.id == ticket_id)
            .first()
        )

    def create(self, data: dict[str, Any] | TicketCreateRequest) -> TicketCreation:
        payload = parse_payload(TicketCreateRequest, data)
        match = self.find_business_match(payload.email, payload.company_name)

        ticket = Ticket(
            title=payload.subject,
            description=payload.description,
            status=TicketStatus.UNASSIGNED,
            priority=payload.priority,
            submitter_name=payload.name,
            submitter_email=payload.email,
            submitted_company_name=payload.company_name,
        )
        if match is not None and match.confidence == "high":
            ticket.business_id = match.business_id
            ticket.status = TicketStatus.OPEN

        self.db.add(ticket)
        self.commit()
        self.db.refresh(ticket)
        requires_review = match is None or match.confidence != "high"
        logger.info(
            "ticket.created",
            extra={
                "event": "ticket.created",
                "ticket_id": ticket.id,
                "match_confidence": match.confidence if match else None,
                "requires_review": requires_review,
            },
        )
        return TicketCreation(ticket=ticket, requires_review=requires_review, match=match)

    def update(self, ticket_id: str, data: dict[str, Any] | TicketUpdateRequest) -> Ticket:
        payload = parse_payload(TicketUpdateRequest, data)
        ticket = self._require(ticket_id)
        changes = payload.model_dump(exclude_unset=True)

        if changes.get("business_id"):
            if self._businesses().filter(Business.id == changes["business_id"]).first() is None:
                raise NotFoundError(f"Business {changes['business_id']} not found")
        if changes.get("contact_id"):
            contacts = ContactService(self.db, workspace_id=self.workspace_id)
            if contacts.get_by_id(changes["contact_id"]) is None:
                raise NotFoundError(f"Contact {changes['contact_id']} not found")
        if changes.get("assignee_id"):
            self._require_user(changes["assignee_id"])

        if changes.get("status") == TicketStatus.RESOLVED and ticket.status != TicketStatus.RESOLVED:
            ticket.resolved_at = utcnow()
        for name, value in changes.items():
            setattr(ticket, name, value)
        self.commit()
        self.db.refresh(ticket)
        return ticket

    def add_comment(
        self,
        ticket_id: str,
        data: dict[str, Any] | CommentCreateRequest,
        author_id: str | None = None,
    ) -> TicketComment:
        payload = parse_payload(CommentCreateRequest, data)
        ticket = self._require(ticket_id)
        if author_id is None:
            author_id = ensure_system_user(self.db).id
        else:
            author_id = self._require_user(author_id).id
        comment = TicketComment(
            ticket_id=ticket.id,
            author_id=author_id,
            content=payload.content,
            is_internal=payload.is_internal,
        )
        self.db.add(comment)
        self.commit()
        self.db.refresh(comment)
        return comment

    def delete(self, ticket_id: str) -> None:
        ticket = self._require(ticket_id)
        self.db.delete(ticket)
        self.commit()
