"""Business service: lead/customer lifecycle, tags, contacts and SMS history."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from vekstloop.core.exceptions import NotFoundError, TagNotFoundError, ValidationError
from vekstloop.models.activity import Activity
from vekstloop.models.business import Business, Tag
from vekstloop.models.contact import Contact
from vekstloop.models.enums import LEAD_STAGES, BusinessStatus, CustomerStage, SmsStatus
from vekstloop.models.offer import Offer
from vekstloop.models.sms_message import SmsMessage
from vekstloop.schemas.businesses import BusinessCreateRequest, BusinessUpdateRequest, SmsSendRequest
from vekstloop.services.base_service import ScopedService
from vekstloop.utils.validators import coerce_enum, normalize_tag_names, parse_payload

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 10


class BusinessService(ScopedService):
    """Service for business CRUD, stage transitions and related reads."""

    def _query(self):
        return self.scoped(self.db.query(Business), Business.workspace_id)

    def _require(self, business_id: str) -> Business:
        business = self._query().filter(Business.id == business_id).first()
        if business is None:
            raise NotFoundError(f"Business {business_id} not found")
        return business

    def _existing_tags(self, names: list[str]) -> dict[str, Tag]:
        return {tag.name: tag for tag in self.db.query(Tag).filter(Tag.name.in_(names)).all()}

    def _find_or_add_tags(self, names: list[str]) -> list[Tag]:
        existing = self._existing_tags(names)
        missing = [Tag(name=name) for name in names if name not in existing]
        if missing:
            self.db.add_all(missing)
            self.db.flush()
            existing.update((tag.name, tag) for tag in missing)
        return [existing[name] for name in names]

    def _resolve_tags(self, names: list[str] | None) -> list[Tag]:
        """Existing tags by name, creating the rest.

        A concurrent insert of the same name rolls the session back before
        re-reading, so this runs before the caller stages its own changes.
        """
        cleaned = normalize_tag_names(names)
        if not cleaned:
            return []
        try:
            return self._find_or_add_tags(cleaned)
        except IntegrityError:
            self.db.rollback()
            return self._find_or_add_tags(cleaned)

    def get_all(self) -> list[Business]:
        return self._query().order_by(Business.name.asc()).all()

    def get_by_stage(self, stage: CustomerStage | str) -> list[Business]:
        stage = coerce_enum(CustomerStage, stage, "stage")
        return self._query().filter(Business.stage == stage).order_by(Business.created_at.desc()).all()

    def get_leads(self) -> list[Business]:
        return (
            self._query()
            .filter(Business.stage.in_(LEAD_STAGES))
            .order_by(Business.created_at.desc())
            .all()
        )

    def get_customers(self) -> list[Business]:
        return (
            self._query()
            .filter(Business.stage == CustomerStage.CUSTOMER)
            .order_by(Business.name.asc())
            .all()
        )

    def get_by_id(self, business_id: str) -> Business | None:
        return (
            self._query()
            .options(
                selectinload(Business.contacts),
                selectinload(Business.activities),
                selectinload(Business.offers).selectinload(Offer.items),
                selectinload(Business.tags),
            )
            .filter(Business.id == business_id)
            .first()
        )

    def create(self, data: dict[str, Any] | BusinessCreateRequest) -> Business:
        payload = parse_payload(BusinessCreateRequest, data)
        business = Business(**payload.model_dump(exclude={"tags"}), workspace_id=self.workspace_id)
        business.tags = self._resolve_tags(payload.tags)
        self.db.add(business)
        self.commit()
        self.db.refresh(business)
        logger.info(
            "business.created",
            extra={"event": "business.created", "business_id": business.id, "workspace_id": self.workspace_id},
        )
        return business

    def update(self, business_id: str, data: dict[str, Any] | BusinessUpdateRequest) -> Business:
        payload = parse_payload(BusinessUpdateRequest, data)
        business = self._require(business_id)
        for field, value in payload.model_dump(exclude_unset=True).items():
            setattr(business, field, value)
        self.commit()
        self.db.refresh(business)
        return business

    def update_stage(self, business_id: str, stage: CustomerStage | str) -> Business:
        stage = coerce_enum(CustomerStage, stage, "stage")
        business = self._require(business_id)
        business.stage = stage
        self.commit()
        self.db.refresh(business)
        return business

    def convert_to_customer(
        self, business_id: str, data: dict[str, Any] | BusinessUpdateRequest | None = None
    ) -> Business:
        """Apply optional customer details and promote to an active customer."""
        payload = parse_payload(BusinessUpdateRequest, data)
        business = self._require(business_id)
        for field, value in payload.model_dump(exclude_unset=True).items():
            setattr(business, field, value)
        business.stage = CustomerStage.CUSTOMER
        business.status = BusinessStatus.ACTIVE
        self.commit()
        self.db.refresh(business)
        logger.info(
            "business.converted_to_customer",
            extra={"event": "business.converted_to_customer", "business_id": business.id},
        )
        return business

    def delete(self, business_id: str, cascade_contacts: bool = True) -> Business:
        """Delete a business.

        Contacts are removed with it when ``cascade_contacts`` is set;
        otherwise a business that still has contacts is refused.
        """
        business = self._require(business_id)
        contacts = self.db.query(Contact).filter(Contact.business_id == business.id).all()
        if contacts and not cascade_contacts:
            raise ValidationError("Business still has contacts.")
        for contact in contacts:
            self.db.delete(contact)
        self.db.flush()
        self.db.delete(business)
        self.commit()
        return business

    def add_tags(self, business_id: str, names: list[str]) -> Business:
        business = self._require(business_id)
        current = set(business.tag_names)
        for tag in self._resolve_tags(names):
            if tag.name not in current:
                business.tags.append(tag)
                current.add(tag.name)
        self.commit()
        self.db.refresh(business)
        return business

    def remove_tag(self, business_id: str, name: str) -> Business:
        business = self._require(business_id)
        tag = self.db.query(Tag).filter(Tag.name == name).first()
        if tag is None:
            raise TagNotFoundError(name)
        if tag in business.tags:
            business.tags.remove(tag)
        self.commit()
        self.db.refresh(business)
        return business

    def get_contacts(self, business_id: str) -> list[Contact]:
        business = self._require(business_id)
        return (
            self.db.query(Contact)
            .filter(Contact.business_id == business.id)
            .order_by(Contact.is_primary.desc(), Contact.name.asc())
            .all()
        )

    def get_activities(self, business_id: str) -> list[Activity]:
        business = self._require(business_id)
        return (
            self.db.query(Activity)
            .options(selectinload(Activity.contact))
            .filter(Activity.business_id == business.id)
            .order_by(Activity.date.desc())
            .all()
        )

    def get_offers(self, business_id: str) -> list[Offer]:
        business = self._require(business_id)
        return (
            self.db.query(Offer)
            .options(selectinload(Offer.items), selectinload(Offer.contact))
            .filter(Offer.business_id == business.id)
            .order_by(Offer.created_at.desc())
            .all()
        )

    def search(self, query: str | None) -> list[Business]:
        term = (query or "").strip()
        if not term:
            return []
        return (
            self._query()
            .filter(
                or_(
                    Business.name.icontains(term, autoescape=True),
                    Business.email.icontains(term, autoescape=True),
                    Business.phone.icontains(term, autoescape=True),
                    Business.contact_person.icontains(term, autoescape=True),
                    Business.website.icontains(term, autoescape=True),
                )
            )
            .order_by(Business.name.asc())
            .limit(SEARCH_LIMIT)
            .all()
        )

    def send_sms(self, business_id: str, content: str, user_id: str) -> SmsMessage:
        """Record an outbound SMS to the business phone number.

        Messages are queued in history; delivery is handled outside this service.
        """
        payload = parse_payload(SmsSendRequest, {"content": content})
        business = self._require(business_id)
        if not business.phone:
            raise ValidationError("Business has no phone number.")
        message = SmsMessage(
            business_id=business.id,
            user_id=user_id,
            to_number=business.phone,
            content=payload.content,
            status=SmsStatus.QUEUED,
        )
        self.db.add(message)
        self.commit()
        self.db.refresh(message)
        logger.info(
            "sms.queued",
            extra={"event": "sms.queued", "business_id": business.id, "sms_id": message.id},
        )
        return message

    def get_sms_history(self, business_id: str) -> list[SmsMessage]:
        business = self._require(business_id)
        return (
            self.db.query(SmsMessage)
            .filter(SmsMessage.business_id == business.id)
            .order_by(SmsMessage.created_at.desc())
            .all()
        )
