"""Contact service with single-primary-per-business enforcement."""

from __future__ import annotations

from typing import Any

from vekstloop.core.exceptions import NotFoundError
from vekstloop.models.business import Business
from vekstloop.models.contact import Contact
from vekstloop.schemas.contacts import ContactCreateRequest
from vekstloop.services.base_service import ScopedService
from vekstloop.utils.validators import parse_payload


class ContactService(ScopedService):
    """Contacts are scoped through their owning business."""

    def _query(self):
        query = self.db.query(Contact)
        if self.workspace_id is None:
            return query
        return query.join(Business, Contact.business_id == Business.id).filter(
            Business.workspace_id == self.workspace_id
        )

    def _require_business(self, business_id: str) -> Business:
        business = self.scoped(self.db.query(Business), Business.workspace_id).filter(
            Business.id == business_id
        ).first()
        if business is None:
            raise NotFoundError(f"Business {business_id} not found")
        return business

    def _unset_other_primaries(self, business_id: str, keep_id: str | None = None) -> None:
        query = self.db.query(Contact).filter(Contact.business_id == business_id, Contact.is_primary.is_(True))
        if keep_id is not None:
            query = query.filter(Contact.id != keep_id)
        for contact in query.all():
            contact.is_primary = False

    def get_all(self) -> list[Contact]:
        return self._query().order_by(Contact.name.asc()).all()

    def get_by_id(self, contact_id: str) -> Contact | None:
        return self._query().filter(Contact.id == contact_id).first()

    def get_by_business(self, business_id: str) -> list[Contact]:
        business = self._require_business(business_id)
        return (
            self.db.query(Contact)
            .filter(Contact.business_id == business.id)
            .order_by(Contact.is_primary.desc(), Contact.name.asc())
            .all()
        )

    def get_primary(self, business_id: str) -> Contact | None:
        business = self._require_business(business_id)
        return (
            self.db.query(Contact)
            .filter(Contact.business_id == business.id, Contact.is_primary.is_(True))
            .first()
        )

    def create(self, business_id: str, data: dict[str, Any] | ContactCreateRequest) -> Contact:
        payload = parse_payload(ContactCreateRequest, data)
        business = self._require_business(business_id)
        if payload.is_primary:
            self._unset_other_primaries(business.id)
        contact = Contact(**payload.model_dump(), business_id=business.id)
        self.db.add(contact)
        self.commit()
        self.db.refresh(contact)
        return contact

    def set_primary(self, contact_id: str) -> Contact:
        contact = self.get_by_id(contact_id)
        if contact is None:
            raise NotFoundError(f"Contact {contact_id} not found")
        self._unset_other_primaries(contact.business_id, keep_id=contact.id)
        contact.is_primary = True
        self.commit()
        self.db.refresh(contact)
        return contact
