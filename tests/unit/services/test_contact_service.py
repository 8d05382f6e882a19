from __future__ import annotations

import pytest

from vekstloop.core.exceptions import NotFoundError
from vekstloop.services.business_service import BusinessService
from vekstloop.services.contact_service import ContactService


def test_only_one_primary_contact_per_business(db_session, business_data):
    business = BusinessService(db=db_session).create(business_data())
    service = ContactService(db=db_session)

    first = service.create(business.id, {"name": "Ola", "is_primary": True})
    second = service.create(business.id, {"name": "Kari", "is_primary": True})
    db_session.refresh(first)

    assert first.is_primary is False
    assert second.is_primary is True
    assert service.get_primary(business.id).id == second.id


def test_set_primary_switches_primary(db_session, business_data):
    business = BusinessService(db=db_session).create(business_data())
    service = ContactService(db=db_session)
    first = service.create(business.id, {"name": "Ola", "is_primary": True})
    second = service.create(business.id, {"name": "Kari"})

    service.set_primary(second.id)
    db_session.refresh(first)

    assert first.is_primary is False
    assert [contact.name for contact in service.get_by_business(business.id)] == ["Kari", "Ola"]


def test_contacts_follow_business_workspace(db_session, workspace_a, workspace_b, business_data):
    business = BusinessService(db=db_session, workspace_id=workspace_a.id).create(business_data())
    ContactService(db=db_session, workspace_id=workspace_a.id).create(business.id, {"name": "Ola"})
    outsider = ContactService(db=db_session, workspace_id=workspace_b.id)

    assert outsider.get_all() == []
    with pytest.raises(NotFoundError):
        outsider.create(business.id, {"name": "Intruder"})
    with pytest.raises(NotFoundError):
        outsider.get_by_business(business.id)


def test_create_for_missing_business(db_session):
    with pytest.raises(NotFoundError):
        ContactService(db=db_session).create("missing", {"name": "Ola"})
