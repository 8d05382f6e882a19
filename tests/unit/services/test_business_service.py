from __future__ import annotations

from datetime import timedelta

import pytest
from sqlalchemy import inspect

from vekstloop.core.exceptions import NotFoundError, TagNotFoundError, ValidationError
from vekstloop.models import Activity, ActivityType, Business, Contact, CustomerStage, Offer, OfferItem, Tag
from vekstloop.models.base import utcnow
from vekstloop.models.enums import BusinessStatus, SmsStatus
from vekstloop.services.business_service import BusinessService


def test_get_leads_returns_only_early_stages(db_session, workspace_a, business_data):
    service = BusinessService(db=db_session, workspace_id=workspace_a.id)
    for stage in CustomerStage:
        service.create(business_data(name=f"Biz {stage.value}", stage=stage.value))

    leads = service.get_leads()

    assert {business.stage for business in leads} == {
        CustomerStage.LEAD,
        CustomerStage.PROSPECT,
        CustomerStage.QUALIFIED,
    }
    assert len(leads) == 3


def test_get_customers_sorted_by_name(db_session, business_data):
    service = BusinessService(db=db_session)
    service.create(business_data(name="Zeta", stage="customer"))
    service.create(business_data(name="Alfa", stage="customer"))
    service.create(business_data(name="Lead Co", stage="lead"))

    assert [business.name for business in service.get_customers()] == ["Alfa", "Zeta"]


def test_get_by_stage_filters_and_validates(db_session, business_data):
    service = BusinessService(db=db_session)
    service.create(business_data(name="Churned Co", stage="churned"))
    service.create(business_data(name="Lead Co", stage="lead"))

    assert [business.name for business in service.get_by_stage("churned")] == ["Churned Co"]
    with pytest.raises(ValidationError):
        service.get_by_stage("archived")


def test_overlapping_tags_are_not_duplicated(db_session, business_data):
    service = BusinessService(db=db_session)
    first = service.create(business_data(name="One", tags=["vip", "oslo"]))
    second = service.create(business_data(name="Two", tags=["oslo", "bergen", "oslo", " vip "]))

    assert db_session.query(Tag).count() == 3
    assert first.tag_names == ["oslo", "vip"]
    assert second.tag_names == ["bergen", "oslo", "vip"]


def test_add_and_remove_tags(db_session, business_data):
    service = BusinessService(db=db_session)
    business = service.create(business_data(tags=["vip"]))

    updated = service.add_tags(business.id, ["vip", "partner"])
    assert updated.tag_names == ["partner", "vip"]

    updated = service.remove_tag(business.id, "vip")
    assert updated.tag_names == ["partner"]
    assert db_session.query(Tag).filter(Tag.name == "vip").count() == 1


def test_remove_unknown_tag_raises(db_session, business_data):
    service = BusinessService(db=db_session)
    business = service.create(business_data())

    with pytest.raises(TagNotFoundError, match="Tag ghost not found"):
        service.remove_tag(business.id, "ghost")


def test_create_requires_email(db_session):
    service = BusinessService(db=db_session)
    with pytest.raises(ValidationError):
        service.create({"name": "No Mail", "phone": "123"})


def test_update_rejects_unknown_fields(db_session, business_data):
    service = BusinessService(db=db_session)
    business = service.create(business_data())
    with pytest.raises(ValidationError):
        service.update(business.id, {"workspace_id": "other"})


def test_workspace_scope_hides_other_workspaces(db_session, workspace_a, workspace_b, business_data):
    owner = BusinessService(db=db_session, workspace_id=workspace_a.id)
    business = owner.create(business_data())
    outsider = BusinessService(db=db_session, workspace_id=workspace_b.id)

    assert business.workspace_id == workspace_a.id
    assert outsider.get_by_id(business.id) is None
    assert outsider.get_all() == []
    with pytest.raises(NotFoundError):
        outsider.update(business.id, {"name": "Hijacked"})
    with pytest.raises(NotFoundError):
        outsider.delete(business.id)

    assert BusinessService(db=db_session).get_by_id(business.id) is not None


def test_convert_to_customer_applies_details(db_session, business_data):
    service = BusinessService(db=db_session)
    lead = service.create(business_data(stage="qualified", status="lead"))

    customer = service.convert_to_customer(lead.id, {"bilag_count": 12, "city": "Oslo"})

    assert customer.stage == CustomerStage.CUSTOMER
    assert customer.status == BusinessStatus.ACTIVE
    assert customer.bilag_count == 12
    assert customer.city == "Oslo"


def test_update_stage_rejects_unknown_stage(db_session, business_data):
    service = BusinessService(db=db_session)
    business = service.create(business_data())
    with pytest.raises(ValidationError):
        service.update_stage(business.id, "won")


def test_delete_cascades_contacts(db_session, business_data):
    service = BusinessService(db=db_session)
    business = service.create(business_data())
    db_session.add(Contact(business_id=business.id, name="Ola"))
    db_session.commit()

    service.delete(business.id)

    assert db_session.query(Business).count() == 0
    assert db_session.query(Contact).count() == 0


def test_delete_without_cascade_refuses_when_contacts_exist(db_session, business_data):
    service = BusinessService(db=db_session)
    business = service.create(business_data())
    db_session.add(Contact(business_id=business.id, name="Ola"))
    db_session.commit()

    with pytest.raises(ValidationError):
        service.delete(business.id, cascade_contacts=False)
    assert db_session.query(Business).count() == 1


def test_contacts_listed_primary_first(db_session, business_data):
    service = BusinessService(db=db_session)
    business = service.create(business_data())
    db_session.add_all(
        [
            Contact(business_id=business.id, name="Anne", is_primary=False),
            Contact(business_id=business.id, name="Per", is_primary=True),
        ]
    )
    db_session.commit()

    assert [contact.name for contact in service.get_contacts(business.id)] == ["Per", "Anne"]


def test_search_is_case_insensitive_and_limited(db_session, business_data):
    service = BusinessService(db=db_session)
    for index in range(12):
        service.create(business_data(name=f"Fjord Consulting {index:02d}"))
    service.create(business_data(name="Other", email="hei@annet.no"))

    assert service.search("") == []
    assert service.search("   ") == []
    results = service.search("fjord")
    assert len(results) == 10
    assert all("Fjord" in business.name for business in results)
    assert [business.name for business in service.search("ANNET")] == ["Other"]


def test_search_matches_website(db_session, business_data):
    service = BusinessService(db=db_session)
    target = service.create(business_data(name="Fjell AS", website="https://fjelltopp.no"))
    service.create(business_data(name="Dal AS", website="https://dal.no"))

    assert [business.id for business in service.search("FjellTopp")] == [target.id]


def test_search_treats_wildcards_literally(db_session, business_data):
    service = BusinessService(db=db_session)
    service.create(business_data(name="Plain"))
    assert service.search("%") == []


def test_send_sms_is_queued_and_listed(db_session, make_user, business_data):
    user = make_user()
    service = BusinessService(db=db_session)
    business = service.create(business_data(stage="customer"))

    message = service.send_sms(business.id, "Hei fra oss", user.id)

    assert message.status == SmsStatus.QUEUED
    assert message.to_number == business.phone
    assert [sms.id for sms in service.get_sms_history(business.id)] == [message.id]


def test_send_sms_rejects_empty_content(db_session, make_user, business_data):
    user = make_user()
    service = BusinessService(db=db_session)
    business = service.create(business_data())
    with pytest.raises(ValidationError):
        service.send_sms(business.id, "", user.id)


@pytest.fixture
def business_with_history(db_session, make_user, business_data):
    user = make_user()
    business = BusinessService(db=db_session).create(business_data(stage="customer"))
    contact = Contact(business_id=business.id, name="Kari", is_primary=True)
    db_session.add(contact)
    db_session.flush()
    now = utcnow()
    db_session.add_all(
        [
            Activity(
                business_id=business.id,
                contact_id=contact.id,
                user_id=user.id,
                type=ActivityType.CALL,
                description="Intro call",
                date=now - timedelta(days=3),
            ),
            Activity(
                business_id=business.id,
                user_id=user.id,
                type=ActivityType.MEETING,
                description="Follow-up",
                date=now - timedelta(days=1),
            ),
            Offer(
                business_id=business.id,
                title="Regnskap 2025",
                total_amount=1200,
                created_at=now - timedelta(days=10),
                items=[OfferItem(description="Bilag", quantity=12, unit_price=100, total=1200)],
            ),
            Offer(
                business_id=business.id,
                contact_id=contact.id,
                title="Lønn 2026",
                total_amount=500,
                created_at=now - timedelta(days=2),
                items=[
                    OfferItem(description="Lønnskjøring", quantity=1, unit_price=400, total=400),
                    OfferItem(description="A-melding", quantity=1, unit_price=100, total=100),
                ],
            ),
        ]
    )
    db_session.commit()
    return business


def test_get_by_id_loads_related_records(db_session, business_with_history):
    business_id = business_with_history.id
    db_session.expunge_all()

    business = BusinessService(db=db_session).get_by_id(business_id)

    unloaded = inspect(business).unloaded
    assert not {"contacts", "activities", "offers", "tags"} & unloaded
    assert [contact.name for contact in business.contacts] == ["Kari"]
    assert [activity.description for activity in business.activities] == ["Follow-up", "Intro call"]
    assert [offer.title for offer in business.offers] == ["Lønn 2026", "Regnskap 2025"]
    newest_offer = business.offers[0]
    assert "items" not in inspect(newest_offer).unloaded
    assert sorted(item.description for item in newest_offer.items) == ["A-melding", "Lønnskjøring"]


def test_get_activities_newest_first_with_contact(db_session, business_with_history):
    activities = BusinessService(db=db_session).get_activities(business_with_history.id)

    assert [activity.description for activity in activities] == ["Follow-up", "Intro call"]
    assert activities[1].contact.name == "Kari"
    assert activities[0].contact is None


def test_get_offers_newest_first_with_items(db_session, business_with_history):
    offers = BusinessService(db=db_session).get_offers(business_with_history.id)

    assert [offer.title for offer in offers] == ["Lønn 2026", "Regnskap 2025"]
    assert [len(offer.items) for offer in offers] == [2, 1]
    assert offers[0].contact.name == "Kari"


def test_history_of_other_workspace_is_not_found(db_session, workspace_b, business_with_history):
    outsider = BusinessService(db=db_session, workspace_id=workspace_b.id)

    with pytest.raises(NotFoundError):
        outsider.get_activities(business_with_history.id)
    with pytest.raises(NotFoundError):
        outsider.get_offers(business_with_history.id)


def test_tag_created_concurrently_is_reused(db_session, business_data, monkeypatch):
    db_session.add(Tag(name="oslo"))
    db_session.commit()
    service = BusinessService(db=db_session)
    real_lookup = service._existing_tags
    lookups = []

    def _stale_then_real(names):
        lookups.append(names)
        return {} if len(lookups) == 1 else real_lookup(names)

    monkeypatch.setattr(service, "_existing_tags", _stale_then_real)

    business = service.create(business_data(tags=["oslo", "vip"]))

    assert len(lookups) == 2
    assert business.tag_names == ["oslo", "vip"]
    assert db_session.query(Tag).filter(Tag.name == "oslo").count() == 1
