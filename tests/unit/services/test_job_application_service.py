from __future__ import annotations

from types import SimpleNamespace

import pytest
from sqlalchemy.exc import IntegrityError

import vekstloop.services.job_application_service as job_application_module
from vekstloop.core.exceptions import NotFoundError, ValidationError
from vekstloop.models import Activity, ActivityType, JobApplication, JobApplicationSkill, JobApplicationStatus
from vekstloop.services.job_application_service import STATUS_LABELS, JobApplicationService, status_label


def test_status_labels_cover_every_status():
    assert set(STATUS_LABELS) == set(JobApplicationStatus)
    assert status_label("hired") == "Ansatt"
    assert status_label(JobApplicationStatus.REVIEWING) == "Under vurdering"
    assert status_label("offer_extended") == "Tilbud sendt"
    assert status_label("rejected") == "Avslått"


def test_status_label_rejects_unknown_status():
    with pytest.raises(ValidationError):
        status_label("ghosted")


def test_update_status_records_one_system_activity(db_session, application_data):
    service = JobApplicationService(db=db_session)
    application = service.create(application_data())

    updated = service.update_status(application.id, "hired")

    assert updated.status == JobApplicationStatus.HIRED
    activities = service.get_activities(application.id)
    assert len(activities) == 1
    activity = activities[0]
    assert activity.type == ActivityType.NOTE
    assert activity.completed is True
    assert activity.description == "Status endret til Ansatt"
    assert activity.actor.is_system


def test_update_status_is_atomic(db_session, application_data, monkeypatch):
    service = JobApplicationService(db=db_session)
    application = service.create(application_data())
    monkeypatch.setattr(
        job_application_module,
        "ensure_system_user",
        lambda db: SimpleNamespace(id="missing-user"),
    )

    with pytest.raises(IntegrityError):
        service.update_status(application.id, "rejected")

    reloaded = db_session.get(JobApplication, application.id)
    assert reloaded.status == JobApplicationStatus.NEW
    assert db_session.query(Activity).count() == 0


def test_update_status_unknown_application(db_session):
    with pytest.raises(NotFoundError):
        JobApplicationService(db=db_session).update_status("missing", "hired")


def test_search_matches_fields_and_exact_skills(db_session, application_data):
    service = JobApplicationService(db=db_session)
    by_position = service.create(application_data(email="a@example.com", desired_position="Senior Engineer"))
    by_skill = service.create(application_data(email="b@example.com", skills=["engineer", "python"]))
    service.create(application_data(email="c@example.com", skills=["engineering manager"]))
    service.create(application_data(email="d@example.com", desired_position="Designer"))

    found = {application.id for application in service.search("  Engineer ")}

    assert found == {by_position.id, by_skill.id}


def test_search_by_name_and_education(db_session, application_data):
    service = JobApplicationService(db=db_session)
    target = service.create(application_data(first_name="Ingrid", education="NTNU"))
    service.create(application_data(first_name="Lars", email="lars@example.com"))

    assert [application.id for application in service.search("ntnu")] == [target.id]
    assert [application.id for application in service.search("INGRID")] == [target.id]


def test_skills_are_normalized_and_replaced(db_session, application_data):
    service = JobApplicationService(db=db_session)
    application = service.create(application_data(skills=["Python", "python", " SQL "]))
    assert sorted(application.skills) == ["python", "sql"]

    updated = service.update(application.id, {"skills": ["sql", "go"]})

    assert sorted(updated.skills) == ["go", "sql"]
    assert db_session.query(JobApplicationSkill).count() == 2


def test_get_by_status_orders_newest_first(db_session, application_data):
    service = JobApplicationService(db=db_session)
    older = service.create(application_data(email="old@example.com", status="reviewing"))
    newer = service.create(application_data(email="new@example.com", status="reviewing"))
    service.create(application_data(email="other@example.com"))
    older.application_date = newer.application_date.replace(year=newer.application_date.year - 1)
    db_session.commit()

    assert [application.id for application in service.get_by_status("reviewing")] == [newer.id, older.id]


def test_add_activity_uses_given_actor(db_session, make_user, application_data):
    user = make_user()
    service = JobApplicationService(db=db_session)
    application = service.create(application_data())

    activity = service.add_activity(application.id, {"type": "call", "description": "Phone screen"}, user_id=user.id)

    assert activity.user_id == user.id
    assert activity.job_application_id == application.id


def test_add_activity_unknown_actor(db_session, application_data):
    service = JobApplicationService(db=db_session)
    application = service.create(application_data())
    with pytest.raises(NotFoundError):
        service.add_activity(application.id, {"type": "note", "description": "x"}, user_id="nobody")


def test_add_activity_payload_cannot_choose_actor(db_session, make_user, application_data):
    other = make_user(name="Other")
    service = JobApplicationService(db=db_session)
    application = service.create(application_data())

    with pytest.raises(ValidationError, match="user_id"):
        service.add_activity(application.id, {"type": "note", "description": "x", "user_id": other.id})


def test_add_activity_without_actor_records_system_user(db_session, application_data):
    service = JobApplicationService(db=db_session)
    application = service.create(application_data())

    activity = service.add_activity(application.id, {"type": "note", "description": "Imported"})

    assert activity.actor.is_system


def test_delete_removes_activities(db_session, application_data):
    service = JobApplicationService(db=db_session)
    application = service.create(application_data(skills=["python"]))
    service.update_status(application.id, "reviewing")

    service.delete(application.id)

    assert db_session.query(JobApplication).count() == 0
    assert db_session.query(Activity).count() == 0
    assert db_session.query(JobApplicationSkill).count() == 0
