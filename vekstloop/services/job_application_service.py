"""Job application service with status audit trail."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import selectinload

from vekstloop.auth.session import ensure_system_user
from vekstloop.core.exceptions import NotFoundError
from vekstloop.models.activity import Activity
from vekstloop.models.base import utcnow
from vekstloop.models.enums import ActivityType, JobApplicationStatus
from vekstloop.models.job_application import JobApplication, JobApplicationSkill
from vekstloop.models.user import User
from vekstloop.schemas.activities import ActivityCreateRequest
from vekstloop.schemas.applications import JobApplicationCreateRequest, JobApplicationUpdateRequest
from vekstloop.services.base_service import BaseService
from vekstloop.utils.validators import coerce_enum, parse_payload

logger = logging.getLogger(__name__)

STATUS_LABELS: dict[JobApplicationStatus, str] = {
    JobApplicationStatus.NEW: "Ny",
    JobApplicationStatus.REVIEWING: "Under vurdering",
    JobApplicationStatus.INTERVIEWED: "Intervjuet",
    JobApplicationStatus.OFFER_EXTENDED: "Tilbud sendt",
    JobApplicationStatus.HIRED: "Ansatt",
    JobApplicationStatus.REJECTED: "Avslått",
}


def status_label(status: JobApplicationStatus | str) -> str:
    """Human-readable (Norwegian) label for an application status."""
    return STATUS_LABELS[coerce_enum(JobApplicationStatus, status, "status")]


def _unique(values: list[str]) -> list[str]:
    return list(dict.fromkeys(values))


class JobApplicationService(BaseService):
    """Service for job application CRUD, search and activities."""

    def _require(self, application_id: str) -> JobApplication:
        application = self.db.query(JobApplication).filter(JobApplication.id == application_id).first()
        if application is None:
            raise NotFoundError(f"Job application {application_id} not found")
        return application

    def _resolve_actor(self, user_id: str | None) -> str:
        if user_id is None:
            return ensure_system_user(self.db).id
        if self.db.get(User, user_id) is None:
            raise NotFoundError(f"User {user_id} not found")
        return user_id

    def get_all(self) -> list[JobApplication]:
        return self.db.query(JobApplication).order_by(JobApplication.application_date.desc()).all()

    def get_by_status(self, status: JobApplicationStatus | str) -> list[JobApplication]:
        status = coerce_enum(JobApplicationStatus, status, "status")
        return (
            self.db.query(JobApplication)
            .filter(JobApplication.status == status)
            .order_by(JobApplication.application_date.desc())
            .all()
        )

    def get_by_id(self, application_id: str) -> JobApplication | None:
        return (
            self.db.query(JobApplication)
            .options(selectinload(JobApplication.activities), selectinload(JobApplication.skill_rows))
            .filter(JobApplication.id == application_id)
            .first()
        )

    def create(self, data: dict[str, Any] | JobApplicationCreateRequest) -> JobApplication:
        payload = parse_payload(JobApplicationCreateRequest, data)
        application = JobApplication(**payload.model_dump(exclude={"skills"}))
        application.skills = _unique(payload.skills)
        self.db.add(application)
        self.commit()
        self.db.refresh(application)
        logger.info(
            "job_application.created",
            extra={"event": "job_application.created", "job_application_id": application.id},
        )
        return application

    def update(self, application_id: str, data: dict[str, Any] | JobApplicationUpdateRequest) -> JobApplication:
        payload = parse_payload(JobApplicationUpdateRequest, data)
        application = self._require(application_id)
        changes = payload.model_dump(exclude_unset=True)
        if "skills" in changes:
            # Old rows must be gone before the replacements hit the unique constraint.
            application.skill_rows.clear()
            self.db.flush()
            application.skills = _unique(changes.pop("skills"))
        for field, value in changes.items():
            setattr(application, field, value)
        self.commit()
        self.db.refresh(application)
        return application

    def update_status(self, application_id: str, status: JobApplicationStatus | str) -> JobApplication:
        """Change status and record a note activity in the same transaction."""
        status = coerce_enum(JobApplicationStatus, status, "status")
        application = self._require(application_id)
        actor_id = ensure_system_user(self.db).id
        application.status = status
        self.db.add(
            Activity(
                type=ActivityType.NOTE,
                date=utcnow(),
                description=f"Status endret til {status_label(status)}",
                completed=True,
                job_application_id=application.id,
                user_id=actor_id,
            )
        )
        self.commit()
        self.db.refresh(application)
        logger.info(
            "job_application.status_changed",
            extra={
                "event": "job_application.status_changed",
                "job_application_id": application.id,
                "status": status.value,
            },
        )
        return application

    def delete(self, application_id: str) -> JobApplication:
        application = self._require(application_id)
        self.db.delete(application)
        self.commit()
        return application

    def search(self, term: str | None) -> list[JobApplication]:
        needle = (term or "").lower().strip()
        skill_match = (
            self.db.query(JobApplicationSkill.job_application_id)
            .filter(JobApplicationSkill.name == needle)
        )
        return (
            self.db.query(JobApplication)
            .filter(
                or_(
                    JobApplication.first_name.icontains(needle, autoescape=True),
                    JobApplication.last_name.icontains(needle, autoescape=True),
                    JobApplication.email.icontains(needle, autoescape=True),
                    JobApplication.desired_position.icontains(needle, autoescape=True),
                    JobApplication.current_employer.icontains(needle, autoescape=True),
                    JobApplication.education.icontains(needle, autoescape=True),
                    JobApplication.id.in_(skill_match),
                )
            )
            .order_by(JobApplication.application_date.desc())
            .all()
        )

    def add_activity(
        self,
        application_id: str,
        data: dict[str, Any] | ActivityCreateRequest,
        user_id: str | None = None,
    ) -> Activity:
        payload = parse_payload(ActivityCreateRequest, data)
        application = self._require(application_id)
        activity = Activity(
            **payload.model_dump(),
            job_application_id=application.id,
            user_id=self._resolve_actor(user_id),
        )
        self.db.add(activity)
        self.commit()
        self.db.refresh(activity)
        return activity

    def get_activities(self, application_id: str) -> list[Activity]:
        application = self._require(application_id)
        return (
            self.db.query(Activity)
            .filter(Activity.job_application_id == application.id)
            .order_by(Activity.date.desc())
            .all()
        )
