"""Job application actions."""

from __future__ import annotations

from typing import Any

from vekstloop.actions.base import ActionContext, action
from vekstloop.core.exceptions import NotFoundError
from vekstloop.schemas.applications import NoteRequest
from vekstloop.services.job_application_service import JobApplicationService
from vekstloop.utils.validators import parse_payload


@action("Failed to fetch applications")
def get_applications(ctx: ActionContext, status: str | None = None):
    service = JobApplicationService(ctx.db)
    if status:
        return service.get_by_status(status)
    return service.get_all()


@action("Failed to fetch application details")
def get_application_by_id(ctx: ActionContext, application_id: str):
    application = JobApplicationService(ctx.db).get_by_id(application_id)
    if application is None:
        raise NotFoundError("Application not found")
    return application


@action("Failed to create application", revalidate=("/applications",))
def create_application(ctx: ActionContext, data: dict[str, Any]):
    return JobApplicationService(ctx.db).create(data)


@action(
    "Failed to update application status",
    revalidate=("/applications/{application_id}", "/applications"),
)
def update_application_status(ctx: ActionContext, application_id: str, status: str):
    return JobApplicationService(ctx.db).update_status(application_id, status)


@action("Failed to add activity", revalidate=("/applications/{application_id}",))
def add_application_activity(ctx: ActionContext, application_id: str, data: dict[str, Any]):
    return JobApplicationService(ctx.db).add_activity(application_id, data, user_id=ctx.user_id)


@action("Failed to search applications")
def search_applications(ctx: ActionContext, term: str):
    return JobApplicationService(ctx.db).search(term)


@action("Failed to add note", revalidate=("/applications/{application_id}",))
def add_application_note(ctx: ActionContext, application_id: str, note: str):
    payload = parse_payload(NoteRequest, {"note": note})
    return JobApplicationService(ctx.db).update(application_id, {"notes": payload.note})


@action(
    "Failed to update application",
    revalidate=("/applications/{application_id}", "/applications"),
)
def update_application(ctx: ActionContext, application_id: str, data: dict[str, Any]):
    return JobApplicationService(ctx.db).update(application_id, data)


@action("Failed to delete application", revalidate=("/applications",))
def delete_application(ctx: ActionContext, application_id: str):
    return JobApplicationService(ctx.db).delete(application_id)
