"""Job application endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from vekstloop.actions import applications as actions
from vekstloop.auth.session import RequestCredentials
from vekstloop.core.dependencies import get_credentials, get_db_session
from vekstloop.models.enums import JobApplicationStatus
from vekstloop.schemas.activities import ActivityCreateRequest, ActivityResponse
from vekstloop.schemas.applications import (
    JobApplicationCreateRequest,
    JobApplicationDetailResponse,
    JobApplicationResponse,
    JobApplicationUpdateRequest,
    NoteRequest,
    StatusUpdateRequest,
)
from vekstloop.schemas.common import APIEnvelope

router = APIRouter(prefix="/applications", tags=["applications"])


@router.get("", response_model=list[JobApplicationResponse])
def list_applications(
    status_filter: JobApplicationStatus | None = Query(default=None, alias="status"),
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.get_applications(db, credentials, status_filter.value if status_filter else None)


@router.post("", response_model=JobApplicationResponse, status_code=status.HTTP_201_CREATED)
def create_application(
    payload: JobApplicationCreateRequest,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.create_application(db, credentials, payload.model_dump(exclude_unset=True))


@router.get("/search", response_model=list[JobApplicationResponse])
def search_applications(
    q: str = Query(default=""),
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.search_applications(db, credentials, q)


@router.get("/{application_id}", response_model=JobApplicationDetailResponse)
def get_application(
    application_id: str,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.get_application_by_id(db, credentials, application_id)


@router.patch("/{application_id}", response_model=JobApplicationResponse)
def update_application(
    application_id: str,
    payload: JobApplicationUpdateRequest,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.update_application(db, credentials, application_id, payload.model_dump(exclude_unset=True))


@router.delete("/{application_id}", response_model=APIEnvelope)
def delete_application(
    application_id: str,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    actions.delete_application(db, credentials, application_id)
    return APIEnvelope(message="Application deleted")


@router.put("/{application_id}/status", response_model=JobApplicationResponse)
def update_status(
    application_id: str,
    payload: StatusUpdateRequest,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.update_application_status(db, credentials, application_id, payload.status.value)


@router.post(
    "/{application_id}/activities",
    response_model=ActivityResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_activity(
    application_id: str,
    payload: ActivityCreateRequest,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.add_application_activity(db, credentials, application_id, payload.model_dump(exclude_unset=True))


@router.post("/{application_id}/notes", response_model=JobApplicationResponse)
def add_note(
    application_id: str,
    payload: NoteRequest,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.add_application_note(db, credentials, application_id, payload.note)
