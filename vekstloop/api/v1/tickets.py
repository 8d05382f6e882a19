"""Support ticket endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from vekstloop.actions import tickets as actions
from vekstloop.api.v1._errors import not_found
from vekstloop.auth.session import RequestCredentials
from vekstloop.core.dependencies import get_credentials, get_db_session
from vekstloop.models.enums import TicketStatus
from vekstloop.schemas.common import APIEnvelope
from vekstloop.schemas.tickets import (
    BusinessSearchItem,
    CommentCreateRequest,
    TicketCommentResponse,
    TicketCreatedResponse,
    TicketCreateRequest,
    TicketDetailResponse,
    TicketResponse,
    TicketUpdateRequest,
)

router = APIRouter(prefix="/tickets", tags=["tickets"])


@router.get("", response_model=list[TicketResponse])
def list_tickets(
    status_filter: TicketStatus | None = Query(default=None, alias="status"),
    business_id: str | None = Query(default=None),
    assignee_id: str | None = Query(default=None),
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.get_tickets(
        db,
        credentials,
        status_filter.value if status_filter else None,
        business_id,
        assignee_id,
    )


@router.post("", response_model=TicketCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_ticket(
    payload: TicketCreateRequest,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    created = actions.create_ticket(db, credentials, payload.model_dump(exclude_unset=True))
    return TicketCreatedResponse(ticket_id=created.ticket.id, requires_review=created.requires_review)


@router.get("/business-search", response_model=list[BusinessSearchItem])
def search_businesses(
    q: str = Query(default=""),
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.search_ticket_businesses(db, credentials, q)


@router.get("/{ticket_id}", response_model=TicketDetailResponse)
def get_ticket(
    ticket_id: str,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    ticket = actions.get_ticket(db, credentials, ticket_id)
    if ticket is None:
        raise not_found("Ticket not found")
    return ticket


@router.patch("/{ticket_id}", response_model=TicketResponse)
def update_ticket(
    ticket_id: str,
    payload: TicketUpdateRequest,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.update_ticket(db, credentials, ticket_id, payload.model_dump(exclude_unset=True))


@router.post(
    "/{ticket_id}/comments",
    response_model=TicketCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_comment(
    ticket_id: str,
    payload: CommentCreateRequest,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.add_ticket_comment(db, credentials, ticket_id, payload.model_dump(exclude_unset=True))


@router.delete("/{ticket_id}", response_model=APIEnvelope)
def delete_ticket(
    ticket_id: str,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    actions.delete_ticket(db, credentials, ticket_id)
    return APIEnvelope(message="Ticket deleted")
