"""Contact endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from vekstloop.actions import contacts as actions
from vekstloop.api.v1._errors import not_found
from vekstloop.auth.session import RequestCredentials
from vekstloop.core.dependencies import get_credentials, get_db_session
from vekstloop.schemas.contacts import ContactCreateRequest, ContactResponse

router = APIRouter(tags=["contacts"])


@router.get("/contacts", response_model=list[ContactResponse])
def list_contacts(
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.get_contacts(db, credentials)


@router.get("/contacts/{contact_id}", response_model=ContactResponse)
def get_contact(
    contact_id: str,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    contact = actions.get_contact_by_id(db, credentials, contact_id)
    if contact is None:
        raise not_found("Contact not found")
    return contact


@router.post(
    "/businesses/{business_id}/contacts",
    response_model=ContactResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_contact(
    business_id: str,
    payload: ContactCreateRequest,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.create_contact(db, credentials, business_id, payload.model_dump(exclude_unset=True))


@router.put("/contacts/{contact_id}/primary", response_model=ContactResponse)
def set_primary(
    contact_id: str,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.set_primary_contact(db, credentials, contact_id)
