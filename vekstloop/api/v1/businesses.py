"""Business directory endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from vekstloop.actions import businesses as actions
from vekstloop.api.v1._errors import not_found
from vekstloop.auth.session import RequestCredentials
from vekstloop.core.dependencies import get_credentials, get_db_session
from vekstloop.schemas.activities import ActivityResponse
from vekstloop.schemas.businesses import (
    BusinessDetailResponse,
    BusinessResponse,
    BusinessUpdateRequest,
    OfferResponse,
    TagsRequest,
)
from vekstloop.schemas.common import APIEnvelope
from vekstloop.schemas.contacts import ContactResponse

router = APIRouter(prefix="/businesses", tags=["businesses"])


@router.get("", response_model=list[BusinessResponse])
def list_businesses(
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.get_businesses(db, credentials)


@router.get("/search", response_model=list[BusinessResponse])
def search_businesses(
    q: str = Query(default=""),
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.search_businesses(db, credentials, q)


@router.get("/{business_id}", response_model=BusinessDetailResponse)
def get_business(
    business_id: str,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    business = actions.get_business_by_id(db, credentials, business_id)
    if business is None:
        raise not_found("Business not found")
    return business


@router.patch("/{business_id}", response_model=BusinessResponse)
def update_business(
    business_id: str,
    payload: BusinessUpdateRequest,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.update_business(db, credentials, business_id, payload.model_dump(exclude_unset=True))


@router.delete("/{business_id}", response_model=APIEnvelope)
def delete_business(
    business_id: str,
    cascade_contacts: bool = Query(default=True),
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    actions.delete_business(db, credentials, business_id, cascade_contacts)
    return APIEnvelope(message="Business deleted")


@router.get("/{business_id}/contacts", response_model=list[ContactResponse])
def business_contacts(
    business_id: str,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.get_business_contacts(db, credentials, business_id)


@router.get("/{business_id}/primary-contact", response_model=ContactResponse | None)
def primary_contact(
    business_id: str,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.get_primary_contact(db, credentials, business_id)


@router.get("/{business_id}/activities", response_model=list[ActivityResponse])
def business_activities(
    business_id: str,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.get_business_activities(db, credentials, business_id)


@router.get("/{business_id}/offers", response_model=list[OfferResponse])
def business_offers(
    business_id: str,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.get_business_offers(db, credentials, business_id)


@router.post("/{business_id}/tags", response_model=BusinessResponse)
def add_tags(
    business_id: str,
    payload: TagsRequest,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.add_business_tags(db, credentials, business_id, payload.tags)


@router.delete("/{business_id}/tags/{tag_name}", response_model=BusinessResponse)
def remove_tag(
    business_id: str,
    tag_name: str,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.remove_business_tag(db, credentials, business_id, tag_name)
