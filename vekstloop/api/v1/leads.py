"""Lead endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from vekstloop.actions import customers as customer_actions
from vekstloop.actions import leads as actions
from vekstloop.api.v1._errors import not_found
from vekstloop.auth.session import RequestCredentials
from vekstloop.core.dependencies import get_credentials, get_db_session
from vekstloop.schemas.businesses import (
    BusinessCreateRequest,
    BusinessDetailResponse,
    BusinessResponse,
    BusinessUpdateRequest,
    StageUpdateRequest,
)

router = APIRouter(prefix="/leads", tags=["leads"])


@router.get("", response_model=list[BusinessResponse])
def list_leads(
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.get_leads(db, credentials)


@router.post("", response_model=BusinessResponse, status_code=status.HTTP_201_CREATED)
def create_lead(
    payload: BusinessCreateRequest,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.create_lead(db, credentials, payload.model_dump(exclude_unset=True))


@router.get("/{lead_id}", response_model=BusinessDetailResponse)
def get_lead(
    lead_id: str,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    lead = actions.get_lead_by_id(db, credentials, lead_id)
    if lead is None:
        raise not_found("Lead not found")
    return lead


@router.put("/{lead_id}/stage", response_model=BusinessResponse)
def update_stage(
    lead_id: str,
    payload: StageUpdateRequest,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.update_lead_status(db, credentials, lead_id, payload.stage.value)


@router.post("/{lead_id}/convert", response_model=BusinessResponse)
def convert_lead(
    lead_id: str,
    payload: BusinessUpdateRequest | None = None,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    data = payload.model_dump(exclude_unset=True) if payload else None
    return customer_actions.convert_lead_to_customer(db, credentials, lead_id, data)
