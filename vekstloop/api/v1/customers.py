"""Customer endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from vekstloop.actions import customers as actions
from vekstloop.api.v1._errors import not_found
from vekstloop.auth.session import RequestCredentials
from vekstloop.core.dependencies import get_credentials, get_db_session
from vekstloop.schemas.businesses import (
    BusinessDetailResponse,
    BusinessResponse,
    BusinessUpdateRequest,
    SmsMessageResponse,
    SmsSendRequest,
)
from vekstloop.schemas.common import APIEnvelope

router = APIRouter(prefix="/customers", tags=["customers"])


@router.get("", response_model=list[BusinessResponse])
def list_customers(
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.get_customers(db, credentials)


@router.get("/{customer_id}", response_model=BusinessDetailResponse)
def get_customer(
    customer_id: str,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    customer = actions.get_customer_by_id(db, credentials, customer_id)
    if customer is None:
        raise not_found("Customer not found")
    return customer


@router.patch("/{customer_id}", response_model=BusinessResponse)
def update_customer(
    customer_id: str,
    payload: BusinessUpdateRequest,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.update_customer_details(db, credentials, customer_id, payload.model_dump(exclude_unset=True))


@router.delete("/{customer_id}", response_model=APIEnvelope)
def delete_customer(
    customer_id: str,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    actions.delete_customer(db, credentials, customer_id)
    return APIEnvelope(message="Customer deleted")


@router.post("/{customer_id}/sms", response_model=SmsMessageResponse, status_code=status.HTTP_201_CREATED)
def send_sms(
    customer_id: str,
    payload: SmsSendRequest,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.send_sms_to_customer(db, credentials, customer_id, payload.content)


@router.get("/{customer_id}/sms", response_model=list[SmsMessageResponse])
def sms_history(
    customer_id: str,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return actions.get_sms_history(db, credentials, customer_id)
