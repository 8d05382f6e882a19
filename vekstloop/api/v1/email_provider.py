"""Email provider linkage and outbound email endpoints for API v1."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from vekstloop.actions import email as email_actions
from vekstloop.actions import email_provider as actions
from vekstloop.auth.session import RequestCredentials
from vekstloop.core.dependencies import get_credentials, get_db_session
from vekstloop.schemas.email_provider import (
    ProviderResultResponse,
    ProviderStatusResponse,
    SaveProviderRequest,
    SendEmailRequest,
)

router = APIRouter(tags=["email"])


@router.get("/email-provider", response_model=ProviderStatusResponse)
def provider_status(
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return ProviderStatusResponse(**asdict(actions.get_email_provider_status(db, credentials)))


@router.post("/email-provider", response_model=ProviderResultResponse)
def save_provider(
    payload: SaveProviderRequest,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return ProviderResultResponse(**asdict(actions.save_email_provider(db, credentials, payload.model_dump())))


@router.delete("/email-provider", response_model=ProviderResultResponse)
def disconnect_provider(
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return ProviderResultResponse(**asdict(actions.disconnect_email_provider(db, credentials)))


@router.post("/email-provider/google/link", response_model=ProviderResultResponse)
def link_google(
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return ProviderResultResponse(**asdict(actions.fetch_google_token_info(db, credentials)))


@router.post("/email-provider/microsoft/link", response_model=ProviderResultResponse)
def link_microsoft(
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
):
    return ProviderResultResponse(**asdict(actions.fetch_microsoft_token_info(db, credentials)))


@router.post("/email/send", status_code=status.HTTP_202_ACCEPTED)
def send_email(
    payload: SendEmailRequest,
    db: Session = Depends(get_db_session),
    credentials: RequestCredentials = Depends(get_credentials),
) -> dict:
    result = email_actions.send_email(
        db,
        credentials,
        payload.to,
        payload.subject,
        payload.body,
        payload.cc,
        payload.bcc,
    )
    return {"status": "sent", "result": result}
