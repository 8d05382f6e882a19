"""OAuth token bridge entry points.

These never raise: every outcome, including a missing session, comes back
as a ``ProviderResult`` (or a disconnected status).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from vekstloop.auth.session import RequestCredentials, SessionContext, resolve_session
from vekstloop.core.config import get_config
from vekstloop.core.exceptions import AuthenticationError, VekstloopException
from vekstloop.core.logging import LogContext, build_log_event
from vekstloop.models.enums import EmailProviderName
from vekstloop.services.email_provider_service import EmailProviderService, ProviderResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderStatus:
    connected: bool
    provider: str | None = None
    email: str | None = None


def _session_or_none(db: Session, credentials: RequestCredentials | None) -> SessionContext | None:
    try:
        return resolve_session(db, credentials, get_config())
    except AuthenticationError:
        return None


def _failed(db: Session, action_name: str, session: SessionContext | None, exc: Exception) -> str:
    db.rollback()
    logger.exception(
        "email_provider.failed",
        extra=build_log_event(
            "email_provider.failed",
            LogContext(user_id=session.user_id if session else None, action=action_name),
            error_type=type(exc).__name__,
        ),
    )
    if isinstance(exc, VekstloopException):
        return str(exc)
    return "Unknown error"


def save_email_provider(db: Session, credentials: RequestCredentials | None, data: dict[str, Any]) -> ProviderResult:
    session = _session_or_none(db, credentials)
    if session is None:
        return ProviderResult.fail("Not authenticated")
    try:
        row = EmailProviderService(db).upsert(session.user_id, data)
    except Exception as exc:
        return ProviderResult.fail(_failed(db, "save_email_provider", session, exc))
    return ProviderResult.ok(row.email)


def disconnect_email_provider(db: Session, credentials: RequestCredentials | None) -> ProviderResult:
    session = _session_or_none(db, credentials)
    if session is None:
        return ProviderResult.fail("No session found")
    try:
        EmailProviderService(db).disconnect(session.user_id)
    except Exception as exc:
        return ProviderResult.fail(_failed(db, "disconnect_email_provider", session, exc))
    return ProviderResult.ok()


def _link(db: Session, credentials: RequestCredentials | None, provider: EmailProviderName) -> ProviderResult:
    session = _session_or_none(db, credentials)
    if session is None:
        return ProviderResult.fail("No session found")
    try:
        return EmailProviderService(db).link_from_account(session.user_id, provider)
    except Exception as exc:
        return ProviderResult.fail(_failed(db, f"fetch_{provider.value}_token_info", session, exc))


def fetch_google_token_info(db: Session, credentials: RequestCredentials | None) -> ProviderResult:
    return _link(db, credentials, EmailProviderName.GOOGLE)


def fetch_microsoft_token_info(db: Session, credentials: RequestCredentials | None) -> ProviderResult:
    return _link(db, credentials, EmailProviderName.MICROSOFT)


def get_email_provider_status(db: Session, credentials: RequestCredentials | None) -> ProviderStatus:
    session = _session_or_none(db, credentials)
    if session is None:
        return ProviderStatus(connected=False)
    row = EmailProviderService(db).get_for_user(session.user_id)
    if row is None:
        return ProviderStatus(connected=False)
    return ProviderStatus(connected=True, provider=row.provider, email=row.email)
