"""Session resolution from cookie or bearer credentials."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vekstloop.core.config import Config, get_config
from vekstloop.core.exceptions import AuthenticationError
from vekstloop.models.base import as_utc, utcnow
from vekstloop.models.enums import UserKind
from vekstloop.models.user import User, UserSession

logger = logging.getLogger(__name__)

SYSTEM_USER_EMAIL = "system@vekstloop.local"
SYSTEM_USER_NAME = "System"


@dataclass(frozen=True)
class RequestCredentials:
    """Raw request material a session can be resolved from."""

    cookies: Mapping[str, str] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_token(cls, token: str) -> "RequestCredentials":
        return cls(headers={"authorization": f"Bearer {token}"})


@dataclass(frozen=True)
class SessionContext:
    user_id: str
    workspace_id: str | None


def _bearer_token(headers: Mapping[str, str]) -> str | None:
    authorization = None
    for key, value in headers.items():
        if key.lower() == "authorization":
            authorization = value
            break
    if authorization is None or not authorization.strip():
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1].strip() or None


def extract_session_token(credentials: RequestCredentials, settings: Config | None = None) -> str | None:
    """Cookie first, then ``Authorization: Bearer``."""
    cfg = settings or get_config()
    token = credentials.cookies.get(cfg.SESSION_COOKIE_NAME)
    if token and token.strip():
        return token.strip()
    return _bearer_token(credentials.headers)


def resolve_session(
    db: Session,
    credentials: RequestCredentials | None,
    settings: Config | None = None,
) -> SessionContext:
    """Resolve the caller's session or raise ``AuthenticationError``."""
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    token = extract_session_token(credentials, settings)
    if token is None:
        raise AuthenticationError("Not authenticated")

    row = db.execute(select(UserSession).where(UserSession.token == token)).scalar_one_or_none()
    if row is None:
        raise AuthenticationError("Not authenticated")
    if as_utc(row.expires_at) <= utcnow():
        logger.info(
            "session.expired",
            extra={"event": "session.expired", "user_id": row.user_id},
        )
        raise AuthenticationError("Session expired")

    return SessionContext(user_id=row.user_id, workspace_id=row.user.workspace_id)


def _system_user(db: Session) -> User | None:
    return db.execute(select(User).where(User.kind == UserKind.SYSTEM)).scalars().first()


def ensure_system_user(db: Session) -> User:
    """Find or create the reserved actor recorded on automatic activities.

    Only flushes; the caller's transaction decides whether it is kept. Losing
    the insert race rolls the session back, so call this before staging other
    changes.
    """
    user = _system_user(db)
    if user is not None:
        return user

    user = User(email=SYSTEM_USER_EMAIL, name=SYSTEM_USER_NAME, kind=UserKind.SYSTEM)
    db.add(user)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        user = _system_user(db)
        if user is None:
            raise
        return user
    logger.info("system_user.created", extra={"event": "system_user.created", "user_id": user.id})
    return user
