"""Dependency providers for API handlers."""

from __future__ import annotations

from collections.abc import Generator

from fastapi import Request
from sqlalchemy.orm import Session

from vekstloop.auth.session import RequestCredentials
from vekstloop.database.db import get_db


def get_db_session() -> Generator[Session, None, None]:
    """Yield SQLAlchemy session for dependency injection."""
    yield from get_db()


def get_credentials(request: Request) -> RequestCredentials:
    """Capture the cookie and header material a session is resolved from."""
    return RequestCredentials(cookies=dict(request.cookies), headers=dict(request.headers))
