"""Identifier generation helpers."""

from __future__ import annotations

import secrets
import uuid


def new_id() -> str:
    """Create a UUID4-based opaque row identifier."""
    return str(uuid.uuid4())


def new_session_token() -> str:
    """Create an unguessable session token."""
    return secrets.token_urlsafe(32)
