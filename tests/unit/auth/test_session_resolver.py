from __future__ import annotations

import dataclasses
from datetime import timedelta

import pytest

import vekstloop.auth.session as session_module
from vekstloop.auth.session import (
    RequestCredentials,
    SessionContext,
    ensure_system_user,
    extract_session_token,
    resolve_session,
)
from vekstloop.auth.workspace_context import WorkspaceContext, enforce_workspace_match, from_session
from vekstloop.core.config import get_config
from vekstloop.core.exceptions import AuthenticationError, NotFoundError
from vekstloop.models import User, UserKind


def test_cookie_wins_over_bearer_header():
    cfg = get_config()
    creds = RequestCredentials(
        cookies={cfg.SESSION_COOKIE_NAME: "from-cookie"},
        headers={"Authorization": "Bearer from-header"},
    )

    assert extract_session_token(creds, cfg) == "from-cookie"


@pytest.mark.parametrize(
    "header",
    ["", "Bearer", "Bearer   ", "Basic abc", "token abc"],
)
def test_malformed_authorization_header_yields_no_token(header):
    assert extract_session_token(RequestCredentials(headers={"Authorization": header})) is None


def test_resolves_user_and_workspace(db_session, user_a, creds_a):
    session = resolve_session(db_session, creds_a)

    assert session == SessionContext(user_id=user_a.id, workspace_id=user_a.workspace_id)


def test_unknown_token_is_rejected(db_session):
    with pytest.raises(AuthenticationError, match="Not authenticated"):
        resolve_session(db_session, RequestCredentials.from_token("nope"))


def test_missing_credentials_are_rejected(db_session):
    with pytest.raises(AuthenticationError):
        resolve_session(db_session, None)


def test_expired_session_is_rejected(db_session, user_a, login):
    creds = login(user_a, expires_in=timedelta(minutes=-1))

    with pytest.raises(AuthenticationError, match="Session expired"):
        resolve_session(db_session, creds)


def test_workspace_mode_requires_workspace():
    cfg = dataclasses.replace(get_config(), SCOPE_MODE="workspace")

    with pytest.raises(AuthenticationError):
        from_session(SessionContext(user_id="u1", workspace_id=None), cfg)


def test_global_mode_clears_workspace():
    cfg = dataclasses.replace(get_config(), SCOPE_MODE="global")

    context = from_session(SessionContext(user_id="u1", workspace_id="w1"), cfg)

    assert context.workspace_id is None
    assert context.is_global


def test_workspace_mismatch_reads_as_not_found():
    context = WorkspaceContext(user_id="u1", workspace_id="w1", scope_mode="workspace")

    enforce_workspace_match("w1", context)
    with pytest.raises(NotFoundError):
        enforce_workspace_match("w2", context)
    enforce_workspace_match("w2", WorkspaceContext(user_id="u1", workspace_id=None, scope_mode="global"))


def test_system_user_is_created_once(db_session):
    first = ensure_system_user(db_session)
    db_session.commit()
    second = ensure_system_user(db_session)

    assert first.id == second.id
    assert db_session.query(User).filter(User.kind == UserKind.SYSTEM).count() == 1


def test_system_user_rereads_after_losing_insert_race(db_session, monkeypatch):
    winner = ensure_system_user(db_session)
    db_session.commit()
    lookups = []
    real_lookup = session_module._system_user

    def _stale_then_real(db):
        lookups.append(db)
        return None if len(lookups) == 1 else real_lookup(db)

    monkeypatch.setattr(session_module, "_system_user", _stale_then_real)

    user = ensure_system_user(db_session)

    assert user.id == winner.id
    assert len(lookups) == 2
    assert db_session.query(User).filter(User.kind == UserKind.SYSTEM).count() == 1
