from __future__ import annotations

import dataclasses
from datetime import timedelta

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import vekstloop.actions.base as action_base
from vekstloop.actions.revalidation import register_listener, unregister_listener
from vekstloop.auth.session import RequestCredentials
from vekstloop.core.config import get_config
from vekstloop.database.db import build_engine
from vekstloop.models import Base, User, UserSession, Workspace
from vekstloop.models.base import utcnow
from vekstloop.utils.ids import new_id, new_session_token


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def make_workspace(db_session):
    def _make(name: str = "Workspace") -> Workspace:
        workspace = Workspace(name=name)
        db_session.add(workspace)
        db_session.commit()
        return workspace

    return _make


@pytest.fixture
def make_user(db_session):
    def _make(workspace: Workspace | None = None, name: str = "Test User") -> User:
        user = User(
            email=f"{new_id()}@example.com",
            name=name,
            workspace_id=workspace.id if workspace else None,
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make


@pytest.fixture
def login(db_session):
    def _login(user: User, expires_in: timedelta = timedelta(hours=1)) -> RequestCredentials:
        token = new_session_token()
        db_session.add(UserSession(token=token, user_id=user.id, expires_at=utcnow() + expires_in))
        db_session.commit()
        return RequestCredentials.from_token(token)

    return _login


@pytest.fixture
def workspace_a(make_workspace):
    return make_workspace("Workspace A")


@pytest.fixture
def workspace_b(make_workspace):
    return make_workspace("Workspace B")


@pytest.fixture
def user_a(make_user, workspace_a):
    return make_user(workspace_a, name="Alice")


@pytest.fixture
def user_b(make_user, workspace_b):
    return make_user(workspace_b, name="Bob")


@pytest.fixture
def creds_a(login, user_a):
    return login(user_a)


@pytest.fixture
def creds_b(login, user_b):
    return login(user_b)


@pytest.fixture
def scope_mode(monkeypatch):
    """Switch the scope mode seen by the action decorator."""

    def _set(mode: str) -> None:
        cfg = dataclasses.replace(get_config(), SCOPE_MODE=mode)
        monkeypatch.setattr(action_base, "get_config", lambda: cfg)

    _set("workspace")
    return _set


@pytest.fixture
def revalidated():
    paths: list[str] = []
    register_listener(paths.append)
    yield paths
    unregister_listener(paths.append)


@pytest.fixture
def business_data():
    def _data(**overrides) -> dict:
        data = {
            "name": "Nordlys AS",
            "email": "post@nordlys.no",
            "phone": "+4712345678",
        }
        data.update(overrides)
        return data

    return _data


@pytest.fixture
def application_data():
    def _data(**overrides) -> dict:
        data = {
            "first_name": "Kari",
            "last_name": "Nordmann",
            "email": "kari@example.com",
            "phone": "+4798765432",
        }
        data.update(overrides)
        return data

    return _data
