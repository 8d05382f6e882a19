from __future__ import annotations

import pytest

import vekstloop.clients.oauth_providers as oauth_module
from vekstloop.actions import email_provider
from vekstloop.core.exceptions import UpstreamProviderError
from vekstloop.models import Account, EmailProvider


def _save(db_session, creds, **overrides):
    data = {
        "provider": "google",
        "access_token": "access-1",
        "refresh_token": "refresh-1",
        "expires_at": 1_900_000_000,
        "email": "alice@gmail.com",
    }
    data.update(overrides)
    return email_provider.save_email_provider(db_session, creds, data)


@pytest.fixture
def add_account(db_session):
    def _add(user, provider_id: str, access_token: str | None = "account-token") -> Account:
        account = Account(
            user_id=user.id,
            provider_id=provider_id,
            account_id=f"{provider_id}-{user.id}",
            access_token=access_token,
            refresh_token="account-refresh",
        )
        db_session.add(account)
        db_session.commit()
        return account

    return _add


def test_save_twice_keeps_one_row_with_latest_tokens(db_session, creds_a, user_a):
    assert _save(db_session, creds_a).success is True
    result = _save(db_session, creds_a, provider="microsoft", access_token="access-2", email="alice@contoso.com")

    assert result.success is True
    rows = db_session.query(EmailProvider).filter(EmailProvider.user_id == user_a.id).all()
    assert len(rows) == 1
    assert rows[0].provider == "microsoft"
    assert rows[0].access_token == "access-2"
    assert rows[0].email == "alice@contoso.com"


def test_save_without_session():
    result = email_provider.save_email_provider(None, None, {})

    assert result.success is False
    assert result.error == "Not authenticated"


def test_save_with_invalid_payload_returns_error(db_session, creds_a):
    result = _save(db_session, creds_a, provider="yahoo")

    assert result.success is False
    assert "provider" in result.error


def test_disconnect_without_row_succeeds(db_session, creds_a):
    assert email_provider.disconnect_email_provider(db_session, creds_a).success is True


def test_disconnect_removes_row(db_session, creds_a):
    _save(db_session, creds_a)

    assert email_provider.disconnect_email_provider(db_session, creds_a).success is True
    assert db_session.query(EmailProvider).count() == 0


def test_disconnect_without_session(db_session):
    result = email_provider.disconnect_email_provider(db_session, None)

    assert result.error == "No session found"


def test_status_reports_connection(db_session, creds_a):
    assert email_provider.get_email_provider_status(db_session, creds_a).connected is False

    _save(db_session, creds_a)
    status = email_provider.get_email_provider_status(db_session, creds_a)

    assert status.connected is True
    assert status.provider == "google"
    assert status.email == "alice@gmail.com"


def test_google_link_requires_account(db_session, creds_a):
    result = email_provider.fetch_google_token_info(db_session, creds_a)

    assert result.success is False
    assert result.error == "No Google account found"


def test_microsoft_link_requires_access_token(db_session, creds_a, user_a, add_account):
    add_account(user_a, "microsoft", access_token=None)

    result = email_provider.fetch_microsoft_token_info(db_session, creds_a)

    assert result.error == "No access token found"


def test_google_link_stores_userinfo_email(db_session, creds_a, user_a, add_account, monkeypatch):
    add_account(user_a, "google")
    monkeypatch.setattr(oauth_module, "fetch_google_userinfo", lambda token: {"email": "alice@gmail.com"})

    result = email_provider.fetch_google_token_info(db_session, creds_a)

    assert result.success is True
    assert result.email == "alice@gmail.com"
    row = db_session.query(EmailProvider).one()
    assert row.access_token == "account-token"
    assert row.refresh_token == "account-refresh"


def test_microsoft_link_falls_back_to_principal_name(db_session, creds_a, user_a, add_account, monkeypatch):
    add_account(user_a, "microsoft")
    monkeypatch.setattr(
        oauth_module,
        "fetch_microsoft_me",
        lambda token: {"mail": None, "userPrincipalName": "alice@contoso.onmicrosoft.com"},
    )

    result = email_provider.fetch_microsoft_token_info(db_session, creds_a)

    assert result.email == "alice@contoso.onmicrosoft.com"


def test_link_reports_upstream_failure(db_session, creds_a, user_a, add_account, monkeypatch):
    add_account(user_a, "google")

    def _fail(token):
        raise UpstreamProviderError("Unauthorized")

    monkeypatch.setattr(oauth_module, "fetch_google_userinfo", _fail)

    result = email_provider.fetch_google_token_info(db_session, creds_a)

    assert result.error == "Failed to fetch token info: Unauthorized"


def test_link_without_email_in_response(db_session, creds_a, user_a, add_account, monkeypatch):
    add_account(user_a, "microsoft")
    monkeypatch.setattr(oauth_module, "fetch_microsoft_me", lambda token: {})

    result = email_provider.fetch_microsoft_token_info(db_session, creds_a)

    assert result.error == "No email found in user info"
