from __future__ import annotations

import base64
from email import message_from_bytes

import pytest
import requests

import vekstloop.clients.oauth_providers as oauth_module
from vekstloop.core.exceptions import UpstreamProviderError, ValidationError


class _Response:
    def __init__(self, status_code=200, payload=None, reason="OK"):
        self.status_code = status_code
        self.ok = 200 <= status_code < 300
        self.reason = reason
        self._payload = payload
        self.text = ""

    def json(self):
        if self._payload is None:
            raise ValueError("empty")
        return self._payload


def test_google_userinfo_passes_token_as_query(monkeypatch):
    seen = {}

    def _get(url, **kwargs):
        seen.update(kwargs, url=url)
        return _Response(payload={"email": "alice@gmail.com"})

    monkeypatch.setattr(oauth_module.requests, "get", _get)

    assert oauth_module.fetch_google_userinfo("tok")["email"] == "alice@gmail.com"
    assert seen["params"] == {"alt": "json", "access_token": "tok"}
    assert isinstance(seen["timeout"], tuple)


def test_microsoft_me_uses_bearer_header(monkeypatch):
    seen = {}

    def _get(url, **kwargs):
        seen.update(kwargs, url=url)
        return _Response(payload={"mail": "bob@contoso.com"})

    monkeypatch.setattr(oauth_module.requests, "get", _get)

    oauth_module.fetch_microsoft_me("tok")
    assert seen["url"].endswith("/me")
    assert seen["headers"] == {"Authorization": "Bearer tok"}


def test_non_200_raises_with_reason(monkeypatch):
    monkeypatch.setattr(oauth_module.requests, "get", lambda url, **kw: _Response(401, {}, "Unauthorized"))

    with pytest.raises(UpstreamProviderError, match="Unauthorized"):
        oauth_module.fetch_google_userinfo("tok")


def test_network_error_is_wrapped(monkeypatch):
    def _boom(url, **kwargs):
        raise requests.exceptions.ConnectTimeout("timed out")

    monkeypatch.setattr(oauth_module.requests, "get", _boom)

    with pytest.raises(UpstreamProviderError):
        oauth_module.fetch_microsoft_me("tok")


def test_microsoft_refresh_requests_mail_scope(monkeypatch):
    seen = {}

    def _post(url, **kwargs):
        seen.update(kwargs, url=url)
        return _Response(payload={"access_token": "new", "expires_in": 60})

    monkeypatch.setattr(oauth_module.requests, "post", _post)

    payload = oauth_module.refresh_access_token("microsoft", "r-1")
    assert payload["access_token"] == "new"
    assert seen["data"]["scope"] == oauth_module.MICROSOFT_MAIL_SCOPE


def test_refresh_rejects_unknown_provider():
    with pytest.raises(UpstreamProviderError, match="Unsupported email provider"):
        oauth_module.refresh_access_token("yahoo", "r-1")


def test_refresh_without_access_token_fails(monkeypatch):
    monkeypatch.setattr(oauth_module.requests, "post", lambda url, **kw: _Response(payload={"error": "nope"}))

    with pytest.raises(UpstreamProviderError, match="no access_token"):
        oauth_module.refresh_access_token("google", "r-1")


def test_mime_message_omits_empty_headers():
    message = oauth_module.build_mime_message("a@x.no", "b@x.no", "Hei", "<p>body</p>")

    assert message["From"] == "a@x.no"
    assert message["To"] == "b@x.no"
    assert message["Subject"] == "Hei"
    assert message["Cc"] is None
    assert message["Bcc"] is None
    assert message.get_content_type() == "text/html"


def test_mime_message_keeps_non_ascii_body():
    message = oauth_module.build_mime_message("a@x.no", "b@x.no", "Møte på fredag", "<p>Blåbærsyltetøy</p>")
    parsed = message_from_bytes(message.as_bytes())

    assert parsed.get_content_charset() == "utf-8"
    assert parsed["Content-Transfer-Encoding"] != "7bit"
    assert parsed.get_payload(decode=True).decode("utf-8") == "<p>Blåbærsyltetøy</p>"


@pytest.mark.parametrize(
    "field, overrides",
    [
        ("Subject", {"subject": "Hei\r\nBcc: victim@example.com"}),
        ("To", {"to": "b@x.no\nBcc: victim@example.com"}),
        ("Cc", {"cc": "c@x.no\r\nX-Injected: 1"}),
    ],
)
def test_mime_message_rejects_header_line_breaks(field, overrides):
    fields = {"from_email": "a@x.no", "to": "b@x.no", "subject": "Hei", "body": "<p>body</p>"}
    fields.update(overrides)

    with pytest.raises(ValidationError, match=field):
        oauth_module.build_mime_message(**fields)


def test_raw_message_is_unpadded_urlsafe():
    message = oauth_module.build_mime_message("a@x.no", "b@x.no", "Hei", "<p>body</p>")
    raw = oauth_module.encode_raw_message(message)

    assert "=" not in raw
    padded = raw + "=" * (-len(raw) % 4)
    assert base64.urlsafe_b64decode(padded) == message.as_bytes()
