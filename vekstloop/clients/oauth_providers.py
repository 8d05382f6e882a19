"""HTTP clients for Google and Microsoft identity, token and mail endpoints."""

from __future__ import annotations

import base64
import logging
from email.mime.text import MIMEText
from typing import Any

import requests

from vekstloop.core.config import Config, get_config
from vekstloop.core.exceptions import UpstreamProviderError, ValidationError
from vekstloop.models.enums import EmailProviderName

logger = logging.getLogger(__name__)

MICROSOFT_MAIL_SCOPE = "openid email profile https://graph.microsoft.com/Mail.Send"


def _json_or_text(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return {"error": response.text}


def _get_json(url: str, config: Config, **kwargs) -> dict[str, Any]:
    """GET returning the decoded body; errors carry the HTTP reason phrase."""
    try:
        response = requests.get(url, timeout=config.provider_timeout, **kwargs)
    except requests.exceptions.RequestException as exc:
        logger.warning(
            "oauth_provider.request_failed",
            extra={"event": "oauth_provider.request_failed", "error": type(exc).__name__},
        )
        raise UpstreamProviderError(str(exc)) from exc

    if response.status_code != 200:
        logger.warning(
            "oauth_provider.bad_status",
            extra={"event": "oauth_provider.bad_status", "status_code": response.status_code},
        )
        raise UpstreamProviderError(response.reason or str(response.status_code))
    try:
        return response.json()
    except ValueError as exc:
        raise UpstreamProviderError("Invalid JSON response") from exc


def fetch_google_userinfo(access_token: str, config: Config | None = None) -> dict[str, Any]:
    cfg = config or get_config()
    return _get_json(cfg.GOOGLE_USERINFO_URL, cfg, params={"alt": "json", "access_token": access_token})


def fetch_microsoft_me(access_token: str, config: Config | None = None) -> dict[str, Any]:
    cfg = config or get_config()
    return _get_json(
        f"{cfg.MICROSOFT_GRAPH_URL}/me",
        cfg,
        headers={"Authorization": f"Bearer {access_token}"},
    )


def refresh_access_token(provider: str, refresh_token: str, config: Config | None = None) -> dict[str, Any]:
    """Exchange a refresh token; returns the provider's token payload.

    The payload carries at least ``access_token`` and ``expires_in``.
    """
    cfg = config or get_config()
    if provider == EmailProviderName.GOOGLE.value:
        url = cfg.GOOGLE_TOKEN_URL
        form = {
            "client_id": cfg.GOOGLE_CLIENT_ID or "",
            "client_secret": cfg.GOOGLE_CLIENT_SECRET or "",
            "refresh_token": refresh_token,
            "grant_type": "refresh_token",
        }
    elif provider == EmailProviderName.MICROSOFT.value:
        url = cfg.MICROSOFT_TOKEN_URL
        form = {
            "client_id": cfg.MICROSOFT_CLIENT_ID or "",
            "client_secret": cfg.MICROSOFT_CLIENT_SECRET or "",
            "refresh_token": refresh_token,
            "grant_type": "refresh_token",
            "scope": MICROSOFT_MAIL_SCOPE,
        }
    else:
        raise UpstreamProviderError(f"Unsupported email provider: {provider}")

    try:
        response = requests.post(url, data=form, timeout=cfg.provider_timeout)
    except requests.exceptions.RequestException as exc:
        raise UpstreamProviderError(f"Token refresh failed: {exc}") from exc

    if not response.ok:
        logger.error(
            "oauth_provider.refresh_failed",
            extra={"event": "oauth_provider.refresh_failed", "provider": provider, "status_code": response.status_code},
        )
        raise UpstreamProviderError(f"Token refresh failed: {_json_or_text(response)}")

    payload = _json_or_text(response)
    if not isinstance(payload, dict) or not payload.get("access_token"):
        raise UpstreamProviderError("Token refresh failed: no access_token in response")
    logger.info(
        "oauth_provider.token_refreshed",
        extra={"event": "oauth_provider.token_refreshed", "provider": provider},
    )
    return payload


def _header(name: str, value: str) -> str:
    if "\r" in value or "\n" in value:
        raise ValidationError(f"{name} must not contain line breaks")
    return value


def build_mime_message(
    from_email: str,
    to: str,
    subject: str,
    body: str,
    cc: str | None = None,
    bcc: str | None = None,
) -> MIMEText:
    """HTML message with a UTF-8 body; header values may not span lines."""
    message = MIMEText(body, "html", "utf-8")
    message["From"] = _header("From", from_email)
    message["To"] = _header("To", to)
    if cc:
        message["Cc"] = _header("Cc", cc)
    if bcc:
        message["Bcc"] = _header("Bcc", bcc)
    message["Subject"] = _header("Subject", subject)
    return message


def encode_raw_message(message: MIMEText) -> str:
    """Base64url without padding, as the Gmail ``raw`` field expects."""
    return base64.urlsafe_b64encode(message.as_bytes()).decode("ascii").rstrip("=")


def _recipients(addresses: str) -> list[dict[str, dict[str, str]]]:
    return [
        {"emailAddress": {"address": address.strip()}}
        for address in addresses.split(",")
        if address.strip()
    ]


def _post_json(url: str, access_token: str, payload: dict[str, Any], config: Config) -> requests.Response:
    try:
        response = requests.post(
            url,
            json=payload,
            headers={"Authorization": f"Bearer {access_token}"},
            timeout=config.provider_timeout,
        )
    except requests.exceptions.RequestException as exc:
        raise UpstreamProviderError(f"Failed to send email: {exc}") from exc
    if not response.ok:
        logger.error(
            "email.send_rejected",
            extra={"event": "email.send_rejected", "status_code": response.status_code},
        )
        raise UpstreamProviderError(f"Failed to send email: {_json_or_text(response)}")
    return response


def send_gmail(
    access_token: str,
    from_email: str,
    to: str,
    subject: str,
    body: str,
    cc: str | None = None,
    bcc: str | None = None,
    config: Config | None = None,
) -> dict[str, Any]:
    cfg = config or get_config()
    raw = encode_raw_message(build_mime_message(from_email, to, subject, body, cc, bcc))
    response = _post_json(f"{cfg.GMAIL_API_URL}/users/me/messages/send", access_token, {"raw": raw}, cfg)
    return _json_or_text(response)


def send_graph_mail(
    access_token: str,
    to: str,
    subject: str,
    body: str,
    cc: str | None = None,
    bcc: str | None = None,
    config: Config | None = None,
) -> dict[str, Any]:
    cfg = config or get_config()
    message: dict[str, Any] = {
        "subject": subject,
        "body": {"contentType": "HTML", "content": body},
        "toRecipients": _recipients(to),
    }
    if cc:
        message["ccRecipients"] = _recipients(cc)
    if bcc:
        message["bccRecipients"] = _recipients(bcc)
    # Graph answers 202 with an empty body.
    _post_json(f"{cfg.MICROSOFT_GRAPH_URL}/me/sendMail", access_token, {"message": message, "saveToSentItems": True}, cfg)
    return {"success": True}
