"""Outbound email through the user's linked provider."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any

from vekstloop.clients import oauth_providers
from vekstloop.core.exceptions import NotFoundError, UpstreamProviderError
from vekstloop.models.account import EmailProvider
from vekstloop.models.base import as_utc, utcnow
from vekstloop.models.enums import EmailProviderName
from vekstloop.schemas.email_provider import SendEmailRequest
from vekstloop.services.base_service import BaseService
from vekstloop.utils.validators import parse_payload

logger = logging.getLogger(__name__)


class EmailService(BaseService):
    """Send mail with the caller's Gmail or Microsoft 365 account."""

    def refresh_provider_token(self, provider_row: EmailProvider) -> EmailProvider:
        if not provider_row.refresh_token:
            raise UpstreamProviderError("No refresh token available")
        token = oauth_providers.refresh_access_token(provider_row.provider, provider_row.refresh_token)
        provider_row.access_token = token["access_token"]
        provider_row.expires_at = utcnow() + timedelta(seconds=int(token.get("expires_in", 3600)))
        self.commit()
        self.db.refresh(provider_row)
        return provider_row

    def send(self, user_id: str, data: dict[str, Any] | SendEmailRequest) -> dict[str, Any]:
        payload = parse_payload(SendEmailRequest, data)
        provider_row = self.db.query(EmailProvider).filter(EmailProvider.user_id == user_id).first()
        if provider_row is None:
            raise NotFoundError("No email provider configured")

        if provider_row.expires_at is not None and as_utc(provider_row.expires_at) < utcnow():
            logger.info(
                "email_provider.token_expired",
                extra={"event": "email_provider.token_expired", "user_id": user_id, "provider": provider_row.provider},
            )
            provider_row = self.refresh_provider_token(provider_row)

        if provider_row.provider == EmailProviderName.GOOGLE.value:
            result = oauth_providers.send_gmail(
                provider_row.access_token,
                provider_row.email,
                payload.to,
                payload.subject,
                payload.body,
                payload.cc,
                payload.bcc,
            )
        elif provider_row.provider == EmailProviderName.MICROSOFT.value:
            result = oauth_providers.send_graph_mail(
                provider_row.access_token,
                payload.to,
                payload.subject,
                payload.body,
                payload.cc,
                payload.bcc,
            )
        else:
            raise UpstreamProviderError(f"Unsupported email provider: {provider_row.provider}")

        logger.info(
            "email.sent",
            extra={"event": "email.sent", "user_id": user_id, "provider": provider_row.provider},
        )
        return result
