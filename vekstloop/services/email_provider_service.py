"""Email provider linkage: upsert, disconnect and link from a sign-in account."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.exc import IntegrityError

from vekstloop.clients import oauth_providers
from vekstloop.core.exceptions import UpstreamProviderError
from vekstloop.models.account import Account, EmailProvider
from vekstloop.models.base import as_utc
from vekstloop.models.enums import EmailProviderName
from vekstloop.schemas.email_provider import SaveProviderRequest
from vekstloop.services.base_service import BaseService
from vekstloop.utils.validators import parse_payload

logger = logging.getLogger(__name__)

PROVIDER_LABELS = {
    EmailProviderName.GOOGLE: "Google",
    EmailProviderName.MICROSOFT: "Microsoft",
}


@dataclass(frozen=True)
class ProviderResult:
    success: bool
    email: str | None = None
    error: str | None = None

    @classmethod
    def ok(cls, email: str | None = None) -> "ProviderResult":
        return cls(success=True, email=email)

    @classmethod
    def fail(cls, error: str) -> "ProviderResult":
        return cls(success=False, error=error)


def _from_epoch(value: int | None) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)


def _to_epoch(value: datetime | None) -> int | None:
    if value is None:
        return None
    return int(as_utc(value).timestamp())


class EmailProviderService(BaseService):
    """One EmailProvider row per user, created or overwritten in place."""

    def get_for_user(self, user_id: str) -> EmailProvider | None:
        return self.db.query(EmailProvider).filter(EmailProvider.user_id == user_id).first()

    def get_account(self, user_id: str, provider: EmailProviderName) -> Account | None:
        return (
            self.db.query(Account)
            .filter(Account.user_id == user_id, Account.provider_id == provider.value)
            .first()
        )

    @staticmethod
    def _apply(row: EmailProvider, payload: SaveProviderRequest) -> None:
        row.provider = payload.provider.value
        row.email = payload.email
        row.access_token = payload.access_token
        row.refresh_token = payload.refresh_token
        row.expires_at = _from_epoch(payload.expires_at)

    def upsert(self, user_id: str, data: dict[str, Any] | SaveProviderRequest) -> EmailProvider:
        payload = parse_payload(SaveProviderRequest, data)
        row = self.get_for_user(user_id)
        if row is None:
            row = EmailProvider(user_id=user_id)
            self.db.add(row)
        self._apply(row, payload)
        try:
            self.commit()
        except IntegrityError:
            # Lost an insert race on the unique user_id; overwrite the winner.
            row = self.get_for_user(user_id)
            if row is None:
                raise
            self._apply(row, payload)
            self.commit()
        self.db.refresh(row)
        logger.info(
            "email_provider.saved",
            extra={"event": "email_provider.saved", "user_id": user_id, "provider": row.provider},
        )
        return row

    def disconnect(self, user_id: str) -> bool:
        """Remove the user's provider row; returns whether one existed."""
        row = self.get_for_user(user_id)
        if row is None:
            return False
        self.db.delete(row)
        self.commit()
        logger.info(
            "email_provider.disconnected",
            extra={"event": "email_provider.disconnected", "user_id": user_id},
        )
        return True

    def link_from_account(self, user_id: str, provider: EmailProviderName) -> ProviderResult:
        """Look up the identity email for the user's sign-in account and store it."""
        label = PROVIDER_LABELS[provider]
        account = self.get_account(user_id, provider)
        if account is None:
            return ProviderResult.fail(f"No {label} account found")
        if not account.access_token:
            return ProviderResult.fail("No access token found")

        if provider == EmailProviderName.GOOGLE:
            what = "token info"
            fetch = oauth_providers.fetch_google_userinfo
        else:
            what = "user info"
            fetch = oauth_providers.fetch_microsoft_me

        try:
            info = fetch(account.access_token)
        except UpstreamProviderError as exc:
            return ProviderResult.fail(f"Failed to fetch {what}: {exc}")

        if provider == EmailProviderName.GOOGLE:
            email = info.get("email")
        else:
            email = info.get("mail") or info.get("userPrincipalName")
        if not email:
            return ProviderResult.fail(f"No email found in {what}")

        self.upsert(
            user_id,
            {
                "provider": provider,
                "access_token": account.access_token,
                "refresh_token": account.refresh_token,
                "expires_at": _to_epoch(account.access_token_expires_at),
                "email": email,
            },
        )
        return ProviderResult.ok(email)
