"""Email provider linkage and outbound email schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vekstloop.models.enums import EmailProviderName


class SaveProviderRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    provider: EmailProviderName
    access_token: str = Field(min_length=1)
    refresh_token: str | None = None
    expires_at: int | None = Field(default=None, ge=0, description="Expiry as epoch seconds.")
    email: str = Field(min_length=3, max_length=320)


class ProviderResultResponse(BaseModel):
    success: bool
    email: str | None = None
    error: str | None = None


class ProviderStatusResponse(BaseModel):
    connected: bool
    provider: str | None = None
    email: str | None = None


class SendEmailRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    to: str = Field(min_length=3)
    subject: str = Field(min_length=1, max_length=998)
    body: str = Field(min_length=1)
    cc: str | None = None
    bcc: str | None = None

    @field_validator("to", "subject", "cc", "bcc")
    @classmethod
    def _single_line(cls, value: str | None) -> str | None:
        if value is not None and ("\r" in value or "\n" in value):
            raise ValueError("must not contain line breaks")
        return value
