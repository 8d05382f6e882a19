"""Outbound email action."""

from __future__ import annotations

from vekstloop.actions.base import ActionContext, action
from vekstloop.services.email_service import EmailService


@action("Failed to send email")
def send_email(
    ctx: ActionContext,
    to: str,
    subject: str,
    body: str,
    cc: str | None = None,
    bcc: str | None = None,
):
    return EmailService(ctx.db).send(
        ctx.user_id,
        {"to": to, "subject": subject, "body": body, "cc": cc, "bcc": bcc},
    )
