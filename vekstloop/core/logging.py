"""Structured logging helpers for the action and service layers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class LogContext:
    """Normalized context fields expected in structured logs."""

    workspace_id: str | None = None
    user_id: str | None = None
    action: str | None = None


def build_log_event(event: str, context: LogContext | None = None, **fields: Any) -> dict[str, Any]:
    """Build the ``extra=`` payload for a structured log call."""
    context = context or LogContext()
    payload: dict[str, Any] = {
        "event": event,
        "workspace_id": context.workspace_id,
        "user_id": context.user_id,
        "action": context.action,
    }
    payload.update(fields)
    return payload
