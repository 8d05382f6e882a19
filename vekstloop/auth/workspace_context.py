"""Workspace context extraction and enforcement utilities."""

from __future__ import annotations

from dataclasses import dataclass

from vekstloop.auth.session import SessionContext
from vekstloop.core.config import Config, get_config
from vekstloop.core.exceptions import AuthenticationError, NotFoundError


@dataclass(frozen=True)
class WorkspaceContext:
    user_id: str
    workspace_id: str | None
    scope_mode: str

    @property
    def is_global(self) -> bool:
        return self.scope_mode == "global"


def from_session(session: SessionContext, settings: Config | None = None) -> WorkspaceContext:
    """Build workspace context for the configured scope mode."""
    cfg = settings or get_config()
    if not cfg.is_workspace_scoped:
        return WorkspaceContext(user_id=session.user_id, workspace_id=None, scope_mode=cfg.SCOPE_MODE)
    if session.workspace_id is None:
        raise AuthenticationError("User has no workspace.")
    return WorkspaceContext(
        user_id=session.user_id,
        workspace_id=session.workspace_id,
        scope_mode=cfg.SCOPE_MODE,
    )


def enforce_workspace_match(entity_workspace_id: str | None, context: WorkspaceContext) -> None:
    """Ensure entity access stays inside the context workspace.

    Mismatches surface as not-found so other workspaces' ids are not revealed.
    """
    if context.is_global:
        return
    if entity_workspace_id != context.workspace_id:
        raise NotFoundError("Resource not found.")
