"""The ``@action`` decorator: session scoping, revalidation and error boundary."""

from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vekstloop.actions.revalidation import revalidate_path
from vekstloop.auth.session import RequestCredentials, SessionContext, resolve_session
from vekstloop.auth.workspace_context import from_session
from vekstloop.core.config import get_config
from vekstloop.core.exceptions import (
    ActionError,
    AuthenticationError,
    DatabaseError,
    ErrorKind,
    NotFoundError,
    UpstreamProviderError,
    ValidationError,
)
from vekstloop.core.logging import LogContext, build_log_event

logger = logging.getLogger(__name__)

_KIND_BY_EXCEPTION: tuple[tuple[type[BaseException], ErrorKind], ...] = (
    (AuthenticationError, ErrorKind.UNAUTHENTICATED),
    (NotFoundError, ErrorKind.NOT_FOUND),
    (ValidationError, ErrorKind.VALIDATION),
    (UpstreamProviderError, ErrorKind.UPSTREAM),
    (DatabaseError, ErrorKind.PERSISTENCE),
    (SQLAlchemyError, ErrorKind.PERSISTENCE),
)


@dataclass(frozen=True)
class ActionContext:
    """Everything an action body needs after the session was resolved."""

    db: Session
    session: SessionContext
    scope_mode: str
    workspace_id: str | None

    @property
    def user_id(self) -> str:
        return self.session.user_id

    def log_context(self, action_name: str) -> LogContext:
        return LogContext(workspace_id=self.workspace_id, user_id=self.user_id, action=action_name)


def error_kind_for(exc: BaseException) -> ErrorKind:
    for exc_type, kind in _KIND_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            return kind
    return ErrorKind.INTERNAL


def action(failure_message: str, revalidate: Iterable[str] = ()) -> Callable:
    """Wrap an action body as ``(db, credentials, *args)``.

    The body receives an ``ActionContext`` followed by the caller's arguments.
    Path templates in ``revalidate`` are formatted with the body's bound
    arguments and revalidated only after success. Any failure rolls the
    session back and surfaces as ``ActionError(failure_message, kind)``.
    """
    templates = tuple(revalidate)

    def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
        signature = inspect.signature(fn)

        @functools.wraps(fn)
        def wrapper(db: Session, credentials: RequestCredentials | None, *args: Any, **kwargs: Any) -> Any:
            ctx: ActionContext | None = None
            try:
                config = get_config()
                session = resolve_session(db, credentials, config)
                workspace = from_session(session, config)
                ctx = ActionContext(
                    db=db,
                    session=session,
                    scope_mode=config.SCOPE_MODE,
                    workspace_id=workspace.workspace_id,
                )
                result = fn(ctx, *args, **kwargs)
            except Exception as exc:
                db.rollback()
                kind = error_kind_for(exc)
                log_context = ctx.log_context(fn.__name__) if ctx else LogContext(action=fn.__name__)
                logger.exception(
                    "action.failed",
                    extra=build_log_event(
                        "action.failed",
                        log_context,
                        error_kind=kind.value,
                        error_type=type(exc).__name__,
                    ),
                )
                raise ActionError(failure_message, kind) from exc

            if templates:
                bound = signature.bind(ctx, *args, **kwargs)
                bound.apply_defaults()
                for template in templates:
                    revalidate_path(template.format(**bound.arguments))
            return result

        wrapper.failure_message = failure_message
        wrapper.revalidates = templates
        return wrapper

    return decorator
