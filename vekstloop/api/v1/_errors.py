"""Shared error mapping for API v1 route modules."""

from __future__ import annotations

from fastapi import Request, status
from fastapi.responses import JSONResponse

from vekstloop.core.exceptions import ActionError, ErrorKind
from vekstloop.schemas.common import ErrorEnvelope

STATUS_BY_KIND = {
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.VALIDATION: 422,
    ErrorKind.UPSTREAM: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.PERSISTENCE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def map_action_error(exc: ActionError) -> tuple[int, ErrorEnvelope]:
    code = STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    return code, ErrorEnvelope(error_code=exc.kind.value, detail=exc.message)


def action_error_handler(request: Request, exc: ActionError) -> JSONResponse:
    code, envelope = map_action_error(exc)
    return JSONResponse(status_code=code, content=envelope.model_dump())


def not_found(detail: str) -> ActionError:
    return ActionError(detail, ErrorKind.NOT_FOUND)
