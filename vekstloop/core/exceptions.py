"""Custom exceptions for the Vekstloop CRM backend."""

from __future__ import annotations

import enum


class VekstloopException(Exception):
    """Base exception for Vekstloop application."""

    pass


class ValidationError(VekstloopException):
    """Raised when input validation fails."""

    pass


class NotFoundError(VekstloopException):
    """Raised when a resource is absent or outside the caller's workspace."""

    pass


class TagNotFoundError(NotFoundError):
    """Raised when a tag name does not exist."""

    def __init__(self, tag_name: str) -> None:
        super().__init__(f"Tag {tag_name} not found")
        self.tag_name = tag_name


class DatabaseError(VekstloopException):
    """Raised when a database operation fails."""

    pass


class UpstreamProviderError(VekstloopException):
    """Raised when an OAuth/email provider responds with an error."""

    pass


class ConfigurationError(VekstloopException):
    """Raised when configuration is invalid."""

    pass


class AuthenticationError(VekstloopException):
    """Raised when no valid session can be resolved."""

    pass


class ErrorKind(str, enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    UPSTREAM = "upstream"
    PERSISTENCE = "persistence"
    INTERNAL = "internal"


class ActionError(VekstloopException):
    """User-facing failure raised by the action layer.

    The message is stable and safe to show; the original cause is chained
    through ``__cause__`` and logged before this is raised.
    """

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.INTERNAL) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
