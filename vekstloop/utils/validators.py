"""Input validation and sanitizing helpers shared by services."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from vekstloop.core.exceptions import ValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def sanitize_text(value: str | None, max_len: int = 20000) -> str:
    """Sanitize free-form content before persistence/display."""
    if value is None:
        return ""
    cleaned = str(value).replace("\x00", "").strip()
    cleaned = cleaned[:max_len]
    return cleaned


def _describe(exc: PydanticValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ())) or "payload"
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)


def parse_payload(schema: type[SchemaT], data: Mapping[str, Any] | BaseModel | None) -> SchemaT:
    """Validate ``data`` against ``schema``.

    Accepts an already-built schema instance, another pydantic model, or a
    plain mapping. Raises the domain ``ValidationError`` instead of pydantic's.
    """
    if isinstance(data, schema):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=True)
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ValidationError(f"Expected an object payload, got {type(data).__name__}.")
    try:
        return schema.model_validate(dict(data))
    except PydanticValidationError as exc:
        raise ValidationError(_describe(exc)) from exc


def coerce_enum(enum_cls, value: Any, field: str = "value"):
    """Convert ``value`` to ``enum_cls`` or raise ``ValidationError``."""
    try:
        return enum_cls(value)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"{field} must be one of: {allowed}") from exc


def normalize_tag_names(names: list[str] | tuple[str, ...] | None) -> list[str]:
    """Trim, drop blanks and de-duplicate tag names while keeping order."""
    seen: set[str] = set()
    result: list[str] = []
    for raw in names or []:
        name = sanitize_text(raw, 120)
        if not name or name in seen:
            continue
        seen.add(name)
        result.append(name)
    return result
