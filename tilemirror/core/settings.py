"""Validation of the scalar room settings.

Each settable property has a strict pydantic type; validation failures are
translated into :class:`~tilemirror.core.errors.ValidationError`.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import StrictBool, StrictStr, StringConstraints, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from tilemirror.core.enums import Category
from tilemirror.core.errors import ValidationError

NAME_MAX_LENGTH = 30
CODE_MAX_LENGTH = 20

RoomName = Annotated[StrictStr, StringConstraints(min_length=1, max_length=NAME_MAX_LENGTH)]
RoomCode = Annotated[StrictStr, StringConstraints(max_length=CODE_MAX_LENGTH)]

# Order matches the combined OWNERINFO settings message
SETTINGS_FIELDS: tuple[str, ...] = (
    "name",
    "code",
    "category",
    "visible",
    "auto_save",
    "allow_spectate",
    "allow_particle_actions",
)

_ADAPTERS: dict[str, TypeAdapter] = {
    "name": TypeAdapter(RoomName),
    "code": TypeAdapter(RoomCode),
    "category": TypeAdapter(StrictStr),
    "visible": TypeAdapter(StrictBool),
    "auto_save": TypeAdapter(StrictBool),
    "allow_spectate": TypeAdapter(StrictBool),
    "allow_particle_actions": TypeAdapter(StrictBool),
}


def validate_setting(field: str, value: Any) -> Any:
    """Return the wire value for *field*, or raise ValidationError."""
    adapter = _ADAPTERS.get(field)
    if adapter is None:
        raise ValidationError(field, "unknown room setting")
    if isinstance(value, Category):
        value = value.value
    try:
        result = adapter.validate_python(value)
    except PydanticValidationError as exc:
        raise ValidationError(field, exc.errors()[0]["msg"]) from None
    if field == "category":
        try:
            return Category(result).value
        except ValueError:
            allowed = ", ".join(c.value for c in Category)
            raise ValidationError(field, f"must be one of: {allowed}") from None
    return result
