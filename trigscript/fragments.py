"""Shapes shared by everything that produces or consumes parsed fragments."""

from __future__ import annotations

from typing import Any, Final, TypeAlias

Primitive: TypeAlias = str | int | float | bool
Fragment: TypeAlias = dict[str, Any] | list[Any] | Primitive | None

FUNCTION_FIELD: Final[str] = "function"
PUBLIC_TYPE_FIELD: Final[str] = "type"
COMMENT_FIELD: Final[str] = "comment"
RESERVED_PREFIX: Final[str] = "_"


def is_primitive(value: object) -> bool:
    return isinstance(value, (str, int, float, bool))


def primitive_kind(value: object) -> str | None:
    """Runtime kind name of a primitive, as script authors spell types."""
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return None


def function_name(fragment: object) -> str | None:
    if isinstance(fragment, dict):
        name = fragment.get(FUNCTION_FIELD)
        if isinstance(name, str):
            return name
    return None


def is_reserved_field(name: str) -> bool:
    return name.startswith(RESERVED_PREFIX)
