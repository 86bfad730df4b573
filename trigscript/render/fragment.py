"""Reverse rendering of fragments back into script text.

The output parses back to an equal fragment: binary operands are wrapped in
parentheses whenever the grammar would otherwise associate them differently.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Final

from trigscript.catalog import CALCULATE_FUNCTION, VARIABLE_FUNCTION, ActionCatalog, default_catalog
from trigscript.fragments import COMMENT_FIELD, FUNCTION_FIELD, PUBLIC_TYPE_FIELD, Fragment, is_reserved_field
from trigscript.lexer import quote_string

_LOGICAL_SPELLINGS: Final[dict[str, str]] = {"AND": "and", "OR": "or"}

_PRECEDENCE: Final[dict[str, int]] = {
    "OR": 1,
    "AND": 2,
    "==": 3,
    "!=": 3,
    "<=": 3,
    ">=": 3,
    "<": 3,
    ">": 3,
    "+": 4,
    "-": 4,
    "*": 5,
    "/": 5,
    "%": 5,
}
_COMPARISON_PRECEDENCE: Final[int] = 3
_ATOM_PRECEDENCE: Final[int] = 10


@dataclass(frozen=True, slots=True)
class FragmentRenderer:
    catalog: ActionCatalog = field(default_factory=default_catalog)
    # Literal string -> bare token it was substituted from.
    reverse_substitutions: Mapping[str, str] = field(default_factory=dict)

    def render(self, fragment: Fragment) -> str:
        text, _ = self._render(fragment)
        return text

    def _render(self, fragment: Fragment) -> tuple[str, int]:
        match fragment:
            case None:
                return "", _ATOM_PRECEDENCE
            case bool():
                return ("true" if fragment else "false"), _ATOM_PRECEDENCE
            case int() | float():
                return _number_text(fragment), _ATOM_PRECEDENCE
            case str():
                bare = self.reverse_substitutions.get(fragment)
                return (bare if bare is not None else quote_string(fragment)), _ATOM_PRECEDENCE
            case list():
                return self._render_condition(fragment)
            case dict():
                return self._render_call(fragment)
            case _:
                raise TypeError(f"Cannot render fragment of type {type(fragment).__name__}")

    def _render_condition(self, condition: list[Any]) -> tuple[str, int]:
        header = condition[0] if condition else None
        if not isinstance(header, dict) or len(condition) != 3:
            raise ValueError(f"Malformed condition fragment: {condition!r}")
        operator = str(header.get("operator"))
        spelling = _LOGICAL_SPELLINGS.get(operator, operator)
        return self._binary(spelling, operator, condition[1], condition[2])

    def _render_call(self, fragment: dict[str, Any]) -> tuple[str, int]:
        name = fragment.get(FUNCTION_FIELD)
        if name is None and isinstance(fragment.get(PUBLIC_TYPE_FIELD), str):
            return f"@{fragment[PUBLIC_TYPE_FIELD]}", _ATOM_PRECEDENCE
        if not isinstance(name, str):
            raise ValueError(f"Fragment has no `{FUNCTION_FIELD}` field: {fragment!r}")

        if name == CALCULATE_FUNCTION:
            items = fragment.get("items")
            if not isinstance(items, list) or len(items) != 3 or not isinstance(items[0], dict):
                raise ValueError(f"Malformed calculation fragment: {fragment!r}")
            operator = str(items[0].get("operator"))
            return self._binary(operator, operator, items[1], items[2])

        if name == VARIABLE_FUNCTION:
            return str(fragment.get("variableName", "")), _ATOM_PRECEDENCE

        signature = self.catalog.get(name)
        if signature is not None:
            if signature.arity == 0:
                return name, _ATOM_PRECEDENCE
            arguments = [fragment.get(param.field) for param in signature.params]
        else:
            arguments = [
                value
                for key, value in fragment.items()
                if key not in (FUNCTION_FIELD, COMMENT_FIELD) and not is_reserved_field(key)
            ]
        rendered = ", ".join(self.render(argument) for argument in arguments)
        return f"{name}({rendered})", _ATOM_PRECEDENCE

    def _binary(self, spelling: str, operator: str, left: Fragment, right: Fragment) -> tuple[str, int]:
        precedence = _PRECEDENCE.get(operator)
        if precedence is None:
            raise ValueError(f"Unknown operator `{operator}`")

        left_text, left_precedence = self._render(left)
        right_text, right_precedence = self._render(right)
        # Comparisons do not chain; everything else associates to the left.
        if left_precedence < precedence or (
            precedence == _COMPARISON_PRECEDENCE and left_precedence == precedence
        ):
            left_text = f"({left_text})"
        if right_precedence <= precedence:
            right_text = f"({right_text})"
        return f"{left_text} {spelling} {right_text}", precedence


def render_to_text(
    fragment: Fragment,
    catalog: ActionCatalog | None = None,
    reverse_substitutions: Mapping[str, str] | None = None,
) -> str:
    renderer = FragmentRenderer(
        catalog if catalog is not None else default_catalog(),
        reverse_substitutions or {},
    )
    return renderer.render(fragment)


def _number_text(value: int | float) -> str:
    text = repr(value)
    if "e" not in text:
        return text
    # The lexer has no exponent syntax; spell the same digits out positionally.
    fixed = format(Decimal(text), "f")
    return fixed if "." in fixed else f"{fixed}.0"
