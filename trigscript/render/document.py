"""Reverse rendering of whole documents."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from trigscript.fragments import COMMENT_FIELD, FUNCTION_FIELD, PUBLIC_TYPE_FIELD
from trigscript.render.fragment import FragmentRenderer

INDENT = "  "
CONDITION_TYPE = "condition"


def render_document(document: Mapping[str, Any], renderer: FragmentRenderer | None = None) -> str:
    """Script text for a document, published (`type`) or raw (`function`) actions alike."""
    renderer = renderer or FragmentRenderer()
    lines: list[str] = []
    for trigger in document.get("triggers", ()):
        lines.append(f"@{trigger.get(PUBLIC_TYPE_FIELD, '')}")
    _render_actions(document.get("actions", ()), renderer, 0, lines)
    return "\n".join(lines)


def _render_actions(actions: Iterable[Any], renderer: FragmentRenderer, depth: int, lines: list[str]) -> None:
    indent = INDENT * depth
    for action in actions:
        if isinstance(action, dict):
            comment = action.get(COMMENT_FIELD)
            if comment:
                lines.extend(f"{indent}// {line}" for line in str(comment).split("\n"))
            if _is_conditional(action):
                _render_conditional(action, renderer, depth, lines)
                continue
            action = _as_raw_action(action)
        lines.append(indent + renderer.render(action))


def _render_conditional(action: dict[str, Any], renderer: FragmentRenderer, depth: int, lines: list[str]) -> None:
    indent = INDENT * depth
    condition = renderer.render(action.get("conditions"))
    lines.append(f"{indent}if {condition}" if condition else f"{indent}if")
    _render_actions(action.get("then", ()), renderer, depth + 1, lines)
    else_actions = action.get("else", ())
    if else_actions:
        lines.append(f"{indent}else")
        _render_actions(else_actions, renderer, depth + 1, lines)
    lines.append(f"{indent}end")


def _is_conditional(action: Mapping[str, Any]) -> bool:
    return action.get(PUBLIC_TYPE_FIELD) == CONDITION_TYPE and "then" in action


def _as_raw_action(action: dict[str, Any]) -> dict[str, Any]:
    if FUNCTION_FIELD in action or PUBLIC_TYPE_FIELD not in action:
        return action
    return {
        (FUNCTION_FIELD if key == PUBLIC_TYPE_FIELD else key): value
        for key, value in action.items()
    }
