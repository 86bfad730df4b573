"""Field-level transforms applied to fragments on their way out of the core."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, TypeAlias

from trigscript.fragments import FUNCTION_FIELD, PUBLIC_TYPE_FIELD, is_reserved_field

# Called as effect(key, value) for every visited value; the root is visited with key "".
FieldEffect: TypeAlias = Callable[[str, Any], None]

BRANCH_SLOTS: tuple[str, ...] = ("then", "else")


def strip_reserved_fields(value: Any, effects: Sequence[FieldEffect] = ()) -> Any:
    """Copy of `value` without `_`-prefixed keys at any depth.

    Effects run on each value before it is copied, so an effect may rewrite
    the value in place and the copy reflects the rewrite.
    """
    for effect in effects:
        effect("", value)
    return _strip(value, effects)


def _strip(value: Any, effects: Sequence[FieldEffect]) -> Any:
    if isinstance(value, dict):
        stripped: dict[str, Any] = {}
        for key, item in value.items():
            if is_reserved_field(key):
                continue
            for effect in effects:
                effect(key, item)
            stripped[key] = _strip(item, effects)
        return stripped
    if isinstance(value, list):
        items: list[Any] = []
        for index, item in enumerate(value):
            for effect in effects:
                effect(str(index), item)
            items.append(_strip(item, effects))
        return items
    return value


def publish_action(action: Any) -> Any:
    """Rename the parser's `function` field to the public `type` field.

    Applies to the action itself and to the actions held in `then` / `else`
    branches; arguments and conditions keep `function`.
    """
    if not isinstance(action, dict):
        return action
    published: dict[str, Any] = {}
    for key, item in action.items():
        if key == FUNCTION_FIELD:
            published[PUBLIC_TYPE_FIELD] = item
        elif key in BRANCH_SLOTS and isinstance(item, list):
            published[key] = [publish_action(child) for child in item]
        else:
            published[key] = item
    return published


def publish_actions(actions: Sequence[Any]) -> list[Any]:
    return [publish_action(action) for action in actions]
