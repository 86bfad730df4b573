"""Control structures built across several lines.

Each structure kind is its own builder class with a fixed, ordered slot set.
The registry is closed: adding a kind means adding a builder and an entry in
`STRUCTURE_KINDS`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, ClassVar, Protocol

from trigscript.fragments import PUBLIC_TYPE_FIELD, Fragment


class StructureBuilder(Protocol):
    kind: ClassVar[str]

    @property
    def active_slot(self) -> str | None: ...

    @property
    def has_next_slot(self) -> bool: ...

    def advance(self) -> None: ...

    def insert(self, fragment: Fragment) -> bool: ...

    def build(self) -> dict[str, Any]: ...


class ConditionalSlot(StrEnum):
    CONDITIONS = "conditions"
    THEN = "then"
    ELSE = "else"


@dataclass(slots=True)
class ConditionalBuilder:
    """`if` block: a condition, then the `then` actions, then the `else` actions."""

    kind: ClassVar[str] = "if"
    slots: ClassVar[tuple[ConditionalSlot, ...]] = (
        ConditionalSlot.CONDITIONS,
        ConditionalSlot.THEN,
        ConditionalSlot.ELSE,
    )

    conditions: Fragment = None
    then_actions: list[Fragment] = field(default_factory=list)
    else_actions: list[Fragment] = field(default_factory=list)
    slot_index: int = 0

    @property
    def active_slot(self) -> ConditionalSlot | None:
        if 0 <= self.slot_index < len(self.slots):
            return self.slots[self.slot_index]
        return None

    @property
    def has_next_slot(self) -> bool:
        return self.slot_index + 1 < len(self.slots)

    def advance(self) -> None:
        self.slot_index += 1

    def insert(self, fragment: Fragment) -> bool:
        """Fill an empty slot or append to a sequence slot; False when neither applies."""
        match self.active_slot:
            case ConditionalSlot.CONDITIONS:
                if self.conditions is not None:
                    return False
                self.conditions = fragment
            case ConditionalSlot.THEN:
                self.then_actions.append(fragment)
            case ConditionalSlot.ELSE:
                self.else_actions.append(fragment)
            case _:
                return False
        return True

    def build(self) -> dict[str, Any]:
        return {
            PUBLIC_TYPE_FIELD: "condition",
            ConditionalSlot.CONDITIONS.value: self.conditions,
            ConditionalSlot.THEN.value: list(self.then_actions),
            ConditionalSlot.ELSE.value: list(self.else_actions),
        }


STRUCTURE_KINDS: dict[str, type[ConditionalBuilder]] = {
    ConditionalBuilder.kind: ConditionalBuilder,
}


def new_structure(kind: str) -> StructureBuilder:
    builder_type = STRUCTURE_KINDS.get(kind)
    if builder_type is None:
        raise ValueError(f"Unknown structure kind `{kind}`; expected one of {sorted(STRUCTURE_KINDS)}")
    return builder_type()
