"""Caller-side context for one processing pass."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True, slots=True)
class Substitution:
    """Bare `match_token` in an action line stands for the string literal `replacement`."""

    match_token: str
    replacement: str


@dataclass(frozen=True, slots=True)
class EntityBinding:
    data_type: str
    entity: str
    key: str


@dataclass(frozen=True, slots=True)
class SideTable:
    """Caller-side data the post-processor resolves fragments against."""

    this_entity: tuple[EntityBinding, ...] = ()

    def binding_for(self, data_type: str) -> EntityBinding | None:
        for binding in self.this_entity:
            if binding.data_type == data_type:
                return binding
        return None

    @staticmethod
    def from_mapping(data: Mapping[str, Any]) -> SideTable:
        """Read `{"thisEntity": [{"dataType", "entity", "key"}, ...]}`."""
        bindings = tuple(
            EntityBinding(
                data_type=str(entry["dataType"]),
                entity=str(entry["entity"]),
                key=str(entry["key"]),
            )
            for entry in data.get("thisEntity", ())
        )
        return SideTable(this_entity=bindings)


@dataclass(frozen=True, slots=True)
class ScriptContext:
    default_return_type: str = ""
    type_substitutions: Mapping[str, tuple[Substitution, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    side_table: SideTable = field(default_factory=SideTable)

    def substitutions(self) -> tuple[Substitution, ...]:
        """Substitutions registered for the default return type."""
        if not self.default_return_type:
            return ()
        return tuple(self.type_substitutions.get(self.default_return_type, ()))

    def reverse_substitutions(self) -> dict[str, str]:
        return {substitution.replacement: substitution.match_token for substitution in self.substitutions()}
