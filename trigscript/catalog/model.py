"""Function catalog: the signatures the line grammar and type checker resolve against."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final

# Data types every catalog understands without declaring them.
NUMBER: Final[str] = "number"
STRING: Final[str] = "string"
BOOLEAN: Final[str] = "boolean"
SCRIPT: Final[str] = "script"
ANY: Final[str] = "any"

# Fragments the grammar builds itself rather than looking up.
VARIABLE_FUNCTION: Final[str] = "getVariable"
CALCULATE_FUNCTION: Final[str] = "calculate"
THIS_ENTITY_FUNCTION: Final[str] = "thisEntity"


@dataclass(frozen=True, slots=True)
class Param:
    """One positional argument of a catalog function."""

    field: str
    data_type: str


@dataclass(frozen=True, slots=True)
class FunctionSignature:
    key: str
    params: tuple[Param, ...] = ()
    return_type: str = ANY
    category: str = ""
    title: str = ""

    @property
    def arity(self) -> int:
        return len(self.params)

    @property
    def is_action(self) -> bool:
        """Actions are statements; their return type is irrelevant to callers."""
        return self.category == "action"


@dataclass(frozen=True, slots=True)
class ActionCatalog:
    """Lookup of callable functions plus the trigger names a document may declare."""

    functions: Mapping[str, FunctionSignature] = field(default_factory=lambda: MappingProxyType({}))
    triggers: frozenset[str] = frozenset()

    @staticmethod
    def of(signatures: Iterable[FunctionSignature], triggers: Iterable[str] = ()) -> ActionCatalog:
        by_key: dict[str, FunctionSignature] = {}
        for signature in signatures:
            if signature.key in by_key:
                raise ValueError(f"Duplicate catalog function `{signature.key}`")
            by_key[signature.key] = signature
        return ActionCatalog(functions=MappingProxyType(by_key), triggers=frozenset(triggers))

    def get(self, key: str) -> FunctionSignature | None:
        return self.functions.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self.functions

    def merged_with(self, other: ActionCatalog) -> ActionCatalog:
        """Catalog with `other`'s functions layered over this one's."""
        merged = dict(self.functions)
        merged.update(other.functions)
        return ActionCatalog(functions=MappingProxyType(merged), triggers=self.triggers | other.triggers)


def is_type_name(data_type: str) -> bool:
    """Types such as `unitType` or `itemType` are referenced by their string name."""
    return "Type" in data_type
