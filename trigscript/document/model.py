"""Document identity and defaults."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


def default_conditions() -> list[Any]:
    """Top-level guard that always passes: `true == true`."""
    return [{"operator": "==", "operandType": "boolean"}, True, True]


@dataclass(frozen=True, slots=True)
class DocumentIdentity:
    """Caller-supplied identity and ordering of a document."""

    name: str
    key: str
    order: int = 0
    parent: str | None = None
    is_protected: bool = False

    def __post_init__(self):
        if isinstance(self.order, bool) or not isinstance(self.order, int):
            raise ValueError("DocumentIdentity.order must be an integer")

    @staticmethod
    def from_mapping(data: Mapping[str, Any]) -> DocumentIdentity:
        """Read the identity fields of a published document."""
        return DocumentIdentity(
            name=str(data.get("name", "")),
            key=str(data.get("key", "")),
            order=int(data.get("order", 0)),
            parent=data.get("parent"),
            is_protected=bool(data.get("isProtected", False)),
        )
