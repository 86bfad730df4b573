"""Run result carriers for the processing entrypoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from trigscript.diagnostics import Diagnostic, has_errors
from trigscript.fragments import Fragment


@dataclass(frozen=True, slots=True)
class DocumentRunResult:
    """Result of processing a whole script into a document."""

    document: dict[str, Any]
    diagnostics: list[Diagnostic]
    rendered_text: str

    @property
    def has_errors(self) -> bool:
        return has_errors(self.diagnostics)

    @property
    def has_output(self) -> bool:
        return bool(self.document["triggers"] or self.document["actions"])

    def diagnostics_as_dicts(self) -> list[dict[str, Any]]:
        return [diagnostic.to_dict() for diagnostic in self.diagnostics]


@dataclass(frozen=True, slots=True)
class InlineRunResult:
    """Result of processing one inline expression."""

    output: Fragment
    diagnostics: list[Diagnostic]
    rendered_text: str
    has_output: bool

    @property
    def has_errors(self) -> bool:
        return has_errors(self.diagnostics)

    def diagnostics_as_dicts(self) -> list[dict[str, Any]]:
        return [diagnostic.to_dict() for diagnostic in self.diagnostics]
