"""Diagnostics core types."""

from dataclasses import dataclass
from typing import Any

from trigscript.diagnostics.codes import DiagnosticSpec, Severity
from trigscript.text import SourceRange


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic emitted by the lexer, parser, checker or assembler pipeline."""

    code: str
    message: str
    range: SourceRange
    severity: Severity = "error"
    hint: str | None = None
    category: str | None = None

    @staticmethod
    def from_spec(spec: DiagnosticSpec, range: SourceRange, message: str | None = None) -> "Diagnostic":
        return Diagnostic(
            code=spec.code,
            message=message if message is not None else spec.message,
            range=range,
            severity=spec.severity,
            hint=spec.hint,
            category=spec.category,
        )

    def move_to_line(self, line: int, column_delta: int = 0) -> "Diagnostic":
        """Copy of this diagnostic with its range re-anchored onto a document line."""
        return Diagnostic(
            code=self.code,
            message=self.message,
            range=self.range.move_to_line(line, column_delta),
            severity=self.severity,
            hint=self.hint,
            category=self.category,
        )

    def to_dict(self) -> dict[str, Any]:
        """Editor marker shape: message, severity and a line/column range."""
        return {
            "message": self.message,
            "severity": self.severity,
            "range": self.range.to_dict(),
        }
