"""Diagnostic codes and messages."""

from dataclasses import dataclass
from typing import Final, Literal

Severity = Literal["info", "warning", "error"]


@dataclass(frozen=True, slots=True)
class DiagnosticSpec:
    code: str
    message: str
    hint: str | None = None
    severity: Severity = "error"
    category: str | None = None


LEXER_UNTERMINATED_STRING: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNTERMINATED_STRING",
    message="Unterminated string literal.",
    hint="Close the string with a double quote.",
    severity="error",
    category="lexer",
)

PARSER_UNEXPECTED_TOKEN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_UNEXPECTED_TOKEN",
    message="Unexpected token",
    severity="error",
    category="parser",
)

PARSER_UNDEFINED_NAME: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_UNDEFINED_NAME",
    message="Name is undefined",
    hint="Declare the variable or pick a function from the catalog.",
    severity="error",
    category="parser",
)

TYPECHECK_RETURN_TYPE_MISMATCH: Final[DiagnosticSpec] = DiagnosticSpec(
    code="TYPECHECK_RETURN_TYPE_MISMATCH",
    message="Value does not produce the expected type.",
    severity="error",
    category="typecheck",
)

TYPECHECK_ARGUMENT_TYPE_MISMATCH: Final[DiagnosticSpec] = DiagnosticSpec(
    code="TYPECHECK_ARGUMENT_TYPE_MISMATCH",
    message="Argument does not match the parameter type.",
    severity="error",
    category="typecheck",
)

STRUCTURE_UNMATCHED_ELSE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="STRUCTURE_UNMATCHED_ELSE",
    message="`else` without an open `if` block.",
    severity="error",
    category="structure",
)

STRUCTURE_DUPLICATE_ELSE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="STRUCTURE_DUPLICATE_ELSE",
    message="`if` block already has an `else` branch.",
    hint="Close the block with `end` before starting another branch.",
    severity="error",
    category="structure",
)

STRUCTURE_UNMATCHED_END: Final[DiagnosticSpec] = DiagnosticSpec(
    code="STRUCTURE_UNMATCHED_END",
    message="`end` without an open `if` block.",
    severity="error",
    category="structure",
)

STRUCTURE_UNCLOSED_BLOCK: Final[DiagnosticSpec] = DiagnosticSpec(
    code="STRUCTURE_UNCLOSED_BLOCK",
    message="`if` block is never closed and is left out of the document.",
    hint="Add an `end` line after the block's last action.",
    severity="warning",
    category="structure",
)

INLINE_MULTIPLE_LINES: Final[DiagnosticSpec] = DiagnosticSpec(
    code="INLINE_MULTIPLE_LINES",
    message="Inline scripts must fit on a single line; extra lines are ignored.",
    severity="error",
    category="structure",
)
