"""Diagnostics."""

from trigscript.diagnostics.codes import (
    INLINE_MULTIPLE_LINES,
    LEXER_UNTERMINATED_STRING,
    PARSER_UNDEFINED_NAME,
    PARSER_UNEXPECTED_TOKEN,
    STRUCTURE_DUPLICATE_ELSE,
    STRUCTURE_UNCLOSED_BLOCK,
    STRUCTURE_UNMATCHED_ELSE,
    STRUCTURE_UNMATCHED_END,
    TYPECHECK_ARGUMENT_TYPE_MISMATCH,
    TYPECHECK_RETURN_TYPE_MISMATCH,
    DiagnosticSpec,
    Severity,
)
from trigscript.diagnostics.diagnostic import Diagnostic
from trigscript.diagnostics.report import has_errors, sort_diagnostics

__all__ = [
    "INLINE_MULTIPLE_LINES",
    "LEXER_UNTERMINATED_STRING",
    "PARSER_UNDEFINED_NAME",
    "PARSER_UNEXPECTED_TOKEN",
    "STRUCTURE_DUPLICATE_ELSE",
    "STRUCTURE_UNCLOSED_BLOCK",
    "STRUCTURE_UNMATCHED_ELSE",
    "STRUCTURE_UNMATCHED_END",
    "TYPECHECK_ARGUMENT_TYPE_MISMATCH",
    "TYPECHECK_RETURN_TYPE_MISMATCH",
    "Diagnostic",
    "DiagnosticSpec",
    "Severity",
    "has_errors",
    "sort_diagnostics",
]
