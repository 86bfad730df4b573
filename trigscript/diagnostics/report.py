"""Diagnostics helpers."""

from __future__ import annotations

from collections.abc import Iterable

from trigscript.diagnostics.diagnostic import Diagnostic


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(d.severity == "error" for d in diagnostics)


def sort_diagnostics(diagnostics: list[Diagnostic]) -> list[Diagnostic]:
    return sorted(
        diagnostics,
        key=lambda diagnostic: (
            diagnostic.range.start_line,
            diagnostic.range.start_column,
            diagnostic.range.end_line,
            diagnostic.range.end_column,
            diagnostic.code,
            diagnostic.message,
        ),
    )
