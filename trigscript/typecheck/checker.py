"""Type checking of parsed fragments against catalog signatures."""

from __future__ import annotations

from dataclasses import dataclass, field

from trigscript.catalog import BOOLEAN, CALCULATE_FUNCTION, NUMBER, ActionCatalog, default_catalog
from trigscript.diagnostics import (
    TYPECHECK_ARGUMENT_TYPE_MISMATCH,
    TYPECHECK_RETURN_TYPE_MISMATCH,
    Diagnostic,
)
from trigscript.fragments import Fragment, function_name, primitive_kind
from trigscript.lexer import find_identifier_range
from trigscript.text import SourceRange
from trigscript.typecheck.kinds import accepts_primitive, infer_data_type, is_assignable


@dataclass(frozen=True, slots=True)
class TypeChecker:
    """Checks a fragment's return type and every argument it passes to catalog functions."""

    catalog: ActionCatalog = field(default_factory=default_catalog)

    def check(self, source_text: str, fragment: Fragment, expected_return_type: str) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        if expected_return_type:
            actual = infer_data_type(fragment, self.catalog)
            if not is_assignable(actual, expected_return_type):
                diagnostics.append(
                    Diagnostic.from_spec(
                        TYPECHECK_RETURN_TYPE_MISMATCH,
                        SourceRange.whole_line(1, source_text),
                        message=f"expect {expected_return_type} here, but got {actual}",
                    )
                )
        self._check_arguments(source_text, fragment, diagnostics)
        return diagnostics

    def _check_arguments(self, source_text: str, fragment: Fragment, diagnostics: list[Diagnostic]) -> None:
        if isinstance(fragment, list):
            self._check_condition(source_text, fragment, diagnostics)
            return

        name = function_name(fragment)
        if name is None:
            return
        assert isinstance(fragment, dict)

        if name == CALCULATE_FUNCTION:
            for operand in _operands(fragment.get("items")):
                self._expect(source_text, name, "items", operand, NUMBER, diagnostics)
            return

        signature = self.catalog.get(name)
        if signature is None:
            return
        for param in signature.params:
            self._expect(source_text, name, param.field, fragment.get(param.field), param.data_type, diagnostics)

    def _check_condition(self, source_text: str, condition: list[object], diagnostics: list[Diagnostic]) -> None:
        header = condition[0] if condition else None
        operator = header.get("operator") if isinstance(header, dict) else None
        for operand in _operands(condition):
            if operator in ("AND", "OR"):
                actual = infer_data_type(operand, self.catalog)
                if not is_assignable(actual, BOOLEAN):
                    diagnostics.append(
                        Diagnostic.from_spec(
                            TYPECHECK_ARGUMENT_TYPE_MISMATCH,
                            _range_of(source_text, operand),
                            message=f"expect {BOOLEAN} for `{str(operator).lower()}`, but got {actual}",
                        )
                    )
            self._check_arguments(source_text, operand, diagnostics)

    def _expect(
        self,
        source_text: str,
        owner: str,
        field_name: str,
        value: Fragment,
        data_type: str,
        diagnostics: list[Diagnostic],
    ) -> None:
        actual = infer_data_type(value, self.catalog)
        if not is_assignable(actual, data_type):
            diagnostics.append(
                Diagnostic.from_spec(
                    TYPECHECK_ARGUMENT_TYPE_MISMATCH,
                    _range_of(source_text, value, fallback=owner),
                    message=f"expect {data_type} for `{field_name}` of `{owner}`, but got {actual}",
                )
            )
        self._check_arguments(source_text, value, diagnostics)


def check_type(
    source_text: str,
    fragment: Fragment,
    expected_return_type: str,
    catalog: ActionCatalog | None = None,
) -> list[Diagnostic]:
    """Zero diagnostics means the fragment is valid."""
    checker = TypeChecker(catalog) if catalog is not None else TypeChecker()
    return checker.check(source_text, fragment, expected_return_type)


def check_primitive(source_text: str, value: Fragment, expected_return_type: str) -> list[Diagnostic]:
    """Mismatch between a primitive parse result and the expected return type."""
    if not expected_return_type or accepts_primitive(value, expected_return_type):
        return []
    return [
        Diagnostic.from_spec(
            TYPECHECK_RETURN_TYPE_MISMATCH,
            SourceRange.whole_line(1, source_text),
            message=f"expect {expected_return_type} here, but got {primitive_kind(value)}",
        )
    ]


def _operands(items: object) -> list[Fragment]:
    if not isinstance(items, list):
        return []
    return list(items[1:])


def _range_of(source_text: str, value: Fragment, fallback: str | None = None) -> SourceRange:
    name = function_name(value)
    if name is not None and isinstance(value, dict):
        name = value.get("variableName", name)
    for candidate in (name, fallback):
        if candidate:
            found = find_identifier_range(source_text, str(candidate))
            if found is not None:
                return found
    return SourceRange.whole_line(1, source_text)
