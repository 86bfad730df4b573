"""Data type inference and assignability for parsed fragments."""

from __future__ import annotations

from trigscript.catalog import (
    ANY,
    BOOLEAN,
    CALCULATE_FUNCTION,
    NUMBER,
    SCRIPT,
    STRING,
    THIS_ENTITY_FUNCTION,
    VARIABLE_FUNCTION,
    ActionCatalog,
    is_type_name,
)
from trigscript.fragments import Fragment, function_name, primitive_kind

DATA_TYPE_FIELD = "_dataType"


def infer_data_type(fragment: Fragment, catalog: ActionCatalog) -> str:
    kind = primitive_kind(fragment)
    if kind is not None:
        return kind
    if isinstance(fragment, list):
        # [{operator, operandType}, left, right]
        return BOOLEAN

    name = function_name(fragment)
    if name is None:
        return ANY
    if name == CALCULATE_FUNCTION:
        return NUMBER
    if name in (VARIABLE_FUNCTION, THIS_ENTITY_FUNCTION):
        assert isinstance(fragment, dict)
        return str(fragment.get(DATA_TYPE_FIELD, ANY))

    signature = catalog.get(name)
    return signature.return_type if signature is not None else ANY


def is_assignable(actual: str, expected: str) -> bool:
    if not expected or expected == ANY or actual == ANY:
        return True
    if actual == expected:
        return True
    # Type names and scripts are referenced by their quoted name.
    return actual == STRING and (is_type_name(expected) or expected == SCRIPT)


def accepts_primitive(value: Fragment, expected: str) -> bool:
    """Whether a primitive parse result satisfies an expected return type."""
    kind = primitive_kind(value)
    if kind is None:
        return True
    return is_assignable(kind, expected)
