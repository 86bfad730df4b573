"""Type checking for parsed fragments."""

from trigscript.typecheck.checker import TypeChecker, check_primitive, check_type
from trigscript.typecheck.kinds import (
    DATA_TYPE_FIELD,
    accepts_primitive,
    infer_data_type,
    is_assignable,
)

__all__ = [
    "DATA_TYPE_FIELD",
    "TypeChecker",
    "accepts_primitive",
    "check_primitive",
    "check_type",
    "infer_data_type",
    "is_assignable",
]
