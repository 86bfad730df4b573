"""Function and trigger catalogs."""

from trigscript.catalog.builtin import BUILTIN_CATALOG_DATA, default_catalog
from trigscript.catalog.load import catalog_from_mapping, load_catalog
from trigscript.catalog.model import (
    ANY,
    BOOLEAN,
    CALCULATE_FUNCTION,
    NUMBER,
    SCRIPT,
    STRING,
    THIS_ENTITY_FUNCTION,
    VARIABLE_FUNCTION,
    ActionCatalog,
    FunctionSignature,
    Param,
    is_type_name,
)

__all__ = [
    "ANY",
    "BOOLEAN",
    "BUILTIN_CATALOG_DATA",
    "CALCULATE_FUNCTION",
    "NUMBER",
    "SCRIPT",
    "STRING",
    "THIS_ENTITY_FUNCTION",
    "VARIABLE_FUNCTION",
    "ActionCatalog",
    "FunctionSignature",
    "Param",
    "catalog_from_mapping",
    "default_catalog",
    "is_type_name",
    "load_catalog",
]
