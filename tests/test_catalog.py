import json
from pathlib import Path

import pytest

from trigscript.catalog import (
    ActionCatalog,
    FunctionSignature,
    Param,
    catalog_from_mapping,
    default_catalog,
    is_type_name,
    load_catalog,
)


def test_default_catalog_describes_builtin_actions() -> None:
    catalog = default_catalog()
    signature = catalog.get("setHealth")

    assert signature is not None
    assert signature.params == (Param("entity", "unit"), Param("value", "number"))
    assert signature.arity == 2
    assert signature.is_action
    assert "triggeringPlayer" in catalog
    assert "gameStart" in catalog.triggers


def test_default_catalog_is_shared() -> None:
    assert default_catalog() is default_catalog()


def test_catalog_rejects_duplicate_function_keys() -> None:
    with pytest.raises(ValueError, match="Duplicate catalog function `a`"):
        ActionCatalog.of([FunctionSignature("a"), FunctionSignature("a")])


def test_catalog_from_mapping_reads_json_shape() -> None:
    catalog = catalog_from_mapping(
        {
            "functions": {
                "healUnit": {
                    "category": "action",
                    "returnType": "action",
                    "params": [{"field": "unit", "dataType": "unit"}, {"field": "amount"}],
                }
            },
            "triggers": ["unitHealed"],
        }
    )

    signature = catalog.get("healUnit")
    assert signature is not None
    assert signature.params == (Param("unit", "unit"), Param("amount", "any"))
    assert catalog.triggers == frozenset({"unitHealed"})


def test_catalog_from_mapping_rejects_malformed_sections() -> None:
    with pytest.raises(ValueError):
        catalog_from_mapping({"functions": ["not", "a", "mapping"]})
    with pytest.raises(ValueError):
        catalog_from_mapping({"triggers": "gameStart"})


def test_load_catalog_reads_file(tmp_path: Path) -> None:
    path = tmp_path / "catalog.json"
    path.write_text(
        json.dumps({"functions": {"now": {"returnType": "number"}}, "triggers": []}),
        encoding="utf-8",
    )

    catalog = load_catalog(path)

    assert catalog.get("now") == FunctionSignature("now", return_type="number")


def test_merged_catalog_layers_functions_and_triggers() -> None:
    base = ActionCatalog.of([FunctionSignature("a", return_type="number")], triggers=["t1"])
    extra = ActionCatalog.of([FunctionSignature("a", return_type="string")], triggers=["t2"])

    merged = base.merged_with(extra)

    assert merged.get("a") == FunctionSignature("a", return_type="string")
    assert merged.triggers == frozenset({"t1", "t2"})


def test_type_names_are_recognised_by_suffix() -> None:
    assert is_type_name("unitType")
    assert is_type_name("itemType")
    assert not is_type_name("unit")
