"""Helpers for loading catalogs from JSON documents."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from trigscript.catalog.model import ANY, ActionCatalog, FunctionSignature, Param


def catalog_from_mapping(data: Mapping[str, Any]) -> ActionCatalog:
    """Build a catalog from the JSON shape

    ```
    {
      "functions": {
        "<key>": {
          "params": [{"field": "...", "dataType": "..."}],
          "returnType": "...",
          "category": "...",
          "title": "..."
        }
      },
      "triggers": ["<name>", ...]
    }
    ```
    """
    functions = data.get("functions", {})
    if not isinstance(functions, Mapping):
        raise ValueError("Catalog `functions` must be an object keyed by function name")

    signatures: list[FunctionSignature] = []
    for key, entry in functions.items():
        if not isinstance(entry, Mapping):
            raise ValueError(f"Catalog entry `{key}` must be an object")
        params = tuple(
            Param(field=str(param["field"]), data_type=str(param.get("dataType", ANY)))
            for param in entry.get("params", ())
        )
        signatures.append(
            FunctionSignature(
                key=str(key),
                params=params,
                return_type=str(entry.get("returnType", ANY)),
                category=str(entry.get("category", "")),
                title=str(entry.get("title", "")),
            )
        )

    triggers = data.get("triggers", ())
    if isinstance(triggers, str):
        raise ValueError("Catalog `triggers` must be a list of names")
    return ActionCatalog.of(signatures, triggers=(str(name) for name in triggers))


def load_catalog(path: str | Path) -> ActionCatalog:
    text = Path(path).read_text(encoding="utf-8")
    return catalog_from_mapping(json.loads(text))
