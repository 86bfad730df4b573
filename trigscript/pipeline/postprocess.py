"""Post-processing of parsed fragments before assembly."""

from __future__ import annotations

import copy
from typing import Any

from trigscript.catalog import THIS_ENTITY_FUNCTION
from trigscript.document import FieldEffect, strip_reserved_fields
from trigscript.fragments import FUNCTION_FIELD, Fragment
from trigscript.pipeline.context import SideTable
from trigscript.typecheck import DATA_TYPE_FIELD


def post_process(fragment: Fragment, side_table: SideTable) -> Fragment:
    """Resolve side-table references and drop bookkeeping fields.

    Never mutates `fragment`.
    """
    return strip_reserved_fields(copy.deepcopy(fragment), (_this_entity_effect(side_table),))


def _this_entity_effect(side_table: SideTable) -> FieldEffect:
    def resolve(key: str, value: Any) -> None:
        if not isinstance(value, dict) or value.get(FUNCTION_FIELD) != THIS_ENTITY_FUNCTION:
            return
        data_type = value.get(DATA_TYPE_FIELD)
        if not isinstance(data_type, str):
            return
        binding = side_table.binding_for(data_type)
        if binding is None:
            return
        value["entity"] = binding.entity
        value["key"] = binding.key

    return resolve
