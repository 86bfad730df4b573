"""Document assembly."""

from trigscript.document.assembler import DocumentAssembler
from trigscript.document.fields import (
    BRANCH_SLOTS,
    FieldEffect,
    publish_action,
    publish_actions,
    strip_reserved_fields,
)
from trigscript.document.model import DocumentIdentity, default_conditions
from trigscript.document.structures import (
    STRUCTURE_KINDS,
    ConditionalBuilder,
    ConditionalSlot,
    StructureBuilder,
    new_structure,
)

__all__ = [
    "BRANCH_SLOTS",
    "STRUCTURE_KINDS",
    "ConditionalBuilder",
    "ConditionalSlot",
    "DocumentAssembler",
    "DocumentIdentity",
    "FieldEffect",
    "StructureBuilder",
    "default_conditions",
    "new_structure",
    "publish_action",
    "publish_actions",
    "strip_reserved_fields",
]
