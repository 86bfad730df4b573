"""Assembly and validation of line-oriented game trigger scripts."""

import logging

from trigscript.document import DocumentIdentity
from trigscript.pipeline import (
    DocumentRunResult,
    InlineRunResult,
    ScriptContext,
    ScriptServices,
    SideTable,
    Substitution,
    build_script_services,
    process_document,
    process_inline,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "DocumentIdentity",
    "DocumentRunResult",
    "InlineRunResult",
    "ScriptContext",
    "ScriptServices",
    "SideTable",
    "Substitution",
    "build_script_services",
    "process_document",
    "process_inline",
]
