"""Line classification and the document / inline processing entrypoints."""

from trigscript.pipeline.classify import ClassifiedLine, LineKind, classify_line
from trigscript.pipeline.context import EntityBinding, ScriptContext, SideTable, Substitution
from trigscript.pipeline.entrypoints import LineOutcome, evaluate_line, process_document, process_inline
from trigscript.pipeline.postprocess import post_process
from trigscript.pipeline.results import DocumentRunResult, InlineRunResult
from trigscript.pipeline.services import (
    FragmentChecker,
    LineParser,
    PostProcess,
    ScriptServices,
    build_script_services,
)
from trigscript.pipeline.substitute import apply_substitutions

__all__ = [
    "ClassifiedLine",
    "DocumentRunResult",
    "EntityBinding",
    "FragmentChecker",
    "InlineRunResult",
    "LineKind",
    "LineOutcome",
    "LineParser",
    "PostProcess",
    "ScriptContext",
    "ScriptServices",
    "SideTable",
    "Substitution",
    "apply_substitutions",
    "build_script_services",
    "classify_line",
    "evaluate_line",
    "post_process",
    "process_document",
    "process_inline",
]
