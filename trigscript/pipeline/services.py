"""Collaborators injected into script processing."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol, TypeAlias

from trigscript.catalog import ActionCatalog, default_catalog
from trigscript.diagnostics import Diagnostic
from trigscript.fragments import Fragment
from trigscript.parser import ParserOptions, ScriptParser
from trigscript.pipeline.context import SideTable
from trigscript.pipeline.postprocess import post_process
from trigscript.render import FragmentRenderer
from trigscript.typecheck import TypeChecker

PostProcess: TypeAlias = Callable[[Fragment, SideTable], Fragment]


class LineParser(Protocol):
    def parse(self, text: str) -> Fragment: ...


class FragmentChecker(Protocol):
    def check(self, source_text: str, fragment: Fragment, expected_return_type: str) -> list[Diagnostic]: ...


@dataclass(frozen=True, slots=True)
class ScriptServices:
    parser: LineParser = field(default_factory=ScriptParser)
    checker: FragmentChecker = field(default_factory=TypeChecker)
    renderer: FragmentRenderer = field(default_factory=FragmentRenderer)
    post_process: PostProcess = post_process


def build_script_services(
    catalog: ActionCatalog | None = None,
    options: ParserOptions | None = None,
) -> ScriptServices:
    """Default services sharing one catalog."""
    resolved = catalog if catalog is not None else default_catalog()
    return ScriptServices(
        parser=ScriptParser(resolved, options),
        checker=TypeChecker(resolved),
        renderer=FragmentRenderer(resolved),
    )
