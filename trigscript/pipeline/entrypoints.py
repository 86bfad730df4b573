"""Entrypoints that turn script text into documents and inline fragments."""

from __future__ import annotations

import dataclasses
import logging
import re
from dataclasses import dataclass

from trigscript.catalog import BOOLEAN, ActionCatalog
from trigscript.diagnostics import (
    INLINE_MULTIPLE_LINES,
    PARSER_UNDEFINED_NAME,
    PARSER_UNEXPECTED_TOKEN,
    STRUCTURE_DUPLICATE_ELSE,
    STRUCTURE_UNCLOSED_BLOCK,
    STRUCTURE_UNMATCHED_ELSE,
    STRUCTURE_UNMATCHED_END,
    Diagnostic,
    sort_diagnostics,
)
from trigscript.document import ConditionalBuilder, DocumentAssembler, DocumentIdentity, publish_actions
from trigscript.fragments import Fragment, is_primitive
from trigscript.lexer import find_identifier_range
from trigscript.parser import ParserOptions, ScriptParseError, UndefinedNameError
from trigscript.pipeline.classify import ClassifiedLine, LineKind, classify_line
from trigscript.pipeline.context import ScriptContext
from trigscript.pipeline.results import DocumentRunResult, InlineRunResult
from trigscript.pipeline.services import ScriptServices, build_script_services
from trigscript.pipeline.substitute import apply_substitutions
from trigscript.render import FragmentRenderer, render_document
from trigscript.text import SourceRange
from trigscript.typecheck import check_primitive

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True, slots=True)
class LineOutcome:
    """Parse/check result of one expression, ranges relative to the expression text."""

    fragment: Fragment
    diagnostics: list[Diagnostic]
    parsed: bool


@dataclass(slots=True)
class _OpenBlock:
    range: SourceRange
    has_else: bool = False


def process_document(
    text: str,
    identity: DocumentIdentity,
    context: ScriptContext | None = None,
    *,
    catalog: ActionCatalog | None = None,
    options: ParserOptions | None = None,
    services: ScriptServices | None = None,
) -> DocumentRunResult:
    """Build a document from script text, one line at a time.

    A failing line is reported and left out; it never stops the build.
    """
    resolved_context = context or ScriptContext()
    resolved_services = _resolve_services(catalog=catalog, options=options, services=services)
    assembler = DocumentAssembler(identity)
    diagnostics: list[Diagnostic] = []
    open_blocks: list[_OpenBlock] = []

    for line_number, raw_line in enumerate(_LINE_BREAK.split(text), start=1):
        stripped = raw_line.strip()
        if not stripped:
            continue
        indent = len(raw_line) - len(raw_line.lstrip())
        line = classify_line(stripped)

        match line.kind:
            case LineKind.COMMENT:
                assembler.insert_comment(line.body)
            case LineKind.TRIGGER:
                outcome = evaluate_line(line.body, "", resolved_context, resolved_services, substitute=False)
                diagnostics.extend(_on_line(outcome.diagnostics, line_number, indent))
                if outcome.parsed and not outcome.diagnostics and isinstance(outcome.fragment, dict):
                    assembler.insert_trigger(outcome.fragment)
            case LineKind.IF:
                outcome = evaluate_line(line.body, BOOLEAN, resolved_context, resolved_services)
                diagnostics.extend(_on_line(outcome.diagnostics, line_number, indent + line.body_offset))
                assembler.open_structure(ConditionalBuilder.kind)
                if outcome.parsed and not outcome.diagnostics:
                    assembler.insert_action(outcome.fragment)
                assembler.advance_slot()
                open_blocks.append(_OpenBlock(_keyword_range(line, line_number, indent)))
            case LineKind.ELSE:
                diagnostic = _handle_else(open_blocks, assembler, line, line_number, indent)
                if diagnostic is not None:
                    diagnostics.append(diagnostic)
            case LineKind.END:
                if not open_blocks:
                    diagnostics.append(
                        Diagnostic.from_spec(STRUCTURE_UNMATCHED_END, _keyword_range(line, line_number, indent))
                    )
                else:
                    assembler.close_structure()
                    open_blocks.pop()
            case _:
                outcome = evaluate_line(
                    line.body,
                    resolved_context.default_return_type,
                    resolved_context,
                    resolved_services,
                )
                diagnostics.extend(_on_line(outcome.diagnostics, line_number, indent))
                if outcome.parsed and not outcome.diagnostics:
                    assembler.insert_action(outcome.fragment)

    for block in open_blocks:
        diagnostics.append(Diagnostic.from_spec(STRUCTURE_UNCLOSED_BLOCK, block.range))

    document = assembler.generate_document()
    document["actions"] = publish_actions(document["actions"])
    renderer = _renderer_for(resolved_services, resolved_context)
    logger.debug(
        "built document `%s`: %d triggers, %d actions, %d diagnostics",
        identity.key,
        len(document["triggers"]),
        len(document["actions"]),
        len(diagnostics),
    )
    return DocumentRunResult(
        document=document,
        diagnostics=sort_diagnostics(diagnostics),
        rendered_text=render_document(document, renderer),
    )


def process_inline(
    text: str,
    context: ScriptContext | None = None,
    *,
    catalog: ActionCatalog | None = None,
    options: ParserOptions | None = None,
    services: ScriptServices | None = None,
) -> InlineRunResult:
    """Parse and check a single inline expression against the context's return type.

    The output is kept even when the type check fails.
    """
    resolved_context = context or ScriptContext()
    resolved_services = _resolve_services(catalog=catalog, options=options, services=services)

    lines = [
        (line_number, raw_line)
        for line_number, raw_line in enumerate(_LINE_BREAK.split(text), start=1)
        if raw_line.strip()
    ]
    if not lines:
        return InlineRunResult(output=None, diagnostics=[], rendered_text="", has_output=False)

    line_number, raw_line = lines[0]
    indent = len(raw_line) - len(raw_line.lstrip())
    outcome = evaluate_line(
        raw_line.strip(),
        resolved_context.default_return_type,
        resolved_context,
        resolved_services,
    )
    diagnostics = _on_line(outcome.diagnostics, line_number, indent)
    for extra_number, extra_line in lines[1:]:
        diagnostics.append(
            Diagnostic.from_spec(INLINE_MULTIPLE_LINES, SourceRange.whole_line(extra_number, extra_line))
        )

    rendered = _renderer_for(resolved_services, resolved_context).render(outcome.fragment) if outcome.parsed else ""
    return InlineRunResult(
        output=outcome.fragment if outcome.parsed else None,
        diagnostics=diagnostics,
        rendered_text=rendered,
        has_output=outcome.parsed,
    )


def evaluate_line(
    text: str,
    expected_return_type: str,
    context: ScriptContext,
    services: ScriptServices,
    *,
    substitute: bool = True,
) -> LineOutcome:
    """Substitute, parse, type check and post-process one expression."""
    source = apply_substitutions(text, context.substitutions()) if substitute else text
    try:
        parsed = services.parser.parse(source)
    except ScriptParseError as error:
        range = error.range if error.range is not None else SourceRange.whole_line(1, source)
        return LineOutcome(None, [Diagnostic.from_spec(PARSER_UNEXPECTED_TOKEN, range, message=error.message)], False)
    except UndefinedNameError as error:
        range = find_identifier_range(source, error.name) or SourceRange.whole_line(1, source)
        return LineOutcome(None, [Diagnostic.from_spec(PARSER_UNDEFINED_NAME, range, message=str(error))], False)

    if is_primitive(parsed):
        return LineOutcome(parsed, check_primitive(source, parsed, expected_return_type), True)

    # Checked before post-processing, which drops the `_dataType` bookkeeping.
    diagnostics = services.checker.check(source, parsed, expected_return_type)
    return LineOutcome(services.post_process(parsed, context.side_table), diagnostics, True)


def _handle_else(
    open_blocks: list[_OpenBlock],
    assembler: DocumentAssembler,
    line: ClassifiedLine,
    line_number: int,
    indent: int,
) -> Diagnostic | None:
    range = _keyword_range(line, line_number, indent)
    if not open_blocks:
        return Diagnostic.from_spec(STRUCTURE_UNMATCHED_ELSE, range)
    block = open_blocks[-1]
    if block.has_else:
        return Diagnostic.from_spec(STRUCTURE_DUPLICATE_ELSE, range)
    assembler.advance_slot()
    block.has_else = True
    return None


def _keyword_range(line: ClassifiedLine, line_number: int, indent: int) -> SourceRange:
    return SourceRange.on_line(line_number, indent + 1, indent + line.body_offset + 1)


def _on_line(diagnostics: list[Diagnostic], line_number: int, column_delta: int) -> list[Diagnostic]:
    return [diagnostic.move_to_line(line_number, column_delta) for diagnostic in diagnostics]


def _renderer_for(services: ScriptServices, context: ScriptContext) -> FragmentRenderer:
    reverse = context.reverse_substitutions()
    if not reverse:
        return services.renderer
    return dataclasses.replace(services.renderer, reverse_substitutions=reverse)


def _resolve_services(
    *,
    catalog: ActionCatalog | None,
    options: ParserOptions | None,
    services: ScriptServices | None,
) -> ScriptServices:
    if services is not None:
        if catalog is not None or options is not None:
            raise ValueError("Pass either services or catalog/options, not both")
        return services
    return build_script_services(catalog, options)
