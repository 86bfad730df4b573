"""Whole-word type substitutions applied outside string literals."""

from __future__ import annotations

import re
from collections.abc import Iterable

from trigscript.lexer import Lexer, TokenKind, quote_string
from trigscript.pipeline.context import Substitution


def apply_substitutions(text: str, substitutions: Iterable[Substitution]) -> str:
    """Replace each bare `match_token` with its quoted replacement.

    String literals, terminated or not, are left untouched; segment boundaries
    come from the lexer.
    """
    replacements: dict[str, str] = {}
    for substitution in substitutions:
        if substitution.match_token:
            replacements.setdefault(substitution.match_token, quote_string(substitution.replacement))
    if not replacements:
        return text

    # One pass per segment, so text produced by a replacement is never matched again.
    alternatives = "|".join(re.escape(token) for token in sorted(replacements, key=len, reverse=True))
    pattern = re.compile(rf"\b(?:{alternatives})\b")
    return "".join(
        segment if is_literal else pattern.sub(lambda match: replacements[match.group(0)], segment)
        for segment, is_literal in _segments(text)
    )


def _segments(text: str) -> list[tuple[str, bool]]:
    segments: list[tuple[str, bool]] = []
    cursor = 0
    for token in Lexer(text).lex():
        if token.kind != TokenKind.STRING:
            continue
        start, end = token.range.as_tuple()
        if start > cursor:
            segments.append((text[cursor:start], False))
        segments.append((text[start:end], True))
        cursor = end
    if cursor < len(text):
        segments.append((text[cursor:], False))
    return segments
