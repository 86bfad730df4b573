"""Locate identifiers in script text for best-effort diagnostic ranges."""

from trigscript.lexer.lexer import Lexer, token_text
from trigscript.lexer.tokens import TokenKind
from trigscript.text import LineIndex, SourceRange


def find_identifier_range(source: str, name: str) -> SourceRange | None:
    """Range of the first identifier token spelled `name`; string literals never match."""
    if not name:
        return None
    for token in Lexer(source).lex():
        if token.kind == TokenKind.IDENTIFIER and token_text(source, token) == name:
            return LineIndex(source).source_range(token.range)
    return None
