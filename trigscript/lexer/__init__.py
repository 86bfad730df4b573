"""Lexer."""

from trigscript.lexer.lexer import Lexer, dump_tokens, quote_string, token_text, unquote_string
from trigscript.lexer.locate import find_identifier_range
from trigscript.lexer.tokens import (
    TOKEN_DISPLAY_NAMES,
    Token,
    TokenFlags,
    TokenKind,
)

__all__ = [
    "TOKEN_DISPLAY_NAMES",
    "Lexer",
    "Token",
    "TokenFlags",
    "TokenKind",
    "dump_tokens",
    "find_identifier_range",
    "quote_string",
    "token_text",
    "unquote_string",
]
