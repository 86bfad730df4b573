"""Lexer tokens."""

from dataclasses import dataclass
from enum import IntEnum, IntFlag, auto
from typing import Final

from trigscript.text import TextRange


class TokenKind(IntEnum):
    EOF = auto()

    # trivia
    WHITESPACE = auto()
    NEWLINE = auto()
    COMMENT = auto()
    SKIPPED = auto()

    # literals and names
    IDENTIFIER = auto()
    STRING = auto()
    INT = auto()
    FLOAT = auto()

    # comparison and logic
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    NOT_EQUAL = auto()
    LESS_THAN = auto()
    LESS_THAN_OR_EQUAL = auto()
    GREATER_THAN = auto()
    GREATER_THAN_OR_EQUAL = auto()
    AMP_AMP = auto()
    PIPE_PIPE = auto()
    BANG = auto()

    # arithmetic
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    PERCENT = auto()

    # delimiters
    COMMA = auto()
    DOT = auto()
    AT = auto()
    LPAREN = auto()
    RPAREN = auto()
    LBRACKET = auto()
    RBRACKET = auto()

    @property
    def is_trivia(self) -> bool:
        return self in _TRIVIA


_TRIVIA: Final = frozenset({TokenKind.WHITESPACE, TokenKind.NEWLINE, TokenKind.COMMENT, TokenKind.SKIPPED})

_OPERATOR_TEXT: Final[dict[TokenKind, str]] = {
    TokenKind.EQUAL: "=",
    TokenKind.EQUAL_EQUAL: "==",
    TokenKind.NOT_EQUAL: "!=",
    TokenKind.LESS_THAN: "<",
    TokenKind.LESS_THAN_OR_EQUAL: "<=",
    TokenKind.GREATER_THAN: ">",
    TokenKind.GREATER_THAN_OR_EQUAL: ">=",
    TokenKind.AMP_AMP: "&&",
    TokenKind.PIPE_PIPE: "||",
    TokenKind.BANG: "!",
    TokenKind.PLUS: "+",
    TokenKind.MINUS: "-",
    TokenKind.STAR: "*",
    TokenKind.SLASH: "/",
    TokenKind.PERCENT: "%",
    TokenKind.COMMA: ",",
    TokenKind.DOT: ".",
    TokenKind.AT: "@",
    TokenKind.LPAREN: "(",
    TokenKind.RPAREN: ")",
    TokenKind.LBRACKET: "[",
    TokenKind.RBRACKET: "]",
}

# Names used in "expected ..." messages, matching what a user types.
TOKEN_DISPLAY_NAMES: Final[dict[TokenKind, str]] = {
    TokenKind.EOF: "end of line",
    TokenKind.IDENTIFIER: "FUNCTION",
    TokenKind.STRING: "STRING",
    TokenKind.INT: "NUMBER",
    TokenKind.FLOAT: "NUMBER",
    **{kind: f"'{text}'" for kind, text in _OPERATOR_TEXT.items()},
}


class TokenFlags(IntFlag):
    NONE = 0
    PRECEDING_LINE_BREAK = auto()
    WAS_QUOTED = auto()
    HAS_ESCAPE = auto()
    UNTERMINATED = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """One lexed token, trivia included."""

    kind: TokenKind
    range: TextRange
    flags: TokenFlags = TokenFlags.NONE

    def has_preceding_line_break(self) -> bool:
        return bool(self.flags & TokenFlags.PRECEDING_LINE_BREAK)

    @property
    def is_unterminated(self) -> bool:
        return bool(self.flags & TokenFlags.UNTERMINATED)
