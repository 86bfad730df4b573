"""Line classification."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from trigscript.lexer import Lexer, TokenKind, token_text

COMMENT_SIGIL = "//"
TRIGGER_SIGIL = "@"

_INSIGNIFICANT: frozenset[TokenKind] = frozenset({TokenKind.WHITESPACE, TokenKind.NEWLINE, TokenKind.COMMENT})


class LineKind(StrEnum):
    BLANK = "blank"
    COMMENT = "comment"
    TRIGGER = "trigger"
    IF = "if"
    ELSE = "else"
    END = "end"
    ACTION = "action"


@dataclass(frozen=True, slots=True)
class ClassifiedLine:
    kind: LineKind
    text: str
    # Offset of `body` inside `text`.
    body_offset: int = 0
    body: str = ""


def classify_line(line: str) -> ClassifiedLine:
    """Classify one trimmed line.

    `body` holds the comment text for comments, the condition for `if` lines
    and the whole line otherwise.
    """
    if not line.strip():
        return ClassifiedLine(LineKind.BLANK, line)
    if line.startswith(COMMENT_SIGIL):
        return ClassifiedLine(LineKind.COMMENT, line, len(COMMENT_SIGIL), line[len(COMMENT_SIGIL) :].strip())
    if line.startswith(TRIGGER_SIGIL):
        return ClassifiedLine(LineKind.TRIGGER, line, 0, line)

    keyword = _leading_keyword(line)
    if keyword is not None:
        kind, end = keyword
        if kind is LineKind.IF:
            return ClassifiedLine(kind, line, end, line[end:])
        return ClassifiedLine(kind, line, end, "")
    return ClassifiedLine(LineKind.ACTION, line, 0, line)


def _leading_keyword(line: str) -> tuple[LineKind, int] | None:
    tokens = [token for token in Lexer(line).lex() if token.kind not in _INSIGNIFICANT]
    if not tokens or tokens[0].kind != TokenKind.IDENTIFIER:
        return None
    match token_text(line, tokens[0]):
        case "if":
            return LineKind.IF, tokens[0].range.end.value
        case "else" | "end" as word if tokens[1].kind == TokenKind.EOF:
            return LineKind(word), tokens[0].range.end.value
    return None
