"""Lexer."""

from collections.abc import Callable

from trigscript.diagnostics import LEXER_UNTERMINATED_STRING, Diagnostic
from trigscript.lexer.tokens import Token, TokenFlags, TokenKind
from trigscript.text import LineIndex, TextRange, slice_text_range

_PUNCTUATION: dict[str, TokenKind] = {
    "==": TokenKind.EQUAL_EQUAL,
    "!=": TokenKind.NOT_EQUAL,
    "<=": TokenKind.LESS_THAN_OR_EQUAL,
    ">=": TokenKind.GREATER_THAN_OR_EQUAL,
    "&&": TokenKind.AMP_AMP,
    "||": TokenKind.PIPE_PIPE,
    "=": TokenKind.EQUAL,
    "<": TokenKind.LESS_THAN,
    ">": TokenKind.GREATER_THAN,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "%": TokenKind.PERCENT,
    "!": TokenKind.BANG,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    "@": TokenKind.AT,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}

_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    '"': '"',
    "\\": "\\",
}

_LINE_BREAKS = ("\n", "\r")


def _is_ascii_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


class Lexer:
    """Lossless lexer: concatenating every token's text reproduces the source."""

    def __init__(self, source: str) -> None:
        self._text = source
        self._offset = 0
        self._token_start = 0
        self._flags = TokenFlags.NONE
        self._line_break_seen = False
        self._lines: LineIndex | None = None
        self._diagnostics: list[Diagnostic] = []

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self._diagnostics

    @property
    def is_eof(self) -> bool:
        return self._offset >= len(self._text)

    @property
    def current_range(self) -> TextRange:
        return TextRange(self._token_start, self._offset)

    def next_token(self) -> Token:
        self._token_start = self._offset
        self._flags = TokenFlags.NONE
        if self.is_eof:
            return Token(TokenKind.EOF, self.current_range)

        kind = self._scan()
        if self._line_break_seen:
            self._flags |= TokenFlags.PRECEDING_LINE_BREAK
        if kind == TokenKind.NEWLINE:
            self._line_break_seen = True
        elif not kind.is_trivia:
            self._line_break_seen = False
        return Token(kind, self.current_range, self._flags)

    def lex(self) -> list[Token]:
        """All tokens, ending with exactly one EOF token."""
        tokens = [self.next_token()]
        while tokens[-1].kind != TokenKind.EOF:
            tokens.append(self.next_token())
        return tokens

    def _scan(self) -> TokenKind:
        ch = self._char()
        if ch in _LINE_BREAKS:
            self._bump(2 if self._text.startswith("\r\n", self._offset) else 1)
            return TokenKind.NEWLINE
        if ch in (" ", "\t"):
            self._bump_while(lambda c: c in (" ", "\t"))
            return TokenKind.WHITESPACE
        if self._text.startswith("//", self._offset):
            self._bump_while(lambda c: c not in _LINE_BREAKS)
            return TokenKind.COMMENT
        if ch == '"':
            return self._scan_string()
        if _is_ascii_digit(ch):
            return self._scan_number()
        if ch.isalpha() or ch == "_":
            self._bump_while(lambda c: c.isalnum() or c == "_")
            return TokenKind.IDENTIFIER

        for length in (2, 1):
            kind = _PUNCTUATION.get(self._text[self._offset : self._offset + length])
            if kind is not None:
                self._bump(length)
                return kind

        # Unknown characters are kept so token ranges stay contiguous.
        self._bump()
        return TokenKind.SKIPPED

    def _scan_string(self) -> TokenKind:
        self._flags |= TokenFlags.WAS_QUOTED
        self._bump()
        while not self.is_eof:
            ch = self._char()
            if ch == '"':
                self._bump()
                return TokenKind.STRING
            if ch in _LINE_BREAKS:
                break
            if ch == "\\":
                self._flags |= TokenFlags.HAS_ESCAPE
                self._bump(min(2, len(self._text) - self._offset))
                continue
            self._bump()

        self._flags |= TokenFlags.UNTERMINATED
        if self._lines is None:
            self._lines = LineIndex(self._text)
        self._diagnostics.append(
            Diagnostic.from_spec(LEXER_UNTERMINATED_STRING, self._lines.source_range(self.current_range))
        )
        return TokenKind.STRING

    def _scan_number(self) -> TokenKind:
        self._bump_while(_is_ascii_digit)
        if self._char() == "." and _is_ascii_digit(self._char(1)):
            self._bump()
            self._bump_while(_is_ascii_digit)
            return TokenKind.FLOAT
        return TokenKind.INT

    def _char(self, ahead: int = 0) -> str:
        index = self._offset + ahead
        return self._text[index] if index < len(self._text) else ""

    def _bump(self, count: int = 1) -> None:
        self._offset += count

    def _bump_while(self, predicate: Callable[[str], bool]) -> None:
        while not self.is_eof and predicate(self._char()):
            self._offset += 1


def token_text(source: str, token: Token) -> str:
    """Get the text of a token from the source string based on its range."""
    if token.kind == TokenKind.EOF:
        return ""
    return slice_text_range(source, token.range)


def unquote_string(raw: str) -> str:
    """Decode the value of a STRING token's text, tolerating a missing closing quote."""
    body = raw[1:] if raw.startswith('"') else raw
    if body.endswith('"') and not _ends_with_escaped_quote(body):
        body = body[:-1]

    chars: list[str] = []
    index = 0
    while index < len(body):
        ch = body[index]
        if ch == "\\" and index + 1 < len(body):
            nxt = body[index + 1]
            chars.append(_ESCAPES.get(nxt, nxt))
            index += 2
            continue
        chars.append(ch)
        index += 1
    return "".join(chars)


def quote_string(value: str) -> str:
    """Inverse of `unquote_string`."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


def _ends_with_escaped_quote(body: str) -> bool:
    backslashes = 0
    index = len(body) - 2
    while index >= 0 and body[index] == "\\":
        backslashes += 1
        index -= 1
    return backslashes % 2 == 1


def dump_tokens(tokens: list[Token], source: str, diagnostics: list[Diagnostic] | None = None) -> None:
    """Print token list with kind, range, flags, and text for debugging."""
    for i, tok in enumerate(tokens):
        text = token_text(source, tok)
        print(f"{i:03d} {tok.kind.name:<22} range={tok.range.as_tuple()} flags={tok.flags} text={text!r}")

    if diagnostics is not None:
        print("\nDiagnostics:")
        for d in diagnostics:
            print(f"- {d.severity.upper()} {d.code} range={d.range!r} message={d.message}")
