"""Token cursor used by the line grammar."""

from trigscript.catalog import ActionCatalog
from trigscript.lexer import TOKEN_DISPLAY_NAMES, Lexer, Token, TokenKind, token_text
from trigscript.parser.errors import ScriptParseError
from trigscript.parser.options import ParserOptions
from trigscript.text import LineIndex

# Comments and whitespace never reach the grammar; SKIPPED bytes do, so they
# surface as unexpected tokens instead of vanishing.
_IGNORED: frozenset[TokenKind] = frozenset({TokenKind.WHITESPACE, TokenKind.NEWLINE, TokenKind.COMMENT})


class Parser:
    """Cursor over the significant tokens of one script line."""

    def __init__(
        self,
        text: str,
        catalog: ActionCatalog,
        options: ParserOptions | None = None,
    ) -> None:
        self._text = text
        self._catalog = catalog
        self._options = options or ParserOptions()
        self._tokens: list[Token] = [token for token in Lexer(text).lex() if token.kind not in _IGNORED]
        self._position = 0
        self._line_index = LineIndex(text)

    @property
    def text(self) -> str:
        return self._text

    @property
    def catalog(self) -> ActionCatalog:
        return self._catalog

    @property
    def options(self) -> ParserOptions:
        return self._options

    @property
    def current_token(self) -> Token:
        return self._tokens[self._position]

    @property
    def eof_token(self) -> Token:
        return self._tokens[-1]

    @property
    def current(self) -> TokenKind:
        return self.current_token.kind

    @property
    def current_text(self) -> str:
        return token_text(self._text, self.current_token)

    def at(self, kind: TokenKind) -> bool:
        return self.current == kind

    def at_keyword(self, keyword: str) -> bool:
        return self.at(TokenKind.IDENTIFIER) and self.current_text == keyword

    def nth(self, n: int) -> TokenKind:
        index = min(self._position + n, len(self._tokens) - 1)
        return self._tokens[index].kind

    def bump(self) -> Token:
        token = self.current_token
        if token.kind != TokenKind.EOF:
            self._position += 1
        return token

    def bump_text(self) -> str:
        return token_text(self._text, self.bump())

    def eat(self, kind: TokenKind) -> bool:
        if self.at(kind):
            self.bump()
            return True
        return False

    def expect(self, kind: TokenKind) -> Token:
        if not self.at(kind):
            raise self.unexpected((TOKEN_DISPLAY_NAMES.get(kind, kind.name),))
        return self.bump()

    def unexpected(self, expected: tuple[str, ...], *, token: Token | None = None) -> ScriptParseError:
        """Error for the current (or given) token, listing what the grammar accepts there."""
        target = token or self.current_token
        got = TOKEN_DISPLAY_NAMES[TokenKind.EOF] if target.kind == TokenKind.EOF else token_text(self._text, target)
        message = f"expect {', '.join(expected)} here, but got {got}"
        return ScriptParseError(
            message,
            token=got,
            expected=expected,
            range=self._line_index.source_range(target.range),
            recoverable=target.kind == TokenKind.EOF,
        )
