"""High-level parse entrypoint for one line of script text."""

from __future__ import annotations

from trigscript.catalog import ActionCatalog, default_catalog
from trigscript.fragments import Fragment
from trigscript.parser.grammar import parse_line as _parse_line
from trigscript.parser.options import ParserOptions
from trigscript.parser.parser import Parser


class ScriptParser:
    """Parses single lines against a catalog.

    Lines are independent: nothing carries over from one `parse` call to the
    next, so one instance can serve any number of builds.
    """

    def __init__(self, catalog: ActionCatalog | None = None, options: ParserOptions | None = None) -> None:
        self._catalog = catalog if catalog is not None else default_catalog()
        self._options = options or ParserOptions()

    @property
    def catalog(self) -> ActionCatalog:
        return self._catalog

    @property
    def options(self) -> ParserOptions:
        return self._options

    def parse(self, text: str) -> Fragment:
        """Parse `text` or raise `ScriptParseError` / `UndefinedNameError`."""
        return _parse_line(Parser(text, self._catalog, self._options))


def parse_line(
    text: str,
    catalog: ActionCatalog | None = None,
    options: ParserOptions | None = None,
) -> Fragment:
    return ScriptParser(catalog, options).parse(text)
