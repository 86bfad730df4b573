"""Errors raised by line parsers."""

from __future__ import annotations

from trigscript.text import SourceRange


class ScriptError(Exception):
    """Base class for failures turning one line of script into a fragment."""


class ScriptParseError(ScriptError):
    """Grammar rejection with the location and the tokens the grammar would have accepted.

    `range` is relative to the parsed text: line 1 is its first line.
    """

    def __init__(
        self,
        message: str,
        *,
        token: str,
        expected: tuple[str, ...] = (),
        range: SourceRange | None = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.token = token
        self.expected = expected
        self.range = range
        self.recoverable = recoverable


class UndefinedNameError(ScriptError):
    """A name the grammar cannot resolve. Carries no location, only its message."""

    def __init__(self, name: str) -> None:
        super().__init__(f"{name} is undefined")
        self.name = name
