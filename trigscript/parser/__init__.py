"""Line parser (token cursor + expression grammar)."""

from trigscript.parser.errors import (
    ScriptError,
    ScriptParseError,
    UndefinedNameError,
)
from trigscript.parser.options import ParserOptions
from trigscript.parser.parser import Parser
from trigscript.parser.script import ScriptParser, parse_line

__all__ = [
    "Parser",
    "ParserOptions",
    "ScriptError",
    "ScriptParseError",
    "ScriptParser",
    "UndefinedNameError",
    "parse_line",
]
