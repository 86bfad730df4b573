#!/usr/bin/env python
"""Print the lexer tokens of a script file or an inline snippet."""

import argparse
from pathlib import Path

from trigscript.lexer import Lexer, dump_tokens


def main() -> None:
    parser = argparse.ArgumentParser(description="Dump lexer tokens for debugging")
    source_group = parser.add_mutually_exclusive_group(required=True)
    source_group.add_argument("--file", type=Path, help="Script file to lex")
    source_group.add_argument("--text", help="Script text to lex")
    args = parser.parse_args()

    text = args.file.read_text(encoding="utf-8") if args.file else args.text
    lexer = Lexer(text)
    tokens = lexer.lex()
    dump_tokens(tokens, text, lexer.diagnostics)
    print(f"\n{len(tokens)} tokens")


if __name__ == "__main__":
    main()
