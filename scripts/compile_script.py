#!/usr/bin/env python3
"""Compile trigger script files into document JSON plus diagnostics."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from tqdm import tqdm

from trigscript.catalog import default_catalog, load_catalog
from trigscript.document import DocumentIdentity
from trigscript.parser import ParserOptions
from trigscript.pipeline import ScriptContext, SideTable, process_document


def _collect_script_files(paths: list[Path], suffix: str) -> list[Path]:
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(sorted(path.rglob(f"*{suffix}")))
        elif path.is_file():
            files.append(path)
        else:
            raise SystemExit(f"No such file or directory: {path}")
    return files


def _parse_variables(entries: list[str]) -> dict[str, str]:
    variables: dict[str, str] = {}
    for entry in entries:
        name, sep, data_type = entry.partition("=")
        if not sep or not name or not data_type:
            raise SystemExit(f"Invalid --variable `{entry}`; expected NAME=TYPE")
        variables[name] = data_type
    return variables


def main() -> int:
    parser = argparse.ArgumentParser(description="Compile trigger scripts into action documents")
    parser.add_argument("paths", type=Path, nargs="+", help="Script files or directories of scripts")
    parser.add_argument("--suffix", default=".trig", help="Script file suffix when walking directories (default: .trig)")
    parser.add_argument("--catalog", type=Path, help="JSON catalog to use instead of the built-in one")
    parser.add_argument(
        "--variable",
        action="append",
        default=[],
        metavar="NAME=TYPE",
        help="Declare a variable and its data type (repeatable)",
    )
    parser.add_argument("--side-table", type=Path, help="JSON side table with `thisEntity` bindings")
    parser.add_argument("--out-dir", type=Path, help="Write <name>.json per script here instead of stdout")
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable tqdm progress bars",
    )
    parser.add_argument("--verbose", action="store_true", help="Log build details")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    catalog = load_catalog(args.catalog) if args.catalog else default_catalog()
    options = ParserOptions.with_variables(_parse_variables(args.variable))
    side_table = (
        SideTable.from_mapping(json.loads(args.side_table.read_text(encoding="utf-8")))
        if args.side_table
        else SideTable()
    )
    context = ScriptContext(side_table=side_table)

    files = _collect_script_files(args.paths, args.suffix)
    if not files:
        raise SystemExit("No script files found")
    if args.out_dir:
        args.out_dir.mkdir(parents=True, exist_ok=True)

    iterator = tqdm(files, desc="compile", unit="file") if not args.no_progress else files
    error_count = 0
    for order, path in enumerate(iterator):
        identity = DocumentIdentity(name=path.stem, key=path.stem, order=order)
        result = process_document(
            path.read_text(encoding="utf-8"),
            identity,
            context,
            catalog=catalog,
            options=options,
        )
        payload = {"document": result.document, "diagnostics": result.diagnostics_as_dicts()}
        if result.has_errors:
            error_count += 1

        if args.out_dir:
            (args.out_dir / f"{path.stem}.json").write_text(json.dumps(payload, indent=2), encoding="utf-8")
        else:
            print(json.dumps({"path": str(path), **payload}, indent=2))

    print(f"Compiled {len(files)} scripts, {error_count} with errors")
    return 1 if error_count else 0


if __name__ == "__main__":
    raise SystemExit(main())
