"""Command-line entry point."""

from __future__ import annotations

import json
import sys
from dataclasses import replace
from pathlib import Path

from .ast import SourceFile
from .errors import MigrateError
from .options import DEFAULT_OPTIONS, MigrateOptions
from .pipeline import migrate_batch
from .printer import print_node
from .serialize import source_file_from_dict, to_dict

EMIT_FORMATS: list[str] = ["ts", "json"]

USAGE: str = """\
tsmigrate [OPTIONS] INPUT...

Each INPUT is a JSON file holding a syntax tree (a SourceFile dict).

Options:
  --emit FORMAT          Output format: ts, json (default: ts)
  -o, --output DIR       Write one output file per input into DIR
                         instead of stdout
  --component-base NAME  Base class marking a component (repeatable;
                         default: Component, PureComponent)
  --help                 Show this help message
"""


def parse_args(args: list[str]) -> tuple[str, str | None, list[str], list[str]]:
    """Parse command-line arguments. Returns (emit, output_dir, component_bases, inputs)."""
    emit = "ts"
    output_dir: str | None = None
    bases: list[str] = []
    inputs: list[str] = []
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            sys.exit(0)
        elif arg == "--emit" or arg == "-o" or arg == "--output" or arg == "--component-base":
            if i + 1 >= len(args):
                print("error: " + arg + " requires an argument", file=sys.stderr)
                sys.exit(2)
            value = args[i + 1]
            if arg == "--emit":
                emit = value
            elif arg == "--component-base":
                bases.append(value)
            else:
                output_dir = value
            i += 2
        elif arg.startswith("-"):
            print("error: unknown flag '" + arg + "'", file=sys.stderr)
            sys.exit(2)
        else:
            inputs.append(arg)
            i += 1
    if emit not in EMIT_FORMATS:
        print("error: unknown emit format '" + emit + "'", file=sys.stderr)
        sys.exit(2)
    if len(inputs) == 0:
        print("error: no input provided", file=sys.stderr)
        sys.exit(2)
    return (emit, output_dir, bases, inputs)


def read_tree(path: str) -> SourceFile:
    """Load a SourceFile from a JSON file. Raises MigrateError."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError:
        raise MigrateError("cannot open '" + path + "'")
    except ValueError as e:
        raise MigrateError("invalid JSON: " + str(e))
    tree = source_file_from_dict(data)
    if tree.file_name == "":
        tree = replace(tree, file_name=path)
    return tree


def render(tree: SourceFile, emit: str) -> str:
    if emit == "json":
        return json.dumps(to_dict(tree), indent=2)
    return print_node(tree)


def write_output(output: str, path: str, emit: str, output_dir: str | None) -> bool:
    """Write to DIR/<stem>.<emit>, or stdout. Returns False on error."""
    if output_dir is None:
        print(output)
        return True
    target = Path(output_dir) / (Path(path).stem + "." + emit)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(output + "\n")
    except OSError:
        print("error: cannot write '" + str(target) + "'", file=sys.stderr)
        return False
    return True


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    emit, output_dir, bases, inputs = parse_args(sys.argv[1:] if argv is None else argv)
    options: MigrateOptions = DEFAULT_OPTIONS
    if len(bases) > 0:
        options = replace(DEFAULT_OPTIONS, component_bases=tuple(bases))
    failed = False
    units: list[tuple[str, SourceFile]] = []
    for path in inputs:
        try:
            units.append((path, read_tree(path)))
        except MigrateError as e:
            print("error: " + path + ": " + str(e), file=sys.stderr)
            failed = True
    result = migrate_batch(units, options=options)
    for path, reason in result.failures:
        print("error: " + path + ": " + reason, file=sys.stderr)
        failed = True
    for path, tree in result.migrated.items():
        if not write_output(render(tree, emit), path, emit, output_dir):
            failed = True
    if failed:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
