#!/usr/bin/env python3
"""
Command line interface for funcgen.

Usage:
    python -m funcgen.codegen -m <module> [-m <module> ...] [-o <output_dir>]
    # Or use the CLI entrypoint:
    funcgen -m <module> [-m <module> ...] [-o <output_dir>]

The CLI imports the specified modules, collects every class decorated with
``@funcgen.function(...)`` and writes one generated function per class into a single
output file.

Examples:
    # Generate GeneratedFunctions.kt in the current directory
    funcgen -m my.package.declarations

    # Render every generic argument as a star projection
    funcgen -m my.package.declarations -A ignoreGenericArgs=true
"""

import argparse
import logging
import sys
from pathlib import Path

from funcgen.diagnostics import DiagnosticLogger
from funcgen.exceptions import GenerationError
from funcgen.options import GeneratorOptions, parse_option_pairs
from funcgen.resolver import ModuleResolver

from .compile import FunctionProcessor
from .writer import DEFAULT_EXTENSION, DEFAULT_FILE_NAME, BufferSink, FileSink, output_path


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="funcgen",
        description="Generate functions from @function-annotated protocol declarations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate functions to GeneratedFunctions.kt (default)
  funcgen -m my.package.declarations

  # Generate into a package directory below output/
  funcgen -m my.package.declarations -o output/ --package com.example

  # Print the generated file to stdout
  funcgen -m my.package.declarations --stdout

  # Collect declarations from several modules
  funcgen -m package.a -m package.b -A ignoreGenericArgs=true
        """,
    )
    parser.add_argument(
        "-m",
        "--module",
        action="append",
        dest="modules",
        required=True,
        help="Qualified module name to import (can be specified multiple times)",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        default=".",
        help="Output directory for the generated file (default: current directory)",
    )
    parser.add_argument(
        "--package",
        default="",
        help="Package of the generated file, used as a subdirectory path (default: none)",
    )
    parser.add_argument(
        "--file-name",
        default=DEFAULT_FILE_NAME,
        help=f"Name of the generated file without extension (default: {DEFAULT_FILE_NAME})",
    )
    parser.add_argument(
        "--extension",
        default=DEFAULT_EXTENSION,
        help=f"Extension of the generated file (default: {DEFAULT_EXTENSION})",
    )
    parser.add_argument(
        "-A",
        "--option",
        action="append",
        dest="options",
        default=[],
        metavar="KEY=VALUE",
        help="Generator option, e.g. ignoreGenericArgs=true (can be specified multiple times)",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the generated file to stdout instead of writing it",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = build_argument_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        options = GeneratorOptions.from_mapping(parse_option_pairs(args.options))
    except GenerationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    print("Importing modules...", file=sys.stderr)
    for module_name in args.modules:
        print(f"  Importing module: {module_name}", file=sys.stderr)
    resolver = ModuleResolver.from_module_names(args.modules)

    buffer = BufferSink()
    path = output_path(Path(args.output_dir), args.package, args.file_name, args.extension)

    def open_sink():
        if args.stdout:
            return buffer
        return FileSink.open(Path(args.output_dir), args.package, args.file_name, args.extension)

    diagnostics = DiagnosticLogger()
    processor = FunctionProcessor(open_sink, options, diagnostics)

    print("Generating functions...", file=sys.stderr)
    try:
        result = processor.process(resolver)
    except GenerationError as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)

    if not result.written and not result.skipped:
        print(
            "\nError: No @function declarations found in the specified modules.",
            file=sys.stderr,
        )
        print("Make sure your protocols are decorated, e.g.:", file=sys.stderr)
        print('  @funcgen.function(name="my_function")', file=sys.stderr)
        print("  class MyFunction(typing.Protocol): ...", file=sys.stderr)
        sys.exit(1)

    for declaration in result.deferred:
        logging.getLogger("funcgen").warning("Declaration has unresolved types: %s", declaration)

    print(f"Generated {len(result.written)} function(s)", file=sys.stderr)
    if args.stdout:
        print(buffer.getvalue(), end="")
    else:
        print(f"  Wrote: {path}", file=sys.stderr)

    if diagnostics.has_errors:
        print(f"\nGeneration reported {len(diagnostics.errors)} error(s)", file=sys.stderr)
        sys.exit(1)

    print("\nGeneration completed successfully!", file=sys.stderr)


if __name__ == "__main__":
    main()
