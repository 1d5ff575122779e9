#!/usr/bin/env python3
"""
loxparse - command line front end for the Lox parser

Usage:
    loxparse FILE               Parse a script and print its syntax tree
    loxparse -e EXPRESSION      Parse a single expression
    loxparse                    Start an expression REPL

Options:
    --format {sexpr,source}     Print s-expressions (default) or Lox source
    --verbose                   Enable debug logging

Exit status is 65 when any syntax error was reported and 66 when the
input file cannot be read.
"""

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from .parser import (
    AstPrinter, SourcePrinter, ErrorReporter, ErrorStatement,
    parse_source, parse_expression_source
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_DATAERR = 65
EXIT_NOINPUT = 66

PROMPT = "> "


def _make_printer(output_format: str):
    if output_format == "source":
        return SourcePrinter()
    return AstPrinter()


def _report_diagnostics(reporter: ErrorReporter, err: TextIO):
    for diagnostic in reporter.diagnostics:
        print(diagnostic, file=err)


def run_source(source: str, output_format: str, out: TextIO, err: TextIO,
               filename: str = "<string>") -> int:
    """Parse a whole program and print every recovered statement."""
    reporter = ErrorReporter()
    statements = parse_source(source, reporter, filename)
    printer = _make_printer(output_format)

    for stmt in statements:
        # Source output has no spelling for a failed declaration
        if isinstance(stmt, ErrorStatement) and output_format == "source":
            continue
        print(printer.print(stmt), file=out)

    _report_diagnostics(reporter, err)
    return EXIT_DATAERR if reporter.had_error else EXIT_OK


def run_file(path: str, output_format: str, out: TextIO, err: TextIO) -> int:
    try:
        with open(path, "r", encoding="utf-8") as f:
            source = f.read()
    except OSError as e:
        print(f"loxparse: cannot read {path}: {e.strerror}", file=err)
        return EXIT_NOINPUT

    logger.debug("Read %d characters from %s", len(source), path)
    return run_source(source, output_format, out, err, filename=path)


def run_expression(source: str, output_format: str, out: TextIO, err: TextIO) -> int:
    """Parse a single expression and print it."""
    reporter = ErrorReporter()
    expr = parse_expression_source(source, reporter)

    if expr is not None:
        print(_make_printer(output_format).print(expr), file=out)

    _report_diagnostics(reporter, err)
    return EXIT_DATAERR if reporter.had_error else EXIT_OK


def run_prompt(output_format: str, stdin: TextIO, out: TextIO, err: TextIO) -> int:
    """Read expressions line by line until end of input."""
    while True:
        out.write(PROMPT)
        out.flush()
        line = stdin.readline()
        if not line:
            out.write("\n")
            return EXIT_OK
        if not line.strip():
            continue
        # Errors on one line never end the session
        run_expression(line, output_format, out, err)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="loxparse",
        description="Parse Lox source and print its syntax tree",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    loxparse script.lox                   # Print each statement as an s-expression
    loxparse --format source script.lox   # Pretty-print the parsed program
    loxparse -e "a ? b : c ? d : e"       # Parse a single expression
    loxparse                              # Interactive expression prompt
        """
    )

    parser.add_argument('script', nargs='?',
                        help='Lox source file to parse')
    parser.add_argument('-e', '--expression',
                        help='Parse a single expression instead of a file')
    parser.add_argument('--format', choices=('sexpr', 'source'), default='sexpr',
                        help='Output format (default: sexpr)')
    parser.add_argument('--verbose', action='store_true',
                        help='Enable debug logging')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for loxparse."""
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.expression is not None:
        return run_expression(args.expression, args.format, sys.stdout, sys.stderr)
    if args.script is not None:
        return run_file(args.script, args.format, sys.stdout, sys.stderr)
    return run_prompt(args.format, sys.stdin, sys.stdout, sys.stderr)


if __name__ == "__main__":
    sys.exit(main())
