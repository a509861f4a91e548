"""Command-line front end: show tokens, syntax trees and diagnostics for PL/0 files."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence

from pl0lib import __version__
from pl0lib.diagnostics.collector import DiagnosticCollector
from pl0lib.diagnostics.kinds import DiagnosticSeverity
from pl0lib.parser.lexer import Lexer
from pl0lib.parser.parser import ParserOptions, parse_tokens
from pl0lib.parser.printer import ast_to_dict, format_ast, format_tokens

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SYNTAX_ERRORS = 1
EXIT_USAGE = 2


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(format="{levelname}: {name}: {message}", style="{")
    logging.getLogger().setLevel(logging.DEBUG if verbose else logging.WARNING)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pl0lib",
        description="PL/0 compiler front end: lexical and syntax analysis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s tokens square.pl0           # Token listing, one per line
  %(prog)s ast square.pl0              # Syntax tree as an S-expression
  %(prog)s ast square.pl0 -f json      # Syntax tree as JSON
  %(prog)s check - < square.pl0        # Diagnostics only, source from stdin
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("file", metavar="FILE", help="PL/0 source file, or '-' for stdin")
    common.add_argument("-v", "--verbose", action="store_true", help="verbose debugging output")
    common.add_argument(
        "--max-integer",
        type=int,
        default=ParserOptions.max_integer,
        help="largest integer literal accepted without a diagnostic (default: %(default)s)",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("tokens", parents=[common], help="print the token listing")
    ast_cmd = commands.add_parser("ast", parents=[common], help="print the syntax tree")
    ast_cmd.add_argument(
        "-f",
        "--format",
        choices=["sexp", "json"],
        default="sexp",
        help="tree output format (default: sexp)",
    )
    commands.add_parser("check", parents=[common], help="print diagnostics only")
    return parser


def read_source(path: str) -> tuple[str, str]:
    """Return ``(source, display_name)`` for *path*; ``-`` reads stdin."""
    if path == "-":
        return sys.stdin.read(), "<stdin>"
    with open(path, encoding="utf-8") as f:
        return f.read(), path


def report(diag: DiagnosticCollector) -> None:
    """Write diagnostics and a one-line summary to stderr."""
    diagnostics = diag.get_all()
    for d in diagnostics:
        print(d, file=sys.stderr)
        for note in d.notes:
            print(f"  note: {note}", file=sys.stderr)
    if diagnostics:
        errors = sum(1 for d in diagnostics if d.severity == DiagnosticSeverity.ERROR)
        warnings = sum(1 for d in diagnostics if d.severity == DiagnosticSeverity.WARNING)
        print(f"{errors} error(s), {warnings} warning(s)", file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        source, name = read_source(args.file)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read {args.file}: {e}", file=sys.stderr)
        return EXIT_USAGE
    logger.debug("read %d characters from %s", len(source), name)

    tokens = Lexer(source, name).tokenize()
    if args.command == "tokens":
        for line in format_tokens(tokens):
            print(line)
        return EXIT_OK

    program, diag = parse_tokens(tokens, ParserOptions(max_integer=args.max_integer), name)
    if args.command == "ast":
        if args.format == "json":
            print(json.dumps(ast_to_dict(program), indent=2))
        else:
            print(format_ast(program))
    report(diag)
    return EXIT_SYNTAX_ERRORS if diag.has_errors() else EXIT_OK
