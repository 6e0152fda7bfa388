"""
Lox CLI Entrypoint.

This module provides the command-line interface for the Lox expression front end.

Features:
    - Read source from a file (UTF-8) or an inline string.
    - Lex and parse one expression, then print its debug rendering or JSON tree.
    - Optionally print the token stream first.
    - Launch the interactive REPL when no source is given.

Example usage:
    lox expr.lox
    lox -s "1 + 2 * 3"
    lox -s "(1 + 2) * 3" --tokens
    lox -s "-4 >= 2" --json
    lox --repl --verbose

Functions:
    run_lox(source: str, is_string: bool = False, show_tokens: bool = False,
            as_json: bool = False) -> int:
        Runs the pipeline (read → lex → parse → print) and returns an exit status.

    main() -> None:
        Parses CLI arguments and invokes the appropriate action.
"""

import argparse
import logging
import sys

from lox.lox_lexer import Lexer
from lox.lox_parser import ParseError, Parser
from lox.lox_printer import ast_dump, json_dump


def run_source(source: str, show_tokens: bool = False, as_json: bool = False) -> int:
    """
    Lex, parse and print one expression from `source`.

    Lexical diagnostics are printed to stdout as they are found; parsing
    still runs on whatever tokens were produced. A syntax error is printed
    to stderr.

    Returns:
        int: 0 on success, 1 if parsing failed.
    """
    lexer = Lexer(source)
    tokens = lexer.scan_tokens()
    for diagnostic in lexer.diagnostics:
        print(diagnostic)

    if show_tokens:
        for tok in tokens:
            print(repr(tok))

    try:
        expr = Parser(tokens).parse()
    except ParseError as e:
        print(f"[error] >>> {e}", file=sys.stderr)
        return 1

    if as_json:
        print(json_dump(expr))
    else:
        print(ast_dump(expr))
    return 0


def run_lox(
    source: str,
    is_string: bool = False,
    show_tokens: bool = False,
    as_json: bool = False,
) -> int:
    """
    Run the Lox front end on a file or on literal source text.

    Args:
        source (str): Path to a source file, or the source itself with `is_string`.
        is_string (bool): Treat `source` as code instead of a path. Defaults to False.
        show_tokens (bool): Print every token before the tree. Defaults to False.
        as_json (bool): Print the tree as JSON instead of the debug rendering.

    Raises:
        OSError: If the source file cannot be read.
    """
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    return run_source(source, show_tokens=show_tokens, as_json=as_json)


def main() -> None:
    """
    Entry point for the Lox CLI.

    - Launches the REPL if no source is passed or `--repl` is specified.
    - Otherwise runs the front end on the source and exits with its status.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `--tokens`: Print the token stream before the tree.
        - `--json`: Print the tree as JSON.
        - `--repl`: Launch the interactive REPL.
        - `-v`, `--verbose`: Debug logging, and token echo in the REPL.
    """
    parser = argparse.ArgumentParser(prog="lox")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "--tokens", action="store_true", help="Print the token stream first"
    )
    parser.add_argument(
        "--json", dest="as_json", action="store_true", help="Print the tree as JSON"
    )
    parser.add_argument(
        "--repl", action="store_true", help="Launch interactive REPL"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )

    if args.repl or args.source is None:
        from lox.lox_repl import start_repl

        start_repl(verbose=args.verbose)
        return

    status = run_lox(
        source=args.source,
        is_string=args.string,
        show_tokens=args.tokens,
        as_json=args.as_json,
    )
    if status:
        sys.exit(status)


if __name__ == "__main__":
    main()
