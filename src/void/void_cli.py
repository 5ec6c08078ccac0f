"""
Void CLI Entrypoint.

This module provides the command-line interface for running Void source code.
It supports evaluating files or inline strings, dumping the intermediate token
stream or syntax tree, and an interactive REPL.

Features:
    - Read source from `.void` files or inline strings.
    - Lex, parse and evaluate against a fresh session.
    - Dump tokens (`--tokens`) or the parsed tree as JSON (`--ast`).
    - Launch an interactive REPL.
    - Debug logging with `-v/--verbose`.

Example usage:
    void hello.void
    void -s "puts(len([1, 2, 3]))"
    void -s "let x = 1 + 2 * 3" --ast
    void --repl

Functions:
    run_void(source: str, is_string: bool = False, tokens: bool = False, ast: bool = False) -> int:
        Executes the Void pipeline and returns a process exit status.

    main() -> None:
        Parses CLI arguments and invokes the appropriate action (REPL, dump, or evaluate).
"""

import argparse
import json
import logging
import sys

from void.void_evaluator import Session
from void.void_lexer import tokenize
from void.void_object import is_error
from void.void_parser import parse_program


def run_void(
    source: str,
    is_string: bool = False,
    tokens: bool = False,
    ast: bool = False,
) -> int:
    """
    Run the Void toolchain: lex, parse, and evaluate or dump.

    Args:
        source (str): The Void source code or path to a `.void` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        tokens (bool): If True, print the token stream instead of evaluating.
        ast (bool): If True, print the parsed program as JSON instead of evaluating.

    Returns:
        int: 0 on success, 1 if parsing or evaluation produced an error.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.void'.
    """
    if not is_string and not source.endswith(".void"):
        raise ValueError("Only .void files are supported.")
    # 1. Read source
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    # 2. Lexing
    if tokens:
        for tok in tokenize(source):
            print(f"{tok.line}:{tok.col}\t{tok.type}\t{tok.value}")
        return 0

    # 3. Parsing
    program, errors = parse_program(source)
    if errors:
        for error in errors:
            print(f"[parse error] >>> {error}", file=sys.stderr)
        return 1
    if ast:
        print(json.dumps(program.to_dict(), indent=2))
        return 0

    # 4. Evaluation
    result = Session().evaluate(source)
    print(result.inspect())
    return 1 if is_error(result) else 0


def main() -> None:
    """
    Entry point for the Void CLI.

    - Launches the REPL if no arguments are passed or `--repl` is specified.
    - Otherwise runs `run_void` and exits with its status.
    """
    if len(sys.argv) == 1:
        from void.void_repl import start_repl

        start_repl()
        return
    parser = argparse.ArgumentParser(prog="void")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "--tokens", action="store_true", help="Print the token stream and stop"
    )
    parser.add_argument(
        "--ast", action="store_true", help="Print the parsed tree as JSON and stop"
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
        from void.void_repl import start_repl

        start_repl(verbose=args.verbose)
        return

    sys.exit(
        run_void(
            source=args.source,
            is_string=args.string,
            tokens=args.tokens,
            ast=args.ast,
        )
    )


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
