"""
MonCow CLI Entrypoint.

Parses MonCow source from a file or an inline string and prints the result.

Features:
    - Read source from a file or, with `-s`, from the command line.
    - Print the canonical rendering of the parsed Program, or its JSON dump.
    - Output to console or file.
    - Report parser diagnostics on stderr with a non-zero exit status.
    - Launch the interactive REPL.

Example usage:
    moncow hello.mc
    moncow -s "let x = 1 + 2 * 3;"
    moncow hello.mc --json -o hello.json
    moncow --repl --verbose

Functions:
    run_moncow(source: str, is_string: bool = False, as_json: bool = False,
               out: str | None = None) -> int:
        Lexes and parses one source text and writes the result; returns the exit status.

    main() -> None:
        Parses CLI arguments and dispatches to the REPL or to `run_moncow`.
"""

import argparse
import json
import logging
import sys

from moncow.moncow_lexer import Lexer
from moncow.moncow_parser import Parser

logger = logging.getLogger(__name__)


def run_moncow(
    source: str,
    is_string: bool = False,
    as_json: bool = False,
    out: str | None = None,
) -> int:
    """
    Run the MonCow front end over one source text.

    Args:
        source (str): MonCow source code, or a path to a source file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        as_json (bool): If True, writes the Program as indented JSON instead of its
            canonical rendering.
        out (str | None): Optional path to write the output to. If None, prints to stdout.

    Returns:
        int: 0 when the source parsed cleanly, 1 when there were diagnostics.

    Raises:
        OSError: If the source file cannot be read or the output file cannot be written.
    """
    if not is_string:
        logger.debug("Reading source from %s", source)
        with open(source, encoding="utf-8") as f:
            source = f.read()

    parser = Parser(Lexer(source))
    program = parser.parse_program()

    if parser.errors:
        for msg in parser.errors:
            print(f"[error] >>> {msg}", file=sys.stderr)
        return 1

    if as_json:
        text = json.dumps(program.to_dict(), indent=2, ensure_ascii=False)
    else:
        text = str(program)

    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        logger.info("Wrote %d statement(s) to %s", len(program.statements), out)
    else:
        print(text)
    return 0


def main() -> None:
    """
    Entry point for the MonCow CLI.

    Launches the REPL if no arguments are passed or `--repl` is specified;
    otherwise parses the given source and exits with `run_moncow`'s status.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `--json`: Print the AST as JSON.
        - `-o`, `--out`: Write output to a file.
        - `--repl`: Launch the interactive REPL.
        - `--verbose`: Enable debug logging (and token echo in the REPL).
    """
    parser = argparse.ArgumentParser(
        prog="moncow", description="Parse MonCow source into an AST."
    )
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "--json", dest="as_json", action="store_true", help="Print the AST as JSON"
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "--repl", action="store_true", help="Launch interactive REPL instead of parsing"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.repl or args.source is None:
        from moncow.moncow_repl import start_repl

        start_repl(verbose=args.verbose)
        return

    try:
        status = run_moncow(
            source=args.source,
            is_string=args.string,
            as_json=args.as_json,
            out=args.out,
        )
    except OSError as e:
        parser.error(str(e))
    sys.exit(status)


if __name__ == "__main__":
    main()
