"""
Interactive read-parse-print loop for MonCow.

Each entered chunk is parsed on its own. The REPL prints the canonical
rendering of the resulting Program, or the parser diagnostics if there are
any. Input continues on `... ` prompts while `{` braces are unbalanced.

Commands:
    exit / quit     Leave the REPL.
    verbose-mode    Toggle printing the token stream before each parse.
"""

import getpass

from moncow.moncow_lexer import tokenize
from moncow.moncow_parser import parse

PROMPT = ">>> "
CONTINUATION_PROMPT = "... "


def greeting() -> str:
    try:
        user = getpass.getuser()
    except (KeyError, OSError):
        user = "there"
    return f"Hello {user}! This is MonCow, a language derived from Monkey :)"


def print_parser_errors(errors: list[str]) -> None:
    print("[error] >>> parser errors:")
    for msg in errors:
        print(f"\t{msg}")


def read_chunk() -> str | None:
    """Reads lines until braces balance. Returns None on `exit`/`quit`."""
    src_lines: list[str] = []
    brace_count = 0
    while True:
        line = input(CONTINUATION_PROMPT if src_lines else PROMPT)
        if line.strip() in ("exit", "quit") and not src_lines:
            return None
        src_lines.append(line)
        brace_count += line.count("{") - line.count("}")
        if brace_count <= 0:
            return "\n".join(src_lines).strip()


def start_repl(verbose: bool = False) -> None:
    print(greeting())
    print("Type 'exit' or 'quit' to leave.")

    while True:
        try:
            src = read_chunk()
            if src is None:
                print("Exiting MonCow REPL.")
                return
            if not src:
                continue
            if src.lower() == "verbose-mode":
                verbose = not verbose
                print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
                continue

            if verbose:
                print(f"[tokens] >>> {tokenize(src)}")

            program, errors = parse(src)
            if errors:
                print_parser_errors(errors)
                continue
            print(program)

        except (KeyboardInterrupt, EOFError):
            print("\nExiting MonCow REPL.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
