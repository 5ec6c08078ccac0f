import io
import os
import traceback

from void.void_evaluator import Session
from void.void_parser import parse_program

DEFAULT_PROMPT = ">> "
CONTINUATION_PROMPT = ".. "


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def brace_delta(line: str) -> int:
    """Net `{` minus `}` on `line`, ignoring braces inside string literals."""
    depth = 0
    in_string = False
    for ch in line:
        if ch == '"':
            in_string = not in_string
        elif not in_string:
            if ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
    return depth


def read_unit(prompt: str) -> str | None:
    """Read one source unit, continuing across lines while braces are open.

    Returns None when the user typed `exit` on a fresh line.
    """
    src_lines: list[str] = []
    brace_count = 0
    while True:
        line = input(prompt if not src_lines else CONTINUATION_PROMPT)
        if line == "exit" and not src_lines:
            return None
        src_lines.append(line)
        brace_count += brace_delta(line)
        if brace_count <= 0:
            return "\n".join(src_lines)


def start_repl(session: Session | None = None, verbose: bool = False) -> None:
    session = session or Session()
    prompt = os.getenv("VOID_PROMPT", DEFAULT_PROMPT)
    print("Void REPL. Type 'exit' to leave.")

    while True:
        try:
            src = read_unit(prompt)
            if src is None:
                print("Exiting Void REPL.")
                return
            if not src.strip():
                continue
            if src.strip() == "verbose-mode":
                verbose = not verbose
                print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
                continue

            if verbose:
                program, errors = parse_program(src)
                if not errors:
                    print(f"[ast] >>> {program}")

            try:
                result = session.evaluate(src)
            except Exception:
                print_traceback()
                continue
            print(result.inspect())

        except (KeyboardInterrupt, EOFError):
            print("\nExiting Void REPL.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
