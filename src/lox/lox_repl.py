import io
import traceback

from lox.lox_lexer import Lexer, Token
from lox.lox_parser import ParseError, Parser
from lox.lox_printer import ast_dump


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def evaluate_line(src: str, verbose: bool = False) -> None:
    """Run one REPL line through the lexer and parser and print the result."""
    lexer = Lexer(src)
    tokens: list[Token] = lexer.scan_tokens()
    for diagnostic in lexer.diagnostics:
        print(diagnostic)
    if verbose:
        print(f"[tokens] >>> {tokens}")

    # comment-only or fully rejected lines leave only EOF behind
    if len(tokens) == 1:
        return

    try:
        expr = Parser(tokens).parse()
    except ParseError as e:
        print(f"[error] >>> {e}")
        return

    print(ast_dump(expr))


def start_repl(verbose: bool = False) -> None:
    print("Lox REPL. Type 'exit' or 'quit' to leave.")

    while True:
        try:
            src = input(">>> ").strip()
            if src in ("exit", "quit"):
                print("Exiting Lox REPL.")
                return
            if not src:
                continue
            if src.lower() == "verbose-mode":
                verbose = not verbose
                print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
                continue

            try:
                evaluate_line(src, verbose=verbose)
            except Exception:
                print_traceback()

        except (KeyboardInterrupt, EOFError):
            print("\nExiting Lox REPL.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
