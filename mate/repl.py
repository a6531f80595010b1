import argparse
import logging
import sys
from typing import Optional

from mate.calculator import compute
from mate.tokenizer import format_tokens, tokenize

VERSION = "0.1.0"

QUIT_COMMANDS = ("quit", "exit", "q")
HELP_COMMANDS = ("help", "h", "?")

REPL_HELP = """
Available commands:
  help, h, ?    Show this help message
  quit, exit, q Exit the REPL
  tokens        Toggle token display

Supported operations:
  +       Addition
  -       Subtraction
  *, •    Multiplication
  /, :    Division
  ()      Brackets for grouping

Operations are applied strictly left to right, use brackets to group:
  2 + 3 * 4    is 20
  2 + (3 * 4)  is 14
"""


def format_result(result: float) -> str:
    if result.is_integer():
        return str(int(result))
    return str(result)


def print_tokens(code: str) -> None:
    print("-" * 15)
    for line in format_tokens(tokenize(code)):
        print(line)
    print("-" * 15)


def execute(code: str, show_tokens: bool) -> bool:
    try:
        if show_tokens:
            print_tokens(code)
        result, error = compute(code)
    except RecursionError:
        print("[Evaluation error] Expression is nested too deeply")
        return False

    if error is not None:
        print(error)
        return False

    print(format_result(result))
    return True


def repl(show_tokens: bool) -> None:
    print("mate - a simple arithmetic expression evaluator")
    print("Type 'help' for available commands, 'quit' to exit.")

    while True:
        try:
            code = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not code:
            continue

        command = code.lower()
        if command in QUIT_COMMANDS:
            break
        elif command in HELP_COMMANDS:
            print(REPL_HELP)
        elif command == "tokens":
            show_tokens = not show_tokens
            print(f"Token display: {'enabled' if show_tokens else 'disabled'}")
        else:
            execute(code, show_tokens)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mate",
        description="A simple arithmetic expression evaluator. Starts a REPL when no expression is given.",
    )
    parser.add_argument("-t", "--tokens", action="store_true", help="Show parsed tokens")
    parser.add_argument("-v", "--version", action="version", version=f"mate v{VERSION}")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for diagnostics (default: WARNING)",
    )
    parser.add_argument("expression", nargs="*", help="Expression to evaluate, e.g. '(5 + 3) * 2'")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    if args.expression:
        return 0 if execute(" ".join(args.expression), args.tokens) else 1

    repl(show_tokens=args.tokens)
    return 0


if __name__ == "__main__":
    sys.exit(main())
