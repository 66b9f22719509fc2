# main.py
"""CLI entry point for the Biglio writing assistant."""

from __future__ import annotations

import argparse
import sys

from config import CONTEXT_MODES

from orchestration.cli_runner import run


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="biglio")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("prompt", "Print the budgeted prompt for a question"),
        ("chat", "Send a question to the assistant and print the reply"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("question", help="The writer's question")
        sub.add_argument("--context", help="Path to a camelCase context JSON file")
        sub.add_argument(
            "--chapters",
            help="Path to a JSON list of chapters to compose full-book content",
        )
        sub.add_argument("--focus", type=int, help="Chapter number in focus")
        sub.add_argument("--mode", choices=CONTEXT_MODES, default=None)

    outline = subparsers.add_parser("outline", help="Generate a chapter outline")
    outline.add_argument("--title", required=True)
    outline.add_argument("--description", required=True)
    outline.add_argument("--chapters", type=int, default=None)
    outline.add_argument("--genre", default=None)
    outline.add_argument("--audience", action="append", default=None)
    outline.add_argument(
        "--book-type", choices=("fiction", "non-fiction"), default=None
    )
    outline.add_argument("--existing", help="Path to an existing outline JSON list")

    summary = subparsers.add_parser("summary", help="Summarize a drafted chapter")
    summary.add_argument(
        "--request", required=True, help="Path to a chapter summary request JSON"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse command-line arguments and run the requested command."""
    args = build_parser().parse_args(argv)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
