from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import load_settings
from .repl import REPL


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pratt-calc",
        description="Integer calculator with variables and if/then/else, parsed by precedence climbing.",
    )
    parser.add_argument(
        "-e", "--eval",
        action="append",
        metavar="EXPR",
        help="Evaluate EXPR and exit instead of starting the REPL (repeatable; shares one environment).",
    )
    parser.add_argument("--tokens", action="store_true", default=None, help="Print the token list for each line.")
    parser.add_argument("--tree", action="store_true", default=None, help="Print the parse tree for each line.")
    parser.add_argument(
        "--rollback",
        action="store_true",
        default=None,
        help="Undo assignments made by a line that fails to evaluate.",
    )
    parser.add_argument("--log-level", type=str, help="Logging level (default: WARNING).")
    parser.add_argument("--history-file", type=str, help="File for interactive input history.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings({
        "show_tokens": args.tokens,
        "show_tree": args.tree,
        "rollback_on_error": args.rollback,
        "log_level": args.log_level,
        "history_file": args.history_file,
    })

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    repl = REPL(settings)
    if args.eval:
        for expr in args.eval:
            ok, out = repl.evaluate_line(expr)
            print(out)
            if not ok:
                return 1
        return 0

    repl.repl_loop()
    return 0
