"""
Command-line entry point for the Egg interpreter.

    egg program.egg         run a file and print its result
    egg -e 'print(+(1, 2))' run an expression given on the command line
    egg                     start the interactive REPL
"""

import argparse
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from egg import __version__
from egg.config.logging_config import setup_logging
from egg.config.settings import VALID_LOG_LEVELS, InterpreterSettings
from egg.egg_evaluator.egg_evaluator import EggEvaluator
from egg.egg_evaluator.egg_primitives import create_global_environment, format_value
from egg.repl.repl import Repl
from egg.system.errors import EggError

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="egg", description="Run Egg programs or start an Egg REPL.")
    parser.add_argument("file", nargs="?", help="Program file to run ('-' reads standard input).")
    parser.add_argument("-e", "--expression", help="Program text to run instead of a file.")
    parser.add_argument("--dump-ast", action="store_true", default=None,
                        help="Print the parsed AST as JSON before running.")
    parser.add_argument("-q", "--quiet", action="store_true", help="Do not print the program's result.")
    parser.add_argument("--log-level", type=str.upper, choices=VALID_LOG_LEVELS,
                        help="Logging level (overrides EGG_LOG_LEVEL).")
    parser.add_argument("--log-file", help="Write logs to this file (overrides EGG_LOG_FILE).")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def main(argv: Optional[List[str]] = None) -> int:
    """Runs the CLI and returns the process exit status."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.file and args.expression is not None:
        parser.error("give either a program file or -e/--expression, not both")

    try:
        settings = InterpreterSettings.from_env().with_overrides(
            log_level=args.log_level,
            log_file=args.log_file,
            dump_ast=args.dump_ast,
        )
    except ValidationError as e:
        print(f"Invalid settings: {e}", file=sys.stderr)
        return 2

    setup_logging(settings.log_level, settings.log_file)

    if not args.file and args.expression is None:
        Repl().start()
        return 0

    if args.expression is not None:
        source = args.expression
    else:
        try:
            source = _read_source(args.file)
        except OSError as e:
            logger.error(f"Failed to read program file '{args.file}': {e}")
            print(f"egg: cannot read '{args.file}': {e.strerror or e}", file=sys.stderr)
            return 1

    evaluator = EggEvaluator()
    try:
        node = evaluator.parser.parse_string(source)
        if settings.dump_ast:
            print(node.model_dump_json(indent=2))
        result = evaluator.evaluate(node, create_global_environment().extend({}))
    except EggError as e:
        print(f"{type(e).__name__}: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        print(format_value(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
