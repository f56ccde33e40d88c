"""REPL interface for interactive Egg sessions."""
from typing import Callable, Dict, List, Optional, TextIO
import sys
import logging

from egg.config.logging_config import set_level
from egg.egg_evaluator.egg_environment import EggEnvironment
from egg.egg_evaluator.egg_evaluator import EggEvaluator
from egg.egg_evaluator.egg_primitives import create_global_environment, format_value
from egg.egg_parser.egg_parser import open_paren_depth
from egg.system.errors import EggError

logger = logging.getLogger(__name__)

PROMPT = "egg> "
CONTINUATION_PROMPT = "...> "


class Repl:
    """Interactive REPL (Read-Eval-Print Loop) interface.

    Each complete entry is parsed and evaluated in a session frame that
    persists between entries, so defines made at the prompt stay visible.
    An entry continues over several lines while '(' outnumber ')', not
    counting parentheses inside strings or comments.
    """

    def __init__(
        self,
        evaluator: Optional[EggEvaluator] = None,
        global_env: Optional[EggEnvironment] = None,
        output_stream: Optional[TextIO] = None,
        input_func: Callable[[str], str] = input,
    ):
        """Initialize the REPL interface.

        Args:
            evaluator: The EggEvaluator to use (a new one if None)
            global_env: Root environment; defaults to the standard bootstrap
                        printing to the REPL's output stream
            output_stream: Optional output stream (defaults to sys.stdout)
            input_func: Line reader, replaceable for tests
        """
        self.output = output_stream or sys.stdout
        self.evaluator = evaluator or EggEvaluator()
        self.global_env = global_env or create_global_environment(self.output)
        self.session_env = self.global_env.extend({})
        self.input_func = input_func
        self.show_ast = False
        self.verbose = False
        self.running = False
        self._buffer: List[str] = []
        self.commands: Dict[str, Callable[[str], None]] = {
            "/help": self._cmd_help,
            "/exit": self._cmd_exit,
            "/reset": self._cmd_reset,
            "/ast": self._cmd_ast,
            "/verbose": self._cmd_verbose,
        }

    def start(self) -> None:
        """Start the REPL and read entries until /exit, EOF or Ctrl-C."""
        print("Egg REPL. Type an expression, or /help for commands.", file=self.output)
        self.running = True
        while self.running:
            prompt = CONTINUATION_PROMPT if self._buffer else PROMPT
            try:
                line = self.input_func(prompt)
            except (KeyboardInterrupt, EOFError):
                print("\nExiting...", file=self.output)
                break
            self._process_input(line)

    def _process_input(self, line: str) -> None:
        """Handles one input line: a command, or part of an Egg entry."""
        if not self._buffer:
            stripped = line.strip()
            if not stripped:
                return
            if stripped.startswith("/"):
                self._handle_command(stripped)
                return

        self._buffer.append(line)
        source = "\n".join(self._buffer)
        if open_paren_depth(source) > 0:
            return  # keep reading

        self._buffer = []
        self._evaluate_entry(source)

    def _handle_command(self, command: str) -> None:
        parts = command.split(maxsplit=1)
        cmd = parts[0].lower()
        args = parts[1] if len(parts) > 1 else ""

        if cmd in self.commands:
            self.commands[cmd](args)
        else:
            print(f"Unknown command: {cmd}", file=self.output)
            print("Type /help for available commands", file=self.output)

    def _evaluate_entry(self, source: str) -> None:
        """Parses and evaluates one entry, printing the result or the error."""
        try:
            node = self.evaluator.parser.parse_string(source)
            if self.show_ast:
                print(node.model_dump_json(indent=2), file=self.output)
            result = self.evaluator.evaluate(node, self.session_env)
        except EggError as e:
            logger.debug(f"Entry failed: {e!r}")
            print(f"{type(e).__name__}: {e}", file=self.output)
            return
        print(format_value(result), file=self.output)

    def _cmd_help(self, args: str) -> None:
        print("Available commands:", file=self.output)
        print("  /help     - Show this help message", file=self.output)
        print("  /exit     - Exit the REPL", file=self.output)
        print("  /reset    - Discard all definitions made in this session", file=self.output)
        print("  /ast      - Toggle printing the parsed AST as JSON", file=self.output)
        print("  /verbose  - Toggle debug logging", file=self.output)
        print("Anything else is evaluated as an Egg expression, e.g. +(1, 2)", file=self.output)

    def _cmd_exit(self, args: str) -> None:
        print("Exiting...", file=self.output)
        self.running = False

    def _cmd_reset(self, args: str) -> None:
        self.session_env = self.global_env.extend({})
        self._buffer = []
        print("Session reset", file=self.output)

    def _cmd_ast(self, args: str) -> None:
        self.show_ast = not self.show_ast
        print(f"AST display {'on' if self.show_ast else 'off'}", file=self.output)

    def _cmd_verbose(self, args: str) -> None:
        self.verbose = not self.verbose
        set_level("DEBUG" if self.verbose else "WARNING")
        print(f"Verbose mode {'on' if self.verbose else 'off'}", file=self.output)
