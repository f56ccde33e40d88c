"""
Default host bootstrap for Egg.

Builds the root environment: the boolean constants, the binary operators, and
a few utility functions. Every binding is an ordinary Python value or
callable, so the evaluator treats it exactly like a value computed in Egg.
Host functions receive already-evaluated arguments positionally.
"""
import logging
import operator
import sys
from typing import Any, Callable, Dict, List, Optional, TextIO

from .egg_closure import Closure
from .egg_environment import EggEnvironment

logger = logging.getLogger(__name__)

BINARY_OPERATORS: Dict[str, Callable[[Any, Any], Any]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
    "==": operator.eq,
    "<": operator.lt,
    ">": operator.gt,
}


def format_value(value: Any, nested: bool = False) -> str:
    """
    Renders an Egg value the way print() and the REPL show it.

    Booleans print as true/false, integral floats without a fraction, arrays
    in brackets. Strings are shown raw at the top level and quoted inside
    arrays.
    """
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, str):
        return f'"{value}"' if nested else value
    if isinstance(value, list):
        return "[" + ", ".join(format_value(item, nested=True) for item in value) + "]"
    if isinstance(value, Closure):
        return f"<function({', '.join(value.params)})>"
    if callable(value):
        return f"<host function {getattr(value, '__name__', type(value).__name__)}>"
    return str(value)


class PrimitiveProcessor:
    """
    Host utility functions exposed to Egg programs.
    Each apply_* method is bound into the root environment under its Egg name.
    """
    def __init__(self, output_stream: Optional[TextIO] = None):
        """
        Args:
            output_stream: Where print() writes. Defaults to sys.stdout,
                           looked up at call time.
        """
        self.output_stream = output_stream

    def apply_print_primitive(self, value: Any) -> Any:
        """print(value): writes the formatted value and returns it unchanged."""
        stream = self.output_stream if self.output_stream is not None else sys.stdout
        print(format_value(value), file=stream)
        return value

    def apply_array_primitive(self, *values: Any) -> List[Any]:
        """array(values...): returns a new array of the arguments."""
        return list(values)

    def apply_length_primitive(self, array: List[Any]) -> int:
        """length(array)"""
        return len(array)

    def apply_element_primitive(self, array: List[Any], n: int) -> Any:
        """element(array, n): zero-based indexing. Negative n is out of range."""
        if n < 0:
            raise IndexError(f"element index out of range: {n}")
        return array[n]

    def bindings(self) -> Dict[str, Any]:
        """Returns the name -> callable mapping for the utility functions."""
        return {
            "print": self.apply_print_primitive,
            "array": self.apply_array_primitive,
            "length": self.apply_length_primitive,
            "element": self.apply_element_primitive,
        }


def create_global_environment(output_stream: Optional[TextIO] = None) -> EggEnvironment:
    """
    Creates a root EggEnvironment seeded with the default host bindings.

    Args:
        output_stream: Stream used by print(). Defaults to sys.stdout.

    Returns:
        A new root environment (no parent).
    """
    bindings: Dict[str, Any] = {"true": True, "false": False}
    bindings.update(BINARY_OPERATORS)
    bindings.update(PrimitiveProcessor(output_stream).bindings())
    logger.debug(f"Created global environment with bindings: {list(bindings.keys())}")
    return EggEnvironment(bindings=bindings)
