"""Egg: a small embedded expression language.

Source text is parsed into an immutable AST and evaluated by a tree-walking
evaluator with lexical scope, closures, and a fixed set of special forms.
"""

from egg.egg_parser.egg_parser import EggParser, parse
from egg.egg_evaluator.egg_environment import EggEnvironment
from egg.egg_evaluator.egg_evaluator import EggEvaluator, evaluate, run
from egg.egg_evaluator.egg_primitives import create_global_environment, format_value
from egg.system.errors import EggError, EggReferenceError, EggSyntaxError, EggTypeError, HostError

__version__ = "0.1.0"

__all__ = [
    "EggParser",
    "parse",
    "EggEnvironment",
    "EggEvaluator",
    "evaluate",
    "run",
    "create_global_environment",
    "format_value",
    "EggError",
    "EggSyntaxError",
    "EggReferenceError",
    "EggTypeError",
    "HostError",
]
