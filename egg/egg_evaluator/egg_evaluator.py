"""
Egg evaluator implementation.
Walks parsed AST nodes against an environment chain and produces values.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from egg.egg_parser.ast_nodes import ApplyNode, Expression, IdentifierNode, LiteralNode
from egg.egg_parser.egg_parser import EggParser
from egg.egg_evaluator.egg_environment import EggEnvironment
from egg.egg_evaluator.egg_primitives import create_global_environment
from .egg_closure import Closure
from .egg_special_forms import SpecialFormProcessor
from egg.system.errors import EggError, EggSyntaxError, EggTypeError, HostError

logger = logging.getLogger(__name__)

# handler(unevaluated_args, env, call_node) -> value
SpecialFormHandler = Callable[[Sequence[Expression], EggEnvironment, ApplyNode], Any]


class EggEvaluator:
    """
    Evaluates Egg AST nodes.

    Application nodes whose operator is an identifier naming a special form
    go to that form's handler with unevaluated arguments. Everything else is
    applied as a function: the operator is evaluated, the arguments are
    evaluated left to right, and the callable is invoked positionally.
    """

    def __init__(self):
        self.parser = EggParser()
        self.special_form_processor = SpecialFormProcessor(self)

        # Resolved once here, never per call.
        self.SPECIAL_FORM_HANDLERS: Dict[str, SpecialFormHandler] = {
            "if": self.special_form_processor.handle_if_form,
            "while": self.special_form_processor.handle_while_form,
            "do": self.special_form_processor.handle_do_form,
            "define": self.special_form_processor.handle_define_form,
            "set": self.special_form_processor.handle_set_form,
            "fun": self.special_form_processor.handle_fun_form,
        }
        logger.debug(f"EggEvaluator initialized. SPECIAL_FORM_HANDLERS keys: {list(self.SPECIAL_FORM_HANDLERS.keys())}")

    def register_special_form(self, name: str, handler: SpecialFormHandler) -> None:
        """
        Adds (or replaces) a special form.

        Args:
            name: Operator name that triggers the form.
            handler: Called as handler(arg_exprs, env, call_node) with the
                     unevaluated argument nodes.
        """
        if not callable(handler):
            raise TypeError(f"Special form handler for '{name}' must be callable.")
        logger.info(f"Registering special form '{name}'")
        self.SPECIAL_FORM_HANDLERS[name] = handler

    def evaluate_string(self, source: str, env: Optional[EggEnvironment] = None) -> Any:
        """
        Parses and evaluates an Egg program within a given environment.

        Args:
            source: The program text.
            env: The environment to evaluate in. Defaults to a new, empty root
                 environment (no host bindings).

        Returns:
            The value of the program's top-level expression.
        """
        logger.info(f"Evaluating Egg source: {source[:100]}...")
        try:
            parsed_node = self.parser.parse_string(source)
            env = env if env is not None else EggEnvironment()
            result = self.evaluate(parsed_node, env)
            logger.info(f"Finished evaluating Egg source. Result type: {type(result).__name__}")
            return result
        except EggError as e:
            logger.error(f"Egg program failed with {type(e).__name__}: {e.message}")
            raise

    def evaluate(self, node: Expression, env: EggEnvironment) -> Any:
        """
        Evaluates one AST node in the given environment.

        Raises:
            EggReferenceError: An identifier has no binding in the chain.
            EggTypeError: A non-callable is applied, or a closure gets the
                          wrong number of arguments.
            EggSyntaxError: A special form is misused.
            HostError: A host callable raised a non-Egg exception.
        """
        if isinstance(node, LiteralNode):
            return node.value

        if isinstance(node, IdentifierNode):
            return env.lookup(node.name)

        if isinstance(node, ApplyNode):
            return self._eval_apply(node, env)

        raise EggSyntaxError(f"Unknown expression type: {type(node).__name__}", repr(node))

    def _eval_apply(self, node: ApplyNode, env: EggEnvironment) -> Any:
        op_expr_node = node.operator

        if isinstance(op_expr_node, IdentifierNode):
            handler = self.SPECIAL_FORM_HANDLERS.get(op_expr_node.name)
            if handler is not None:
                logger.debug(f"  Dispatching to special form handler: {op_expr_node.name}")
                return handler(node.args, env, node)

        resolved_op = self.evaluate(op_expr_node, env)
        if not callable(resolved_op):
            raise EggTypeError(
                "Applying a non-function.",
                str(node),
                error_details=f"operator '{op_expr_node}' evaluated to {type(resolved_op).__name__}",
            )

        evaluated_args = [self.evaluate(arg_node, env) for arg_node in node.args]

        if isinstance(resolved_op, Closure):
            return resolved_op(*evaluated_args)
        return self._call_host_function(resolved_op, evaluated_args, node)

    def _call_host_function(self, func: Callable, args: List[Any], node: ApplyNode) -> Any:
        """Invokes a host-supplied callable, wrapping non-Egg failures in HostError."""
        try:
            return func(*args)
        except (EggError, RecursionError):
            raise
        except Exception as e:
            func_name = str(node.operator)
            logger.error(f"Host function '{func_name}' raised {type(e).__name__}: {e}")
            raise HostError(
                f"Error invoking host function '{func_name}': {e}",
                str(node),
                error_details=type(e).__name__,
            ) from e


_default_evaluator = EggEvaluator()


def evaluate(expr: Expression, env: EggEnvironment) -> Any:
    """Evaluates an AST node with a shared EggEvaluator instance."""
    return _default_evaluator.evaluate(expr, env)


def run(source: str, env: Optional[EggEnvironment] = None) -> Any:
    """
    Parses and evaluates a program in a fresh child frame of a global environment.

    Top-level defines land in the child frame, so the global environment is
    left unchanged.

    Args:
        source: The program text.
        env: The global environment to extend. Defaults to a new one built by
             create_global_environment().
    """
    global_env = env if env is not None else create_global_environment()
    return _default_evaluator.evaluate_string(source, global_env.extend({}))
