"""
Processor for Egg special forms.

Special forms receive their argument expressions unevaluated, together with
the current environment, and decide themselves what to evaluate and when.
"""
import logging
from typing import TYPE_CHECKING, Any, List, Sequence

from egg.egg_parser.ast_nodes import ApplyNode, Expression, IdentifierNode
from egg.egg_evaluator.egg_environment import EggEnvironment
from egg.egg_evaluator.egg_closure import Closure
from egg.system.errors import EggSyntaxError

if TYPE_CHECKING:
    from .egg_evaluator import EggEvaluator

logger = logging.getLogger(__name__)


class SpecialFormProcessor:
    """
    Processes special forms for the EggEvaluator.
    Each method handles one form and is responsible for its evaluation
    semantics, including which arguments get evaluated and in what order.

    Truthiness: only the boolean False is falsy. 0, "" and empty arrays all
    count as true.
    """
    def __init__(self, evaluator_instance: 'EggEvaluator'):
        """
        Initializes the SpecialFormProcessor.

        Args:
            evaluator_instance: The EggEvaluator used for recursive evaluation
                                of sub-expressions.
        """
        self.evaluator = evaluator_instance
        logger.debug("SpecialFormProcessor initialized.")

    def handle_if_form(self, arg_exprs: Sequence[Expression], env: EggEnvironment, call_node: ApplyNode) -> Any:
        """Handles the 'if' special form: if(condition, then_branch, else_branch)"""
        if len(arg_exprs) != 3:
            raise EggSyntaxError("Wrong number of args to if", str(call_node),
                                 error_details=f"expected 3, got {len(arg_exprs)}")

        cond_expr, then_expr, else_expr = arg_exprs
        condition_result = self.evaluator.evaluate(cond_expr, env)
        chosen_branch_expr = then_expr if condition_result is not False else else_expr
        logger.debug(f"  'if' condition evaluated to {condition_result!r}, chose branch: {chosen_branch_expr}")
        return self.evaluator.evaluate(chosen_branch_expr, env)

    def handle_while_form(self, arg_exprs: Sequence[Expression], env: EggEnvironment, call_node: ApplyNode) -> bool:
        """Handles the 'while' special form: while(condition, body)

        The body runs in the enclosing environment, not a per-iteration frame.
        There is no iteration limit. Always returns False.
        """
        if len(arg_exprs) != 2:
            raise EggSyntaxError("Wrong number of args to while", str(call_node),
                                 error_details=f"expected 2, got {len(arg_exprs)}")

        cond_expr, body_expr = arg_exprs
        iterations = 0
        while self.evaluator.evaluate(cond_expr, env) is not False:
            self.evaluator.evaluate(body_expr, env)
            iterations += 1

        logger.debug(f"  'while' finished after {iterations} iterations")
        return False

    def handle_do_form(self, arg_exprs: Sequence[Expression], env: EggEnvironment, call_node: ApplyNode) -> Any:
        """Handles the 'do' special form: do(expr...)"""
        final_result: Any = False  # Result of an empty 'do'
        for expr in arg_exprs:
            final_result = self.evaluator.evaluate(expr, env)
        return final_result

    def handle_define_form(self, arg_exprs: Sequence[Expression], env: EggEnvironment, call_node: ApplyNode) -> Any:
        """Handles the 'define' special form: define(name, value_expression)"""
        if len(arg_exprs) != 2 or not isinstance(arg_exprs[0], IdentifierNode):
            raise EggSyntaxError("Incorrect use of define", str(call_node),
                                 error_details="expected define(name, value)")

        var_name = arg_exprs[0].name
        value = self.evaluator.evaluate(arg_exprs[1], env)
        env.define(var_name, value)
        return value

    def handle_set_form(self, arg_exprs: Sequence[Expression], env: EggEnvironment, call_node: ApplyNode) -> Any:
        """Handles the 'set' special form: set(name, value_expression)

        Reassigns the binding in the nearest enclosing frame that owns the
        name. Raises EggReferenceError if no frame does.
        """
        if len(arg_exprs) != 2 or not isinstance(arg_exprs[0], IdentifierNode):
            raise EggSyntaxError("Incorrect use of set", str(call_node),
                                 error_details="expected set(name, value)")

        var_name = arg_exprs[0].name
        value = self.evaluator.evaluate(arg_exprs[1], env)
        env.set_value_in_scope(var_name, value)
        return value

    def handle_fun_form(self, arg_exprs: Sequence[Expression], env: EggEnvironment, call_node: ApplyNode) -> Closure:
        """Handles the 'fun' special form: fun(param..., body)"""
        if not arg_exprs:
            raise EggSyntaxError("Functions need a body", str(call_node))

        *param_exprs, body_expr = arg_exprs
        params: List[str] = []
        for param_expr in param_exprs:
            if not isinstance(param_expr, IdentifierNode):
                raise EggSyntaxError("Parameter names must be words", str(call_node),
                                     error_details=f"got {param_expr}")
            params.append(param_expr.name)

        return Closure(params, body_expr, env, self.evaluator)
