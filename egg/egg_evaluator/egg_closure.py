"""
Defines the Closure class for functions created by the 'fun' special form.
"""
import logging
from typing import TYPE_CHECKING, Any, List

from egg.egg_parser.ast_nodes import Expression
from egg.system.errors import EggTypeError
from .egg_environment import EggEnvironment

if TYPE_CHECKING:
    from .egg_evaluator import EggEvaluator

logger = logging.getLogger(__name__)


class Closure:
    def __init__(
        self,
        params: List[str],
        body: Expression,
        definition_env: EggEnvironment,
        evaluator: 'EggEvaluator'
    ):
        """
        Represents a lexically-scoped function created by 'fun'.

        Args:
            params: The parameter names, in order.
            body: The single body expression.
            definition_env: The EggEnvironment active when 'fun' was evaluated.
                            It becomes the parent of every call frame.
            evaluator: The evaluator used to run the body.
        """
        # Parameter names are validated as identifiers by the 'fun' handler.
        self.params: List[str] = params
        self.body: Expression = body
        self.definition_env: EggEnvironment = definition_env
        self.evaluator = evaluator
        logger.debug(f"Closure created: params=({', '.join(self.params)}), def_env_id={id(self.definition_env)}")

    def __call__(self, *args: Any) -> Any:
        """
        Calls the closure with already-evaluated arguments.

        A fresh frame whose parent is the definition environment binds each
        parameter to its argument, and the body is evaluated in that frame.

        Raises:
            EggTypeError: If the argument count differs from the parameter count.
        """
        if len(args) != len(self.params):
            raise EggTypeError(
                f"Wrong number of arguments: expected {len(self.params)}, got {len(args)}",
                expression=str(self.body),
            )

        call_frame_env = self.definition_env.extend(dict(zip(self.params, args)))
        logger.debug(f"Calling {self!r} in call frame id={id(call_frame_env)}")
        return self.evaluator.evaluate(self.body, call_frame_env)

    def __repr__(self):
        return f"<Closure params=({', '.join(self.params)}) def_env_id={id(self.definition_env)}>"
