"""
Lexical scoping environment for Egg evaluation.
"""

import logging
from typing import Any, Dict, Optional

from egg.system.errors import EggReferenceError

logger = logging.getLogger(__name__)


class EggEnvironment:
    """
    A frame of name -> value bindings with an optional parent frame.

    Frames are shared by reference: a closure keeps its defining frame alive
    for as long as the closure itself is reachable, and several closures may
    hold the same frame. Only closure calls create child frames; if/while/do
    bodies run directly in the enclosing frame.
    """

    def __init__(
        self,
        bindings: Optional[Dict[str, Any]] = None,
        parent: Optional['EggEnvironment'] = None
    ):
        """
        Initializes a new EggEnvironment.

        Args:
            bindings: An optional dictionary of initial bindings for this frame.
            parent: An optional parent frame. None marks a root frame.
        """
        self._bindings: Dict[str, Any] = bindings if bindings is not None else {}
        self._parent: Optional['EggEnvironment'] = parent
        logger.debug(f"Initialized EggEnvironment (Parent: {parent is not None}, Bindings: {list(self._bindings.keys())})")

    @property
    def parent(self) -> Optional['EggEnvironment']:
        return self._parent

    def owns(self, name: str) -> bool:
        """Returns True if this frame itself (not an ancestor) binds name."""
        return name in self._bindings

    def lookup(self, name: str) -> Any:
        """
        Looks up a name in this frame and then in each ancestor frame.

        Args:
            name: The identifier to resolve.

        Returns:
            The value bound in the nearest frame that owns the name.

        Raises:
            EggReferenceError: If no frame in the chain binds the name.
        """
        env: Optional[EggEnvironment] = self
        while env is not None:
            if name in env._bindings:
                logger.debug(f"  Found '{name}' in env id={id(env)}")
                return env._bindings[name]
            env = env._parent

        logger.debug(f"  '{name}' not found in chain starting from env id={id(self)}")
        raise EggReferenceError(f"Undefined binding: {name}", name=name)

    def define(self, name: str, value: Any) -> None:
        """
        Creates or overwrites a binding in *this* frame only.
        Ancestor frames are never touched, so a define can shadow an outer name.
        """
        logger.debug(f"Defining '{name}' = {type(value).__name__} in env {id(self)}")
        self._bindings[name] = value

    def extend(self, bindings: Dict[str, Any]) -> 'EggEnvironment':
        """
        Creates a child frame of this one holding the given bindings.

        Args:
            bindings: Names and already-evaluated values for the child frame.

        Returns:
            The new child EggEnvironment.
        """
        logger.debug(f"Extending env {id(self)} with bindings: {list(bindings.keys())}")
        return EggEnvironment(bindings=dict(bindings), parent=self)

    def set_value_in_scope(self, name: str, value: Any) -> None:
        """Reassigns an *existing* binding in the nearest frame that owns it.

        Never creates a binding.

        Args:
            name: The identifier to reassign.
            value: The new value.

        Raises:
            EggReferenceError: If no frame in the chain owns the name.
        """
        env: Optional[EggEnvironment] = self
        while env is not None:
            if env.owns(name):
                logger.debug(f"Found '{name}' in env {id(env)}, updating value.")
                env._bindings[name] = value
                return
            env = env._parent

        logger.error(f"Cannot 'set' unbound name '{name}': not defined in any enclosing scope.")
        raise EggReferenceError(f"Could not find {name} in any scope.", name=name)

    def get_local_bindings(self) -> Dict[str, Any]:
        """Returns a copy of the bindings defined directly in this frame."""
        return self._bindings.copy()

    def __repr__(self) -> str:
        parent_id = id(self._parent) if self._parent else None
        return f"<EggEnvironment id={id(self)} parent={parent_id} bindings={list(self._bindings.keys())}>"
