"""AST node models for Egg programs.

The parser produces a tree of these nodes and nothing mutates it afterwards,
so the same tree can be evaluated any number of times against different
environments. Nodes are frozen pydantic models: they compare structurally,
hash, and serialize with ``model_dump_json`` (used by ``egg --dump-ast``).
"""
from typing import Annotated, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr


class LiteralNode(BaseModel):
    """
    A number or string literal.

    Attributes:
        type: Node type discriminator, always "value"
        value: The literal value (int or str)
    """
    model_config = ConfigDict(frozen=True)

    type: Literal["value"] = "value"
    value: Union[StrictInt, StrictStr]

    def __str__(self) -> str:
        """Render the literal back to Egg source."""
        if isinstance(self.value, str):
            return f'"{self.value}"'
        return str(self.value)


class IdentifierNode(BaseModel):
    """
    A name resolved against the scope chain at evaluation time.

    Attributes:
        type: Node type discriminator, always "word"
        name: The identifier text
    """
    model_config = ConfigDict(frozen=True)

    type: Literal["word"] = "word"
    name: StrictStr

    def __str__(self) -> str:
        return self.name


class ApplyNode(BaseModel):
    """
    An application of an operator expression to argument expressions.

    The operator can be any expression, which is how chained calls such as
    ``f(a)(b)`` are represented.

    Attributes:
        type: Node type discriminator, always "apply"
        operator: Expression producing the function (or naming a special form)
        args: Argument expressions, in source order
    """
    model_config = ConfigDict(frozen=True)

    type: Literal["apply"] = "apply"
    operator: "Expression"
    args: Tuple["Expression", ...] = ()

    def __str__(self) -> str:
        """Render the application back to Egg source."""
        args_str = ", ".join(str(arg) for arg in self.args)
        return f"{self.operator}({args_str})"


Expression = Annotated[
    Union[LiteralNode, IdentifierNode, ApplyNode],
    Field(discriminator="type"),
]

ApplyNode.model_rebuild()
