"""Egg parser package."""

from .ast_nodes import ApplyNode, Expression, IdentifierNode, LiteralNode
from .egg_parser import EggParser, open_paren_depth, parse

__all__ = [
    "ApplyNode",
    "Expression",
    "IdentifierNode",
    "LiteralNode",
    "EggParser",
    "open_paren_depth",
    "parse",
]
