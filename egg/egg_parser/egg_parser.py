"""
Recursive-descent parser for Egg source text.
Turns a program string into an immutable tree of AST nodes.
"""

import logging
import re
from typing import Tuple

from egg.egg_parser.ast_nodes import ApplyNode, Expression, IdentifierNode, LiteralNode
from egg.system.errors import EggSyntaxError

logger = logging.getLogger(__name__)

# Whitespace and '#' line comments are both skippable between tokens.
_SKIPPABLE_RE = re.compile(r"(?:\s|#.*)*")
_STRING_RE = re.compile(r'"([^"]*)"')
_NUMBER_RE = re.compile(r"\d+\b", re.ASCII)
_IDENTIFIER_RE = re.compile(r'[^\s(),#"]+')

_SNIPPET_LENGTH = 30


class EggParser:
    """
    Parses Egg source strings into AST nodes.

    Grammar:
        expr       := (string | number | identifier) ( '(' arglist? ')' )*
        arglist    := expr (',' expr)*

    The parser holds no state between calls; the same input always yields a
    structurally equal tree.
    """

    def parse_string(self, source: str) -> Expression:
        """
        Parses exactly one top-level expression from a string.

        Args:
            source: The Egg program text.

        Returns:
            The root AST node.

        Raises:
            EggSyntaxError: If a token matches none of string/number/identifier,
                            an argument list is malformed or unterminated, or
                            text remains after the top-level expression.
            TypeError: If the input is not a string.
        """
        if not isinstance(source, str):
            raise TypeError("Input must be a string.")

        logger.debug(f"Attempting to parse Egg source: '{source[:100]}'")
        expr, pos = self._parse_expression(source, 0)

        pos = self._skip_space(source, pos)
        if pos < len(source):
            logger.error(f"Unexpected text after program at offset {pos}")
            raise self._error("Unexpected text after program", source, pos)

        logger.debug(f"Successfully parsed AST: {expr}")
        return expr

    def _skip_space(self, source: str, pos: int) -> int:
        return _SKIPPABLE_RE.match(source, pos).end()

    def _parse_expression(self, source: str, pos: int) -> Tuple[Expression, int]:
        """Parses a string, number or identifier, then any calls chained onto it."""
        pos = self._skip_space(source, pos)
        if pos >= len(source):
            raise self._error("Unexpected end of input, expected an expression", source, pos)

        match = _STRING_RE.match(source, pos)
        if match:
            expr = LiteralNode(value=match.group(1))
        else:
            match = _NUMBER_RE.match(source, pos)
            if match:
                expr = LiteralNode(value=int(match.group(0)))
            else:
                match = _IDENTIFIER_RE.match(source, pos)
                if match:
                    expr = IdentifierNode(name=match.group(0))
                else:
                    raise self._error("Unexpected syntax", source, pos)

        return self._parse_apply(expr, source, match.end())

    def _parse_apply(self, expr: Expression, source: str, pos: int) -> Tuple[Expression, int]:
        """Wraps expr in an ApplyNode for each '(' argument list that follows it."""
        pos = self._skip_space(source, pos)
        while pos < len(source) and source[pos] == "(":
            args = []
            pos = self._skip_space(source, pos + 1)
            if pos < len(source) and source[pos] == ")":
                pos += 1
            else:
                while True:
                    arg, pos = self._parse_expression(source, pos)
                    args.append(arg)
                    pos = self._skip_space(source, pos)
                    if pos >= len(source):
                        raise self._error("Unterminated argument list, expected ',' or ')'", source, pos)
                    if source[pos] == ")":
                        pos += 1
                        break
                    if source[pos] != ",":
                        raise self._error("Expected ',' or ')'", source, pos)
                    pos = self._skip_space(source, pos + 1)
                    if pos < len(source) and source[pos] == ")":
                        raise self._error("Expected an expression after ','", source, pos)

            expr = ApplyNode(operator=expr, args=tuple(args))
            pos = self._skip_space(source, pos)
        return expr, pos

    @staticmethod
    def _error(message: str, source: str, pos: int) -> EggSyntaxError:
        line = source.count("\n", 0, pos) + 1
        column = pos - (source.rfind("\n", 0, pos) + 1) + 1
        remainder = source[pos:pos + _SNIPPET_LENGTH]
        details = f"at '{remainder}'" if remainder else "at end of input"
        return EggSyntaxError(
            message,
            source,
            error_details=details,
            position=pos,
            line=line,
            column=column,
        )


def open_paren_depth(source: str) -> int:
    """
    Counts '(' minus ')' outside string literals and comments.

    Scanning stops at an unterminated string, so a string left open inside
    an argument list still reports that list as open.
    """
    depth = 0
    pos = 0
    while pos < len(source):
        char = source[pos]
        if char == '"':
            match = _STRING_RE.match(source, pos)
            if not match:
                break
            pos = match.end()
            continue
        if char == "#":
            pos = _SKIPPABLE_RE.match(source, pos).end()
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        pos += 1
    return depth


_default_parser = EggParser()


def parse(source: str) -> Expression:
    """Parses an Egg program with a shared EggParser instance."""
    return _default_parser.parse_string(source)
