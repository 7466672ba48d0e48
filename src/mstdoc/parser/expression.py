# Copyright 2026 mstdoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Structural expression tree consumed by the model resolution engine.

The tree is a deliberately small projection of a JavaScript syntax tree: only
the node kinds that matter for model declarations get their own
:class:`ExpressionKind`, everything else is kept as ``OTHER`` so that
declarations nested inside arbitrary code can still be discovered.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass, field

# ###############
# Public Interface
# ###############


class ExpressionKind(enum.Enum):
    """Kinds of nodes in the expression tree."""

    PROGRAM = "program"
    VARIABLE_DECLARATION = "variable_declaration"
    VARIABLE_DECLARATOR = "variable_declarator"
    ASSIGNMENT = "assignment"
    EXPRESSION_STATEMENT = "expression_statement"
    EXPORT = "export"
    RETURN = "return"
    BLOCK = "block"
    CALL = "call"
    MEMBER = "member"
    IDENTIFIER = "identifier"
    STRING = "string"
    TEMPLATE = "template"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    UNDEFINED = "undefined"
    OBJECT = "object"
    PAIR = "pair"
    SHORTHAND = "shorthand"
    METHOD = "method"
    SPREAD = "spread"
    ARRAY = "array"
    ARROW_FUNCTION = "arrow_function"
    FUNCTION = "function"
    PARENTHESIZED = "parenthesized"
    OTHER = "other"


@dataclass(frozen=True, eq=False)
class Expr:
    """A node of the expression tree.

    Nodes compare and hash by identity, so they can key side indexes.

    Attributes:
        kind: The node kind.
        text: Kind-specific text: the name of an identifier, member expression
            or method, the decoded value of a string, the raw text of a number.
        line: 1-based source line where the node starts.
        fields: Named sub-expressions (``callee``, ``object``, ``property``,
            ``key``, ``value``, ``name``, ``body``, ``left``, ``right``,
            ``declaration``).
        items: Positional sub-expressions (call arguments, statements, object
            entries, array elements).
        flags: Modifier keywords attached to functions and methods
            (``get``, ``set``, ``async``, ``*``, ``static``).
    """

    kind: ExpressionKind
    text: str = ""
    line: int = 1
    fields: dict[str, Expr] = field(default_factory=dict)
    items: tuple[Expr, ...] = ()
    flags: frozenset[str] = frozenset()

    def get(self, name: str) -> Expr | None:
        """Return the named sub-expression, or None if absent."""
        return self.fields.get(name)

    def children(self) -> Iterator[Expr]:
        """Yield every direct sub-expression, named fields first."""
        yield from self.fields.values()
        yield from self.items

    @property
    def arguments(self) -> tuple[Expr, ...]:
        """Positional arguments of a call expression."""
        return self.items

    def unwrap(self) -> Expr:
        """Strip any number of enclosing parentheses."""
        node = self
        while node.kind is ExpressionKind.PARENTHESIZED and node.items:
            node = node.items[0]
        return node


def returned_expression(function: Expr) -> Expr | None:
    """Return the expression a function produces.

    For an arrow function with an expression body this is the body itself;
    for a block body it is the argument of the first top-level ``return``.
    Returns None when *function* is not a function or returns nothing.
    """
    function = function.unwrap()
    if function.kind not in (ExpressionKind.ARROW_FUNCTION, ExpressionKind.FUNCTION):
        return None
    body = function.get("body")
    if body is None:
        return None
    if body.kind is not ExpressionKind.BLOCK:
        return body.unwrap()
    for statement in body.items:
        if statement.kind is ExpressionKind.RETURN:
            return statement.items[0].unwrap() if statement.items else None
    return None


def static_text(expr: Expr) -> str | None:
    """Return the value of a string written without substitutions.

    Covers quoted strings and template literals such as ```Todo```; a
    template with a ``${...}`` part, or any other expression, gives None.
    """
    if expr.kind is ExpressionKind.STRING:
        return expr.text
    if expr.kind is ExpressionKind.TEMPLATE:
        if any(item.kind is ExpressionKind.OTHER and item.text == "template_substitution" for item in expr.items):
            return None
        return expr.text
    return None
