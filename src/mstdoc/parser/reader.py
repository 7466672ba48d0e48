# Copyright 2026 mstdoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""JavaScript reader: builds the expression tree from a tree-sitter parse.

tree-sitter produces a concrete syntax tree for any input; this module walks
it once and converts the nodes the resolution engine cares about into
:class:`~mstdoc.parser.expression.Expr` nodes.
"""

from __future__ import annotations

import tree_sitter_javascript
from tree_sitter import Language, Node, Parser

from mstdoc.parser.expression import ExpressionKind, Expr

# ###############
# Public Interface
# ###############


class ParseError(Exception):
    """Raised when the source text is not syntactically valid JavaScript.

    Attributes:
        line: 1-based line number of the first syntax error.
        column: 1-based column number of the first syntax error.
    """

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.line = line
        self.column = column


def parse(source: str) -> Expr:
    """Parse JavaScript source text into an expression tree.

    Args:
        source: The full text of a JavaScript module or script.

    Returns:
        The ``PROGRAM`` node of the expression tree.

    Raises:
        ParseError: If the source contains a syntax error.
    """
    tree = _parser().parse(source.encode("utf-8"))
    root = tree.root_node
    if root.has_error:
        bad = _first_error(root) or root
        row, column = bad.start_point[0], bad.start_point[1]
        what = "missing token" if bad.is_missing else "unexpected syntax"
        raise ParseError(f"{what} near {_text(bad)[:20]!r}", row + 1, column + 1)
    return _convert(root)


# ################
# Implementation
# ################

_PARSER: Parser | None = None

_MODIFIERS = frozenset({"get", "set", "async", "*", "static"})

_FUNCTION_TYPES = frozenset({"function_expression", "function", "generator_function"})

_LEAF_KINDS: dict[str, ExpressionKind] = {
    "identifier": ExpressionKind.IDENTIFIER,
    "property_identifier": ExpressionKind.IDENTIFIER,
    "private_property_identifier": ExpressionKind.IDENTIFIER,
    "this": ExpressionKind.IDENTIFIER,
    "shorthand_property_identifier": ExpressionKind.SHORTHAND,
    "number": ExpressionKind.NUMBER,
    "true": ExpressionKind.BOOLEAN,
    "false": ExpressionKind.BOOLEAN,
    "null": ExpressionKind.NULL,
    "undefined": ExpressionKind.UNDEFINED,
}


def _parser() -> Parser:
    global _PARSER
    if _PARSER is None:
        _PARSER = Parser(Language(tree_sitter_javascript.language()))
    return _PARSER


def _text(node: Node) -> str:
    return node.text.decode("utf-8") if node.text is not None else ""


def _line(node: Node) -> int:
    return node.start_point[0] + 1


def _first_error(root: Node) -> Node | None:
    """Return the first ERROR or MISSING node in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        stack.extend(reversed([c for c in node.children if c.has_error or c.is_missing]))
    return None


def _named(node: Node) -> list[Node]:
    """Named children of *node*, without comments."""
    return [child for child in node.named_children if child.type != "comment"]


def _modifiers(node: Node) -> frozenset[str]:
    """Collect keyword modifiers (anonymous tokens) of a function or method."""
    return frozenset(child.type for child in node.children if not child.is_named and child.type in _MODIFIERS)


def _string_value(node: Node) -> str:
    raw = _text(node)
    if len(raw) >= 2 and raw[0] in "\"'`" and raw[-1] == raw[0]:
        return raw[1:-1]
    return raw


def _key_text(node: Node) -> str:
    """Return the property name spelled by a key node (empty when computed)."""
    if node.type == "string":
        return _string_value(node)
    if node.type == "computed_property_name":
        return ""
    return _text(node)


def _convert(root: Node) -> Expr:
    """Convert a tree-sitter subtree into an Expr tree."""
    return _Converter().convert(root)


class _Converter:
    """Bottom-up conversion driven by an explicit stack.

    Generated or minified code nests expressions far deeper than the
    interpreter's recursion limit, so children are converted before their
    parents from a post-order listing instead of by recursive descent.
    """

    def __init__(self) -> None:
        self._done: dict[Node, Expr] = {}

    def convert(self, root: Node) -> Expr:
        pending = [root]
        order: list[Node] = []
        while pending:
            node = pending.pop()
            order.append(node)
            pending.extend(_named(node))
        for node in reversed(order):
            self._done[node] = self._build(node)
        return self._done[root]

    def _get(self, node: Node) -> Expr:
        converted = self._done.get(node)
        return converted if converted is not None else self.convert(node)

    def _items(self, node: Node) -> tuple[Expr, ...]:
        return tuple(self._get(child) for child in _named(node))

    def _fields(self, node: Node, *names: str) -> dict[str, Expr]:
        result: dict[str, Expr] = {}
        for name in names:
            child = node.child_by_field_name(name)
            if child is not None:
                result[name] = self._get(child)
        return result

    def _build(self, node: Node) -> Expr:
        """Build the Expr for *node*; its named children are already converted."""
        kind = node.type
        line = _line(node)

        if kind in _LEAF_KINDS:
            return Expr(_LEAF_KINDS[kind], text=_text(node), line=line)

        if kind == "program":
            return Expr(ExpressionKind.PROGRAM, line=line, items=self._items(node))

        if kind in ("lexical_declaration", "variable_declaration"):
            return Expr(ExpressionKind.VARIABLE_DECLARATION, line=line, items=self._items(node))

        if kind == "variable_declarator":
            return Expr(ExpressionKind.VARIABLE_DECLARATOR, line=line, fields=self._fields(node, "name", "value"))

        if kind == "assignment_expression":
            return Expr(ExpressionKind.ASSIGNMENT, line=line, fields=self._fields(node, "left", "right"))

        if kind == "expression_statement":
            return Expr(ExpressionKind.EXPRESSION_STATEMENT, line=line, items=self._items(node))

        if kind == "export_statement":
            return Expr(ExpressionKind.EXPORT, line=line, fields=self._fields(node, "declaration", "value"))

        if kind == "return_statement":
            return Expr(ExpressionKind.RETURN, line=line, items=self._items(node))

        if kind == "statement_block":
            return Expr(ExpressionKind.BLOCK, line=line, items=self._items(node))

        if kind == "parenthesized_expression":
            return Expr(ExpressionKind.PARENTHESIZED, line=line, items=self._items(node))

        if kind == "call_expression":
            callee = node.child_by_field_name("function")
            arguments = node.child_by_field_name("arguments")
            args: tuple[Expr, ...] = ()
            # Tagged templates carry a template_string instead of an argument list.
            if arguments is not None and arguments.type == "arguments":
                args = self._items(arguments)
            return Expr(
                ExpressionKind.CALL,
                text=_text(callee) if callee is not None else "",
                line=line,
                fields={"callee": self._get(callee)} if callee is not None else {},
                items=args,
            )

        if kind == "member_expression":
            return Expr(
                ExpressionKind.MEMBER, text=_text(node), line=line, fields=self._fields(node, "object", "property")
            )

        if kind == "string":
            return Expr(ExpressionKind.STRING, text=_string_value(node), line=line)

        if kind == "template_string":
            return Expr(ExpressionKind.TEMPLATE, text=_string_value(node), line=line, items=self._items(node))

        if kind == "object":
            return Expr(ExpressionKind.OBJECT, line=line, items=self._items(node))

        if kind == "pair":
            return Expr(ExpressionKind.PAIR, line=line, fields=self._fields(node, "key", "value"))

        if kind == "method_definition":
            name = node.child_by_field_name("name")
            return Expr(
                ExpressionKind.METHOD,
                text=_key_text(name) if name is not None else "",
                line=line,
                fields=self._fields(node, "body"),
                flags=_modifiers(node),
            )

        if kind == "spread_element":
            return Expr(ExpressionKind.SPREAD, line=line, items=self._items(node))

        if kind == "array":
            return Expr(ExpressionKind.ARRAY, line=line, items=self._items(node))

        if kind == "arrow_function":
            return Expr(
                ExpressionKind.ARROW_FUNCTION, line=line, fields=self._fields(node, "body"), flags=_modifiers(node)
            )

        if kind in _FUNCTION_TYPES:
            flags = _modifiers(node)
            if kind == "generator_function":
                flags = flags | {"*"}
            return Expr(ExpressionKind.FUNCTION, line=line, fields=self._fields(node, "body"), flags=flags)

        return Expr(ExpressionKind.OTHER, text=kind, line=line, items=self._items(node))
