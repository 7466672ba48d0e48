# Copyright 2026 mstdoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type constructor interpreter: type-describing expressions to TypeExpr trees.

Only the shape of a type is interpreted here. A property whose value is a
model declaration (or an identifier bound to one) becomes a ``MODEL`` node
linking the registered model; the model's body is never looked at. A
composition written directly in the slot is additionally wrapped in
``COMPOSED`` so its unresolved bases can still name it.
"""

from __future__ import annotations

from collections.abc import Collection

from mstdoc.compiler.chain import namespace_member
from mstdoc.compiler.diagnostics import (
    Diagnostic,
    StructureError,
    UnknownConstructError,
    UnresolvedReferenceError,
)
from mstdoc.compiler.registry import Placeholder, Registry
from mstdoc.model.types import TypeExpr, TypeKind, leaf, wrap
from mstdoc.parser.expression import ExpressionKind, Expr, returned_expression, static_text

# ###############
# Public Interface
# ###############


class TypeInterpreter:
    """Converts type-describing expressions into :class:`TypeExpr` trees.

    Args:
        registry: The completed model registry.
        namespaces: Identifiers the builder vocabulary hangs off.
        diagnostics: List that non-fatal diagnostics are appended to.
    """

    def __init__(
        self,
        registry: Registry,
        namespaces: Collection[str],
        diagnostics: list[Diagnostic],
    ) -> None:
        self._registry = registry
        self._namespaces = namespaces
        self._diagnostics = diagnostics

    def interpret(self, expr: Expr) -> TypeExpr:
        """Return the TypeExpr described by *expr*.

        Unrecognised shapes produce an opaque leaf and record a diagnostic.
        """
        expr = expr.unwrap()
        placeholder = self._registry.placeholder_at(expr)
        if placeholder is not None:
            model_type = self._model_type(placeholder)
            if self._registry.declarations[placeholder.model_id].chain.is_composition:
                # Written in place, a composition keeps its bases visible.
                return wrap(TypeKind.COMPOSED, model_type)
            return model_type

        match expr.kind:
            case ExpressionKind.IDENTIFIER | ExpressionKind.SHORTHAND:
                return self._identifier(expr)
            case ExpressionKind.MEMBER:
                return self._member(expr)
            case ExpressionKind.CALL:
                return self._call(expr)
            case ExpressionKind.STRING | ExpressionKind.TEMPLATE:
                # A primitive default value makes the property optional.
                return wrap(TypeKind.OPTIONAL, leaf(TypeKind.STRING))
            case ExpressionKind.NUMBER:
                return wrap(TypeKind.OPTIONAL, leaf(TypeKind.NUMBER))
            case ExpressionKind.BOOLEAN:
                return wrap(TypeKind.OPTIONAL, leaf(TypeKind.BOOLEAN))
            case ExpressionKind.NULL:
                return leaf(TypeKind.NULL)
            case ExpressionKind.UNDEFINED:
                return leaf(TypeKind.UNDEFINED)
            case _:
                return self._unknown(expr, f"unsupported type expression ({expr.kind.value})")

    # ------------------------------------------------------------------
    # Dispatch arms
    # ------------------------------------------------------------------

    def _model_type(self, placeholder: Placeholder) -> TypeExpr:
        model = self._registry.model(placeholder)
        model.mark_referenced()
        return TypeExpr(kind=TypeKind.MODEL, model=model)

    def _identifier(self, expr: Expr) -> TypeExpr:
        placeholder = self._registry.bound(expr.text)
        if placeholder is not None:
            return self._model_type(placeholder)
        self._diagnostics.append(
            UnresolvedReferenceError.at(expr, f"'{expr.text}' does not name a model declared in this file")
        )
        return leaf(TypeKind.OPAQUE, label=expr.text)

    def _member(self, expr: Expr) -> TypeExpr:
        name = namespace_member(expr, self._namespaces)
        if name is None:
            # e.g. ``other.Todo``: a model imported from elsewhere.
            self._diagnostics.append(
                UnresolvedReferenceError.at(expr, f"'{expr.text}' does not name a model declared in this file")
            )
            return leaf(TypeKind.OPAQUE, label=expr.text)
        if name in _LEAVES:
            return leaf(_LEAVES[name])
        if name == "frozen":
            return wrap(TypeKind.FROZEN, None)
        return self._unknown(expr, f"unknown type '{expr.text}'")

    def _call(self, expr: Expr) -> TypeExpr:
        callee = expr.get("callee")
        name = namespace_member(callee, self._namespaces) if callee is not None else None
        if name is None:
            return self._unknown(expr, f"'{expr.text}(...)' is not a type constructor")

        args = expr.arguments
        if name in _WRAPPERS:
            return wrap(_WRAPPERS[name], self._type_argument(expr, args, 0, name))
        if name == "identifier":
            # ``identifier(types.number)`` narrows the key type.
            return self.interpret(args[0]) if args else leaf(TypeKind.STRING)
        if name == "identifierNumber":
            return leaf(TypeKind.NUMBER)
        if name == "late":
            return self._late(expr, args)
        if name == "frozen":
            if args and args[0].unwrap().kind in _TYPE_SHAPES:
                return wrap(TypeKind.FROZEN, self.interpret(args[0]))
            return wrap(TypeKind.FROZEN, None)
        if name == "literal":
            return self._literal(expr, args)
        if name == "enumeration":
            return wrap(TypeKind.ENUMERATION, leaf(TypeKind.STRING))
        if name == "refinement":
            offset = 1 if args and static_text(args[0]) is not None else 0
            return wrap(TypeKind.REFINEMENT, self._type_argument(expr, args, offset, name))
        if name == "custom":
            return self._custom(args)
        if name == "union":
            return wrap(TypeKind.UNION, None)
        return self._unknown(expr, f"unknown type constructor '{callee.text if callee else name}'")

    # ------------------------------------------------------------------
    # Constructor helpers
    # ------------------------------------------------------------------

    def _type_argument(self, call: Expr, args: tuple[Expr, ...], index: int, name: str) -> TypeExpr:
        """Interpret the type argument at *index*, or an opaque leaf if missing."""
        if index >= len(args):
            self._diagnostics.append(StructureError.at(call, f"'{name}' expects a type argument"))
            return leaf(TypeKind.OPAQUE)
        return self.interpret(args[index])

    def _late(self, call: Expr, args: tuple[Expr, ...]) -> TypeExpr:
        """``late(name?, () => T)``: the type is whatever the thunk returns."""
        thunks = [arg for arg in args if static_text(arg) is None]
        if not thunks:
            self._diagnostics.append(StructureError.at(call, "'late' expects a function returning a type"))
            return wrap(TypeKind.LATE, None)
        thunk = thunks[0]
        target = returned_expression(thunk)
        if target is None:
            if thunk.unwrap().kind in (ExpressionKind.ARROW_FUNCTION, ExpressionKind.FUNCTION):
                return wrap(TypeKind.LATE, None)
            target = thunk
        return wrap(TypeKind.LATE, self.interpret(target))

    def _literal(self, call: Expr, args: tuple[Expr, ...]) -> TypeExpr:
        if not args:
            self._diagnostics.append(StructureError.at(call, "'literal' expects a value"))
            return wrap(TypeKind.LITERAL, None)
        # Every literal value documents as a string, numbers and booleans included.
        return wrap(TypeKind.LITERAL, leaf(TypeKind.STRING))

    def _custom(self, args: tuple[Expr, ...]) -> TypeExpr:
        """``custom({name: "Decimal", ...})``: a leaf named after the config."""
        label = None
        config = args[0].unwrap() if args else None
        if config is not None and config.kind is ExpressionKind.OBJECT:
            for entry in config.items:
                key = entry.get("key")
                value = entry.get("value")
                if entry.kind is not ExpressionKind.PAIR or key is None or value is None:
                    continue
                if key.text == "name":
                    label = static_text(value) or label
        return TypeExpr(kind=TypeKind.CUSTOM, label=label)

    def _unknown(self, expr: Expr, message: str) -> TypeExpr:
        self._diagnostics.append(UnknownConstructError.at(expr, message))
        return leaf(TypeKind.OPAQUE)


# ################
# Implementation
# ################

_LEAVES: dict[str, TypeKind] = {
    "string": TypeKind.STRING,
    "number": TypeKind.NUMBER,
    "integer": TypeKind.INTEGER,
    "float": TypeKind.NUMBER,
    "finite": TypeKind.NUMBER,
    "boolean": TypeKind.BOOLEAN,
    "Date": TypeKind.DATE,
    "null": TypeKind.NULL,
    "undefined": TypeKind.UNDEFINED,
    "identifier": TypeKind.STRING,
    "identifierNumber": TypeKind.NUMBER,
}

# Constructors taking a single type argument (first position).
_WRAPPERS: dict[str, TypeKind] = {
    "array": TypeKind.COLLECTION,
    "map": TypeKind.MAP,
    "optional": TypeKind.OPTIONAL,
    "maybe": TypeKind.MAYBE,
    "maybeNull": TypeKind.MAYBE_NULL,
    "reference": TypeKind.REFERENCE,
    "safeReference": TypeKind.SAFE_REFERENCE,
}

# Expressions that describe a type rather than a plain value.
_TYPE_SHAPES = frozenset({ExpressionKind.IDENTIFIER, ExpressionKind.MEMBER, ExpressionKind.CALL})
