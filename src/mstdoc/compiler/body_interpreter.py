# Copyright 2026 mstdoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Model body interpreter: name, properties, actions and views of one model.

The body is read from the registered declaration chain::

    types.model("Todo", { title: types.string })   # name + properties
        .props({ done: false })                     # more properties
        .named("Task")                              # rename
        .views(self => ({ get label() {...} }))     # views
        .actions(self => { return { toggle() {...} } })

Within one chain a later ``.actions`` (or ``.views``) attachment replaces the
members of an earlier one of the same kind.
"""

from __future__ import annotations

import logging
from collections.abc import Collection

from mstdoc.compiler.diagnostics import Diagnostic, StructureError
from mstdoc.compiler.registry import Declaration
from mstdoc.compiler.type_interpreter import TypeInterpreter
from mstdoc.model.entities import MethodKind, Model
from mstdoc.model.types import TypeExpr
from mstdoc.parser.expression import ExpressionKind, Expr, returned_expression, static_text

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

ACTIONS = "actions"
VIEWS = "views"


class BodyInterpreter:
    """Populates models from their declaration chains.

    Args:
        types: Interpreter used for property types.
        async_helpers: Helper names whose call marks an action asynchronous.
        diagnostics: List that non-fatal diagnostics are appended to.
    """

    def __init__(
        self,
        types: TypeInterpreter,
        async_helpers: Collection[str],
        diagnostics: list[Diagnostic],
    ) -> None:
        self._types = types
        self._async_helpers = async_helpers
        self._diagnostics = diagnostics

    def interpret(self, model: Model, declaration: Declaration) -> None:
        """Fill in the name, properties, actions and views of *model*.

        For a composition only the name and the chained attachments are read
        here; base arguments are left to the composition resolver.
        """
        chain = declaration.chain
        args = list(chain.root.arguments)
        name = static_text(args[0]) if args else None
        if name is not None:
            model.name = name
            args.pop(0)

        if not chain.is_composition and args:
            self._add_properties(model, args[0])

        for link in chain.links:
            if link.method == "props":
                if link.arguments:
                    self._add_properties(model, link.arguments[0])
            elif link.method == "named":
                name = static_text(link.arguments[0]) if link.arguments else None
                if name is not None:
                    model.name = name
            elif link.method in (ACTIONS, VIEWS):
                members = self._attachment(link.arguments, link.method, link.line)
                if members is not None:
                    self._assign(model, link.method, members)
            elif link.method == "extend":
                self._extend(model, link.arguments, link.line)

        logger.debug(
            "model %d %r: %d properties, %d actions, %d views",
            model.id,
            model.name,
            len(model.properties),
            len(model.actions),
            len(model.views),
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    def _add_properties(self, model: Model, expr: Expr) -> None:
        props = expr.unwrap()
        if props.kind is not ExpressionKind.OBJECT:
            self._diagnostics.append(StructureError.at(expr, "model properties must be an object literal"))
            return
        for entry in props.items:
            prop = self._property(entry)
            if prop is not None:
                name, type_expr = prop
                model.properties[name] = type_expr

    def _property(self, entry: Expr) -> tuple[str, TypeExpr] | None:
        if entry.kind is ExpressionKind.SHORTHAND:
            return entry.text, self._types.interpret(entry)
        if entry.kind is ExpressionKind.PAIR:
            name = _key_name(entry)
            value = entry.get("value")
            if name is None or value is None:
                self._diagnostics.append(StructureError.at(entry, "property key must be a plain name"))
                return None
            return name, self._types.interpret(value)
        self._diagnostics.append(
            StructureError.at(entry, f"unsupported entry in model properties ({entry.kind.value})")
        )
        return None

    # ------------------------------------------------------------------
    # Actions and views
    # ------------------------------------------------------------------

    def _attachment(self, arguments: tuple[Expr, ...], kind: str, line: int) -> dict[str, MethodKind] | None:
        """Read the members returned by an ``.actions`` or ``.views`` builder."""
        if not arguments:
            self._diagnostics.append(StructureError(f"'.{kind}' expects a builder function", line))
            return None
        returned = returned_expression(arguments[0])
        if returned is None or returned.kind is not ExpressionKind.OBJECT:
            self._diagnostics.append(
                StructureError.at(arguments[0], f"'.{kind}' builder must return an object literal")
            )
            return None
        return self._members(returned)

    def _extend(self, model: Model, arguments: tuple[Expr, ...], line: int) -> None:
        """``.extend(self => ({ actions: {...}, views: {...} }))``."""
        if not arguments:
            self._diagnostics.append(StructureError("'.extend' expects a builder function", line))
            return
        returned = returned_expression(arguments[0])
        if returned is None or returned.kind is not ExpressionKind.OBJECT:
            self._diagnostics.append(StructureError.at(arguments[0], "'.extend' builder must return an object literal"))
            return
        for entry in returned.items:
            name = _key_name(entry) if entry.kind is ExpressionKind.PAIR else None
            if name not in (ACTIONS, VIEWS):
                continue
            value = entry.get("value")
            members = value.unwrap() if value is not None else None
            if members is None or members.kind is not ExpressionKind.OBJECT:
                self._diagnostics.append(StructureError.at(entry, f"'{name}' of '.extend' must be an object literal"))
                continue
            self._assign(model, name, self._members(members))

    def _members(self, obj: Expr) -> dict[str, MethodKind]:
        members: dict[str, MethodKind] = {}
        for entry in obj.items:
            member = self._member(entry)
            if member is not None:
                name, kind = member
                members[name] = kind
        return members

    def _member(self, entry: Expr) -> tuple[str, MethodKind] | None:
        if entry.kind is ExpressionKind.METHOD:
            if not entry.text:
                self._diagnostics.append(StructureError.at(entry, "computed member names are not supported"))
                return None
            if "get" in entry.flags:
                return entry.text, MethodKind.GETTER
            if "set" in entry.flags:
                return entry.text, MethodKind.SETTER
            if "async" in entry.flags:
                return entry.text, MethodKind.ASYNC
            return entry.text, MethodKind.METHOD

        if entry.kind is ExpressionKind.SHORTHAND:
            return entry.text, MethodKind.METHOD

        if entry.kind is ExpressionKind.PAIR:
            name = _key_name(entry)
            value = entry.get("value")
            if name is None or value is None:
                self._diagnostics.append(StructureError.at(entry, "member key must be a plain name"))
                return None
            kind = self._classify(value.unwrap())
            if kind is None:
                self._diagnostics.append(StructureError.at(entry, f"member '{name}' is not a function"))
                return None
            return name, kind

        self._diagnostics.append(StructureError.at(entry, f"unsupported member entry ({entry.kind.value})"))
        return None

    def _classify(self, value: Expr) -> MethodKind | None:
        """Classify the value of a ``name: value`` member entry."""
        if value.kind in (ExpressionKind.ARROW_FUNCTION, ExpressionKind.FUNCTION):
            return MethodKind.ASYNC if "async" in value.flags else MethodKind.METHOD
        if value.kind is ExpressionKind.CALL:
            return MethodKind.ASYNC if self._is_async_helper(value.get("callee")) else MethodKind.METHOD
        if value.kind in (ExpressionKind.IDENTIFIER, ExpressionKind.MEMBER):
            return MethodKind.METHOD
        return None

    def _is_async_helper(self, callee: Expr | None) -> bool:
        if callee is None:
            return False
        if callee.kind is ExpressionKind.IDENTIFIER:
            return callee.text in self._async_helpers
        if callee.kind is ExpressionKind.MEMBER:
            prop = callee.get("property")
            return prop is not None and prop.text in self._async_helpers
        return False

    @staticmethod
    def _assign(model: Model, kind: str, members: dict[str, MethodKind]) -> None:
        if kind == ACTIONS:
            model.actions = members
        else:
            model.views = members


# ################
# Implementation
# ################

_KEY_KINDS = frozenset({ExpressionKind.IDENTIFIER, ExpressionKind.STRING, ExpressionKind.NUMBER})


def _key_name(pair: Expr) -> str | None:
    """Return the plain name of a ``key: value`` entry, or None when computed."""
    key = pair.get("key")
    if key is None or key.kind not in _KEY_KINDS:
        return None
    return key.text
