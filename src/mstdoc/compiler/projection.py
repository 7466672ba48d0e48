# Copyright 2026 mstdoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Flattening of TypeExpr trees into textual type descriptors.

Named models are always projected symbolically (by name), which is what keeps
projection finite on reference cycles: any cycle through a named model stops
there. Anonymous models are expanded inline as ``{key:type,...}``; a cycle
made only of anonymous models is cut at the first revisit by falling back to
the model's label. An anonymous composition with an unresolved base is named
after its last such base instead of being expanded.
"""

from __future__ import annotations

from mstdoc.model.entities import MethodKind, Model
from mstdoc.model.signature import TypeDescriptor
from mstdoc.model.types import TypeExpr, TypeKind
from mstdoc.workspace.config import DocConfig

# ###############
# Public Interface
# ###############


def display_name(model: Model, config: DocConfig) -> str:
    """Return the name a model is documented and referenced by.

    The declared name (capitalised when configured), else the variable the
    declaration is bound to, else ``<anonymous-prefix><id>``.
    """
    if model.name:
        if config.capitalize_names:
            return model.name[0].upper() + model.name[1:]
        return model.name
    if model.binding:
        return model.binding
    return f"{config.anonymous_prefix}{model.id}"


def member_type(kind: MethodKind) -> str:
    """Return the documented type of an action or view member."""
    if kind in (MethodKind.GETTER, MethodKind.SETTER):
        return "*"
    return "function"


class Projector:
    """Projects TypeExpr trees to :class:`TypeDescriptor` values."""

    def __init__(self, config: DocConfig) -> None:
        self._config = config
        self._expanding: set[int] = set()

    def project(self, type_expr: TypeExpr) -> TypeDescriptor:
        """Return the descriptor of a property's type.

        Only the outermost optional or maybe wrapper makes the property
        optional; nested ones just contribute their inner type.
        """
        if type_expr.kind in (TypeKind.OPTIONAL, TypeKind.MAYBE):
            return TypeDescriptor(type_name=self._child_name(type_expr), optional=True)
        if type_expr.kind is TypeKind.MAYBE_NULL:
            return TypeDescriptor(type_name=self.type_name(type_expr), optional=True)
        return TypeDescriptor(type_name=self.type_name(type_expr), optional=False)

    def type_name(self, type_expr: TypeExpr) -> str:
        """Return the textual type of *type_expr*."""
        kind = type_expr.kind
        if kind is TypeKind.COLLECTION:
            inner = self._child_name(type_expr)
            return f"({inner})[]" if inner.startswith("?") else f"{inner}[]"
        if kind is TypeKind.MAP:
            return f"Map<*,{self._child_name(type_expr)}>"
        if kind is TypeKind.MAYBE_NULL:
            inner = self._child_name(type_expr)
            return inner if inner.startswith("?") else f"?{inner}"
        if kind is TypeKind.MODEL:
            assert type_expr.model is not None
            return self._model_name(type_expr.model)
        if kind in (TypeKind.CUSTOM, TypeKind.OPAQUE) and type_expr.label:
            return type_expr.label
        if kind in _PRIMITIVE_NAMES:
            return _PRIMITIVE_NAMES[kind]
        return self._child_name(type_expr)

    def expand(self, model: Model) -> str:
        """Render every member of *model* as an inline record type."""
        parts: list[str] = []
        for name, type_expr in model.properties.items():
            descriptor = self.project(type_expr)
            key = f"[{name}]" if descriptor.optional else name
            parts.append(f"{key}:{descriptor.type_name}")
        for members in (model.actions, model.views):
            for name, kind in members.items():
                parts.append(f"{name}:{member_type(kind)}")
        return "{" + ",".join(parts) + "}"

    def _child_name(self, type_expr: TypeExpr) -> str:
        child = type_expr.child
        return self.type_name(child) if child is not None else "*"

    def _model_name(self, model: Model) -> str:
        if not model.is_anonymous or model.id in self._expanding:
            return display_name(model, self._config)
        symbolic = [base for base in model.bases if isinstance(base, str)]
        if symbolic:
            # An unresolved base cannot be expanded; its name stands for the whole.
            return symbolic[-1]
        self._expanding.add(model.id)
        try:
            return self.expand(model)
        finally:
            self._expanding.discard(model.id)


# ################
# Implementation
# ################

_PRIMITIVE_NAMES: dict[TypeKind, str] = {
    TypeKind.STRING: "string",
    TypeKind.NUMBER: "number",
    TypeKind.INTEGER: "integer",
    TypeKind.BOOLEAN: "boolean",
    TypeKind.DATE: "Date",
    TypeKind.NULL: "null",
    TypeKind.UNDEFINED: "undefined",
    TypeKind.OPAQUE: "*",
}
