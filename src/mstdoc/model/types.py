# Copyright 2026 mstdoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type constructor algebra for declared model properties."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mstdoc.model.entities import Model

# ###############
# Public Interface
# ###############


class TypeKind(Enum):
    """Closed set of type constructors understood by the engine."""

    # Primitive leaves
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    DATE = "Date"
    NULL = "null"
    UNDEFINED = "undefined"
    OPAQUE = "*"

    # Wrappers
    COLLECTION = "array"
    MAP = "map"
    OPTIONAL = "optional"
    MAYBE = "maybe"
    MAYBE_NULL = "maybeNull"
    REFERENCE = "reference"
    SAFE_REFERENCE = "safeReference"
    REFINEMENT = "refinement"
    CUSTOM = "custom"
    LATE = "late"
    FROZEN = "frozen"
    LITERAL = "literal"
    ENUMERATION = "enumeration"
    UNION = "union"
    COMPOSED = "compose"

    # Link to a declared model
    MODEL = "model"


PRIMITIVE_KINDS: frozenset[TypeKind] = frozenset(
    {
        TypeKind.STRING,
        TypeKind.NUMBER,
        TypeKind.INTEGER,
        TypeKind.BOOLEAN,
        TypeKind.DATE,
        TypeKind.NULL,
        TypeKind.UNDEFINED,
        TypeKind.OPAQUE,
    }
)


@dataclass(frozen=True, eq=False)
class TypeExpr:
    """A type constructor applied to zero or one child type.

    Attributes:
        kind: The constructor.
        children: Nested types; wrappers carry at most one.
        label: Display name of a ``CUSTOM`` type, or the symbolic name of an
            ``OPAQUE`` leaf that stands for an unresolved identifier.
        model: The linked model; set exactly when ``kind`` is ``MODEL``.
    """

    kind: TypeKind
    children: tuple[TypeExpr, ...] = ()
    label: str | None = None
    model: Model | None = None

    def __post_init__(self) -> None:
        if (self.kind is TypeKind.MODEL) != (self.model is not None):
            raise ValueError("a model link is required for, and only allowed on, MODEL types")

    @property
    def child(self) -> TypeExpr | None:
        """The sole tracked child, or None."""
        return self.children[0] if self.children else None


def leaf(kind: TypeKind, label: str | None = None) -> TypeExpr:
    """Build a childless type."""
    return TypeExpr(kind=kind, label=label)


def wrap(kind: TypeKind, child: TypeExpr | None) -> TypeExpr:
    """Build a wrapper type around *child* (or an empty wrapper)."""
    return TypeExpr(kind=kind, children=(child,) if child is not None else ())
