# Copyright 2026 mstdoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Declared models as discovered and resolved during one analysis run."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from mstdoc.model.types import TypeExpr

# ###############
# Public Interface
# ###############


class MethodKind(Enum):
    """How an action or view member is declared."""

    GETTER = "get"
    SETTER = "set"
    METHOD = "method"
    ASYNC = "async"


@dataclass(eq=False)
class Model:
    """A declared record type.

    Models are created by the registry with only ``id`` (and the source
    location) set; the body interpreter and composition resolver fill in the
    rest. Equality is identity.

    Attributes:
        id: Unique, monotonically assigned identity.
        name: Declared name; None for an anonymous model.
        properties: Property name to type, in declaration order.
        actions: Action name to method kind, in declaration order.
        views: View name to method kind, in declaration order.
        bases: Composition parents: resolved models or symbolic names.
        referenced: True once another construct points at this model.
        binding: Variable the declaration is assigned to, if any.
        line: 1-based source line of the declaration.
    """

    id: int
    name: str | None = None
    properties: dict[str, TypeExpr] = field(default_factory=dict)
    actions: dict[str, MethodKind] = field(default_factory=dict)
    views: dict[str, MethodKind] = field(default_factory=dict)
    bases: list[Model | str] = field(default_factory=list)
    referenced: bool = False
    binding: str | None = None
    line: int = 1

    @property
    def is_anonymous(self) -> bool:
        """True when the model has no declared name."""
        return self.name is None

    def mark_referenced(self) -> None:
        """Record that another construct points at this model."""
        self.referenced = True

    def __repr__(self) -> str:
        return f"Model(id={self.id}, name={self.name!r})"
