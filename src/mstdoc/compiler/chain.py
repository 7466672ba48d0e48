# Copyright 2026 mstdoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recognition of model-declaring call chains.

A model declaration is a root constructor call (``types.model(...)`` or
``types.compose(...)``) followed by any number of chained member calls::

    types.model("Todo", {...}).props({...}).actions(self => ({...}))
"""

from __future__ import annotations

from collections.abc import Collection, Iterator
from dataclasses import dataclass

from mstdoc.parser.expression import ExpressionKind, Expr

# ###############
# Public Interface
# ###############

MODEL_CONSTRUCTOR = "model"
COMPOSE_CONSTRUCTOR = "compose"


@dataclass(frozen=True)
class ChainLink:
    """One chained member call such as ``.actions(builder)``.

    Attributes:
        method: Name of the chained method.
        arguments: Positional arguments of the call.
        line: 1-based source line of the call.
    """

    method: str
    arguments: tuple[Expr, ...]
    line: int


@dataclass(frozen=True)
class ModelChain:
    """A recognised model declaration chain.

    Attributes:
        constructor: ``model`` or ``compose``.
        root: The root constructor call.
        links: Chained calls in source (application) order.
    """

    constructor: str
    root: Expr
    links: tuple[ChainLink, ...]

    @property
    def is_composition(self) -> bool:
        """True when the root constructor is ``compose``."""
        return self.constructor == COMPOSE_CONSTRUCTOR

    def all_arguments(self) -> Iterator[Expr]:
        """Yield the arguments of every call in the chain, root first."""
        yield from self.root.arguments
        for link in self.links:
            yield from link.arguments


def namespace_member(expr: Expr, namespaces: Collection[str]) -> str | None:
    """Return ``x`` if *expr* is ``<ns>.x`` for one of *namespaces*, else None."""
    if expr.kind is not ExpressionKind.MEMBER:
        return None
    obj = expr.get("object")
    prop = expr.get("property")
    if obj is None or prop is None:
        return None
    if obj.kind is ExpressionKind.IDENTIFIER and obj.text in namespaces:
        return prop.text
    return None


def read_chain(expr: Expr, namespaces: Collection[str]) -> ModelChain | None:
    """Recognise *expr* as a model declaration chain.

    Returns None unless the innermost call of the member-call spine is a
    ``model`` or ``compose`` constructor of one of *namespaces*.
    """
    links: list[ChainLink] = []
    node = expr
    while node.kind is ExpressionKind.CALL:
        callee = node.get("callee")
        if callee is None:
            return None
        constructor = namespace_member(callee, namespaces)
        if constructor is not None:
            if constructor not in (MODEL_CONSTRUCTOR, COMPOSE_CONSTRUCTOR):
                return None
            links.reverse()
            return ModelChain(constructor=constructor, root=node, links=tuple(links))
        if callee.kind is not ExpressionKind.MEMBER:
            return None
        prop = callee.get("property")
        obj = callee.get("object")
        if prop is None or obj is None:
            return None
        links.append(ChainLink(method=prop.text, arguments=node.arguments, line=node.line))
        node = obj.unwrap()
    return None
