# Copyright 2026 mstdoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Model registry: the discovery pre-pass over the whole expression tree.

The registry finds every model declaration before anything is interpreted, so
that a model used ahead of its own declaration (or two models pointing at
each other) is already identity-bound when property types are resolved.

The tree is never mutated. Each declaration slot is recorded in a side index
keyed by node identity, and later passes consult that index instead of
descending into the declaration again.
"""

from __future__ import annotations

import logging
from collections.abc import Collection
from dataclasses import dataclass

from mstdoc.compiler.chain import ModelChain, read_chain
from mstdoc.model.entities import Model
from mstdoc.parser.expression import ExpressionKind, Expr

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class Placeholder:
    """Synthetic stand-in for a model-declaring sub-tree.

    Attributes:
        model_id: Identity of the bound model.
        token: Name unique within the analysed source text.
    """

    model_id: int
    token: str


@dataclass(frozen=True)
class Declaration:
    """Registration record of one model declaration.

    Attributes:
        placeholder: The placeholder minted for the declaration.
        expr: The original declaration sub-tree (the outermost chained call).
        chain: The recognised declaration chain.
        binding: Variable name the declaration is assigned to, if any.
    """

    placeholder: Placeholder
    expr: Expr
    chain: ModelChain
    binding: str | None


class Registry:
    """Owns model identities and the index of declaration sites."""

    def __init__(self, source: str = "") -> None:
        self._source = source
        self._counter = 0
        self.models: dict[int, Model] = {}
        self.declarations: dict[int, Declaration] = {}
        self._slots: dict[Expr, Placeholder] = {}
        self._bindings: dict[str, Placeholder] = {}

    def register(self, expr: Expr, chain: ModelChain, binding: str | None = None) -> Placeholder:
        """Mint a model and placeholder for the declaration at *expr*.

        Registering the same slot twice returns the existing placeholder.
        """
        existing = self._slots.get(expr)
        if existing is not None:
            return existing
        self._counter += 1
        placeholder = Placeholder(model_id=self._counter, token=self._mint_token(self._counter))
        self.models[placeholder.model_id] = Model(id=placeholder.model_id, binding=binding, line=expr.line)
        self.declarations[placeholder.model_id] = Declaration(
            placeholder=placeholder, expr=expr, chain=chain, binding=binding
        )
        self._slots[expr] = placeholder
        if binding is not None:
            self._bindings.setdefault(binding, placeholder)
        logger.debug("registered model %d (%s) at line %d", placeholder.model_id, binding or "unbound", expr.line)
        return placeholder

    def placeholder_at(self, expr: Expr) -> Placeholder | None:
        """Return the placeholder registered for the slot *expr*, if any."""
        return self._slots.get(expr.unwrap())

    def bound(self, name: str) -> Placeholder | None:
        """Return the placeholder bound to the variable *name*, if any."""
        return self._bindings.get(name)

    def model(self, placeholder: Placeholder) -> Model:
        """Return the model bound to *placeholder*."""
        return self.models[placeholder.model_id]

    def resolve(self, expr: Expr) -> Model | None:
        """Resolve a model reference: a declaration slot or a bound identifier."""
        expr = expr.unwrap()
        placeholder = self.placeholder_at(expr)
        if placeholder is None and expr.kind is ExpressionKind.IDENTIFIER:
            placeholder = self.bound(expr.text)
        return self.model(placeholder) if placeholder is not None else None

    def ordered_models(self) -> list[Model]:
        """All registered models in identity order."""
        return [self.models[model_id] for model_id in sorted(self.models)]

    def _mint_token(self, model_id: int) -> str:
        token = f"__mstdoc_model_{model_id}__"
        while token in self._source:
            token = f"_{token}_"
        return token


def build_registry(program: Expr, namespaces: Collection[str], source: str = "") -> Registry:
    """Run the discovery pre-pass over *program*.

    Args:
        program: Root of the expression tree.
        namespaces: Identifiers the builder vocabulary hangs off.
        source: The analysed source text, used to keep placeholder tokens unique.

    Returns:
        A registry holding one model (with only its identity set) per
        declaration, in discovery order.
    """
    registry = Registry(source)
    _Discovery(registry, namespaces).visit(program)
    logger.debug("discovered %d model declaration(s)", len(registry.models))
    return registry


# ################
# Implementation
# ################


class _Discovery:
    """Pre-order walk registering every outermost declaration chain.

    The walk keeps its own stack (children pushed in reverse) so that ids
    follow source order however deeply the surrounding code nests.
    """

    def __init__(self, registry: Registry, namespaces: Collection[str]) -> None:
        self._registry = registry
        self._namespaces = namespaces

    def visit(self, root: Expr) -> None:
        stack: list[tuple[Expr, str | None]] = [(root, None)]
        while stack:
            expr, binding = stack.pop()
            stack.extend(reversed(self._slots(expr, binding)))

    def _slots(self, expr: Expr, binding: str | None) -> list[tuple[Expr, str | None]]:
        """Register *expr* if it declares a model; return the sub-expressions to visit next."""
        chain = read_chain(expr, self._namespaces)
        if chain is not None:
            self._registry.register(expr, chain, binding)
            # The chain spine is claimed; only its arguments are new slots.
            return [(argument, None) for argument in chain.all_arguments()]

        if expr.kind is ExpressionKind.VARIABLE_DECLARATOR:
            return self._binding(expr.get("name"), expr.get("value"))
        if expr.kind is ExpressionKind.ASSIGNMENT:
            return self._binding(expr.get("left"), expr.get("right"))
        if expr.kind is ExpressionKind.PARENTHESIZED:
            return [(child, binding) for child in expr.items]
        return [(child, None) for child in expr.children()]

    @staticmethod
    def _binding(target: Expr | None, value: Expr | None) -> list[tuple[Expr, str | None]]:
        if value is None:
            return []
        name = target.text if target is not None and target.kind is ExpressionKind.IDENTIFIER else None
        return [(value, name)]
