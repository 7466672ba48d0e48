# Copyright 2026 mstdoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Composition resolver: merges base models into ``compose(...)`` models.

Bases merge left to right, later bases overriding earlier ones on key
collisions, and the composing chain's own ``.props``/``.actions``/``.views``
override everything inherited. A base is fully resolved (including its own
bases) before it is merged. A base that is still being resolved further up
the stack, i.e. a composition cycle, contributes only its symbolic name.
"""

from __future__ import annotations

import logging

from mstdoc.compiler.diagnostics import Diagnostic, StructureError, UnresolvedReferenceError
from mstdoc.compiler.projection import display_name
from mstdoc.compiler.registry import Registry
from mstdoc.model.entities import MethodKind, Model
from mstdoc.model.types import TypeExpr
from mstdoc.parser.expression import ExpressionKind, static_text
from mstdoc.workspace.config import DocConfig

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class CompositionResolver:
    """Resolves the bases of every composition in a registry.

    Args:
        registry: Registry whose models have all been body-interpreted.
        config: Naming options, used for symbolic names of cyclic bases.
        diagnostics: List that non-fatal diagnostics are appended to.
    """

    def __init__(self, registry: Registry, config: DocConfig, diagnostics: list[Diagnostic]) -> None:
        self._registry = registry
        self._config = config
        self._diagnostics = diagnostics
        self._resolved: set[int] = set()
        self._active: set[int] = set()

    def resolve_all(self) -> None:
        """Resolve every registered model, in identity order."""
        for model in self._registry.ordered_models():
            self.resolve(model)

    def resolve(self, model: Model) -> None:
        """Merge the bases of *model* into it (no-op for plain models)."""
        if model.id in self._resolved:
            return
        chain = self._registry.declarations[model.id].chain
        if not chain.is_composition:
            self._resolved.add(model.id)
            return

        self._active.add(model.id)
        properties: dict[str, TypeExpr] = {}
        actions: dict[str, MethodKind] = {}
        views: dict[str, MethodKind] = {}

        args = list(chain.root.arguments)
        if args and static_text(args[0]) is not None:
            args.pop(0)
        for arg in args:
            base = self._registry.resolve(arg)
            if base is not None:
                base.mark_referenced()
                if base.id in self._active:
                    logger.debug("composition cycle: model %d reaches model %d again", model.id, base.id)
                    model.bases.append(display_name(base, self._config))
                    continue
                self.resolve(base)
                model.bases.append(base)
                properties.update(base.properties)
                actions.update(base.actions)
                views.update(base.views)
                continue

            symbol = arg.unwrap()
            if symbol.kind in (ExpressionKind.IDENTIFIER, ExpressionKind.MEMBER):
                model.bases.append(symbol.text)
                self._diagnostics.append(
                    UnresolvedReferenceError.at(symbol, f"base '{symbol.text}' is not declared in this file")
                )
            else:
                self._diagnostics.append(
                    StructureError.at(arg, "composition base must be a model or a model name")
                )

        properties.update(model.properties)
        actions.update(model.actions)
        views.update(model.views)
        model.properties = properties
        model.actions = actions
        model.views = views

        self._active.discard(model.id)
        self._resolved.add(model.id)
