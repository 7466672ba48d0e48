# Copyright 2026 mstdoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""The analysis pipeline: source text to documented model signatures.

Stages run strictly in order, each over every model before the next starts:

1. registry pre-pass (identities for every declaration),
2. body interpretation (names, properties, actions, views),
3. composition resolution,
4. projection of the emitted models into signatures.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from mstdoc.compiler.body_interpreter import BodyInterpreter
from mstdoc.compiler.composition import CompositionResolver
from mstdoc.compiler.diagnostics import Diagnostic
from mstdoc.compiler.projection import Projector, display_name, member_type
from mstdoc.compiler.registry import Registry, build_registry
from mstdoc.compiler.type_interpreter import TypeInterpreter
from mstdoc.model.entities import Model
from mstdoc.model.signature import MemberCategory, MemberSignature, ModelSignature, TypeDescriptor
from mstdoc.parser.expression import Expr
from mstdoc.parser.reader import parse
from mstdoc.workspace.config import DocConfig

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


@dataclass
class AnalysisResult:
    """Outcome of analysing one source text.

    Attributes:
        models: Every declared model, in identity order.
        signatures: Signatures of the documented models, in identity order.
        diagnostics: Non-fatal problems found along the way.
    """

    models: list[Model] = field(default_factory=list)
    signatures: list[ModelSignature] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def signature(self, label: str) -> ModelSignature:
        """Return the signature documented under *label*.

        Raises:
            KeyError: If no documented model has that label.
        """
        for signature in self.signatures:
            if signature.label == label:
                return signature
        raise KeyError(label)


def analyze(source: str, config: DocConfig | None = None) -> AnalysisResult:
    """Parse and analyse JavaScript source text.

    Args:
        source: The full text of a JavaScript file.
        config: Recognition and naming options; defaults apply when omitted.

    Returns:
        The resolved models, their signatures, and the diagnostics.

    Raises:
        ParseError: If the source is not valid JavaScript.
    """
    return analyze_tree(parse(source), config, source=source)


def analyze_tree(program: Expr, config: DocConfig | None = None, *, source: str = "") -> AnalysisResult:
    """Analyse an already parsed expression tree."""
    config = config or DocConfig()
    diagnostics: list[Diagnostic] = []

    registry = build_registry(program, config.type_namespaces, source)

    types = TypeInterpreter(registry, config.type_namespaces, diagnostics)
    bodies = BodyInterpreter(types, config.async_helpers, diagnostics)
    for model in registry.ordered_models():
        bodies.interpret(model, registry.declarations[model.id])

    CompositionResolver(registry, config, diagnostics).resolve_all()

    signatures = build_signatures(registry, config)
    logger.debug(
        "documented %d of %d model(s), %d diagnostic(s)", len(signatures), len(registry.models), len(diagnostics)
    )
    return AnalysisResult(models=registry.ordered_models(), signatures=signatures, diagnostics=diagnostics)


def is_documented(model: Model) -> bool:
    """A model gets its own block when it is named or stands alone."""
    return not model.is_anonymous or not model.referenced


def build_signatures(registry: Registry, config: DocConfig) -> list[ModelSignature]:
    """Project every documented model of *registry* into a signature."""
    projector = Projector(config)
    return [_signature(model, projector, config) for model in registry.ordered_models() if is_documented(model)]


# ################
# Implementation
# ################


def _signature(model: Model, projector: Projector, config: DocConfig) -> ModelSignature:
    members: list[MemberSignature] = []
    for name, type_expr in model.properties.items():
        members.append(MemberSignature(name=name, type=projector.project(type_expr)))
    for name, kind in model.actions.items():
        members.append(
            MemberSignature(name=name, type=TypeDescriptor(type_name=member_type(kind)), category=MemberCategory.ACTION)
        )
    for name, kind in model.views.items():
        members.append(
            MemberSignature(name=name, type=TypeDescriptor(type_name=member_type(kind)), category=MemberCategory.VIEW)
        )
    return ModelSignature(
        id=model.id,
        label=display_name(model, config),
        name=model.name,
        parent=_parent(model, config),
        members=members,
    )


def _parent(model: Model, config: DocConfig) -> str:
    """The last symbolic base name, else the configured default parent."""
    for base in reversed(model.bases):
        if isinstance(base, str):
            return base
    return config.default_parent
