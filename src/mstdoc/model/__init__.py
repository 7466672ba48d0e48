# Copyright 2026 mstdoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Semantic model for declared data models (models, type algebra, signatures)."""

from mstdoc.model.entities import MethodKind, Model
from mstdoc.model.signature import MemberCategory, MemberSignature, ModelSignature, TypeDescriptor
from mstdoc.model.types import PRIMITIVE_KINDS, TypeExpr, TypeKind, leaf, wrap

__all__ = [
    # Type algebra
    "TypeKind",
    "TypeExpr",
    "PRIMITIVE_KINDS",
    "leaf",
    "wrap",
    # Entities
    "MethodKind",
    "Model",
    # Signatures
    "MemberCategory",
    "MemberSignature",
    "ModelSignature",
    "TypeDescriptor",
]
