# Copyright 2026 mstdoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Flattened, serializable signatures of resolved models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class MemberCategory(Enum):
    """Which part of a model a member comes from."""

    PROPERTY = "property"
    ACTION = "action"
    VIEW = "view"


class TypeDescriptor(BaseModel):
    """A projected type: its textual name and whether the member is optional."""

    type_name: str
    optional: bool = False


class MemberSignature(BaseModel):
    """One property, action, or view of a model signature."""

    name: str
    type: TypeDescriptor
    category: MemberCategory = MemberCategory.PROPERTY


class ModelSignature(BaseModel):
    """The documented signature of one model."""

    id: int
    label: str
    name: str | None = None
    parent: str = "Object"
    members: list[MemberSignature] = _Field(default_factory=list)

    def members_of(self, category: MemberCategory) -> list[MemberSignature]:
        """Return the members of one category, in declaration order."""
        return [m for m in self.members if m.category is category]
