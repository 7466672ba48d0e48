# Copyright 2026 mstdoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Rendering of model signatures as JSDoc ``@typedef`` blocks."""

from __future__ import annotations

from mstdoc.model.signature import MemberSignature, ModelSignature

# ###############
# Public Interface
# ###############


def render_block(signature: ModelSignature) -> str:
    """Render one model signature as a JSDoc comment block.

    Members appear in declaration order: properties, then actions, then views.
    Optional members have their name in brackets.
    """
    lines = [f"@typedef {{{signature.parent}}} {signature.label}"]
    lines.extend(_property_line(member) for member in signature.members)
    body = "\n".join(f"* {line}" for line in lines)
    return f"/**\n{body}\n*/"


def render_jsdoc(signatures: list[ModelSignature]) -> str:
    """Render every signature, blocks separated by one blank line."""
    if not signatures:
        return ""
    return "\n\n".join(render_block(signature) for signature in signatures) + "\n"


# ################
# Implementation
# ################


def _property_line(member: MemberSignature) -> str:
    name = f"[{member.name}]" if member.type.optional else member.name
    return f"@property {{{member.type.type_name}}} {name}"
