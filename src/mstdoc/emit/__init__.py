# Copyright 2026 mstdoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Emitters for resolved model signatures."""

from mstdoc.emit.jsdoc import render_block, render_jsdoc

__all__ = [
    "render_block",
    "render_jsdoc",
]
