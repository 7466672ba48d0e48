# Copyright 2026 mstdoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""JavaScript reader and the expression tree it produces."""

from mstdoc.parser.expression import ExpressionKind, Expr, returned_expression, static_text
from mstdoc.parser.reader import ParseError, parse

__all__ = [
    "ExpressionKind",
    "Expr",
    "ParseError",
    "parse",
    "returned_expression",
    "static_text",
]
