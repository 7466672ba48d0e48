# Copyright 2026 mstdoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Non-fatal diagnostics recorded while resolving model declarations.

None of these abort analysis: the offending construct is skipped or degraded
to an opaque type and the rest of the file still resolves.
"""

from __future__ import annotations

from dataclasses import dataclass

from mstdoc.parser.expression import Expr

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class Diagnostic:
    """Base class for analysis diagnostics.

    Attributes:
        message: Human-readable description of the problem.
        line: 1-based source line the problem was found on, if known.
    """

    message: str
    line: int | None = None

    @classmethod
    def at(cls, expr: Expr, message: str) -> Diagnostic:
        """Create a diagnostic located at *expr*."""
        return cls(message=message, line=expr.line)

    @property
    def category(self) -> str:
        """Short name of the diagnostic class."""
        return type(self).__name__

    def __str__(self) -> str:
        where = f"line {self.line}: " if self.line is not None else ""
        return f"{where}{self.category}: {self.message}"


@dataclass(frozen=True)
class StructureError(Diagnostic):
    """An argument or entry did not have the expected shape."""


@dataclass(frozen=True)
class UnknownConstructError(Diagnostic):
    """A type-describing expression is not part of the known vocabulary."""


@dataclass(frozen=True)
class UnresolvedReferenceError(Diagnostic):
    """An identifier used as a model reference names no declared model."""
