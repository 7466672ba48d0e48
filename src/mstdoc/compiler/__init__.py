# Copyright 2026 mstdoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Model resolution engine: registry, interpreters, composition, projection."""

from mstdoc.compiler.analysis import AnalysisResult, analyze, analyze_tree
from mstdoc.compiler.artifact import ARTIFACT_SUFFIX, deserialize, read_artifact, serialize, write_artifact
from mstdoc.compiler.build import DocumentationError, document_files
from mstdoc.compiler.diagnostics import (
    Diagnostic,
    StructureError,
    UnknownConstructError,
    UnresolvedReferenceError,
)

__all__ = [
    "analyze",
    "analyze_tree",
    "AnalysisResult",
    "Diagnostic",
    "StructureError",
    "UnknownConstructError",
    "UnresolvedReferenceError",
    "serialize",
    "deserialize",
    "write_artifact",
    "read_artifact",
    "ARTIFACT_SUFFIX",
    "document_files",
    "DocumentationError",
]
