# Copyright 2026 mstdoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Batch documentation of JavaScript source files.

Each file is analysed independently: model references only resolve within
the file that declares them, and anything declared elsewhere is kept as a
symbolic name.
"""

from __future__ import annotations

import logging
from pathlib import Path

from mstdoc.compiler.analysis import AnalysisResult, analyze
from mstdoc.parser.reader import ParseError
from mstdoc.workspace.config import DocConfig

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class DocumentationError(Exception):
    """Raised when a source file cannot be read or parsed."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


def document_files(files: list[Path], config: DocConfig | None = None) -> dict[Path, AnalysisResult]:
    """Analyse a list of JavaScript files.

    Args:
        files: Paths of the files to document. Duplicates are analysed once.
        config: Recognition and naming options; defaults apply when omitted.

    Returns:
        A mapping from each path (in the given order) to its analysis result.

    Raises:
        DocumentationError: If a file cannot be read or is not valid JavaScript.
    """
    config = config or DocConfig()
    results: dict[Path, AnalysisResult] = {}
    for path in files:
        if path in results:
            continue
        results[path] = _document_file(path, config)
    return results


# ################
# Implementation
# ################


def _document_file(path: Path, config: DocConfig) -> AnalysisResult:
    try:
        source_text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DocumentationError(f"Cannot read source file '{path}': {exc}") from exc
    except UnicodeDecodeError as exc:
        raise DocumentationError(f"Source file '{path}' is not valid UTF-8: {exc}") from exc

    logger.debug("analysing %s", path)
    try:
        return analyze(source_text, config)
    except ParseError as exc:
        raise DocumentationError(f"Parse error in '{path}': {exc}") from exc
