# Copyright 2026 mstdoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization and deserialization of model signature artifacts.

Artifacts are compact JSON documents listing the documented model signatures
of one or more source files. The format is versioned so future schema changes
can be detected.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from mstdoc.model.signature import ModelSignature

# ###############
# Public Interface
# ###############

ARTIFACT_FORMAT_VERSION = "1"
ARTIFACT_SUFFIX = ".mstdoc.json"


def serialize(signatures: list[ModelSignature], *, source: str | None = None) -> str:
    """Serialize signatures to a compact JSON string."""
    obj: dict[str, Any] = {"v": ARTIFACT_FORMAT_VERSION}
    if source is not None:
        obj["source"] = source
    obj["models"] = [s.model_dump(mode="json") for s in signatures]
    return json.dumps(obj, separators=(",", ":"))


def deserialize(data: str) -> list[ModelSignature]:
    """Deserialize signatures from a JSON string.

    Args:
        data: JSON string produced by :func:`serialize`.

    Returns:
        The reconstructed signatures, in their serialized order.

    Raises:
        ValueError: If the artifact format version is not recognised or the
            payload does not match the signature schema.
    """
    obj = json.loads(data)
    version = obj.get("v") if isinstance(obj, dict) else None
    if version != ARTIFACT_FORMAT_VERSION:
        raise ValueError(f"Unsupported artifact format version: {version!r}")
    return [ModelSignature.model_validate(m) for m in obj.get("models", [])]


def write_artifact(signatures: list[ModelSignature], path: Path, *, source: str | None = None) -> None:
    """Write an artifact to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(signatures, source=source), encoding="utf-8")


def read_artifact(path: Path) -> list[ModelSignature]:
    """Read and deserialize an artifact from *path*."""
    return deserialize(path.read_text(encoding="utf-8"))
