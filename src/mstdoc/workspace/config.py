# Copyright 2026 mstdoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the mstdoc configuration file."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

import yaml

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".mstdoc.yaml"


class ConfigError(Exception):
    """Raised when a configuration file is invalid or cannot be loaded."""


@dataclass
class DocConfig:
    """Options controlling how model declarations are recognised and rendered.

    Attributes:
        type_namespaces: Identifiers the builder vocabulary hangs off
            (``types`` in ``types.model``).
        async_helpers: Helper functions whose call marks an action as
            asynchronous (``flow`` in ``flow(function* () {})``).
        capitalize_names: Upper-case the first letter of declared model names.
        anonymous_prefix: Prefix of the generated label of an unbound
            anonymous model; the model id is appended.
        default_parent: Parent type written in headers of models without a
            symbolic base.
    """

    type_namespaces: list[str] = field(default_factory=lambda: ["types"])
    async_helpers: list[str] = field(default_factory=lambda: ["flow"])
    capitalize_names: bool = False
    anonymous_prefix: str = "AnonymousModel"
    default_parent: str = "Object"


def load_config(path: Path) -> DocConfig:
    """Load and parse an mstdoc configuration file.

    Args:
        path: Path to the ``.mstdoc.yaml`` file.

    Returns:
        A DocConfig populated from the file; absent keys keep their defaults.

    Raises:
        ConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {exc}") from exc

    return parse_config(text, source_label=str(path))


def find_config(directory: Path) -> Path | None:
    """Return the configuration file in *directory*, or None if there is none."""
    candidate = directory / CONFIG_FILE_NAME
    return candidate if candidate.is_file() else None


def parse_config(text: str, source_label: str = "<string>") -> DocConfig:
    """Parse configuration YAML text into a DocConfig.

    An empty document yields the default configuration.

    Raises:
        ConfigError: If the YAML is invalid, a key is unknown, or a value has
            the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return DocConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: config must be a YAML mapping")

    unknown = sorted(str(key) for key in data if key not in _KEYS)
    if unknown:
        raise ConfigError(f"{source_label}: unknown config key(s): {', '.join(unknown)}")

    config = DocConfig()
    if "type-namespaces" in data:
        config.type_namespaces = _require_names(data, "type-namespaces", source_label)
    if "async-helpers" in data:
        config.async_helpers = _require_names(data, "async-helpers", source_label)
    if "capitalize-names" in data:
        config.capitalize_names = _require_bool(data, "capitalize-names", source_label)
    if "anonymous-prefix" in data:
        config.anonymous_prefix = _require_string(data, "anonymous-prefix", source_label)
    if "default-parent" in data:
        config.default_parent = _require_string(data, "default-parent", source_label)
    return config


def render_default_config() -> str:
    """Return the text of a configuration file holding every default."""
    defaults = DocConfig()
    return (
        "# mstdoc configuration\n"
        "\n"
        "# Identifiers the model builder vocabulary hangs off (types.model, ...).\n"
        f"type-namespaces: [{', '.join(defaults.type_namespaces)}]\n"
        "# Helpers whose call marks an action as asynchronous.\n"
        f"async-helpers: [{', '.join(defaults.async_helpers)}]\n"
        f"capitalize-names: {'true' if defaults.capitalize_names else 'false'}\n"
        f"anonymous-prefix: {defaults.anonymous_prefix}\n"
        f"default-parent: {defaults.default_parent}\n"
    )


# ################
# Implementation
# ################

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

_KEYS = frozenset({"type-namespaces", "async-helpers", "capitalize-names", "anonymous-prefix", "default-parent"})


def _require_string(mapping: dict[str, object], key: str, source_label: str) -> str:
    """Extract a non-empty string field, raising ConfigError otherwise."""
    value = mapping[key]
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{source_label}: '{key}' must be a non-empty string")
    return value


def _require_bool(mapping: dict[str, object], key: str, source_label: str) -> bool:
    value = mapping[key]
    if not isinstance(value, bool):
        raise ConfigError(f"{source_label}: '{key}' must be true or false")
    return value


def _require_names(mapping: dict[str, object], key: str, source_label: str) -> list[str]:
    """Extract a non-empty list of identifier strings."""
    value = mapping[key]
    if not isinstance(value, list) or not value:
        raise ConfigError(f"{source_label}: '{key}' must be a non-empty list")
    for index, item in enumerate(value):
        if not isinstance(item, str) or not _IDENTIFIER.match(item):
            raise ConfigError(f"{source_label}: {key}[{index}] must be an identifier")
    return list(value)
