# Copyright 2026 mstdoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Configuration for mstdoc."""

from mstdoc.workspace.config import (
    CONFIG_FILE_NAME,
    ConfigError,
    DocConfig,
    find_config,
    load_config,
    parse_config,
    render_default_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "DocConfig",
    "find_config",
    "load_config",
    "parse_config",
    "render_default_config",
]
