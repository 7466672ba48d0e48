# Copyright 2026 mstdoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the configuration module."""

from pathlib import Path

import pytest

from mstdoc.workspace import (
    CONFIG_FILE_NAME,
    ConfigError,
    DocConfig,
    find_config,
    load_config,
    parse_config,
    render_default_config,
)


# ###############
# Helpers
# ###############


def _write_config(tmp_path: Path, content: str) -> Path:
    """Write a config file and return its path."""
    config_file = tmp_path / CONFIG_FILE_NAME
    config_file.write_text(content, encoding="utf-8")
    return config_file


# ###############
# Normal Cases
# ###############


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    """An empty config file parses to the default configuration."""
    config = load_config(_write_config(tmp_path, ""))

    assert config == DocConfig()
    assert config.type_namespaces == ["types"]
    assert config.async_helpers == ["flow"]
    assert config.capitalize_names is False
    assert config.anonymous_prefix == "AnonymousModel"
    assert config.default_parent == "Object"


def test_all_keys(tmp_path: Path) -> None:
    """Every documented key is read into the matching attribute."""
    content = """\
type-namespaces: [types, t]
async-helpers:
  - flow
  - task
capitalize-names: true
anonymous-prefix: Anon
default-parent: BaseModel
"""
    config = load_config(_write_config(tmp_path, content))

    assert config.type_namespaces == ["types", "t"]
    assert config.async_helpers == ["flow", "task"]
    assert config.capitalize_names is True
    assert config.anonymous_prefix == "Anon"
    assert config.default_parent == "BaseModel"


def test_partial_config_keeps_other_defaults() -> None:
    """Absent keys keep their default values."""
    config = parse_config("capitalize-names: true\n")

    assert config.capitalize_names is True
    assert config.type_namespaces == ["types"]


def test_dollar_identifiers_accepted() -> None:
    config = parse_config("type-namespaces: [$types, _t]\n")

    assert config.type_namespaces == ["$types", "_t"]


def test_default_config_round_trips() -> None:
    """The text written by ``init`` parses back to the defaults."""
    assert parse_config(render_default_config()) == DocConfig()


def test_find_config(tmp_path: Path) -> None:
    assert find_config(tmp_path) is None
    config_file = _write_config(tmp_path, "")
    assert find_config(tmp_path) == config_file


# ###############
# Error Cases
# ###############


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / CONFIG_FILE_NAME)


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config(_write_config(tmp_path, "type-namespaces: [unclosed\n"))


def test_non_mapping_raises() -> None:
    with pytest.raises(ConfigError, match="must be a YAML mapping"):
        parse_config("- types\n- t\n")


def test_unknown_key_raises() -> None:
    with pytest.raises(ConfigError, match="unknown config key"):
        parse_config("namespaces: [types]\n")


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("type-namespaces: types\n", "must be a non-empty list"),
        ("type-namespaces: []\n", "must be a non-empty list"),
        ("async-helpers: [flow, 1]\n", r"async-helpers\[1\] must be an identifier"),
        ("type-namespaces: ['not valid']\n", r"type-namespaces\[0\] must be an identifier"),
        ("capitalize-names: yes please\n", "must be true or false"),
        ("anonymous-prefix: ''\n", "must be a non-empty string"),
        ("default-parent: 3\n", "must be a non-empty string"),
    ],
)
def test_invalid_values_raise(content: str, message: str) -> None:
    with pytest.raises(ConfigError, match=message):
        parse_config(content)


def test_error_names_the_source(tmp_path: Path) -> None:
    config_file = _write_config(tmp_path, "bogus: 1\n")
    with pytest.raises(ConfigError) as exc_info:
        load_config(config_file)
    assert str(config_file) in str(exc_info.value)
