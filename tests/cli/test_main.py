# Copyright 2026 mstdoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the mstdoc CLI entry point."""

import json
import sys
from pathlib import Path

import pytest

from mstdoc.cli.main import main

_STORE = """\
const Tag = types.model("Tag", { id: types.identifier });
export const Store = types.model("Store", { tags: types.map(Tag) });
"""

# ###############
# Helpers
# ###############


def _run(monkeypatch: pytest.MonkeyPatch, *args: str) -> int:
    """Invoke main() with *args* and return its exit code."""
    monkeypatch.setattr(sys, "argv", ["mstdoc", *args])
    with pytest.raises(SystemExit) as exc_info:
        main()
    code = exc_info.value.code
    assert isinstance(code, int)
    return code


# ###############
# Public Interface
# ###############


def test_main_no_args_prints_help_and_exits(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """main() with no subcommand prints help and exits with code 0."""
    assert _run(monkeypatch) == 0
    assert "usage: mstdoc" in capsys.readouterr().out


# -------- init tests --------


def test_init_writes_default_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """init creates .mstdoc.yaml in the specified directory."""
    assert _run(monkeypatch, "init", str(tmp_path)) == 0
    content = (tmp_path / ".mstdoc.yaml").read_text(encoding="utf-8")
    assert "type-namespaces: [types]" in content
    assert "async-helpers: [flow]" in content


def test_init_default_directory_uses_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """init with no directory argument uses the current working directory."""
    monkeypatch.chdir(tmp_path)
    assert _run(monkeypatch, "init") == 0
    assert (tmp_path / ".mstdoc.yaml").exists()


def test_init_fails_if_config_already_exists(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """init exits with error code 1 and leaves an existing config untouched."""
    (tmp_path / ".mstdoc.yaml").write_text("capitalize-names: true\n", encoding="utf-8")
    assert _run(monkeypatch, "init", str(tmp_path)) == 1
    assert (tmp_path / ".mstdoc.yaml").read_text(encoding="utf-8") == "capitalize-names: true\n"


def test_init_fails_if_directory_does_not_exist(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert _run(monkeypatch, "init", str(tmp_path / "missing")) == 1
    assert "does not exist" in capsys.readouterr().err


# -------- doc tests --------


def test_doc_prints_jsdoc(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """doc prints one @typedef block per documented model."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "store.js").write_text(_STORE, encoding="utf-8")
    assert _run(monkeypatch, "doc", "store.js") == 0
    captured = capsys.readouterr()
    assert "* @typedef {Object} Tag\n* @property {string} id\n" in captured.out
    assert "* @property {Map<*,Tag>} tags\n" in captured.out
    assert captured.err == ""


def test_doc_json_format(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "store.js").write_text(_STORE, encoding="utf-8")
    assert _run(monkeypatch, "doc", "store.js", "--format", "json") == 0
    obj = json.loads(capsys.readouterr().out)
    assert obj["v"] == "1"
    assert [m["label"] for m in obj["models"]] == ["Tag", "Store"]


def test_doc_writes_output_file(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """doc -o writes to the given file (creating directories) instead of stdout."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "store.js").write_text(_STORE, encoding="utf-8")
    out = tmp_path / "docs" / "types.js"
    assert _run(monkeypatch, "doc", "store.js", "-o", str(out)) == 0
    assert capsys.readouterr().out == ""
    assert out.read_text(encoding="utf-8").startswith("/**\n* @typedef {Object} Tag\n")


def test_doc_reports_diagnostics_as_warnings(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Diagnostics do not fail doc; they are printed to stderr."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "m.js").write_text('types.model("M", { a: types.mystery });\n', encoding="utf-8")
    assert _run(monkeypatch, "doc", "m.js") == 0
    captured = capsys.readouterr()
    assert "* @property {*} a" in captured.out
    assert "Warning: m.js: line 1: UnknownConstructError" in captured.err


def test_doc_uses_config_from_cwd(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".mstdoc.yaml").write_text("default-parent: Base\n", encoding="utf-8")
    (tmp_path / "m.js").write_text('types.model("M", {});\n', encoding="utf-8")
    assert _run(monkeypatch, "doc", "m.js") == 0
    assert "@typedef {Base} M" in capsys.readouterr().out


def test_doc_uses_explicit_config(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.chdir(tmp_path)
    config = tmp_path / "conf" / "custom.yaml"
    config.parent.mkdir()
    config.write_text("type-namespaces: [t]\n", encoding="utf-8")
    (tmp_path / "m.js").write_text('t.model("M", {});\n', encoding="utf-8")
    assert _run(monkeypatch, "doc", "m.js", "--config", str(config)) == 0
    assert "@typedef {Object} M" in capsys.readouterr().out


def test_doc_invalid_config(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".mstdoc.yaml").write_text("bogus: 1\n", encoding="utf-8")
    (tmp_path / "m.js").write_text('types.model("M", {});\n', encoding="utf-8")
    assert _run(monkeypatch, "doc", "m.js") == 1
    assert "Error:" in capsys.readouterr().err


def test_doc_missing_file(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.chdir(tmp_path)
    assert _run(monkeypatch, "doc", "missing.js") == 1
    assert "Error: Cannot read source file" in capsys.readouterr().err


# -------- check tests --------


def test_check_clean_file(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """check exits with 0 and a summary when there are no diagnostics."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "store.js").write_text(_STORE, encoding="utf-8")
    assert _run(monkeypatch, "check", "store.js") == 0
    assert "No problems found: 2 model(s) in 1 file(s)." in capsys.readouterr().out


def test_check_reports_problems(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """check exits with 1 and prints every diagnostic."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "bad.js").write_text(
        'types.model("M", { a: types.reference(User), ...rest });\n',
        encoding="utf-8",
    )
    assert _run(monkeypatch, "check", "bad.js") == 1
    captured = capsys.readouterr()
    assert "Found 2 problem(s) in 1 file(s)." in captured.out
    assert "Error: bad.js: line 1: UnresolvedReferenceError" in captured.err
    assert "Error: bad.js: line 1: StructureError" in captured.err


def test_check_reports_parse_error(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "broken.js").write_text("const M = types.model({\n", encoding="utf-8")
    assert _run(monkeypatch, "check", "broken.js") == 1
    assert "Parse error in 'broken.js'" in capsys.readouterr().err


def test_verbose_flag(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """-v is accepted before the subcommand."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "store.js").write_text(_STORE, encoding="utf-8")
    assert _run(monkeypatch, "-v", "check", "store.js") == 0
