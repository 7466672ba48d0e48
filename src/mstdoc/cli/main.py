# Copyright 2026 mstdoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the mstdoc command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from mstdoc.compiler.analysis import AnalysisResult
from mstdoc.compiler.artifact import serialize
from mstdoc.compiler.build import DocumentationError, document_files
from mstdoc.emit.jsdoc import render_jsdoc
from mstdoc.workspace.config import (
    CONFIG_FILE_NAME,
    ConfigError,
    DocConfig,
    find_config,
    load_config,
    render_default_config,
)

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the mstdoc CLI."""
    parser = argparse.ArgumentParser(
        prog="mstdoc",
        description="mstdoc - JSDoc typedefs for mobx-state-tree models",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log the analysis pipeline to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # init subcommand
    init_parser = subparsers.add_parser(
        "init",
        help="Write a default configuration file",
        description=f"Create a {CONFIG_FILE_NAME} file holding the default options.",
    )
    init_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to write the configuration to (default: current directory)",
    )

    # doc subcommand
    doc_parser = subparsers.add_parser(
        "doc",
        help="Generate documentation for model declarations",
        description="Print a JSDoc @typedef block for every documented model.",
    )
    _add_source_arguments(doc_parser)
    doc_parser.add_argument(
        "--format",
        choices=("jsdoc", "json"),
        default="jsdoc",
        help="Output format (default: jsdoc)",
    )
    doc_parser.add_argument(
        "-o",
        "--output",
        help="Write the output to this file instead of stdout",
    )

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Report problems in model declarations",
        description="Analyse files and report every diagnostic; exit with 1 if there are any.",
    )
    _add_source_arguments(check_parser)

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _add_source_arguments(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument(
        "files",
        nargs="+",
        help="JavaScript files declaring models",
    )
    subparser.add_argument(
        "--config",
        help=f"Configuration file (default: {CONFIG_FILE_NAME} in the current directory, if present)",
    )


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "init":
        return _cmd_init(args)
    if args.command == "doc":
        return _cmd_doc(args)
    if args.command == "check":
        return _cmd_check(args)
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    """Handle the init subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    config_file = directory / CONFIG_FILE_NAME

    if config_file.exists():
        print(
            f"Error: configuration already exists at '{config_file}'.",
            file=sys.stderr,
        )
        return 1

    config_file.write_text(render_default_config(), encoding="utf-8")
    print(f"Wrote default configuration to '{config_file}'.")
    return 0


def _cmd_doc(args: argparse.Namespace) -> int:
    """Handle the doc subcommand."""
    results = _analyze_files(args)
    if results is None:
        return 1

    for path, result in results.items():
        _print_diagnostics(path, result, prefix="Warning")

    if args.format == "json":
        signatures = [s for result in results.values() for s in result.signatures]
        output = serialize(signatures) + "\n"
    else:
        output = "\n".join(render_jsdoc(result.signatures) for result in results.values() if result.signatures)

    if args.output:
        out_path = Path(args.output)
        try:
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(output, encoding="utf-8")
        except OSError as exc:
            print(f"Error: cannot write '{out_path}': {exc}", file=sys.stderr)
            return 1
    else:
        sys.stdout.write(output)
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    results = _analyze_files(args)
    if results is None:
        return 1

    problems = 0
    for path, result in results.items():
        problems += _print_diagnostics(path, result, prefix="Error")

    documented = sum(len(result.signatures) for result in results.values())
    if problems:
        print(f"Found {problems} problem(s) in {len(results)} file(s).")
        return 1
    print(f"No problems found: {documented} model(s) in {len(results)} file(s).")
    return 0


def _analyze_files(args: argparse.Namespace) -> dict[Path, AnalysisResult] | None:
    """Load the configuration and analyse the requested files; None on error."""
    config = _load_config(args.config)
    if config is None:
        return None
    try:
        return document_files([Path(f) for f in args.files], config)
    except DocumentationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None


def _load_config(explicit: str | None) -> DocConfig | None:
    path = Path(explicit) if explicit else find_config(Path.cwd())
    if path is None:
        return DocConfig()
    try:
        return load_config(path)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None


def _print_diagnostics(path: Path, result: AnalysisResult, *, prefix: str) -> int:
    for diagnostic in result.diagnostics:
        print(f"{prefix}: {path}: {diagnostic}", file=sys.stderr)
    return len(result.diagnostics)
