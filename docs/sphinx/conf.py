# Copyright 2026 mstdoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for the mstdoc documentation."""

project = "mstdoc"
author = "mstdoc Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc", "sphinx.ext.napoleon"]
autodoc_typehints = "description"

html_theme = "alabaster"
