# Copyright 2026 mstdoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""mstdoc: JSDoc type signatures for mobx-state-tree style model declarations."""

__version__ = "0.1.0"
