# Copyright 2026 Phasec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Phasec: a six-phase compiler for a small C-like teaching language."""

__version__ = "0.1.0"
