# Copyright 2026 Phasec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Command-line interface for phasec."""
