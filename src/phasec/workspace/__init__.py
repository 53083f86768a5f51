# Copyright 2026 Phasec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compiler configuration for phasec."""

from phasec.workspace.config import (
    CONFIG_FILE_NAME,
    DEFAULT_CONFIG_TEXT,
    CompilerConfig,
    CompilerConfigError,
    load_compiler_config,
    parse_compiler_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_CONFIG_TEXT",
    "CompilerConfig",
    "CompilerConfigError",
    "load_compiler_config",
    "parse_compiler_config",
]
