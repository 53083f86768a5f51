# Copyright 2026 Phasec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the phasec compiler configuration file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from phasec.model.tree import ScanMode

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".phasec.yaml"

DEFAULT_CONFIG_TEXT = (
    "# phasec compiler configuration\n"
    "scan-mode: flat\n"
    "optimize: true\n"
    "output-directory: build\n"
)


class CompilerConfigError(Exception):
    """Raised when a compiler configuration file is invalid or cannot be loaded."""


@dataclass(frozen=True)
class CompilerConfig:
    """Options that steer a pipeline run.

    Attributes:
        scan_mode: Statement boundary strategy used by the parser.
        optimize: Whether the peephole pass runs before target emission.
        output_directory: Relative path (from the config file) for CLI output.
    """

    scan_mode: ScanMode = ScanMode.FLAT
    optimize: bool = True
    output_directory: str = "build"


def load_compiler_config(path: Path) -> CompilerConfig:
    """Load and parse a phasec configuration file.

    Args:
        path: Path to the `.phasec.yaml` file.

    Returns:
        A CompilerConfig populated from the file; absent keys keep their defaults.

    Raises:
        CompilerConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise CompilerConfigError(f"Compiler config file not found: {path}") from None
    except OSError as exc:
        raise CompilerConfigError(f"Cannot read compiler config file: {exc}") from exc

    return parse_compiler_config(text, source_label=str(path))


def parse_compiler_config(text: str, source_label: str = "<string>") -> CompilerConfig:
    """Parse compiler config YAML text into a CompilerConfig.

    An empty document yields the defaults.

    Raises:
        CompilerConfigError: If the YAML is invalid or a field has the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise CompilerConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return CompilerConfig()
    if not isinstance(data, dict):
        raise CompilerConfigError(f"{source_label}: compiler config must be a YAML mapping")

    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        raise CompilerConfigError(f"{source_label}: unknown field(s) {', '.join(map(repr, unknown))}")

    defaults = CompilerConfig()
    return CompilerConfig(
        scan_mode=_parse_scan_mode(data, source_label) if "scan-mode" in data else defaults.scan_mode,
        optimize=_optional_bool(data, "optimize", defaults.optimize, source_label),
        output_directory=_optional_string(data, "output-directory", defaults.output_directory, source_label),
    )


# ################
# Implementation
# ################

_KNOWN_KEYS = frozenset({"scan-mode", "optimize", "output-directory"})


def _parse_scan_mode(mapping: dict[str, object], source_label: str) -> ScanMode:
    value = _optional_string(mapping, "scan-mode", ScanMode.FLAT.value, source_label)
    try:
        return ScanMode(value)
    except ValueError:
        choices = ", ".join(repr(m.value) for m in ScanMode)
        raise CompilerConfigError(f"{source_label}: 'scan-mode' must be one of {choices}, got {value!r}") from None


def _optional_string(mapping: dict[str, object], key: str, default: str, source_label: str) -> str:
    """Extract an optional string field, raising CompilerConfigError on a wrong type."""
    if key not in mapping:
        return default
    value = mapping[key]
    if not isinstance(value, str):
        raise CompilerConfigError(f"{source_label}: '{key}' must be a string")
    return value


def _optional_bool(mapping: dict[str, object], key: str, default: bool, source_label: str) -> bool:
    if key not in mapping:
        return default
    value = mapping[key]
    if not isinstance(value, bool):
        raise CompilerConfigError(f"{source_label}: '{key}' must be a boolean")
    return value
