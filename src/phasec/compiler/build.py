# Copyright 2026 Phasec Contributors
# SPDX-License-Identifier: Apache-2.0

"""File-level compiler workflow with a CMake-style cache.

A source file ``lib/prog.pc`` compiles to two outputs that mirror its path
below the source root: ``lib/prog.phasec.json`` (the full artifact) and
``lib/prog.s`` (the assembly listing). Both are reused when the artifact is
strictly newer than the source file and was produced with the same scan mode
and optimization setting.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from phasec.compiler.artifact import ARTIFACT_SUFFIX, read_matching_artifact, write_artifact
from phasec.compiler.emitter import render_assembly
from phasec.compiler.pipeline import CompilationFailure, CompilationResult, compile_source
from phasec.workspace.config import CompilerConfig

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

ASSEMBLY_SUFFIX = ".s"


class CompilerError(Exception):
    """Raised when a source file cannot be read or its compilation fails.

    Semantic errors are not compiler errors: they are carried in the result.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)


@dataclass(frozen=True)
class BuildOutcome:
    """Result of building one source file.

    Attributes:
        result: The compilation result (fresh or loaded from the cache).
        artifact: Path of the JSON artifact.
        assembly: Path of the assembly listing.
        cached: True if the outputs were up to date and not rebuilt.
    """

    result: CompilationResult
    artifact: Path
    assembly: Path
    cached: bool


def read_source(path: Path) -> str:
    """Return the text of a source file.

    Raises:
        CompilerError: If the file cannot be read.
    """
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CompilerError(f"Cannot read source file '{path}': {exc}") from exc


def compile_file(path: Path, config: CompilerConfig | None = None) -> CompilationResult:
    """Compile one source file without touching the output directory.

    Raises:
        CompilerError: If the file cannot be read or the pipeline aborts.
    """
    outcome = compile_source(read_source(path), config=config)
    if isinstance(outcome, CompilationFailure):
        raise CompilerError(f"{path}: {outcome.error}")
    return outcome


def build_files(
    files: list[Path],
    output_dir: Path,
    config: CompilerConfig | None = None,
    source_root: Path | None = None,
) -> dict[Path, BuildOutcome]:
    """Compile source files into *output_dir*, reusing up-to-date outputs.

    Outputs mirror each source's path relative to *source_root*, so files
    with the same name in different directories do not collide.

    Args:
        files: Source files to compile.
        output_dir: Directory receiving the artifact and assembly files.
        config: Pipeline options shared by every file.
        source_root: Directory the output layout is relative to. Defaults to
            the deepest directory containing every source file.

    Returns:
        A mapping from each source path to its :class:`BuildOutcome`.

    Raises:
        CompilerError: On the first file that cannot be read or compiled, or
            when a source lies outside *source_root*.
    """
    if not files:
        return {}
    config = config or CompilerConfig()
    root = (source_root or _common_root(files)).resolve()
    return {f: _build_file(f, _rel_stem(f, root), output_dir, config) for f in files}


# ################
# Implementation
# ################


def _common_root(files: list[Path]) -> Path:
    return Path(os.path.commonpath([f.resolve().parent for f in files]))


def _rel_stem(source_file: Path, root: Path) -> Path:
    """Return the source path relative to *root*, without its suffix."""
    try:
        rel = source_file.resolve().relative_to(root)
    except ValueError:
        raise CompilerError(f"Source file '{source_file}' is not under '{root}'") from None
    return rel.with_suffix("")


def _output_paths(rel_stem: Path, output_dir: Path) -> tuple[Path, Path]:
    base = output_dir / rel_stem
    return base.with_name(base.name + ARTIFACT_SUFFIX), base.with_name(base.name + ASSEMBLY_SUFFIX)


def _is_up_to_date(source_file: Path, artifact: Path) -> bool:
    """Return True if *artifact* exists and is strictly newer than *source_file*."""
    if not artifact.exists() or not source_file.exists():
        return False
    return artifact.stat().st_mtime > source_file.stat().st_mtime


def _cached_result(
    source_file: Path,
    artifact: Path,
    assembly: Path,
    config: CompilerConfig,
) -> CompilationResult | None:
    """Return the stored result if the outputs can be reused for *config*."""
    if not (_is_up_to_date(source_file, artifact) and assembly.exists()):
        return None
    try:
        result = read_matching_artifact(artifact, config)
    except (OSError, ValueError, KeyError, TypeError) as exc:
        logger.debug("Ignoring unreadable artifact %s: %s", artifact, exc)
        return None
    if result is None:
        logger.debug("Configuration changed since %s was written", artifact)
    return result


def _build_file(source_file: Path, rel_stem: Path, output_dir: Path, config: CompilerConfig) -> BuildOutcome:
    artifact, assembly = _output_paths(rel_stem, output_dir)

    cached = _cached_result(source_file, artifact, assembly, config)
    if cached is not None:
        logger.debug("Reusing cached artifact %s", artifact)
        return BuildOutcome(result=cached, artifact=artifact, assembly=assembly, cached=True)

    result = compile_file(source_file, config)
    write_artifact(result, artifact, config)
    assembly.write_text(render_assembly(result.target_sections), encoding="utf-8")
    logger.debug("Wrote %s and %s", artifact, assembly)
    return BuildOutcome(result=result, artifact=artifact, assembly=assembly, cached=False)
