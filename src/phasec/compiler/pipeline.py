# Copyright 2026 Phasec Contributors
# SPDX-License-Identifier: Apache-2.0

"""End-to-end compilation: the six phases run in order on one source string.

Semantic errors do not stop the pipeline; they are returned next to the
generated code. Any exception raised by a phase aborts the run and is
reported as a single :class:`CompilationFailure` with no partial output.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

from phasec.compiler.diagnostics import DiagnosticCollector
from phasec.compiler.emitter import emit
from phasec.compiler.intermediate import generate
from phasec.compiler.lexer import Token, tokenize
from phasec.compiler.optimizer import optimize
from phasec.compiler.parser import parse
from phasec.compiler.semantic_analysis import analyze
from phasec.model.ir import Instruction, TargetSection
from phasec.model.symbols import SymbolEntry
from phasec.model.tree import SyntaxNode
from phasec.workspace.config import CompilerConfig

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class CompilationResult(BaseModel):
    """Outputs of every phase of a successful run."""

    model_config = ConfigDict(frozen=True)

    tokens: list[Token] = _Field(default_factory=list)
    tree: SyntaxNode
    symbol_table: dict[str, SymbolEntry] = _Field(default_factory=dict)
    semantic_errors: list[str] = _Field(default_factory=list)
    instructions: list[Instruction] = _Field(default_factory=list)
    optimized_instructions: list[Instruction] = _Field(default_factory=list)
    target_sections: list[TargetSection] = _Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return True

    def section(self, name: str) -> TargetSection:
        """Return the emitted section called *name* (``"data"`` or ``"text"``)."""
        for section in self.target_sections:
            if section.section == name:
                return section
        raise KeyError(name)


class CompilationFailure(BaseModel):
    """An aborted run: one top-level message and nothing else."""

    model_config = ConfigDict(frozen=True)

    error: str

    @property
    def ok(self) -> bool:
        return False


def compile_source(
    source: str,
    *,
    config: CompilerConfig | None = None,
    diagnostics: DiagnosticCollector | None = None,
) -> CompilationResult | CompilationFailure:
    """Run tokenizer, parser, semantic analysis, IR generation, optimization and emission.

    Args:
        source: Program text.
        config: Pipeline options; defaults to :class:`CompilerConfig` defaults.
        diagnostics: Optional sink forwarded to the parser and IR generator.

    Returns:
        A :class:`CompilationResult`, or a :class:`CompilationFailure` if any
        phase raised.
    """
    config = config or CompilerConfig()
    try:
        return _run_phases(source, config, diagnostics)
    except Exception as exc:
        logger.debug("Compilation aborted", exc_info=True)
        return CompilationFailure(error=f"Compilation failed: {exc}")


# ################
# Implementation
# ################


def _run_phases(
    source: str,
    config: CompilerConfig,
    diagnostics: DiagnosticCollector | None,
) -> CompilationResult:
    tokens = tokenize(source)
    logger.debug("Tokenized %d token(s)", len(tokens))

    tree = parse(tokens, scan_mode=config.scan_mode, diagnostics=diagnostics)
    logger.debug("Parsed program %r with %d function(s)", tree.value, len(tree.children))

    analysis = analyze(tree)
    logger.debug(
        "Semantic analysis recorded %d symbol(s) and %d error(s)",
        len(analysis.symbol_table),
        len(analysis.errors),
    )

    instructions = generate(tree, diagnostics=diagnostics)
    logger.debug("Generated %d instruction(s)", len(instructions))

    if config.optimize:
        optimized = optimize(instructions)
        logger.debug("Optimized to %d instruction(s)", len(optimized))
    else:
        optimized = list(instructions)

    sections = emit(optimized)

    return CompilationResult(
        tokens=tokens,
        tree=tree,
        symbol_table=analysis.symbol_table,
        semantic_errors=analysis.messages,
        instructions=instructions,
        optimized_instructions=optimized,
        target_sections=sections,
    )
