# Copyright 2026 Phasec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compiler pipeline: tokenizer, parser, semantic analysis, IR, optimizer, emitter."""

from phasec.compiler.artifact import (
    ARTIFACT_SUFFIX,
    config_fingerprint,
    deserialize,
    read_artifact,
    read_matching_artifact,
    serialize,
    write_artifact,
)
from phasec.compiler.build import BuildOutcome, CompilerError, build_files, compile_file, read_source
from phasec.compiler.diagnostics import Diagnostic, DiagnosticCollector
from phasec.compiler.emitter import emit, render_assembly
from phasec.compiler.intermediate import generate
from phasec.compiler.lexer import Token, TokenType, tokenize
from phasec.compiler.optimizer import optimize
from phasec.compiler.parser import ScanMode, parse, parse_source
from phasec.compiler.pipeline import CompilationFailure, CompilationResult, compile_source
from phasec.compiler.semantic_analysis import SemanticAnalysis, SemanticError, analyze

__all__ = [
    "tokenize",
    "Token",
    "TokenType",
    "parse",
    "parse_source",
    "ScanMode",
    "analyze",
    "SemanticAnalysis",
    "SemanticError",
    "generate",
    "optimize",
    "emit",
    "render_assembly",
    "compile_source",
    "CompilationResult",
    "CompilationFailure",
    "Diagnostic",
    "DiagnosticCollector",
    "serialize",
    "deserialize",
    "write_artifact",
    "read_artifact",
    "read_matching_artifact",
    "config_fingerprint",
    "ARTIFACT_SUFFIX",
    "build_files",
    "compile_file",
    "read_source",
    "BuildOutcome",
    "CompilerError",
]
