# Copyright 2026 Phasec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization and deserialization of compilation results.

Artifacts are stored as compact JSON files so that a viewer can render every
phase's output without re-running the compiler. The format is versioned so
future schema changes can be detected.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from phasec.compiler.lexer import Token, TokenType
from phasec.compiler.pipeline import CompilationResult
from phasec.model.ir import Instruction, TargetSection
from phasec.model.symbols import SymbolEntry
from phasec.model.tree import NodeKind, SyntaxNode
from phasec.workspace.config import CompilerConfig

# ###############
# Public Interface
# ###############

ARTIFACT_FORMAT_VERSION = "1"
ARTIFACT_SUFFIX = ".phasec.json"


def serialize(result: CompilationResult, config: CompilerConfig | None = None) -> str:
    """Serialize a CompilationResult to a compact JSON string.

    When *config* is given, the options that shaped the result are recorded
    under ``"cfg"`` so a cached artifact can be matched against a later run.
    """
    obj = _result_to_dict(result)
    if config is not None:
        obj["cfg"] = config_fingerprint(config)
    return json.dumps(obj, separators=(",", ":"))


def deserialize(data: str) -> CompilationResult:
    """Deserialize a CompilationResult from a JSON string.

    Args:
        data: JSON string produced by :func:`serialize`.

    Returns:
        The reconstructed :class:`CompilationResult`.

    Raises:
        ValueError: If the data is not an artifact object or its format
            version is not recognised.
    """
    return _result_from_dict(_load_object(data))


def config_fingerprint(config: CompilerConfig) -> dict[str, Any]:
    """Return the configuration fields that change a compilation result."""
    return {"scan-mode": config.scan_mode.value, "optimize": config.optimize}


def write_artifact(result: CompilationResult, path: Path, config: CompilerConfig | None = None) -> None:
    """Write a compilation artifact to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(result, config), encoding="utf-8")


def read_artifact(path: Path) -> CompilationResult:
    """Read and deserialize a compilation artifact from *path*."""
    return deserialize(path.read_text(encoding="utf-8"))


def read_matching_artifact(path: Path, config: CompilerConfig) -> CompilationResult | None:
    """Read the artifact at *path* if it was produced with *config*.

    Returns:
        The stored result, or None when the recorded configuration differs
        or is missing.

    Raises:
        ValueError: If the file is not a readable artifact.
    """
    obj = _load_object(path.read_text(encoding="utf-8"))
    if obj.get("cfg") != config_fingerprint(config):
        return None
    return _result_from_dict(obj)


# ################
# Implementation
# ################


def _load_object(data: str) -> dict[str, Any]:
    obj = json.loads(data)
    if not isinstance(obj, dict):
        raise ValueError("Artifact must be a JSON object")
    version = obj.get("v")
    if version != ARTIFACT_FORMAT_VERSION:
        raise ValueError(f"Unsupported artifact format version: {version!r}")
    return obj


def _result_to_dict(result: CompilationResult) -> dict[str, Any]:
    return {
        "v": ARTIFACT_FORMAT_VERSION,
        "tokens": [_token_to_list(t) for t in result.tokens],
        "tree": _node_to_dict(result.tree),
        "symbols": {key: _symbol_to_dict(entry) for key, entry in result.symbol_table.items()},
        "errors": list(result.semantic_errors),
        "ir": [_instruction_to_dict(i) for i in result.instructions],
        "opt": [_instruction_to_dict(i) for i in result.optimized_instructions],
        "sections": {s.section: list(s.lines) for s in result.target_sections},
    }


def _result_from_dict(obj: dict[str, Any]) -> CompilationResult:
    return CompilationResult(
        tokens=[_token_from_list(t) for t in obj.get("tokens", [])],
        tree=_node_from_dict(obj["tree"]),
        symbol_table={key: _symbol_from_dict(entry) for key, entry in obj.get("symbols", {}).items()},
        semantic_errors=obj.get("errors", []),
        instructions=[_instruction_from_dict(i) for i in obj.get("ir", [])],
        optimized_instructions=[_instruction_from_dict(i) for i in obj.get("opt", [])],
        target_sections=[
            TargetSection(section=name, lines=lines) for name, lines in obj.get("sections", {}).items()
        ],
    )


def _token_to_list(token: Token) -> list[Any]:
    return [token.type.value, token.value, token.line, token.column]


def _token_from_list(obj: list[Any]) -> Token:
    type_name, value, line, column = obj
    return Token(TokenType(type_name), value, line, column)


def _node_to_dict(node: SyntaxNode) -> dict[str, Any]:
    d: dict[str, Any] = {"kind": node.kind.value}
    if node.value is not None:
        d["value"] = node.value
    if node.children:
        d["children"] = [_node_to_dict(c) for c in node.children]
    if node.line is not None:
        d["line"] = node.line
    if node.column is not None:
        d["column"] = node.column
    return d


def _node_from_dict(obj: dict[str, Any]) -> SyntaxNode:
    return SyntaxNode(
        kind=NodeKind(obj["kind"]),
        value=obj.get("value"),
        children=[_node_from_dict(c) for c in obj.get("children", [])],
        line=obj.get("line"),
        column=obj.get("column"),
    )


def _symbol_to_dict(entry: SymbolEntry) -> dict[str, Any]:
    return {"kind": entry.kind, "scope": entry.scope, "line": entry.line}


def _symbol_from_dict(obj: dict[str, Any]) -> SymbolEntry:
    return SymbolEntry(kind=obj["kind"], scope=obj["scope"], line=obj["line"])


def _instruction_to_dict(instruction: Instruction) -> dict[str, Any]:
    d: dict[str, Any] = {"op": instruction.operation, "args": list(instruction.args)}
    if instruction.result:
        d["result"] = instruction.result
    return d


def _instruction_from_dict(obj: dict[str, Any]) -> Instruction:
    return Instruction(operation=obj["op"], args=obj.get("args", []), result=obj.get("result", ""))
