# Copyright 2026 Phasec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Semantic analysis for parsed phasec programs.

Builds the flat symbol table and reports variable redeclarations. Scopes
are dot-joined name paths rooted at ``global``; a function contributes one
path segment. No use-before-declaration or type compatibility checks are
performed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from phasec.model.symbols import FUNCTION_KIND, UNKNOWN_KIND, SymbolEntry, SymbolTable, symbol_key
from phasec.model.tree import NodeKind, SyntaxNode

# ###############
# Public Interface
# ###############

GLOBAL_SCOPE = "global"


@dataclass(frozen=True)
class SemanticError:
    """A non-fatal error detected during semantic analysis.

    Attributes:
        message: Human-readable description of the error.
    """

    message: str


@dataclass
class SemanticAnalysis:
    """Result of analysing one syntax tree.

    Attributes:
        symbol_table: Mapping from ``name@scope`` keys to their first declaration.
        errors: Errors in the order they were found.
    """

    symbol_table: SymbolTable = field(default_factory=dict)
    errors: list[SemanticError] = field(default_factory=list)

    @property
    def messages(self) -> list[str]:
        return [e.message for e in self.errors]


def analyze(tree: SyntaxNode) -> SemanticAnalysis:
    """Walk the tree depth-first and collect declarations.

    Checks performed:
    - Each function is recorded as ``name@scope`` with kind ``"function"``;
      its statements are analysed in scope ``scope.name``.
    - Each variable declaration is recorded with its annotated type (or
      ``"unknown"``). Declaring an existing ``name@scope`` again produces an
      error and keeps the original entry.

    Args:
        tree: The Program node returned by the parser.

    Returns:
        A :class:`SemanticAnalysis` holding the symbol table and errors.
    """
    analyzer = _SemanticAnalyzer()
    analyzer.visit(tree, GLOBAL_SCOPE)
    return analyzer.result


# ################
# Implementation
# ################

_TYPE_ANNOTATION = re.compile(r":\s*([a-zA-Z\[\]]+)")


class _SemanticAnalyzer:
    """Carries the symbol table and error list through the walk."""

    def __init__(self) -> None:
        self.result = SemanticAnalysis()

    def visit(self, node: SyntaxNode, scope: str) -> None:
        if node.kind == NodeKind.FUNCTION and node.value:
            self._declare_function(node, scope)
        elif node.kind == NodeKind.VARIABLE_DECLARATION and node.value:
            self._declare_variable(node, scope)
        else:
            for child in node.children:
                self.visit(child, scope)

    def _declare_function(self, node: SyntaxNode, scope: str) -> None:
        key = symbol_key(node.value, scope)
        # A repeated function name overwrites; only variables are checked.
        self.result.symbol_table[key] = SymbolEntry(kind=FUNCTION_KIND, scope=scope, line=node.line or 0)
        inner_scope = f"{scope}.{node.value}"
        for child in node.children:
            self.visit(child, inner_scope)

    def _declare_variable(self, node: SyntaxNode, scope: str) -> None:
        parts = node.value.split(" ")
        if len(parts) < 2:
            return
        name = parts[1]
        key = symbol_key(name, scope)
        if key in self.result.symbol_table:
            self.result.errors.append(SemanticError(f"Error: Variable '{name}' already declared in scope '{scope}'"))
            return
        match = _TYPE_ANNOTATION.search(node.value)
        var_type = match.group(1) if match else UNKNOWN_KIND
        self.result.symbol_table[key] = SymbolEntry(kind=var_type, scope=scope, line=node.line or 0)
