# Copyright 2026 Phasec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Three-address intermediate code generation.

Statement facts are re-derived from each node's flattened text with regular
expressions. A statement whose text does not have the expected shape emits
nothing. Conditionals and loops emit no control-flow instructions of their
own; only their child statements (if any) are translated.
"""

from __future__ import annotations

import re

from phasec.compiler.diagnostics import Diagnostic, DiagnosticCollector
from phasec.model.ir import (
    ASSIGN,
    DECLARE,
    EVAL,
    FUNC_BEGIN,
    FUNC_END,
    PRINT,
    PRINT_STR,
    RETURN,
    Instruction,
)
from phasec.model.tree import NodeKind, SyntaxNode

# ###############
# Public Interface
# ###############


def generate(tree: SyntaxNode, *, diagnostics: DiagnosticCollector | None = None) -> list[Instruction]:
    """Translate a syntax tree into an ordered instruction list.

    Temporaries are numbered ``t0, t1, ...`` by a single counter that is not
    reset between functions.

    Args:
        tree: The Program node returned by the parser.
        diagnostics: Optional sink for statements that produced no instruction.

    Returns:
        The generated instructions in program order.
    """
    generator = IRGenerator(diagnostics)
    generator.visit(tree)
    return generator.instructions


class IRGenerator:
    """Depth-first translator owning the temporary counter."""

    def __init__(self, diagnostics: DiagnosticCollector | None = None) -> None:
        self.instructions: list[Instruction] = []
        self._temp_counter = 0
        self._diagnostics = diagnostics

    def new_temp(self) -> str:
        """Return a fresh temporary name."""
        name = f"t{self._temp_counter}"
        self._temp_counter += 1
        return name

    def visit(self, node: SyntaxNode) -> None:
        handler = _HANDLERS.get(node.kind)
        if handler is not None:
            if node.value:
                handler(self, node)
            return
        for child in node.children:
            self.visit(child)

    # ------------------------------------------------------------------
    # Node handlers
    # ------------------------------------------------------------------

    def _function(self, node: SyntaxNode) -> None:
        self._emit(FUNC_BEGIN, [node.value])
        for child in node.children:
            self.visit(child)
        self._emit(FUNC_END, [node.value])

    def _print(self, node: SyntaxNode) -> None:
        match = _PRINT.search(node.value)
        if match is None:
            self._unmatched(node)
            return
        arg = match.group(1).strip()
        if arg.startswith('"') and arg.endswith('"'):
            self._emit(PRINT_STR, [arg])
        else:
            temp = self.new_temp()
            self._emit(EVAL, [arg], temp)
            self._emit(PRINT, [temp])

    def _return(self, node: SyntaxNode) -> None:
        match = _RETURN.search(node.value)
        if match is None:
            self._emit(RETURN, [])
            return
        temp = self.new_temp()
        self._emit(EVAL, [match.group(1).strip()], temp)
        self._emit(RETURN, [temp])

    def _declaration(self, node: SyntaxNode) -> None:
        match = _VAR_INIT.search(node.value)
        if match is not None:
            self._emit(ASSIGN, [match.group(2).strip()], match.group(1))
            return
        match = _VAR_NAME.search(node.value)
        if match is None:
            self._unmatched(node)
            return
        self._emit(DECLARE, [match.group(1)])

    def _assignment(self, node: SyntaxNode) -> None:
        match = _ASSIGNMENT.search(node.value)
        if match is None:
            self._unmatched(node)
            return
        self._emit(ASSIGN, [match.group(2).strip()], match.group(1))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _emit(self, operation: str, args: list[str], result: str = "") -> None:
        self.instructions.append(Instruction(operation=operation, args=args, result=result))

    def _unmatched(self, node: SyntaxNode) -> None:
        if self._diagnostics is not None:
            self._diagnostics.report(
                Diagnostic(
                    "intermediate",
                    f"No instruction generated for {node.kind.value} {node.value!r}",
                    node.line,
                    node.column,
                )
            )


# ################
# Implementation
# ################

_PRINT = re.compile(r"print\s*\(\s*(.+)\s*\)")
_RETURN = re.compile(r"return\s+(.+)")
_VAR_INIT = re.compile(r"var\s+([a-zA-Z_][a-zA-Z0-9_]*)\s*(?::\s*[a-zA-Z\[\]]+)?\s*=\s*(.+)")
_VAR_NAME = re.compile(r"var\s+([a-zA-Z_][a-zA-Z0-9_]*)")
# The left-hand side may carry one index suffix, kept verbatim.
_ASSIGNMENT = re.compile(r"([a-zA-Z_][a-zA-Z0-9_]*(?:\[[^\]]+\])?)\s*=\s*(.+)")

_HANDLERS = {
    NodeKind.FUNCTION: IRGenerator._function,
    NodeKind.PRINT_STATEMENT: IRGenerator._print,
    NodeKind.RETURN_STATEMENT: IRGenerator._return,
    NodeKind.VARIABLE_DECLARATION: IRGenerator._declaration,
    NodeKind.ASSIGNMENT: IRGenerator._assignment,
}
