# Copyright 2026 Phasec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model shared by the compiler phases (tree, symbols, instructions)."""

from phasec.model.ir import Instruction, TargetSection
from phasec.model.symbols import SymbolEntry, SymbolTable, symbol_key
from phasec.model.tree import CONTROL_FLOW_KINDS, NodeKind, ScanMode, SyntaxNode

__all__ = [
    # Tree
    "NodeKind",
    "SyntaxNode",
    "CONTROL_FLOW_KINDS",
    "ScanMode",
    # Symbols
    "SymbolEntry",
    "SymbolTable",
    "symbol_key",
    # Instructions
    "Instruction",
    "TargetSection",
]
