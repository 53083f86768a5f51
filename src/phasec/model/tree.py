# Copyright 2026 Phasec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Syntax tree produced by the parser."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class ScanMode(Enum):
    """How the parser finds statement boundaries inside a function body."""

    FLAT = "flat"
    NESTED = "nested"


class NodeKind(Enum):
    """The closed set of syntax node kinds."""

    PROGRAM = "Program"
    FUNCTION = "Function"
    STATEMENT = "Statement"
    VARIABLE_DECLARATION = "VariableDeclaration"
    ASSIGNMENT = "Assignment"
    IF_STATEMENT = "IfStatement"
    FOR_LOOP = "ForLoop"
    WHILE_LOOP = "WhileLoop"
    RETURN_STATEMENT = "ReturnStatement"
    PRINT_STATEMENT = "PrintStatement"


# Statement kinds whose body may hold nested statements.
CONTROL_FLOW_KINDS: frozenset[NodeKind] = frozenset(
    {
        NodeKind.IF_STATEMENT,
        NodeKind.FOR_LOOP,
        NodeKind.WHILE_LOOP,
    }
)


class SyntaxNode(BaseModel):
    """A node of the syntax tree.

    Statement nodes keep their source as flattened text: the literal values
    of the statement's tokens joined by single spaces.

    Attributes:
        kind: The node kind.
        value: Program name, function name, or flattened statement text.
        children: Owned child nodes in source order.
        line: 1-based line of the node's first token.
        column: 0-based column of the node's first token.
    """

    model_config = ConfigDict(frozen=True)

    kind: NodeKind
    value: str | None = None
    children: list[SyntaxNode] = _Field(default_factory=list)
    line: int | None = None
    column: int | None = None

    def walk(self) -> list[SyntaxNode]:
        """Return this node and all of its descendants in depth-first order."""
        nodes = [self]
        for child in self.children:
            nodes.extend(child.walk())
        return nodes


SyntaxNode.model_rebuild()
