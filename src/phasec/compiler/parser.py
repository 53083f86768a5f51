# Copyright 2026 Phasec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for phasec token streams.

The tree has three structural levels (program, function, statement). A
statement is not parsed into an expression tree: its tokens are collected up
to the next ``;`` or ``}`` operator and stored as space-joined text, and its
kind is decided by the first collected token.

In the default :attr:`ScanMode.FLAT` mode that terminator search does not
track brace or parenthesis depth, so a ``;`` inside the block of an ``if``,
``for`` or ``while`` ends the enclosing statement early and the block's
closing ``}`` is taken as the end of the function body. :attr:`ScanMode.NESTED`
is an opt-in depth-aware scanner that parses such blocks into child nodes.
"""

from __future__ import annotations

from phasec.compiler.diagnostics import Diagnostic, DiagnosticCollector
from phasec.compiler.lexer import Token, TokenType, tokenize
from phasec.model.tree import CONTROL_FLOW_KINDS, NodeKind, ScanMode, SyntaxNode

# ###############
# Public Interface
# ###############


def parse(
    tokens: list[Token],
    *,
    scan_mode: ScanMode = ScanMode.FLAT,
    diagnostics: DiagnosticCollector | None = None,
) -> SyntaxNode:
    """Build a syntax tree from a token sequence.

    COMMENT tokens are filtered out first. Unexpected tokens are skipped
    without raising; they are reported to *diagnostics* when one is given.

    Args:
        tokens: Tokens produced by :func:`~phasec.compiler.lexer.tokenize`.
        scan_mode: Statement boundary strategy.
        diagnostics: Optional sink for skipped tokens.

    Returns:
        The Program node. Its value is the program name, or None when the
        source does not start with ``program <name>``.
    """
    code_tokens = [tok for tok in tokens if tok.type != TokenType.COMMENT]
    return _Parser(code_tokens, scan_mode, diagnostics).parse_program()


def parse_source(
    source: str,
    *,
    scan_mode: ScanMode = ScanMode.FLAT,
    diagnostics: DiagnosticCollector | None = None,
) -> SyntaxNode:
    """Tokenize and parse source text in one step."""
    return parse(tokenize(source), scan_mode=scan_mode, diagnostics=diagnostics)


# ################
# Implementation
# ################

_STATEMENT_KINDS: dict[str, NodeKind] = {
    "var": NodeKind.VARIABLE_DECLARATION,
    "if": NodeKind.IF_STATEMENT,
    "for": NodeKind.FOR_LOOP,
    "while": NodeKind.WHILE_LOOP,
    "return": NodeKind.RETURN_STATEMENT,
    "print": NodeKind.PRINT_STATEMENT,
}

_PHASE = "parser"


def _classify(first: Token | None) -> NodeKind:
    """Choose a statement kind from its first token."""
    if first is None:
        return NodeKind.STATEMENT
    if first.type == TokenType.KEYWORD:
        return _STATEMENT_KINDS.get(first.value, NodeKind.STATEMENT)
    if first.type == TokenType.IDENTIFIER:
        return NodeKind.ASSIGNMENT
    return NodeKind.STATEMENT


def _join(tokens: list[Token]) -> str:
    return " ".join(tok.value for tok in tokens)


class _Parser:
    """Cursor over the comment-free token list."""

    def __init__(
        self,
        tokens: list[Token],
        scan_mode: ScanMode,
        diagnostics: DiagnosticCollector | None,
    ) -> None:
        self._tokens = tokens
        self._pos = 0
        self._scan_mode = scan_mode
        self._diagnostics = diagnostics

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _at_end(self) -> bool:
        return self._pos >= len(self._tokens)

    def _current(self) -> Token | None:
        """Return the current token, or None past the end."""
        if self._at_end():
            return None
        return self._tokens[self._pos]

    def _check(self, token_type: TokenType, value: str | None = None) -> bool:
        """Return True if the current token has the given type (and value)."""
        tok = self._current()
        if tok is None or tok.type != token_type:
            return False
        return value is None or tok.value == value

    def _check_operator(self, *values: str) -> bool:
        tok = self._current()
        return tok is not None and tok.type == TokenType.OPERATOR and tok.value in values

    def _advance(self) -> Token:
        tok = self._tokens[self._pos]
        self._pos += 1
        return tok

    def _report(self, message: str, tok: Token | None) -> None:
        if self._diagnostics is None:
            return
        if tok is None:
            self._diagnostics.report(Diagnostic(_PHASE, message))
        else:
            self._diagnostics.report(Diagnostic(_PHASE, message, tok.line, tok.column))

    # ------------------------------------------------------------------
    # Program and functions
    # ------------------------------------------------------------------

    def parse_program(self) -> SyntaxNode:
        """Parse: program <Name> { function* }"""
        start = self._current()
        if not self._check(TokenType.KEYWORD, "program"):
            self._report("Expected 'program' keyword", start)
            return SyntaxNode(kind=NodeKind.PROGRAM)
        self._advance()

        if not self._check(TokenType.IDENTIFIER):
            self._report("Expected program name", self._current())
            return SyntaxNode(kind=NodeKind.PROGRAM, line=start.line, column=start.column)
        name = self._advance().value

        functions: list[SyntaxNode] = []
        if self._check_operator("{"):
            self._advance()
            while not self._at_end() and not self._check_operator("}"):
                if self._check(TokenType.KEYWORD, "function"):
                    function = self._parse_function()
                    if function is not None:
                        functions.append(function)
                else:
                    skipped = self._advance()
                    self._report(f"Skipped unexpected token {skipped.value!r} at program level", skipped)
            if self._check_operator("}"):
                self._advance()
        else:
            self._report("Expected '{' after program name", self._current())

        return SyntaxNode(
            kind=NodeKind.PROGRAM,
            value=name,
            children=functions,
            line=start.line,
            column=start.column,
        )

    def _parse_function(self) -> SyntaxNode | None:
        """Parse: function <name> <ignored tokens> { statement* }

        Returns None, having consumed only the keyword, when no name follows.
        """
        keyword = self._advance()
        if not self._check(TokenType.IDENTIFIER):
            self._report("Expected function name after 'function'", self._current())
            return None
        name = self._advance().value

        # Parameters and return type annotation are not structured.
        while not self._at_end() and not self._check_operator("{"):
            self._advance()

        statements: list[SyntaxNode] = []
        if not self._at_end():
            self._advance()  # {
            statements = self._parse_block_body()
            if not self._at_end():
                self._advance()  # }

        return SyntaxNode(
            kind=NodeKind.FUNCTION,
            value=name,
            children=statements,
            line=keyword.line,
            column=keyword.column,
        )

    def _parse_block_body(self) -> list[SyntaxNode]:
        """Parse statements up to, but not including, the next '}' or the end."""
        statements: list[SyntaxNode] = []
        while not self._at_end() and not self._check_operator("}"):
            statements.append(self._parse_statement())
        return statements

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _parse_statement(self) -> SyntaxNode:
        if self._scan_mode == ScanMode.NESTED:
            return self._parse_nested_statement()
        return self._parse_flat_statement()

    def _parse_flat_statement(self) -> SyntaxNode:
        """Collect tokens up to the next ';' or '}' regardless of nesting.

        A ';' terminator is consumed; a '}' is left for the caller.
        """
        collected: list[Token] = []
        while not self._at_end() and not self._check_operator(";", "}"):
            collected.append(self._advance())
        if self._check_operator(";"):
            self._advance()
        return self._statement_node(collected)

    def _parse_nested_statement(self) -> SyntaxNode:
        """Depth-aware variant of :meth:`_parse_flat_statement`.

        Terminators inside parentheses are part of the statement. A
        control-flow header followed by '{' owns the block as children.
        """
        collected: list[Token] = []
        paren_depth = 0
        while not self._at_end():
            tok = self._current()
            if tok.type == TokenType.OPERATOR and paren_depth == 0:
                if tok.value in (";", "}"):
                    break
                if tok.value == "{" and _classify(collected[0] if collected else None) in CONTROL_FLOW_KINDS:
                    return self._parse_control_flow(collected)
            if tok.type == TokenType.OPERATOR and tok.value == "(":
                paren_depth += 1
            elif tok.type == TokenType.OPERATOR and tok.value == ")":
                paren_depth = max(paren_depth - 1, 0)
            collected.append(self._advance())
        if self._check_operator(";"):
            self._advance()
        return self._statement_node(collected)

    def _parse_control_flow(self, header: list[Token]) -> SyntaxNode:
        """Parse the block following a control-flow header (nested mode only)."""
        children = self._parse_braced_block()
        kind = _classify(header[0])
        if kind == NodeKind.IF_STATEMENT and self._check(TokenType.KEYWORD, "else"):
            else_tok = self._advance()
            children.append(
                SyntaxNode(
                    kind=NodeKind.STATEMENT,
                    value="else",
                    line=else_tok.line,
                    column=else_tok.column,
                )
            )
            if self._check_operator("{"):
                children.extend(self._parse_braced_block())
            elif not self._at_end() and not self._check_operator("}"):
                children.append(self._parse_nested_statement())
        return self._statement_node(header, children)

    def _parse_braced_block(self) -> list[SyntaxNode]:
        self._advance()  # {
        children = self._parse_block_body()
        if self._check_operator("}"):
            self._advance()
        return children

    def _statement_node(self, collected: list[Token], children: list[SyntaxNode] | None = None) -> SyntaxNode:
        first = collected[0] if collected else None
        return SyntaxNode(
            kind=_classify(first),
            value=_join(collected),
            children=children or [],
            line=first.line if first is not None else None,
            column=first.column if first is not None else None,
        )
