# Copyright 2026 Phasec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for phasec source text.

Source is scanned one line at a time. At each column the patterns below are
tried in priority order, anchored at the current position, and the first
match wins. Whitespace is consumed without producing a token. A character
that matches nothing becomes a one-character ERROR token.
"""

import enum
import re
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the phasec lexer."""

    COMMENT = "COMMENT"
    KEYWORD = "KEYWORD"
    IDENTIFIER = "IDENTIFIER"
    NUMBER = "NUMBER"
    STRING = "STRING"
    OPERATOR = "OPERATOR"
    ERROR = "ERROR"


@dataclass(frozen=True)
class Token:
    """A lexical token with its source location.

    Attributes:
        type: The kind of token.
        value: The literal source text of the token (quotes included for strings).
        line: 1-based line number where the token starts.
        column: 0-based column number where the token starts.
    """

    type: TokenType
    value: str
    line: int
    column: int


KEYWORDS: tuple[str, ...] = (
    "program",
    "function",
    "return",
    "var",
    "if",
    "else",
    "for",
    "while",
    "print",
)

OPERATOR_CHARS = "+-*/=<>!&|(){}[];:,"


def tokenize(source: str) -> list[Token]:
    """Tokenize source text into a sequence of tokens in source order.

    Line comments are emitted as COMMENT tokens; the parser filters them.
    Tokens never span lines and there is no terminal EOF token.

    Args:
        source: The full program text.

    Returns:
        A list of Token objects.
    """
    tokens: list[Token] = []
    for line_index, line in enumerate(source.split("\n")):
        tokens.extend(_scan_line(line, line_index + 1))
    return tokens


# ################
# Implementation
# ################

# Keywords match as whole words only, using ASCII word boundaries.
_PATTERNS: list[tuple[re.Pattern[str], TokenType | None]] = [
    (re.compile(r"//.*"), TokenType.COMMENT),
    *[(re.compile(rf"{kw}\b", re.ASCII), TokenType.KEYWORD) for kw in KEYWORDS],
    (re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*"), TokenType.IDENTIFIER),
    (re.compile(r"[0-9]+"), TokenType.NUMBER),
    (re.compile(r'"[^"]*"'), TokenType.STRING),
    (re.compile(r"'[^']*'"), TokenType.STRING),
    (re.compile("[" + re.escape(OPERATOR_CHARS) + "]"), TokenType.OPERATOR),
    # Whitespace is recognised but never emitted.
    (re.compile(r"\s+"), None),
]


def _scan_line(line: str, line_number: int) -> list[Token]:
    """Scan a single line; columns restart at 0."""
    tokens: list[Token] = []
    column = 0
    while column < len(line):
        for pattern, token_type in _PATTERNS:
            match = pattern.match(line, column)
            if match is None:
                continue
            value = match.group(0)
            if token_type is not None:
                tokens.append(Token(token_type, value, line_number, column))
            column += len(value)
            break
        else:
            tokens.append(Token(TokenType.ERROR, line[column], line_number, column))
            column += 1
    return tokens
