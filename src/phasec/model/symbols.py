# Copyright 2026 Phasec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Symbol table entries recorded by semantic analysis."""

from pydantic import BaseModel, ConfigDict

# ###############
# Public Interface
# ###############

FUNCTION_KIND = "function"
UNKNOWN_KIND = "unknown"


class SymbolEntry(BaseModel):
    """Declaration metadata for one ``name@scope`` key.

    ``kind`` is ``"function"`` for functions and the annotated type name
    (or ``"unknown"``) for variables.
    """

    model_config = ConfigDict(frozen=True)

    kind: str
    scope: str
    line: int


# Flat mapping from ``name@scope`` to the entry declared first under that key.
SymbolTable = dict[str, SymbolEntry]


def symbol_key(name: str, scope: str) -> str:
    """Return the symbol table key for *name* declared in *scope*."""
    return f"{name}@{scope}"
