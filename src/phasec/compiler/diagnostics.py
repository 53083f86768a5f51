# Copyright 2026 Phasec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Optional sink for the recoveries that phases otherwise perform silently.

The parser skips unexpected tokens and the IR generator drops statements
whose text does not match the expected shape. Neither is an error, but a
caller that supplies a :class:`DiagnosticCollector` can observe them.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class Diagnostic:
    """A silently recovered condition observed by a compiler phase.

    Attributes:
        phase: Name of the reporting phase (``"parser"`` or ``"intermediate"``).
        message: Human-readable description.
        line: 1-based source line, when known.
        column: 0-based source column, when known.
    """

    phase: str
    message: str
    line: int | None = None
    column: int | None = None


@dataclass
class DiagnosticCollector:
    """Accumulates diagnostics in the order they are reported."""

    diagnostics: list[Diagnostic] = field(default_factory=list)

    def report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def for_phase(self, phase: str) -> list[Diagnostic]:
        """Return the diagnostics reported by *phase*."""
        return [d for d in self.diagnostics if d.phase == phase]

    def __len__(self) -> int:
        return len(self.diagnostics)
