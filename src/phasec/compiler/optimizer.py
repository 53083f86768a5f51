# Copyright 2026 Phasec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Single-pass peephole optimizer over three-address instructions.

Rules, tried in order at each instruction not yet consumed:

1. ``ASSIGN -> x`` immediately followed by another ``ASSIGN -> x``: the first
   is dropped. The second is kept and examined at its own turn.
2. ``EVAL(e) -> t`` immediately followed by ``PRINT(t)``: both are replaced by
   a single ``PRINT_EXPR(e)``.

The pass runs once and is not repeated to a fixed point.
"""

from phasec.model.ir import ASSIGN, EVAL, PRINT, PRINT_EXPR, Instruction

# ###############
# Public Interface
# ###############


def optimize(instructions: list[Instruction]) -> list[Instruction]:
    """Return the peephole-reduced copy of *instructions*."""
    optimized: list[Instruction] = []
    consumed: set[int] = set()

    for i, current in enumerate(instructions):
        if i in consumed:
            continue
        following = instructions[i + 1] if i + 1 < len(instructions) else None

        if _is_overwritten_assignment(current, following):
            consumed.add(i)
        elif _is_printed_temporary(current, following):
            optimized.append(Instruction(operation=PRINT_EXPR, args=list(current.args)))
            consumed.add(i)
            consumed.add(i + 1)
        else:
            optimized.append(current)

    return optimized


# ################
# Implementation
# ################


def _is_overwritten_assignment(current: Instruction, following: Instruction | None) -> bool:
    return (
        following is not None
        and current.operation == ASSIGN
        and following.operation == ASSIGN
        and current.result == following.result
    )


def _is_printed_temporary(current: Instruction, following: Instruction | None) -> bool:
    return (
        following is not None
        and current.operation == EVAL
        and following.operation == PRINT
        and bool(following.args)
        and following.args[0] == current.result
    )
