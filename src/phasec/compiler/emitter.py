# Copyright 2026 Phasec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Target code emission: x86-64 style assembly text in two sections.

Storage is not allocated per variable. Every variable and temporary is
loaded from and stored to the same frame slot, ``-8(%rbp)``, so the output
is only meaningful for functions with a single live value. Expressions are
not evaluated; printing one uses a placeholder value.
"""

from __future__ import annotations

import re

from phasec.model.ir import (
    ASSIGN,
    DECLARE,
    FUNC_BEGIN,
    FUNC_END,
    PRINT,
    PRINT_EXPR,
    PRINT_STR,
    RETURN,
    Instruction,
    TargetSection,
)

# ###############
# Public Interface
# ###############

FRAME_SLOT = "-8(%rbp)"


def emit(instructions: list[Instruction]) -> list[TargetSection]:
    """Translate instructions into a ``data`` and a ``text`` section.

    Every translated instruction is preceded by a comment line. Unknown
    operations become a single comment and are never an error.

    Args:
        instructions: Raw or optimized intermediate instructions.

    Returns:
        ``[data_section, text_section]``.
    """
    emitter = TargetEmitter()
    for instruction in instructions:
        emitter.emit_instruction(instruction)
    return emitter.sections()


def render_assembly(sections: list[TargetSection]) -> str:
    """Join emitted sections into a single assembly listing."""
    blocks = ["\n".join(section.lines) for section in sections]
    return "\n".join(blocks) + "\n"


class TargetEmitter:
    """Accumulates section lines and owns the string-label counter."""

    def __init__(self) -> None:
        self.current_function = ""
        self._string_counter = 0
        self._data: list[str] = [
            "# Data section",
            'format_int: .asciiz "%d\\n"',
            'format_str: .asciiz "%s\\n"',
            "",
        ]
        self._text: list[str] = [
            "# Text section",
            ".globl main",
        ]

    def sections(self) -> list[TargetSection]:
        return [
            TargetSection(section="data", lines=list(self._data)),
            TargetSection(section="text", lines=list(self._text)),
        ]

    def new_string_label(self, literal: str) -> str:
        """Declare *literal* in the data section and return its label."""
        label = f"str_{self._string_counter}"
        self._string_counter += 1
        self._data.append(f"{label}: .asciiz {literal}")
        return label

    def emit_instruction(self, instruction: Instruction) -> None:
        handler = _HANDLERS.get(instruction.operation)
        if handler is None:
            self._text.append(f"    # Unsupported operation: {instruction.operation}")
            return
        handler(self, instruction)

    # ------------------------------------------------------------------
    # Operation handlers
    # ------------------------------------------------------------------

    def _func_begin(self, instruction: Instruction) -> None:
        self.current_function = instruction.args[0]
        self._text.extend(
            [
                "",
                f"{self.current_function}:",
                "    # Function prologue",
                "    pushq %rbp",
                "    movq %rsp, %rbp",
            ]
        )

    def _func_end(self, instruction: Instruction) -> None:
        self._text.extend(
            [
                "    # Function epilogue",
                "    movq %rbp, %rsp",
                "    popq %rbp",
                "    ret",
            ]
        )

    def _declare(self, instruction: Instruction) -> None:
        name = instruction.args[0]
        self._text.append(f"    # Declare {name}")
        self._text.append(f"    subq $8, %rsp    # Allocate space for {name}")

    def _assign(self, instruction: Instruction) -> None:
        source = instruction.args[0]
        self._text.append(f"    # {instruction.result} = {source}")
        if _INTEGER.match(source):
            self._text.append(f"    movq ${source}, %rax")
        elif source.startswith('"'):
            label = self.new_string_label(source)
            self._text.append(f"    leaq {label}(%rip), %rax")
        else:
            self._text.append(f"    # Load {source}")
            self._text.append(f"    movq {FRAME_SLOT}, %rax    # Simplified: assumes {source} is at {FRAME_SLOT}")
        self._text.append(f"    movq %rax, {FRAME_SLOT}    # Simplified: assumes {instruction.result} is at {FRAME_SLOT}")

    def _print_str(self, instruction: Instruction) -> None:
        literal = instruction.args[0]
        label = self.new_string_label(literal)
        self._text.append(f'    # Print string "{literal}"')
        self._text.append(f"    leaq {label}(%rip), %rsi")
        self._call_printf("format_str")

    def _print(self, instruction: Instruction) -> None:
        value = instruction.args[0]
        self._text.append(f"    # Print {value}")
        self._text.append(f"    movq {FRAME_SLOT}, %rsi    # Simplified: assumes {value} is at {FRAME_SLOT}")
        self._call_printf("format_int")

    def _print_expr(self, instruction: Instruction) -> None:
        self._text.append(f"    # Print expression {instruction.args[0]}")
        self._text.append("    # (Evaluate expression, simplified implementation)")
        self._text.append("    movq $1, %rsi    # Simplified: dummy value for expression result")
        self._call_printf("format_int")

    def _return(self, instruction: Instruction) -> None:
        if instruction.args:
            value = instruction.args[0]
            self._text.append(f"    # Return {value}")
            self._text.append(f"    movq {FRAME_SLOT}, %rax    # Simplified: assumes {value} is at {FRAME_SLOT}")
        else:
            self._text.append("    # Return void")
            self._text.append("    xorq %rax, %rax")

    def _call_printf(self, format_label: str) -> None:
        self._text.extend(
            [
                f"    leaq {format_label}(%rip), %rdi",
                "    xorq %rax, %rax",
                "    call printf",
            ]
        )


# ################
# Implementation
# ################

_INTEGER = re.compile(r"[0-9]+\Z")

_HANDLERS = {
    FUNC_BEGIN: TargetEmitter._func_begin,
    FUNC_END: TargetEmitter._func_end,
    DECLARE: TargetEmitter._declare,
    ASSIGN: TargetEmitter._assign,
    PRINT_STR: TargetEmitter._print_str,
    PRINT: TargetEmitter._print,
    PRINT_EXPR: TargetEmitter._print_expr,
    RETURN: TargetEmitter._return,
}
