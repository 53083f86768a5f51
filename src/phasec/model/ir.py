# Copyright 2026 Phasec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Three-address instructions and emitted target sections."""

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############

# Operation tags produced by the IR generator and the optimizer.
FUNC_BEGIN = "FUNC_BEGIN"
FUNC_END = "FUNC_END"
DECLARE = "DECLARE"
ASSIGN = "ASSIGN"
EVAL = "EVAL"
PRINT = "PRINT"
PRINT_STR = "PRINT_STR"
PRINT_EXPR = "PRINT_EXPR"
RETURN = "RETURN"


class Instruction(BaseModel):
    """A three-address instruction: operation, operand list, named result.

    ``result`` is the empty string for instructions that produce no value.
    """

    model_config = ConfigDict(frozen=True)

    operation: str
    args: list[str] = _Field(default_factory=list)
    result: str = ""

    def __str__(self) -> str:
        text = f"{self.operation}({', '.join(self.args)})"
        if self.result:
            text += f" -> {self.result}"
        return text


class TargetSection(BaseModel):
    """One named section of emitted assembly text."""

    model_config = ConfigDict(frozen=True)

    section: Literal["data", "text"]
    lines: list[str] = _Field(default_factory=list)
