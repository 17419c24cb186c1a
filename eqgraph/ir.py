"""Compiled representation of a formula: operands, instructions and sides."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple, Union


@dataclass(frozen=True)
class Constant:
    positive: bool
    magnitude: float


@dataclass(frozen=True)
class Register:
    positive: bool
    index: int


@dataclass(frozen=True)
class VariableX:
    positive: bool = True


@dataclass(frozen=True)
class VariableY:
    positive: bool = True


Operand = Union[Constant, Register, VariableX, VariableY]


class BinaryOp(Enum):
    POWER = '^'
    MULTIPLY = '*'
    DIVIDE = '/'
    MODULUS = '%'
    ADD = '+'


@dataclass(frozen=True)
class Binary:
    op: BinaryOp
    left: Operand
    right: Operand


@dataclass(frozen=True)
class Call:
    function: str
    args: Tuple[int, ...]


Operation = Union[Binary, Call]


@dataclass(frozen=True)
class Instruction:
    op: Operation
    dest: int


@dataclass(frozen=True)
class Side:
    instructions: Tuple[Instruction, ...]

    def __post_init__(self) -> None:
        if not self.instructions:
            raise ValueError('a side needs at least one instruction')

    def __len__(self) -> int:
        return len(self.instructions)

    def __iter__(self):
        return iter(self.instructions)

    @property
    def result_register(self) -> int:
        """Index of the register holding the value of the side."""
        return self.instructions[-1].dest


@dataclass(frozen=True)
class Formula:
    raw: str
    left: Side
    right: Side
    tag: Any = None

    @property
    def sides(self) -> Tuple[Side, Side]:
        return self.left, self.right
