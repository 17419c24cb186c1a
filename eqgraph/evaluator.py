"""Register machine executing compiled sides."""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from . import functions
from .errors import DivideByZero, EvalError, InvalidExponent
from .ir import BinaryOp, Call, Constant, Formula, Operand, Register, Side, VariableX, VariableY


def apply_binary(op: BinaryOp, left_positive: bool, left_magnitude: float, right: float) -> float:
    """Apply one arithmetic operation.

    The left operand is passed as sign flag plus magnitude because ``POWER``
    raises the magnitude and re-applies the sign afterwards; every other
    operation works on the signed value.
    """
    left = left_magnitude if left_positive else -left_magnitude
    if op is BinaryOp.ADD:
        return left + right
    if op is BinaryOp.MULTIPLY:
        return left * right
    if op is BinaryOp.DIVIDE:
        if right == 0.0:
            raise DivideByZero()
        return left / right
    if op is BinaryOp.MODULUS:
        with np.errstate(all='ignore'):
            return float(np.fmod(np.float64(left), np.float64(right)))
    if op is BinaryOp.POWER:
        if right < 0.0:
            raise InvalidExponent()
        with np.errstate(all='ignore'):
            result = float(np.power(np.float64(left_magnitude), np.float64(right)))
        return result if left_positive else -result
    raise ValueError(f'unsupported operation {op!r}')


def _magnitude(operand: Operand, registers: Sequence[float], x: float, y: float) -> Tuple[bool, float]:
    if isinstance(operand, Constant):
        return operand.positive, operand.magnitude
    if isinstance(operand, Register):
        return operand.positive, registers[operand.index]
    if isinstance(operand, VariableX):
        return operand.positive, x
    if isinstance(operand, VariableY):
        return operand.positive, y
    raise ValueError(f'invalid operand {operand!r}')


def _signed(operand: Operand, registers: Sequence[float], x: float, y: float) -> float:
    positive, magnitude = _magnitude(operand, registers, x, y)
    return magnitude if positive else -magnitude


def evaluate(side: Side, x: float, y: float) -> float:
    """Run ``side`` for the point ``(x, y)`` and return the last register."""
    x = float(x)
    y = float(y)
    registers: List[float] = []
    for instruction in side.instructions:
        op = instruction.op
        if isinstance(op, Call):
            value = functions.call(op.function, [registers[i] for i in op.args])
        else:
            left_positive, left_magnitude = _magnitude(op.left, registers, x, y)
            right = _signed(op.right, registers, x, y)
            value = apply_binary(op.op, left_positive, left_magnitude, right)
        registers.append(value)
    return registers[-1]


def evaluate_formula(formula: Formula, x: float, y: float) -> Tuple[float, float]:
    return evaluate(formula.left, x, y), evaluate(formula.right, x, y)


def is_on_curve(formula: Formula, x: float, y: float) -> bool:
    """Whether both sides evaluate at ``(x, y)`` and yield equal values.

    Comparison is exact; rounding to a sampling unit is up to the caller.
    """
    try:
        left, right = evaluate_formula(formula, x, y)
    except EvalError:
        return False
    return left == right
