import math

from .ir import Binary, Call, Constant, Formula, Instruction, Operand, Register, Side, VariableX, VariableY


def _format_number(value: float) -> str:
    if math.isfinite(value) and value == int(value) and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def format_operand(operand: Operand) -> str:
    sign = '' if operand.positive else '-'
    if isinstance(operand, Constant):
        return sign + _format_number(operand.magnitude)
    if isinstance(operand, Register):
        return f'{sign}r{operand.index}'
    if isinstance(operand, VariableX):
        return f'{sign}x'
    if isinstance(operand, VariableY):
        return f'{sign}y'
    raise ValueError(f'invalid operand {operand!r}')


def format_instruction(instruction: Instruction) -> str:
    op = instruction.op
    if isinstance(op, Call):
        args = ', '.join(f'r{i}' for i in op.args)
        return f'r{instruction.dest} = {op.function}({args})'
    if isinstance(op, Binary):
        left = format_operand(op.left)
        right = format_operand(op.right)
        return f'r{instruction.dest} = {left} {op.op.value} {right}'
    raise ValueError(f'invalid operation {op!r}')


def format_side(side: Side) -> str:
    return ''.join(format_instruction(instruction) + '\n' for instruction in side)


def format_formula(formula: Formula) -> str:
    lines = [f'formula: {formula.raw}', 'left:']
    lines.extend('  ' + format_instruction(instruction) for instruction in formula.left)
    lines.append('right:')
    lines.extend('  ' + format_instruction(instruction) for instruction in formula.right)
    return '\n'.join(lines) + '\n'
