import dataclasses
import math

import pytest

from eqgraph import (
    Binary,
    BinaryOp,
    Call,
    Constant,
    FormulaSyntaxError,
    Instruction,
    InvalidOperand,
    InvalidStackReference,
    NoOperandFound,
    Register,
    TooFewArguments,
    TooManyArguments,
    UnbalancedParentheses,
    UnknownFunction,
    VariableX,
    VariableY,
    compile_formula,
    compile_side,
)
from eqgraph.compiler import _SideCompiler

ZERO = Constant(True, 0.0)


def ops(side):
    return [instruction.op for instruction in side]


def test_bare_variable_is_materialized_with_zero():
    side = compile_side('x')
    assert side.instructions == (Instruction(Binary(BinaryOp.ADD, VariableX(True), ZERO), 0),)


def test_constants_are_folded_into_a_single_instruction():
    side = compile_side('1+2*3')
    assert ops(side) == [Binary(BinaryOp.ADD, Constant(True, 7.0), ZERO)]


def test_named_constants_fold():
    side = compile_side('PI*2')
    assert ops(side) == [Binary(BinaryOp.ADD, Constant(True, math.pi * 2), ZERO)]
    side = compile_side('e')
    assert ops(side) == [Binary(BinaryOp.ADD, Constant(True, math.e), ZERO)]


def test_negative_fold_keeps_sign():
    assert ops(compile_side('-2^2')) == [Binary(BinaryOp.ADD, Constant(False, 4.0), ZERO)]
    assert ops(compile_side('1-5')) == [Binary(BinaryOp.ADD, Constant(False, 4.0), ZERO)]


def test_multiplication_pass_runs_before_division():
    side = compile_side('x/y*x')
    assert ops(side) == [
        Binary(BinaryOp.MULTIPLY, VariableY(True), VariableX(True)),
        Binary(BinaryOp.DIVIDE, VariableX(True), Register(True, 0)),
    ]


def test_binary_minus_becomes_negative_operand():
    side = compile_side('3-2*x')
    assert ops(side) == [
        Binary(BinaryOp.MULTIPLY, Constant(False, 2.0), VariableX(True)),
        Binary(BinaryOp.ADD, Constant(True, 3.0), Register(True, 0)),
    ]


def test_subtracting_a_negative():
    assert ops(compile_side('x - -y')) == [Binary(BinaryOp.ADD, VariableX(True), VariableY(True))]
    assert ops(compile_side('x - y')) == [Binary(BinaryOp.ADD, VariableX(True), VariableY(False))]


def test_leading_negation_is_an_operand_sign():
    assert ops(compile_side('-x')) == [Binary(BinaryOp.ADD, VariableX(False), ZERO)]


def test_negated_group_is_materialized():
    side = compile_side('-(x+1)')
    assert ops(side) == [
        Binary(BinaryOp.ADD, VariableX(True), Constant(True, 1.0)),
        Binary(BinaryOp.ADD, Register(False, 0), ZERO),
    ]


@pytest.mark.parametrize(
    'text, op',
    [
        ('2^-1', Binary(BinaryOp.POWER, Constant(True, 2.0), Constant(False, 1.0))),
        ('1/0', Binary(BinaryOp.DIVIDE, Constant(True, 1.0), Constant(True, 0.0))),
    ],
)
def test_failing_folds_are_left_to_the_evaluator(text, op):
    assert ops(compile_side(text)) == [op]


def test_function_call_uses_argument_registers():
    side = compile_side('max(x, 2)')
    assert ops(side) == [
        Binary(BinaryOp.ADD, VariableX(True), ZERO),
        Binary(BinaryOp.ADD, Constant(True, 2.0), ZERO),
        Call('max', (0, 1)),
    ]


def test_nested_group_inside_call():
    side = compile_side('max((x), y)')
    assert ops(side) == [
        Binary(BinaryOp.ADD, VariableX(True), ZERO),
        Binary(BinaryOp.ADD, VariableY(True), ZERO),
        Call('max', (0, 1)),
    ]


def test_registers_are_allocated_in_order():
    side = compile_side('x*y + x/y - max(x, sin(y)) % 3')
    assert [instruction.dest for instruction in side] == list(range(len(side)))
    assert side.result_register == len(side) - 1


def test_compilation_is_deterministic():
    text = 'sqrt(x^2 + y^2) - log(2, abs(x) + 1)'
    assert compile_side(text) == compile_side(text)


def test_unknown_function():
    with pytest.raises(UnknownFunction) as excinfo:
        compile_side('foo(1)')
    assert excinfo.value.name == 'foo'


def test_too_many_arguments():
    with pytest.raises(TooManyArguments) as excinfo:
        compile_side('sqrt(1,2)')
    assert (excinfo.value.expected, excinfo.value.got) == (1, 2)


@pytest.mark.parametrize('text', ['log(2)', 'abs()'])
def test_too_few_arguments(text):
    with pytest.raises(TooFewArguments):
        compile_side(text)


@pytest.mark.parametrize('text', ['', '   ', '()', '-', '+', 'max(1,)'])
def test_no_operand(text):
    with pytest.raises(NoOperandFound):
        compile_side(text)


@pytest.mark.parametrize('text', ['z + 1', '2 3', 'x +', '1,2', 'S0'])
def test_invalid_operand(text):
    with pytest.raises(InvalidOperand):
        compile_side(text)


@pytest.mark.parametrize('text', ['(x', 'x)', '((x)', 'max(x, y'])
def test_unbalanced_parentheses(text):
    with pytest.raises(UnbalancedParentheses):
        compile_side(text)


def test_error_message_points_at_column():
    with pytest.raises(InvalidOperand) as excinfo:
        compile_side('x + z')
    assert excinfo.value.col == 5
    lines = str(excinfo.value).splitlines()
    assert lines[0] == "[col 5] invalid operand 'z'"
    assert lines[1] == '    x + z'
    assert lines[2] == ' ' * 8 + '^'
    assert excinfo.value.message == "invalid operand 'z'"


def test_formula_keeps_raw_text_and_tag():
    formula = compile_formula('y = x*x', tag=3)
    assert formula.raw == 'y = x*x'
    assert formula.tag == 3
    assert formula.left == compile_side('y ')
    assert formula.right == compile_side(' x*x')
    assert formula.sides == (formula.left, formula.right)


def test_formula_is_immutable():
    formula = compile_formula('y = x')
    with pytest.raises(dataclasses.FrozenInstanceError):
        formula.raw = 'y = 2*x'


def test_formula_constant_side_is_single_instruction():
    formula = compile_formula('1+2*3=7')
    assert len(formula.left) == 1
    assert len(formula.right) == 1


@pytest.mark.parametrize('text', ['x', 'x==y', '=x', 'x=', 'x=y=z', ''])
def test_formula_syntax_error(text):
    with pytest.raises(FormulaSyntaxError):
        compile_formula(text)


def test_formula_right_side_errors_use_full_columns():
    with pytest.raises(UnknownFunction) as excinfo:
        compile_formula('y = foo(x)')
    assert excinfo.value.col == 5
    assert str(excinfo.value).splitlines()[-1] == ' ' * 8 + '^'


@pytest.mark.parametrize('text', ['+x', '(+x)', '+(x)'])
def test_leading_plus_is_a_positive_sign(text):
    assert compile_side(text) == compile_side('x')


def test_plus_signs_around_operators():
    assert ops(compile_side('+2')) == [Binary(BinaryOp.ADD, Constant(True, 2.0), ZERO)]
    assert ops(compile_side('2*+x')) == [Binary(BinaryOp.MULTIPLY, Constant(True, 2.0), VariableX(True))]
    assert ops(compile_side('x - +y')) == [Binary(BinaryOp.ADD, VariableX(True), VariableY(False))]


def test_binary_plus_before_a_product_is_kept():
    side = compile_side('x*2+3*4')
    assert ops(side) == [
        Binary(BinaryOp.MULTIPLY, VariableX(True), Constant(True, 2.0)),
        Binary(BinaryOp.ADD, Register(True, 0), Constant(True, 12.0)),
    ]


def test_formula_with_leading_plus_on_the_right():
    formula = compile_formula('y = +2')
    assert formula.right == compile_side('2')


@pytest.mark.parametrize('value', ['5', 'a'])
def test_invalid_register_token(value):
    with pytest.raises(InvalidStackReference):
        _SideCompiler().operand(('REG', value, 1), False)
