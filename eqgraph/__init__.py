from .compiler import compile_formula, compile_side
from .evaluator import evaluate, evaluate_formula, is_on_curve
from .errors import (
    CompileError,
    DivideByZero,
    EvalError,
    FormulaError,
    FormulaSyntaxError,
    InvalidExponent,
    InvalidOperand,
    InvalidStackReference,
    NoOperandFound,
    TooFewArguments,
    TooManyArguments,
    UnbalancedParentheses,
    UnknownFunction,
)
from .ir import (
    Binary,
    BinaryOp,
    Call,
    Constant,
    Formula,
    Instruction,
    Register,
    Side,
    VariableX,
    VariableY,
)
from .functions import FUNCTIONS
from .printer import format_formula, format_side
from .config import PlotOptions, get_plot_options, set_plot_options
from .plot import Viewport, formula_at, render, sample_grid

__all__ = [
    'compile_formula',
    'compile_side',
    'evaluate',
    'evaluate_formula',
    'is_on_curve',
    'FormulaError',
    'CompileError',
    'EvalError',
    'FormulaSyntaxError',
    'NoOperandFound',
    'UnknownFunction',
    'TooFewArguments',
    'TooManyArguments',
    'InvalidStackReference',
    'InvalidOperand',
    'UnbalancedParentheses',
    'DivideByZero',
    'InvalidExponent',
    'Binary',
    'BinaryOp',
    'Call',
    'Constant',
    'Formula',
    'Instruction',
    'Register',
    'Side',
    'VariableX',
    'VariableY',
    'FUNCTIONS',
    'format_formula',
    'format_side',
    'PlotOptions',
    'get_plot_options',
    'set_plot_options',
    'Viewport',
    'formula_at',
    'render',
    'sample_grid',
]
