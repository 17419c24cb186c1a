"""Exceptions raised while compiling or evaluating formulas."""

from __future__ import annotations

from typing import Optional

SYNTAX_ERROR = "Formulae must conform this syntax: [Left] = [Right]"
NEGATIVE_EXPONENT = "Numbers can't be powered by negative values."
DIVIDED_BY_ZERO = "Numbers can't be divided by 0."
NO_OPERAND_FOUND = "No operand found."
INVALID_STACK = "Invalid stack id."
INVALID_OPERAND = "Invalid operand!"


class FormulaError(Exception):
    """Base class for every error reported by eqgraph.

    ``col`` is the 1-based column in the source text the error refers to,
    when one is known.
    """

    def __init__(self, message: str, *, col: Optional[int] = None):
        self.message = message
        self.col = col
        super().__init__(f'[col {col}] {message}' if col is not None else message)


class CompileError(FormulaError):
    pass


class FormulaSyntaxError(CompileError):
    def __init__(self, message: str = SYNTAX_ERROR, *, col: Optional[int] = None):
        super().__init__(message, col=col)


class NoOperandFound(CompileError):
    def __init__(self, message: str = NO_OPERAND_FOUND, *, col: Optional[int] = None):
        super().__init__(message, col=col)


class UnknownFunction(CompileError):
    def __init__(self, name: str, *, col: Optional[int] = None):
        self.name = name
        super().__init__(f'unknown function {name!r}', col=col)


class _ArityError(CompileError):
    def __init__(self, name: str, expected: int, got: int, *, col: Optional[int] = None):
        self.name = name
        self.expected = expected
        self.got = got
        noun = 'argument' if expected == 1 else 'arguments'
        super().__init__(f'{name}() takes {expected} {noun}, got {got}', col=col)


class TooFewArguments(_ArityError):
    pass


class TooManyArguments(_ArityError):
    pass


class InvalidStackReference(CompileError):
    def __init__(self, message: str = INVALID_STACK, *, col: Optional[int] = None):
        super().__init__(message, col=col)


class InvalidOperand(CompileError):
    def __init__(self, message: str = INVALID_OPERAND, *, col: Optional[int] = None):
        super().__init__(message, col=col)


class UnbalancedParentheses(CompileError):
    pass


class EvalError(FormulaError):
    pass


class DivideByZero(EvalError):
    def __init__(self, message: str = DIVIDED_BY_ZERO):
        super().__init__(message)


class InvalidExponent(EvalError):
    def __init__(self, message: str = NEGATIVE_EXPONENT):
        super().__init__(message)
