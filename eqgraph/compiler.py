"""Compile equation text into register programs.

Compilation rewrites the token list of a side in place: the innermost
parenthesised group is compiled first and replaced by a ``REG`` token, then
one reduction pass per operator kind runs to exhaustion, in the fixed order
``^``, ``*``, ``/``, ``%``, ``+``/``-``. Each reduction either folds two
literal constants into a new ``NUMBER`` token or emits an instruction and
splices in a ``REG`` token for its destination register.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from .errors import (
    CompileError,
    EvalError,
    FormulaSyntaxError,
    InvalidOperand,
    InvalidStackReference,
    NoOperandFound,
    TooFewArguments,
    TooManyArguments,
    UnbalancedParentheses,
    UnknownFunction,
)
from .evaluator import apply_binary
from .functions import lookup
from .ir import (
    Binary,
    BinaryOp,
    Call,
    Constant,
    Formula,
    Instruction,
    Operand,
    Operation,
    Register,
    Side,
    VariableX,
    VariableY,
)
from .lexer import Token, tokenize
from .logging_utils import debug_log_call

logger = logging.getLogger(__name__)

_SIDES_RE = re.compile(r'([^=]+)=([^=]+)')

_ATOMS = ('NUMBER', 'ID', 'REG')
_SIGNS = ('DASH', 'PLUS')

NAMED_CONSTANTS = {
    'PI': math.pi,
    'e': math.e,
}

PASSES: Tuple[Tuple[BinaryOp, Tuple[str, ...]], ...] = (
    (BinaryOp.POWER, ('CARET',)),
    (BinaryOp.MULTIPLY, ('STAR',)),
    (BinaryOp.DIVIDE, ('SLASH',)),
    (BinaryOp.MODULUS, ('PERCENT',)),
    (BinaryOp.ADD, ('PLUS', 'DASH')),
)


def _is_atom(tok: Token) -> bool:
    return tok[0] in _ATOMS


@dataclass
class _Match:
    start: int
    end: int
    left: Token
    left_signed: bool
    left_negative: bool
    op: Token
    right: Token
    right_negative: bool


def _find_leftmost(tokens: Sequence[Token], op_types: Tuple[str, ...]) -> Optional[_Match]:
    """Locate the leftmost ``[sign]atom OP [sign]atom`` run, a sign being ``-`` or ``+``."""
    n = len(tokens)
    for start in range(n):
        j = start
        left_signed = tokens[j][0] in _SIGNS
        left_negative = tokens[j][0] == 'DASH'
        if left_signed:
            j += 1
        if j >= n or not _is_atom(tokens[j]):
            continue
        left = tokens[j]
        j += 1
        if j >= n or tokens[j][0] not in op_types:
            continue
        op = tokens[j]
        j += 1
        right_negative = False
        if j < n and tokens[j][0] in _SIGNS:
            right_negative = tokens[j][0] == 'DASH'
            j += 1
        if j >= n or not _is_atom(tokens[j]):
            continue
        return _Match(start, j + 1, left, left_signed, left_negative, op, tokens[j], right_negative)
    return None


def _number_tokens(value: float, col: int) -> List[Token]:
    if value < 0:
        return [('DASH', '-', col), ('NUMBER', repr(-value), col)]
    return [('NUMBER', repr(value), col)]


class _SideCompiler:
    def __init__(self) -> None:
        self.instructions: List[Instruction] = []

    def emit(self, op: Operation) -> int:
        dest = len(self.instructions)
        self.instructions.append(Instruction(op, dest))
        return dest

    def operand(self, tok: Token, negative: bool) -> Operand:
        kind, value, col = tok
        positive = not negative
        if kind == 'NUMBER':
            try:
                return Constant(positive, float(value))
            except ValueError:
                raise InvalidOperand(col=col) from None
        if kind == 'REG':
            try:
                index = int(value)
            except ValueError:
                raise InvalidStackReference(col=col) from None
            if not 0 <= index < len(self.instructions):
                raise InvalidStackReference(col=col)
            return Register(positive, index)
        if kind == 'ID':
            if value == 'x':
                return VariableX(positive)
            if value == 'y':
                return VariableY(positive)
            if value in NAMED_CONSTANTS:
                return Constant(positive, NAMED_CONSTANTS[value])
            raise InvalidOperand(f'invalid operand {value!r}', col=col)
        raise InvalidOperand(f'unexpected token {value!r}', col=col)

    def compile(self, tokens: Sequence[Token], col: int) -> int:
        """Compile ``tokens`` and return the register holding their value."""
        tokens = list(tokens)
        self.resolve_groups(tokens)
        for op, op_types in PASSES:
            self.reduce(tokens, op, op_types)
        return self.finish(tokens, col)

    def resolve_groups(self, tokens: List[Token]) -> None:
        while True:
            close = next((i for i, t in enumerate(tokens) if t[0] == 'RPAREN'), None)
            if close is None:
                break
            opening = next((i for i in range(close - 1, -1, -1) if tokens[i][0] == 'LPAREN'), None)
            if opening is None:
                raise UnbalancedParentheses("unmatched ')'", col=tokens[close][2])
            inner = tokens[opening + 1:close]
            start = opening
            if opening > 0 and tokens[opening - 1][0] == 'ID':
                start = opening - 1
                reg = self.call(tokens[start], inner, tokens[opening][2])
            else:
                reg = self.compile(inner, tokens[opening][2])
            tokens[start:close + 1] = [('REG', str(reg), tokens[start][2])]
        for tok in tokens:
            if tok[0] == 'LPAREN':
                raise UnbalancedParentheses("unmatched '('", col=tok[2])

    def call(self, name_tok: Token, inner: Sequence[Token], col: int) -> int:
        name = name_tok[1]
        groups: List[List[Token]] = []
        if inner:
            groups.append([])
            for tok in inner:
                if tok[0] == 'COMMA':
                    groups.append([])
                else:
                    groups[-1].append(tok)
        args = tuple(self.compile(group, col) for group in groups)
        fn = lookup(name)
        if fn is None:
            raise UnknownFunction(name, col=name_tok[2])
        if len(args) < fn.arity:
            raise TooFewArguments(name, fn.arity, len(args), col=name_tok[2])
        if len(args) > fn.arity:
            raise TooManyArguments(name, fn.arity, len(args), col=name_tok[2])
        return self.emit(Call(name, args))

    def reduce(self, tokens: List[Token], op: BinaryOp, op_types: Tuple[str, ...]) -> None:
        while True:
            match = _find_leftmost(tokens, op_types)
            if match is None:
                return
            left = self.operand(match.left, match.left_negative)
            if op is BinaryOp.ADD:
                right_positive = (match.op[0] == 'DASH') == match.right_negative
            else:
                right_positive = not match.right_negative
            right = self.operand(match.right, not right_positive)
            col = tokens[match.start][2]

            replacement: List[Token] = []
            if match.left_signed and match.start > 0 and _is_atom(tokens[match.start - 1]):
                # The consumed sign was a binary operator.
                replacement.append(('PLUS', '+', col))

            folded = None
            if isinstance(left, Constant) and isinstance(right, Constant):
                right_value = right.magnitude if right.positive else -right.magnitude
                try:
                    folded = apply_binary(op, left.positive, left.magnitude, right_value)
                except EvalError:
                    # Leave it to the evaluator to report.
                    folded = None
            if folded is not None:
                replacement.extend(_number_tokens(folded, col))
            else:
                dest = self.emit(Binary(op, left, right))
                replacement.append(('REG', str(dest), col))
            tokens[match.start:match.end] = replacement

    def finish(self, tokens: Sequence[Token], col: int) -> int:
        if not any(_is_atom(tok) for tok in tokens):
            raise NoOperandFound(col=col)
        i = 1 if tokens[0][0] in _SIGNS else 0
        if not _is_atom(tokens[i]):
            raise InvalidOperand(f'unexpected token {tokens[i][1]!r}', col=tokens[i][2])
        if i + 1 < len(tokens):
            extra = tokens[i + 1]
            raise InvalidOperand(f'unexpected token {extra[1]!r}', col=extra[2])
        operand = self.operand(tokens[i], negative=tokens[0][0] == 'DASH')
        if isinstance(operand, Register) and operand.positive:
            return operand.index
        return self.emit(Binary(BinaryOp.ADD, operand, Constant(True, 0.0)))


def _augment_error(err: CompileError, text: str) -> None:
    message = str(err)
    if err.col is None or not text or '\n' in message or '\n' in text:
        return
    caret_line = ' ' * (max(err.col, 1) - 1) + '^'
    err.args = (f'{message}\n    {text.rstrip()}\n    {caret_line}',)


def _compile_side(text: str, col_offset: int = 0) -> Side:
    compiler = _SideCompiler()
    result = compiler.compile(tokenize(text, col_offset), col_offset + 1)
    if result != len(compiler.instructions) - 1:
        compiler.emit(Binary(BinaryOp.ADD, Register(True, result), Constant(True, 0.0)))
    logger.debug('Compiled %r into %d instruction(s)', text, len(compiler.instructions))
    return Side(tuple(compiler.instructions))


@debug_log_call(logger)
def compile_side(text: str) -> Side:
    """Compile one side of an equation (no ``=``) into a :class:`Side`."""
    try:
        return _compile_side(text)
    except CompileError as err:
        _augment_error(err, text)
        raise


@debug_log_call(logger)
def compile_formula(text: str, tag: Any = None) -> Formula:
    """Compile ``"[left] = [right]"`` into a :class:`Formula`.

    ``tag`` is stored unchanged, e.g. the colour a front end draws the curve
    with.
    """
    m = _SIDES_RE.fullmatch(text)
    if not m:
        raise FormulaSyntaxError()
    try:
        left = _compile_side(m.group(1), m.start(1))
        right = _compile_side(m.group(2), m.start(2))
    except CompileError as err:
        _augment_error(err, text)
        raise
    return Formula(raw=text, left=left, right=right, tag=tag)
