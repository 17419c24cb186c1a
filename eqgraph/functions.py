"""Built-in functions callable from formulas."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence

import numpy as np


@dataclass(frozen=True)
class Function:
    name: str
    arity: int
    impl: Callable[..., np.float64]


def _log(base, value):
    return np.log(value) / np.log(base)


def _root(degree, value):
    return np.power(value, np.float64(1.0) / degree)


def _round(value):
    # Half away from zero, unlike numpy's banker's rounding.
    truncated = np.trunc(value)
    if np.abs(value - truncated) >= 0.5:
        return truncated + np.copysign(1.0, value)
    return truncated


_FUNCTIONS = [
    Function('abs', 1, np.abs),
    Function('max', 2, np.fmax),
    Function('min', 2, np.fmin),
    Function('ln', 1, np.log),
    Function('log2', 1, np.log2),
    Function('log10', 1, np.log10),
    Function('log', 2, _log),
    Function('root', 2, _root),
    Function('sqrt', 1, np.sqrt),
    Function('cbrt', 1, np.cbrt),
    Function('sin', 1, np.sin),
    Function('cos', 1, np.cos),
    Function('tan', 1, np.tan),
    Function('asin', 1, np.arcsin),
    Function('acos', 1, np.arccos),
    Function('atan', 1, np.arctan),
    Function('sinh', 1, np.sinh),
    Function('cosh', 1, np.cosh),
    Function('tanh', 1, np.tanh),
    Function('asinh', 1, np.arcsinh),
    Function('acosh', 1, np.arccosh),
    Function('atanh', 1, np.arctanh),
    Function('ceil', 1, np.ceil),
    Function('floor', 1, np.floor),
    Function('round', 1, _round),
]

FUNCTIONS: Dict[str, Function] = {fn.name: fn for fn in _FUNCTIONS}


def lookup(name: str) -> Optional[Function]:
    return FUNCTIONS.get(name)


def call(name: str, args: Sequence[float]) -> float:
    """Apply the catalog function ``name`` with IEEE semantics.

    Domain errors produce ``nan`` or ``inf`` instead of raising, the same way
    the arithmetic operations behave.
    """
    fn = FUNCTIONS[name]
    with np.errstate(all='ignore'):
        return float(fn.impl(*(np.float64(arg) for arg in args)))
