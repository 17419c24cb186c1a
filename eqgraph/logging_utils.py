from __future__ import annotations

import logging
import reprlib
from functools import wraps
from typing import Any, Callable, MutableMapping, Optional, Sequence, TypeVar, cast

import numpy as np

from .ir import Formula, Side

F = TypeVar("F", bound=Callable[..., Any])

_repr = reprlib.Repr()
_repr.maxother = 160
_repr.maxstring = 120
_repr.maxlist = 10
_repr.maxtuple = 10


def _safe_repr(value: Any, *, max_length: int = 400) -> str:
    if isinstance(value, np.ndarray):
        return f"ndarray(shape={tuple(value.shape)}, dtype={value.dtype})"
    if isinstance(value, Side):
        return f"Side({len(value.instructions)} instruction(s))"
    if isinstance(value, Formula):
        return (
            f"Formula(raw={_repr.repr(value.raw)}, tag={_repr.repr(value.tag)}, "
            f"left={_safe_repr(value.left)}, right={_safe_repr(value.right)})"
        )
    try:
        rendered = _repr.repr(value)
    except Exception as exc:  # pragma: no cover - defensive
        rendered = f"<repr-error {exc!r}>"
    if len(rendered) > max_length:
        return rendered[:max_length] + "... (truncated)"
    return rendered


def _format_arguments(args: Sequence[Any], kwargs: MutableMapping[str, Any]) -> str:
    parts = []
    if args:
        parts.append("args=[" + ", ".join(_safe_repr(arg) for arg in args) + "]")
    if kwargs:
        parts.append(
            "kwargs={"
            + ", ".join(f"{key}={_safe_repr(value)}" for key, value in kwargs.items())
            + "}"
        )
    if not parts:
        return "no-args"
    return ", ".join(parts)


def debug_log_call(
    logger: logging.Logger, *, name: Optional[str] = None, log_result: bool = True
) -> Callable[[F], F]:
    """Return a decorator that traces calls, results and exceptions at DEBUG level."""

    def decorator(func: F) -> F:
        if getattr(func, "_debug_logging_wrapped", False):
            return func

        qualname = name or getattr(func, "__qualname__", getattr(func, "__name__", "<callable>"))

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Entering %s (%s)", qualname, _format_arguments(args, kwargs))
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug("Exception in %s: %s", qualname, exc)
                raise
            if logger.isEnabledFor(logging.DEBUG):
                if log_result:
                    logger.debug("Exiting %s -> %s", qualname, _safe_repr(result))
                else:
                    logger.debug("Exiting %s", qualname)
            return result

        setattr(wrapper, "_debug_logging_wrapped", True)
        return cast(F, wrapper)

    return decorator
