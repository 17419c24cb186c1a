"""Sample formulas over a rectangular grid of points and draw them as text."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from .config import PlotOptions, get_plot_options
from .evaluator import is_on_curve
from .ir import Formula

logger = logging.getLogger(__name__)

NO_FORMULA = -1


@dataclass(frozen=True)
class Viewport:
    width: int
    height: int
    center: Tuple[float, float] = (0.0, 0.0)
    step: float = 1.0

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"viewport must be non-empty, got {self.width}x{self.height}")
        if self.step <= 0:
            raise ValueError(f"step must be positive, got {self.step}")

    @classmethod
    def from_options(cls, options: PlotOptions) -> "Viewport":
        return cls(options.width, options.height, tuple(options.center), options.step)

    def to_point(self, col: int, row: int) -> Tuple[float, float]:
        """Coordinates of the cell in column ``col`` and row ``row`` (row 0 is the top)."""
        x = (col - self.width // 2) * self.step + self.center[0]
        y = (self.height // 2 - row) * self.step + self.center[1]
        return float(x), float(y)


def formula_at(formulae: Sequence[Formula], x: float, y: float) -> Optional[int]:
    """Index of the topmost formula passing through ``(x, y)``; later formulas win."""
    for idx in range(len(formulae) - 1, -1, -1):
        if is_on_curve(formulae[idx], x, y):
            return idx
    return None


def sample_grid(formulae: Sequence[Formula], options: Optional[PlotOptions] = None) -> np.ndarray:
    """Return a ``(height, width)`` array of formula indices, ``-1`` for empty cells."""
    viewport = Viewport.from_options(options or get_plot_options())
    grid = np.full((viewport.height, viewport.width), NO_FORMULA, dtype=np.int64)
    for row in range(viewport.height):
        for col in range(viewport.width):
            idx = formula_at(formulae, *viewport.to_point(col, row))
            if idx is not None:
                grid[row, col] = idx
    logger.debug(
        "Sampled %dx%d grid for %d formula(s), %d hit(s)",
        viewport.width,
        viewport.height,
        len(formulae),
        int(np.count_nonzero(grid != NO_FORMULA)),
    )
    return grid


def _background(x: float, y: float) -> str:
    if x == 0 and y == 0:
        return "+"
    if y == 0:
        return "-"
    if x == 0:
        return "|"
    if x % 5 == 0 and y % 5 == 0:
        return "."
    return " "


def _marker(formula: Formula, default: str) -> str:
    tag = formula.tag
    if isinstance(tag, str) and len(tag) == 1 and not tag.isspace():
        return tag
    return default


def render(formulae: Sequence[Formula], options: Optional[PlotOptions] = None) -> str:
    """Draw the formulas as text, one character per sampled point.

    A formula whose tag is a single printable character is drawn with it,
    the others with ``options.marker``.
    """
    options = options or get_plot_options()
    viewport = Viewport.from_options(options)
    grid = sample_grid(formulae, options)
    lines = []
    for row in range(viewport.height):
        chars = []
        for col in range(viewport.width):
            idx = int(grid[row, col])
            if idx != NO_FORMULA:
                chars.append(_marker(formulae[idx], options.marker))
            elif options.axes:
                chars.append(_background(*viewport.to_point(col, row)))
            else:
                chars.append(" ")
        lines.append("".join(chars).rstrip())
    return "\n".join(lines) + "\n"
