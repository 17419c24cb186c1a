"""Default options for plotting formulas."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Tuple


@dataclass
class PlotOptions:
    """Geometry and look of a sampled plot.

    ``width`` x ``height`` cells are sampled, one point per cell, ``step``
    units apart, with ``center`` in the middle cell.
    """

    width: int = 79
    height: int = 23
    center: Tuple[float, float] = (0.0, 0.0)
    step: float = 1.0
    marker: str = "*"
    axes: bool = True


_PLOT_OPTIONS = PlotOptions()


def get_plot_options() -> PlotOptions:
    return copy.deepcopy(_PLOT_OPTIONS)


def set_plot_options(options: PlotOptions) -> None:
    global _PLOT_OPTIONS
    _PLOT_OPTIONS = copy.deepcopy(options)
