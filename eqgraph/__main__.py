import argparse
import logging
from typing import Optional, Sequence, Tuple

from eqgraph import (
    CompileError,
    EvalError,
    compile_formula,
    evaluate,
    format_formula,
    get_plot_options,
    is_on_curve,
    render,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _parse_pair(value: str) -> Tuple[float, float]:
    parts = [part.strip() for part in value.split(",")]
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"expected X,Y but got {value!r}")
    try:
        return float(parts[0]), float(parts[1])
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid coordinates {value!r}") from exc


def _positive(kind):
    def parse(value: str):
        try:
            number = kind(value)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(f"invalid value {value!r}") from exc
        if number <= 0:
            raise argparse.ArgumentTypeError(f"must be positive, got {value!r}")
        return number

    return parse


def _format_value(side: str, formula, x: float, y: float) -> str:
    try:
        return repr(evaluate(getattr(formula, side), x, y))
    except EvalError as exc:
        return f"error ({exc})"


def main(argv: Optional[Sequence[str]] = None) -> None:
    defaults = get_plot_options()
    parser = argparse.ArgumentParser(description="Compile and evaluate [left] = [right] formulas")
    parser.add_argument("formula", nargs="+", help="Formula such as 'y = x*x'")
    parser.add_argument(
        "--at",
        action="append",
        type=_parse_pair,
        default=[],
        metavar="X,Y",
        help="Evaluate both sides at this point (repeatable)",
    )
    parser.add_argument("--dump", action="store_true", help="Print the compiled programs")
    parser.add_argument("--plot", action="store_true", help="Draw the formulas as text")
    parser.add_argument(
        "--width",
        type=_positive(int),
        default=defaults.width,
        help=f"Plot width in cells (default: {defaults.width})",
    )
    parser.add_argument(
        "--height",
        type=_positive(int),
        default=defaults.height,
        help=f"Plot height in cells (default: {defaults.height})",
    )
    parser.add_argument(
        "--center",
        type=_parse_pair,
        default=defaults.center,
        metavar="X,Y",
        help="Point shown in the middle of the plot (default: 0,0)",
    )
    parser.add_argument(
        "--step",
        type=_positive(float),
        default=defaults.step,
        help=f"Distance between sampled points (default: {defaults.step})",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    markers = defaults.marker + "#@%&o+x"
    formulae = []
    for idx, text in enumerate(args.formula):
        try:
            formula = compile_formula(text, tag=markers[idx % len(markers)])
        except CompileError as exc:
            logger.error("Cannot compile %r: %s", text, exc)
            raise SystemExit(1)
        logger.info("Compiled %r", text)
        formulae.append(formula)

    for formula in formulae:
        if args.dump:
            print(format_formula(formula), end="")
        for x, y in args.at:
            left = _format_value("left", formula, x, y)
            right = _format_value("right", formula, x, y)
            verdict = "on curve" if is_on_curve(formula, x, y) else "off curve"
            print(f"{formula.raw} at ({x:g}, {y:g}): left={left} right={right} {verdict}")

    if args.plot:
        options = get_plot_options()
        options.width = args.width
        options.height = args.height
        options.center = args.center
        options.step = args.step
        print(render(formulae, options), end="")


if __name__ == "__main__":
    main()
