"""Straight-line least-squares fit from the normal-equation sums."""

from __future__ import annotations

import numpy as np

from ..core import MACHINE_EPS, Status, Trace
from ..logging import get_logger
from .core import LinearFit, validate_points

logger = get_logger(__name__)


def least_squares_line(xs, ys) -> LinearFit:
    """
    Fit ``y = b0 + b1 x`` by ordinary least squares.

    ``b1 = (n Sxy - Sx Sy) / (n Sxx - Sx^2)`` and ``b0 = (Sy - b1 Sx) / n``.
    Both sums are evaluated about the means, ``n Sxx - Sx^2 = n sum (x - x_bar)^2``,
    so all abscissas equal gives ``DEGENERATE_ABSCISSAS`` instead of a slope
    built from rounding residue.

    Example:
        >>> fit = least_squares_line([0, 1, 2, 3], [1, 3, 5, 7])
        >>> fit.intercept, fit.slope
        (1.0, 2.0)
    """
    try:
        x, y = validate_points(xs, ys)
    except ValueError as exc:
        return LinearFit(None, None, Status.INVALID_INPUT, str(exc))

    n = float(x.size)
    sums = {
        "n": n,
        "sum_x": float(np.sum(x)),
        "sum_y": float(np.sum(y)),
        "sum_xy": float(np.sum(x * y)),
        "sum_xx": float(np.sum(x * x)),
    }
    trace = Trace()
    trace.record(0, **sums)

    x_bar, y_bar = sums["sum_x"] / n, sums["sum_y"] / n
    dx = x - x_bar
    denom = n * float(np.sum(dx * dx))
    if np.ptp(x) == 0.0 or denom <= MACHINE_EPS * n * sums["sum_xx"]:
        return LinearFit(
            None,
            None,
            Status.DEGENERATE_ABSCISSAS,
            "All abscissas are equal; the slope is undefined.",
            sums=sums,
            detail={"denominator": denom},
            trace=trace,
        )

    slope = n * float(np.sum(dx * (y - y_bar))) / denom
    intercept = y_bar - slope * x_bar
    trace.record(1, denominator=denom, slope=slope, intercept=intercept)
    logger.debug("least squares: y = %.6g + %.6g x", intercept, slope)
    return LinearFit(
        intercept=intercept,
        slope=slope,
        status=Status.OK,
        message="Least-squares line computed",
        sums=sums,
        trace=trace,
    )


__all__ = ["least_squares_line"]
