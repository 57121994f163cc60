"""Newton divided-difference interpolation."""

from __future__ import annotations

import numpy as np

from ..core import SolverError, Status, Trace
from ..logging import get_logger
from .core import NewtonResult, check_distinct, validate_points

logger = get_logger(__name__)


def divided_difference_table(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """
    Triangular table with ``table[i, j] = f[x_i, ..., x_{i+j}]``.

    Entries with ``i + j >= n`` are NaN. ``x`` must be pairwise distinct.
    """
    n = x.size
    table = np.full((n, n), np.nan)
    table[:, 0] = y
    for j in range(1, n):
        for i in range(n - j):
            table[i, j] = (table[i + 1, j - 1] - table[i, j - 1]) / (x[i + j] - x[i])
    return table


def newton_divided_differences(xs, ys) -> NewtonResult:
    """
    Newton-form interpolant through ``(xs[i], ys[i])``.

    The points are sorted by abscissa before the table is built; the
    coefficients are the first row ``f[x0], f[x0,x1], ...``. Each trace
    record holds one column (order ``j``) of the table.

    Example:
        >>> res = newton_divided_differences([2.0, 0.0, 1.0], [7.0, 1.0, 3.0])
        >>> res.coefficients.tolist()
        [1.0, 2.0, 1.0]
        >>> res(3.0)
        13.0
    """
    try:
        x, y = validate_points(xs, ys)
        check_distinct(x)
    except ValueError as exc:
        return NewtonResult(None, Status.INVALID_INPUT, str(exc))
    except SolverError as exc:
        return NewtonResult(None, exc.status, exc.message, detail=dict(exc.detail))

    order = np.argsort(x, kind="stable")
    x, y = x[order], y[order]
    table = divided_difference_table(x, y)

    trace = Trace()
    n = x.size
    for j in range(n):
        trace.record(j, order=j, differences=table[: n - j, j])

    coefficients = table[0].copy()
    logger.debug("newton: %d nodes, leading coefficient %.6g", n, coefficients[-1])
    return NewtonResult(
        coefficients=coefficients,
        status=Status.OK,
        message="Divided-difference table built",
        nodes=x,
        values=y,
        table=table,
        trace=trace,
    )


__all__ = ["divided_difference_table", "newton_divided_differences"]
