"""
Lagrange interpolation in monomial form.

Example:
    >>> from numlab.interpolate import lagrange
    >>> res = lagrange([0.0, 1.0, 2.0], [1.0, 3.0, 7.0])
    >>> res.polynomial.to_string(decimals=1)
    '1.0 + x + x^2'
"""

from __future__ import annotations

from ..core import SolverError, Status, Trace
from ..logging import get_logger
from .core import LagrangeResult, check_distinct, validate_points
from .polynomial import Polynomial

logger = get_logger(__name__)


def _basis(x, i: int) -> Polynomial:
    """``L_i(x) = prod_{j != i} (x - x_j) / (x_i - x_j)``."""
    poly = Polynomial.constant(1.0)
    for j in range(x.size):
        if j != i:
            poly = poly * Polynomial.linear_factor(x[j]) * (1.0 / (x[i] - x[j]))
    return poly


def lagrange(xs, ys) -> LagrangeResult:
    """
    Build the interpolating polynomial through ``(xs[i], ys[i])``.

    Points are kept in the caller's order so ``basis[i]`` belongs to
    ``xs[i]``. Returns ``INVALID_INPUT`` for unequal lengths, fewer than two
    points or non-finite values and ``DUPLICATE_ABSCISSAS`` when two
    abscissas coincide.
    """
    try:
        x, y = validate_points(xs, ys)
        check_distinct(x)
    except ValueError as exc:
        return LagrangeResult(None, Status.INVALID_INPUT, str(exc))
    except SolverError as exc:
        return LagrangeResult(None, exc.status, exc.message, detail=dict(exc.detail))

    trace = Trace()
    basis: list[Polynomial] = []
    total = Polynomial.constant(0.0)
    for i in range(x.size):
        li = _basis(x, i)
        term = li * float(y[i])
        total = total + term
        basis.append(li)
        trace.record(i, basis=li, term=term, partial=total)

    logger.debug("lagrange: degree %d through %d points", total.degree, x.size)
    return LagrangeResult(
        polynomial=total,
        status=Status.OK,
        message="Interpolating polynomial built",
        basis=basis,
        xs=x,
        ys=y,
        trace=trace,
    )


__all__ = ["lagrange"]
