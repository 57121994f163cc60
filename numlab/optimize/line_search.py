"""Armijo backtracking for descent and ascent directions."""

from __future__ import annotations

import numpy as np

from .core import Array, Objective


def backtracking_armijo(
    f: Objective,
    x: Array,
    p: Array,
    grad_fx: Array,
    alpha0: float = 1.0,
    rho: float = 0.5,
    c: float = 1e-4,
    max_iter: int = 50,
    maximize: bool = False,
    min_alpha: float = 1e-12,
) -> tuple[float, int]:
    """
    Classic Armijo backtracking line search.

    Shrinks ``alpha <- rho * alpha`` until
    ``f(x + alpha p) <= f(x) + c alpha grad_fx . p``, or the reversed
    inequality when ``maximize`` is set. At most ``max_iter`` trial points are
    evaluated and ``alpha`` is never shrunk below ``min_alpha``; the last
    trial step is returned either way, with the number of trial evaluations.
    """
    if not (0 < c < 1):
        raise ValueError("Armijo constant c must lie in (0, 1)")
    if not (0 < rho < 1):
        raise ValueError("rho must lie in (0, 1)")
    if alpha0 <= 0:
        raise ValueError("alpha0 must be positive")
    if max_iter < 1:
        raise ValueError("max_iter must be at least 1")
    alpha = float(alpha0)
    fx = f(x)
    grad_dot = float(np.dot(grad_fx, p))
    nfev = 0
    for _ in range(max_iter):
        f_new = f(x + alpha * p)
        nfev += 1
        bound = fx + c * alpha * grad_dot
        if (f_new >= bound) if maximize else (f_new <= bound):
            return alpha, nfev
        if alpha * rho < min_alpha:
            break
        alpha *= rho
    return alpha, nfev


__all__ = ["backtracking_armijo"]
