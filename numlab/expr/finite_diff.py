"""Central finite differences used when no derivative is supplied.

Callables passed to the Newton-family and gradient methods may come without
an analytic derivative; these helpers approximate it deterministically.
"""

from __future__ import annotations

from typing import Callable

import numpy as np

Array = np.ndarray


def approx_derivative(
    fun: Callable[[float], float], x: float, order: int = 1, eps: float | None = None
) -> float:
    """Central-difference approximation of the first or second derivative.

    Parameters
    ----------
    fun:
        Scalar function of one variable.
    x:
        Point where the derivative is approximated.
    order:
        1 or 2.
    eps:
        Perturbation size; defaults to 1e-6 for ``order=1`` and 1e-4 for
        ``order=2``.
    """
    if order not in (1, 2):
        raise ValueError("order must be 1 or 2")
    if eps is None:
        eps = 1e-6 if order == 1 else 1e-4
    if eps <= 0:
        raise ValueError("eps must be positive")
    x = float(x)
    f_plus = fun(x + eps)
    f_minus = fun(x - eps)
    if order == 1:
        return (f_plus - f_minus) / (2.0 * eps)
    return (f_plus - 2.0 * fun(x) + f_minus) / (eps**2)


def approx_grad(fun: Callable[[Array], float], x: Array, eps: float = 1e-6) -> Array:
    """Central-difference gradient of a function of a vector."""
    if eps <= 0:
        raise ValueError("eps must be positive")
    x = np.asarray(x, dtype=float).copy()
    grad = np.zeros_like(x, dtype=float)
    for i in range(x.size):
        ei = np.zeros_like(x)
        ei[i] = eps
        grad[i] = (fun(x + ei) - fun(x - ei)) / (2.0 * eps)
    return grad


__all__ = ["approx_derivative", "approx_grad"]
