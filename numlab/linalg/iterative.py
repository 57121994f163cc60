"""
Jacobi and Gauss-Seidel iteration for ``A x = b``.

Both methods share one driver loop; only the sweep differs. Jacobi builds the
next iterate entirely from the previous one, Gauss-Seidel reuses components
already updated in the current sweep.

Convergence is declared when every component satisfies
``|x_i^(k+1) - x_i^(k)| / max(|x_i^(k+1)|, pivot_eps) <= tol``.
"""

from __future__ import annotations

from typing import Callable, Optional

import numpy as np

from ..config import DEFAULT_CONFIG
from ..core import Status, Trace, as_vector, augment, residual, split_augmented
from ..logging import get_logger
from .core import IterativeResult
from .utils import is_diagonally_dominant, zero_diagonal_rows

logger = get_logger(__name__)

Sweep = Callable[[np.ndarray, np.ndarray, np.ndarray], np.ndarray]


def jacobi_step(matrix: np.ndarray, rhs: np.ndarray, x: np.ndarray) -> np.ndarray:
    """One Jacobi sweep: ``x_i = (b_i - sum_{j != i} A_ij x_j) / A_ii``."""
    diag = np.diag(matrix)
    off = matrix @ x - diag * x
    return (rhs - off) / diag


def gauss_seidel_step(matrix: np.ndarray, rhs: np.ndarray, x: np.ndarray) -> np.ndarray:
    """One Gauss-Seidel sweep using the freshest available components."""
    x_new = x.copy()
    n = x_new.shape[0]
    for i in range(n):
        s = float(matrix[i, :i] @ x_new[:i]) + float(matrix[i, i + 1 :] @ x_new[i + 1 :])
        x_new[i] = (rhs[i] - s) / matrix[i, i]
    return x_new


def _component_errors(x_new: np.ndarray, x_old: np.ndarray, pivot_eps: float) -> np.ndarray:
    return np.abs(x_new - x_old) / np.maximum(np.abs(x_new), pivot_eps)


def _iterate(
    method: str,
    sweep: Sweep,
    matrix,
    rhs,
    x0,
    tol: float,
    maxiter: int,
    pivot_eps: float,
) -> IterativeResult:
    trace = Trace()
    try:
        a, b = split_augmented(augment(matrix, rhs))
        x = as_vector(x0, a.shape[0]) if x0 is not None else np.zeros(a.shape[0])
    except ValueError as exc:
        return IterativeResult(
            x=None, status=Status.INVALID_INPUT, message=str(exc), method=method, trace=trace
        )
    if tol <= 0 or maxiter < 1:
        return IterativeResult(
            x=None,
            status=Status.INVALID_INPUT,
            message="tol must be positive and maxiter at least 1.",
            method=method,
            trace=trace,
        )

    zero_rows = zero_diagonal_rows(a, pivot_eps)
    if zero_rows:
        return IterativeResult(
            x=None,
            status=Status.ZERO_DIAGONAL,
            message=f"Zero diagonal entry in row {zero_rows[0]}; reorder the equations.",
            method=method,
            detail={"rows": zero_rows},
            trace=trace,
        )

    dominant = is_diagonally_dominant(a)
    if not dominant:
        logger.warning(
            "%s: matrix is not diagonally dominant; convergence is not guaranteed.", method
        )

    max_error: Optional[float] = None
    for k in range(1, maxiter + 1):
        x_new = sweep(a, b, x)
        if not np.all(np.isfinite(x_new)):
            logger.warning("%s: iterate became non-finite at iteration %d.", method, k)
            return IterativeResult(
                x=x,
                status=Status.NOT_CONVERGED,
                message=f"Iteration diverged to non-finite values at step {k}.",
                method=method,
                nit=k,
                diagonally_dominant=dominant,
                max_error=max_error,
                trace=trace,
            )
        errors = _component_errors(x_new, x, pivot_eps)
        max_error = float(np.max(errors))
        trace.record(
            k,
            x=x_new,
            residual=residual(a, b, x_new),
            errors=errors,
            max_error=max_error,
        )
        x = x_new
        logger.debug("%s iteration %d: max error %.3e", method, k, max_error)
        if max_error <= tol:
            logger.info("%s converged in %d iterations.", method, k)
            return IterativeResult(
                x=x,
                status=Status.OK,
                message=f"Converged in {k} iterations",
                method=method,
                nit=k,
                diagonally_dominant=dominant,
                max_error=max_error,
                trace=trace,
            )

    logger.warning("%s did not converge in %d iterations.", method, maxiter)
    return IterativeResult(
        x=x,
        status=Status.NOT_CONVERGED,
        message=f"Did not converge in {maxiter} iterations (max error {max_error:.3e}).",
        method=method,
        nit=maxiter,
        diagonally_dominant=dominant,
        max_error=max_error,
        trace=trace,
    )


def jacobi(
    matrix,
    rhs,
    x0=None,
    tol: float = DEFAULT_CONFIG.tol,
    maxiter: int = DEFAULT_CONFIG.maxiter,
    pivot_eps: float = DEFAULT_CONFIG.pivot_eps,
) -> IterativeResult:
    """
    Solve ``A x = b`` by Jacobi iteration starting from ``x0`` (zeros by default).

    A zero diagonal entry yields ``ZERO_DIAGONAL`` before any iteration. A
    matrix that is not diagonally dominant is still iterated; a warning is
    logged and ``diagonally_dominant`` is False. When the budget runs out the
    last iterate is returned with ``NOT_CONVERGED``.
    """
    return _iterate("jacobi", jacobi_step, matrix, rhs, x0, tol, maxiter, pivot_eps)


def gauss_seidel(
    matrix,
    rhs,
    x0=None,
    tol: float = DEFAULT_CONFIG.tol,
    maxiter: int = DEFAULT_CONFIG.maxiter,
    pivot_eps: float = DEFAULT_CONFIG.pivot_eps,
) -> IterativeResult:
    """Gauss-Seidel counterpart of :func:`jacobi`, same contract."""
    return _iterate(
        "gauss-seidel", gauss_seidel_step, matrix, rhs, x0, tol, maxiter, pivot_eps
    )


__all__ = ["gauss_seidel", "gauss_seidel_step", "jacobi", "jacobi_step"]
