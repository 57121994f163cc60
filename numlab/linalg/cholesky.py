"""Cholesky factorization ``A = L L^T`` for symmetric positive-definite matrices."""

from __future__ import annotations

import math

import numpy as np

from ..config import DEFAULT_CONFIG
from ..core import (
    SolverError,
    Status,
    Trace,
    as_augmented,
    as_matrix,
    norm_inf,
    residual,
    split_augmented,
)
from ..logging import get_logger
from .core import CholeskyResult, LinearSystemResult
from .utils import forward_substitution, is_symmetric

logger = get_logger(__name__)


def _factor(matrix: np.ndarray, pivot_eps: float, trace: Trace) -> np.ndarray:
    n = matrix.shape[0]
    lower = np.zeros((n, n), dtype=float)
    for i in range(n):
        for j in range(i + 1):
            s = float(lower[i, :j] @ lower[j, :j])
            if i == j:
                d = matrix[i, i] - s
                if d <= pivot_eps:
                    raise SolverError(
                        Status.NOT_POSITIVE_DEFINITE,
                        f"Matrix is not positive definite: pivot {d:.3e} at row {i}.",
                        row=i,
                        pivot=float(d),
                    )
                lower[i, i] = math.sqrt(d)
            else:
                lower[i, j] = (matrix[i, j] - s) / lower[j, j]
        trace.record(i, row=i, diagonal=lower[i, i], L=lower)
    return lower


def cholesky_decomposition(
    matrix,
    symmetry_tol: float = DEFAULT_CONFIG.symmetry_tol,
    pivot_eps: float = DEFAULT_CONFIG.pivot_eps,
) -> CholeskyResult:
    """
    Factor a symmetric positive-definite matrix.

    Fails with ``NOT_SYMMETRIC`` if any ``|A_ij - A_ji| > symmetry_tol`` and
    with ``NOT_POSITIVE_DEFINITE`` if a diagonal pivot
    ``A_ii - sum_k L_ik^2`` does not exceed ``pivot_eps``. Never returns a
    factor for a matrix that does not qualify.
    """
    trace = Trace()
    try:
        a = as_matrix(matrix, square=True)
    except ValueError as exc:
        return CholeskyResult(None, Status.INVALID_INPUT, str(exc), trace=trace)

    symmetric, where = is_symmetric(a, symmetry_tol)
    if not symmetric:
        i, j = where
        return CholeskyResult(
            None,
            Status.NOT_SYMMETRIC,
            f"Matrix is not symmetric: A[{i}][{j}]={a[i, j]:.6g} but A[{j}][{i}]={a[j, i]:.6g}.",
            detail={"row": i, "column": j},
            trace=trace,
        )
    try:
        lower = _factor(a, pivot_eps, trace)
    except SolverError as exc:
        logger.info("Cholesky factorization stopped: %s", exc.message)
        return CholeskyResult(None, exc.status, exc.message, detail=exc.detail, trace=trace)
    return CholeskyResult(lower, Status.OK, "Factorization complete", trace=trace)


def _back_substitution_transposed(lower: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Solve ``L^T x = y`` reading ``L`` with swapped indices."""
    n = y.shape[0]
    x = np.zeros(n, dtype=float)
    for i in range(n - 1, -1, -1):
        s = float(lower[i + 1 : n, i] @ x[i + 1 : n])
        x[i] = (y[i] - s) / lower[i, i]
    return x


def cholesky_solve(
    augmented,
    symmetry_tol: float = DEFAULT_CONFIG.symmetry_tol,
    pivot_eps: float = DEFAULT_CONFIG.pivot_eps,
) -> LinearSystemResult:
    """Solve ``A x = b`` with ``L y = b`` then ``L^T x = y``."""
    try:
        aug = as_augmented(augmented)
    except ValueError as exc:
        return LinearSystemResult(
            x=None, status=Status.INVALID_INPUT, message=str(exc), method="cholesky"
        )
    a, b = split_augmented(aug)
    factor = cholesky_decomposition(a, symmetry_tol=symmetry_tol, pivot_eps=pivot_eps)
    if not factor.success:
        return LinearSystemResult(
            x=None,
            status=factor.status,
            message=factor.message,
            method="cholesky",
            detail=factor.detail,
            trace=factor.trace,
        )
    y = forward_substitution(factor.L, b)
    x = _back_substitution_transposed(factor.L, y)
    return LinearSystemResult(
        x=x,
        status=Status.OK,
        message="Unique solution found",
        method="cholesky",
        residual_norm=norm_inf(residual(a, b, x)),
        L=factor.L,
        y=y,
        trace=factor.trace,
    )


__all__ = ["cholesky_decomposition", "cholesky_solve"]
