"""
LU factorization (Doolittle) with partial pivoting.

Row exchanges are tracked in an index vector ``perm`` rather than an explicit
permutation matrix, so ``P A = L U`` with ``P = I[perm]`` and the permuted
right-hand side is simply ``b[perm]``.
"""

from __future__ import annotations

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
from .core import LinearSystemResult, LUResult
from .utils import back_substitution, forward_substitution, partial_pivot_row, swap_rows

logger = get_logger(__name__)


def _doolittle(
    matrix: np.ndarray, pivot_eps: float, trace: Trace
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    n = matrix.shape[0]
    work = matrix.copy()
    lower = np.zeros((n, n), dtype=float)
    upper = np.zeros((n, n), dtype=float)
    perm = np.arange(n)

    for k in range(n):
        p = partial_pivot_row(work, k)
        pivot = float(work[p, k])
        if abs(pivot) < pivot_eps:
            raise SolverError(
                Status.SINGULAR,
                f"Matrix is singular: largest pivot candidate in column {k} is {pivot:.3e}.",
                column=k,
            )
        if p != k:
            swap_rows(work, k, p)
            perm[[k, p]] = perm[[p, k]]
            # Multipliers already computed travel with their rows.
            lower[[k, p], :k] = lower[[p, k], :k]

        lower[k, k] = 1.0
        upper[k, k:] = work[k, k:]
        for i in range(k + 1, n):
            lower[i, k] = work[i, k] / upper[k, k]
            work[i, k:] -= lower[i, k] * upper[k, k:]
        trace.record(
            k,
            column=k,
            pivot_row=p,
            pivot=pivot,
            perm=perm,
            L=lower,
            U=upper,
        )
    return lower, upper, perm


def lu_decomposition(
    matrix, pivot_eps: float = DEFAULT_CONFIG.pivot_eps
) -> LUResult:
    """
    Factor a square matrix as ``P A = L U``.

    Returns ``SINGULAR`` (with the failing column in ``detail``) when no pivot
    of magnitude at least ``pivot_eps`` exists in some column.
    """
    trace = Trace()
    try:
        a = as_matrix(matrix, square=True)
    except ValueError as exc:
        return LUResult(None, None, None, Status.INVALID_INPUT, str(exc), trace=trace)
    try:
        lower, upper, perm = _doolittle(a, pivot_eps, trace)
    except SolverError as exc:
        logger.info("LU factorization stopped: %s", exc.message)
        return LUResult(None, None, None, exc.status, exc.message, detail=exc.detail, trace=trace)
    return LUResult(lower, upper, perm, Status.OK, "Factorization complete", trace=trace)


def lu_solve(augmented, pivot_eps: float = DEFAULT_CONFIG.pivot_eps) -> LinearSystemResult:
    """
    Solve ``A x = b`` via ``P A = L U``: forward substitution on ``L y = b[perm]``
    then back substitution on ``U x = y``.
    """
    try:
        aug = as_augmented(augmented)
    except ValueError as exc:
        return LinearSystemResult(
            x=None, status=Status.INVALID_INPUT, message=str(exc), method="lu"
        )
    a, b = split_augmented(aug)
    factor = lu_decomposition(a, pivot_eps=pivot_eps)
    if not factor.success:
        return LinearSystemResult(
            x=None,
            status=factor.status,
            message=factor.message,
            method="lu",
            detail=factor.detail,
            trace=factor.trace,
        )

    y = forward_substitution(factor.L, b[factor.perm], unit_diagonal=True)
    x = back_substitution(factor.U, y)
    return LinearSystemResult(
        x=x,
        status=Status.OK,
        message="Unique solution found",
        method="lu",
        residual_norm=norm_inf(residual(a, b, x)),
        L=factor.L,
        U=factor.U,
        perm=factor.perm,
        y=y,
        trace=factor.trace,
    )


__all__ = ["lu_decomposition", "lu_solve"]
