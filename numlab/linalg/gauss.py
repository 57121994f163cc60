"""
Gaussian elimination and Gauss-Jordan reduction with partial pivoting.

Both operate on a private copy of the augmented matrix ``[A | b]``. At every
column the candidate with the largest magnitude is swapped into the pivot
position; ties keep the first (lowest) row.

Example:
    >>> from numlab.linalg import gauss_elimination
    >>> res = gauss_elimination([[2.0, 1.0, 3.0], [1.0, 3.0, 5.0]])
    >>> res.x
    array([0.8, 1.4])
"""

from __future__ import annotations

import numpy as np

from ..config import DEFAULT_CONFIG
from ..core import SolverError, Status, Trace, as_augmented, norm_inf, residual, split_augmented
from ..logging import get_logger
from .core import LinearSystemResult
from .utils import back_substitution, partial_pivot_row, swap_rows

logger = get_logger(__name__)


def _forward_eliminate(aug: np.ndarray, pivot_eps: float, trace: Trace) -> None:
    """Reduce ``aug`` in place to upper-triangular form."""
    n = aug.shape[0]
    for k in range(n):
        p = partial_pivot_row(aug, k)
        pivot = float(aug[p, k])
        if abs(pivot) < pivot_eps:
            raise SolverError(
                Status.SINGULAR,
                f"Matrix is singular: largest pivot candidate in column {k} is {pivot:.3e}.",
                column=k,
            )
        swap_rows(aug, k, p)
        factors = np.zeros(n, dtype=float)
        for i in range(k + 1, n):
            factor = aug[i, k] / aug[k, k]
            aug[i, k:] -= factor * aug[k, k:]
            aug[i, k] = 0.0
            factors[i] = factor
        trace.record(
            k,
            column=k,
            pivot_row=p,
            pivot=pivot,
            swapped=p != k,
            factors=factors,
            matrix=aug,
        )


def gauss_elimination(
    augmented, pivot_eps: float = DEFAULT_CONFIG.pivot_eps
) -> LinearSystemResult:
    """
    Solve ``A x = b`` by Gaussian elimination with partial pivoting.

    Parameters
    ----------
    augmented:
        Array-like of shape ``(n, n+1)``.
    pivot_eps:
        A pivot with magnitude below this value makes the system ``SINGULAR``.
    """
    trace = Trace()
    try:
        aug = as_augmented(augmented)
    except ValueError as exc:
        return LinearSystemResult(
            x=None, status=Status.INVALID_INPUT, message=str(exc), method="gauss", trace=trace
        )
    a0, b0 = split_augmented(aug)

    try:
        _forward_eliminate(aug, pivot_eps, trace)
    except SolverError as exc:
        logger.info("Gauss elimination stopped: %s", exc.message)
        return LinearSystemResult(
            x=None,
            status=exc.status,
            message=exc.message,
            method="gauss",
            reduced=aug,
            detail=exc.detail,
            trace=trace,
        )

    x = back_substitution(aug[:, :-1], aug[:, -1])
    res_norm = norm_inf(residual(a0, b0, x))
    logger.debug("Gauss elimination solved %d unknowns, residual %.3e", x.size, res_norm)
    return LinearSystemResult(
        x=x,
        status=Status.OK,
        message="Unique solution found",
        method="gauss",
        residual_norm=res_norm,
        reduced=aug,
        trace=trace,
    )


def _reduce_rref(aug: np.ndarray, pivot_eps: float, trace: Trace) -> list[int]:
    """Bring ``aug`` to reduced row-echelon form in place; return pivot columns."""
    n = aug.shape[0]
    pivot_cols: list[int] = []
    row = 0
    for col in range(n):
        if row >= n:
            break
        p = partial_pivot_row(aug, col, start=row)
        pivot = float(aug[p, col])
        if abs(pivot) < pivot_eps:
            trace.record(col, column=col, pivot_row=None, pivot=pivot, skipped=True, matrix=aug)
            continue
        swap_rows(aug, row, p)
        aug[row] /= aug[row, col]
        for i in range(n):
            if i != row and aug[i, col] != 0.0:
                aug[i] -= aug[i, col] * aug[row]
                aug[i, col] = 0.0
        trace.record(col, column=col, pivot_row=p, pivot=pivot, skipped=False, matrix=aug)
        pivot_cols.append(col)
        row += 1
    return pivot_cols


def gauss_jordan(
    augmented, pivot_eps: float = DEFAULT_CONFIG.pivot_eps
) -> LinearSystemResult:
    """
    Reduce ``[A | b]`` to RREF and classify the system.

    A row ``[0 ... 0 | c]`` with ``|c| > pivot_eps`` means ``INCONSISTENT``;
    otherwise a rank below ``n`` means ``INFINITE_SOLUTIONS``; otherwise the
    unique solution is the last column.
    """
    trace = Trace()
    try:
        aug = as_augmented(augmented)
    except ValueError as exc:
        return LinearSystemResult(
            x=None,
            status=Status.INVALID_INPUT,
            message=str(exc),
            method="gauss-jordan",
            trace=trace,
        )
    a0, b0 = split_augmented(aug)
    n = aug.shape[0]

    pivot_cols = _reduce_rref(aug, pivot_eps, trace)
    rank = len(pivot_cols)

    coeffs = aug[:, :-1]
    for i in range(n):
        if np.all(np.abs(coeffs[i]) <= pivot_eps) and abs(aug[i, -1]) > pivot_eps:
            return LinearSystemResult(
                x=None,
                status=Status.INCONSISTENT,
                message=f"System is inconsistent: row {i} reads 0 = {aug[i, -1]:.6g}.",
                method="gauss-jordan",
                reduced=aug,
                rank=rank,
                detail={"row": i},
                trace=trace,
            )
    if rank < n:
        free = [c for c in range(n) if c not in pivot_cols]
        return LinearSystemResult(
            x=None,
            status=Status.INFINITE_SOLUTIONS,
            message=f"System has infinitely many solutions (rank {rank} < {n}).",
            method="gauss-jordan",
            reduced=aug,
            rank=rank,
            detail={"free_columns": free},
            trace=trace,
        )

    x = aug[:, -1].copy()
    res_norm = norm_inf(residual(a0, b0, x))
    return LinearSystemResult(
        x=x,
        status=Status.OK,
        message="Unique solution found",
        method="gauss-jordan",
        residual_norm=res_norm,
        reduced=aug,
        rank=rank,
        trace=trace,
    )


__all__ = ["gauss_elimination", "gauss_jordan"]
