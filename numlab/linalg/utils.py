"""
Triangular substitutions and matrix property checks shared by the solvers.

Numeric policy: every structural check compares an *absolute* magnitude with
``pivot_eps``. This is simple and predictable for the small, well-scaled
systems used in teaching, but it can misclassify badly scaled systems (a
matrix scaled by 1e-13 looks singular). Rescale such inputs first.
"""

from __future__ import annotations

import numpy as np

from ..core import PIVOT_EPS


def forward_substitution(
    lower: np.ndarray, rhs: np.ndarray, unit_diagonal: bool = False
) -> np.ndarray:
    """Solve ``L y = b`` for lower-triangular ``L``."""
    n = rhs.shape[0]
    y = np.zeros(n, dtype=float)
    for i in range(n):
        s = float(lower[i, :i] @ y[:i])
        y[i] = rhs[i] - s if unit_diagonal else (rhs[i] - s) / lower[i, i]
    return y


def back_substitution(upper: np.ndarray, rhs: np.ndarray) -> np.ndarray:
    """Solve ``U x = y`` for upper-triangular ``U``: ``x_i = (y_i - sum_{j>i} U_ij x_j) / U_ii``."""
    n = rhs.shape[0]
    x = np.zeros(n, dtype=float)
    for i in range(n - 1, -1, -1):
        s = float(upper[i, i + 1 : n] @ x[i + 1 : n])
        x[i] = (rhs[i] - s) / upper[i, i]
    return x


def partial_pivot_row(work: np.ndarray, col: int, start: int | None = None) -> int:
    """Row index in ``[start, n)`` with the largest ``|work[i, col]|`` (first on ties).

    ``start`` defaults to ``col``; Gauss-Jordan passes a lagging row when a
    column had no usable pivot.
    """
    start = col if start is None else start
    return start + int(np.argmax(np.abs(work[start:, col])))


def swap_rows(mat: np.ndarray, i: int, j: int) -> None:
    if i != j:
        mat[[i, j]] = mat[[j, i]]


def zero_diagonal_rows(matrix: np.ndarray, pivot_eps: float = PIVOT_EPS) -> list[int]:
    """Indices of diagonal entries with magnitude ``<= pivot_eps``."""
    diag = np.abs(np.diag(matrix))
    return [int(i) for i in np.flatnonzero(diag <= pivot_eps)]


def is_diagonally_dominant(matrix: np.ndarray) -> bool:
    """
    Diagonal dominance as required for guaranteed Jacobi/Gauss-Seidel convergence.

    Every row must satisfy ``|A_ii| >= sum_{j != i} |A_ij|`` and at least one
    row must satisfy it strictly.
    """
    a = np.asarray(matrix, dtype=float)
    diag = np.abs(np.diag(a))
    off = np.sum(np.abs(a), axis=1) - diag
    slack = 1e-14
    if np.any(diag < off - slack):
        return False
    return bool(np.any(diag > off + slack))


def is_symmetric(matrix: np.ndarray, tol: float) -> tuple[bool, tuple[int, int] | None]:
    """Check ``|A_ij - A_ji| <= tol`` for all ``i < j``; return the first offending pair."""
    n = matrix.shape[0]
    for i in range(n):
        for j in range(i + 1, n):
            if abs(matrix[i, j] - matrix[j, i]) > tol:
                return False, (i, j)
    return True, None


__all__ = [
    "back_substitution",
    "forward_substitution",
    "is_diagonally_dominant",
    "is_symmetric",
    "partial_pivot_row",
    "swap_rows",
    "zero_diagonal_rows",
]
