"""Numeric helpers shared by every solver family.

All helpers return fresh float64 arrays; caller-owned data is never mutated.
Validation failures raise ``ValueError`` which public solvers translate into
``Status.INVALID_INPUT`` results.
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np

# Structural epsilon for pivots, diagonals and singularity checks.
PIVOT_EPS = 1e-12
MACHINE_EPS = float(np.finfo(float).eps)


def as_matrix(data: Any, *, square: bool = False) -> np.ndarray:
    """Copy ``data`` into a finite 2D float64 array.

    Raises:
        ValueError: If rows are ragged, the array is not 2D, is empty, contains
            NaN/Inf, or is not square when ``square`` is requested.
    """
    try:
        arr = np.array(data, dtype=float)
    except (TypeError, ValueError) as exc:
        raise ValueError("Matrix rows must be numeric and of equal length.") from exc
    if arr.ndim != 2 or arr.size == 0:
        raise ValueError(f"Expected a non-empty 2D matrix, got shape {arr.shape}.")
    if not np.all(np.isfinite(arr)):
        raise ValueError("Matrix contains NaN or infinite values.")
    if square and arr.shape[0] != arr.shape[1]:
        raise ValueError(f"Expected a square matrix, got shape {arr.shape}.")
    return arr


def as_augmented(data: Any) -> np.ndarray:
    """Copy an augmented system ``[A | b]`` of shape (n, n+1)."""
    arr = as_matrix(data)
    n, m = arr.shape
    if m != n + 1:
        raise ValueError(f"Augmented matrix must have shape (n, n+1), got {arr.shape}.")
    return arr


def as_vector(data: Any, n: int | None = None) -> np.ndarray:
    """Copy ``data`` into a finite 1D float64 array of optional length ``n``."""
    try:
        arr = np.array(data, dtype=float)
    except (TypeError, ValueError) as exc:
        raise ValueError("Vector entries must be numeric.") from exc
    if arr.ndim == 0:
        arr = arr.reshape(1)
    if arr.ndim != 1:
        raise ValueError(f"Expected a 1D vector, got shape {arr.shape}.")
    if not np.all(np.isfinite(arr)):
        raise ValueError("Vector contains NaN or infinite values.")
    if n is not None and arr.shape[0] != n:
        raise ValueError(f"Expected a vector of length {n}, got {arr.shape[0]}.")
    return arr


def split_augmented(augmented: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Return copies of the coefficient block and right-hand side."""
    return augmented[:, :-1].copy(), augmented[:, -1].copy()


def augment(matrix: Any, rhs: Any) -> np.ndarray:
    """Build ``[A | b]`` from a square matrix and a matching vector."""
    a = as_matrix(matrix, square=True)
    b = as_vector(rhs, a.shape[0])
    return np.column_stack([a, b])


def norm_inf(vec: np.ndarray) -> float:
    """Infinity norm; 0.0 for an empty vector."""
    vec = np.asarray(vec, dtype=float)
    if vec.size == 0:
        return 0.0
    return float(np.max(np.abs(vec)))


def residual(matrix: np.ndarray, rhs: np.ndarray, x: np.ndarray) -> np.ndarray:
    """Per-component residual ``A x - b``."""
    a = np.asarray(matrix, dtype=float)
    return a @ np.asarray(x, dtype=float) - np.asarray(rhs, dtype=float)


def relative_error_pct(new: float, old: float | None) -> float:
    """Relative percentage error ``|new - old| / |new| * 100``.

    Returns ``inf`` when there is no previous iterate. When ``new`` is exactly
    zero the absolute difference (times 100) is used instead.
    """
    if old is None:
        return math.inf
    diff = abs(new - old)
    if new == 0.0:
        return diff * 100.0
    return diff / abs(new) * 100.0


def is_finite(*values: float) -> bool:
    """True when every value is a finite float."""
    return all(math.isfinite(v) for v in values)


__all__ = [
    "MACHINE_EPS",
    "PIVOT_EPS",
    "as_augmented",
    "as_matrix",
    "as_vector",
    "augment",
    "is_finite",
    "norm_inf",
    "relative_error_pct",
    "residual",
    "split_augmented",
]
