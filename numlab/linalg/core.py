"""
Result containers for dense direct and iterative linear solvers.

Systems are given as augmented matrices ``[A | b]`` of shape ``(n, n+1)``.
Factorizations return their factors alongside the status so callers can
inspect or reuse them; on failure the factor fields are ``None`` and
``detail`` names the row/column where the algorithm stopped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

import numpy as np

from ..core import ResultMixin, Status, Trace


@dataclass
class LinearSystemResult(ResultMixin):
    """
    Solution of ``A x = b`` by a direct method.

    Attributes:
        x: Solution vector, or ``None`` on failure.
        status: Exit status.
        message: Human-readable explanation of the status.
        method: Name of the algorithm used.
        residual_norm: ``||A x - b||_inf`` against the original system.
        reduced: Final working augmented matrix (upper-triangular for Gauss,
            RREF for Gauss-Jordan).
        rank: Rank detected during reduction (Gauss-Jordan only).
        L, U, perm, y: Factors, row permutation and intermediate vector of
            the LU or Cholesky solves.
        detail: Where a structural failure occurred (``column``, ``row``...).
        trace: One record per elimination column / factorization step.
    """

    x: Optional[np.ndarray]
    status: Status
    message: str
    method: str
    residual_norm: Optional[float] = None
    reduced: Optional[np.ndarray] = None
    rank: Optional[int] = None
    L: Optional[np.ndarray] = None
    U: Optional[np.ndarray] = None
    perm: Optional[np.ndarray] = None
    y: Optional[np.ndarray] = None
    detail: dict[str, Any] = field(default_factory=dict)
    trace: Trace = field(default_factory=Trace)


@dataclass
class LUResult(ResultMixin):
    """
    Doolittle factorization ``P A = L U`` with ``P = I[perm]``.

    ``L`` is unit lower-triangular and ``U`` upper-triangular. The permutation
    is stored as an index vector; :meth:`permutation_matrix` materializes it.
    """

    L: Optional[np.ndarray]
    U: Optional[np.ndarray]
    perm: Optional[np.ndarray]
    status: Status
    message: str
    detail: dict[str, Any] = field(default_factory=dict)
    trace: Trace = field(default_factory=Trace)

    def permutation_matrix(self) -> np.ndarray:
        if self.perm is None:
            raise ValueError("Factorization failed; no permutation available.")
        return np.eye(len(self.perm))[self.perm]


@dataclass
class CholeskyResult(ResultMixin):
    """Lower-triangular ``L`` with ``A = L L^T``."""

    L: Optional[np.ndarray]
    status: Status
    message: str
    detail: dict[str, Any] = field(default_factory=dict)
    trace: Trace = field(default_factory=Trace)


@dataclass
class IterativeResult(ResultMixin):
    """
    Outcome of Jacobi or Gauss-Seidel iteration.

    ``x`` holds the last iterate even when the method did not converge, so the
    caller can still compare methods; ``status`` is then ``NOT_CONVERGED``.
    ``diagonally_dominant`` reports the advisory pre-check.
    """

    x: Optional[np.ndarray]
    status: Status
    message: str
    method: str
    nit: int = 0
    diagonally_dominant: Optional[bool] = None
    max_error: Optional[float] = None
    detail: dict[str, Any] = field(default_factory=dict)
    trace: Trace = field(default_factory=Trace)


__all__ = ["CholeskyResult", "IterativeResult", "LUResult", "LinearSystemResult"]
