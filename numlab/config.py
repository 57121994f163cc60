"""Default tolerances and iteration budgets."""

from __future__ import annotations

from dataclasses import dataclass

from .core.numeric import PIVOT_EPS


@dataclass(frozen=True)
class SolverConfig:
    """
    Bundle of numeric defaults used across numlab.

    Structural checks (pivots, diagonals, positive-definiteness) use
    ``pivot_eps``; stopping rules use ``tol``.

    Args:
        pivot_eps: Absolute magnitude below which a pivot or diagonal entry
            counts as zero.
        symmetry_tol: Largest ``|A[i][j] - A[j][i]|`` accepted as symmetric.
        tol: Convergence tolerance for iterative linear solvers (fraction).
        error_pct: Stopping tolerance, in percent, for scalar root-finders and
            optimizers.
        maxiter: Iteration budget for root-finders and iterative solvers.
        simplex_maxiter: Pivot budget covering both Simplex phases.
        ode_max_steps: Hard cap on ODE integration steps.
    """

    pivot_eps: float = PIVOT_EPS
    symmetry_tol: float = 1e-10
    tol: float = 1e-6
    error_pct: float = 1e-4
    maxiter: int = 100
    simplex_maxiter: int = 100
    ode_max_steps: int = 10_000

    def __post_init__(self) -> None:
        """Validate SolverConfig invariants."""
        for name in ("pivot_eps", "symmetry_tol", "tol", "error_pct"):
            value = getattr(self, name)
            if not value > 0.0:
                raise ValueError(f"{name} must be positive, got {value}.")
        for name in ("maxiter", "simplex_maxiter", "ode_max_steps"):
            value = getattr(self, name)
            if int(value) != value or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value}.")


DEFAULT_CONFIG = SolverConfig()


__all__ = ["DEFAULT_CONFIG", "SolverConfig"]
