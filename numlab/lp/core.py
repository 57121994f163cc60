"""
Problem and result dataclasses for the tableau Simplex method.

A problem is a list of :class:`Constraint` rows ``a . x (<=|>=|=) b`` plus an
objective ``c . x`` to maximize (or minimize). All decision variables are
implicitly nonnegative.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

import numpy as np

from ..core import ResultMixin, Status, Trace

SENSES = ("<=", ">=", "=")


def _as_coefficients(values: Sequence[float], what: str) -> tuple[float, ...]:
    arr = np.asarray(values, dtype=float).reshape(-1)
    if arr.size == 0:
        raise ValueError(f"{what} must contain at least one coefficient")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{what} contains NaN or infinite values")
    return tuple(float(v) for v in arr)


@dataclass(frozen=True)
class Constraint:
    """One linear constraint ``coefficients . x  sense  rhs``."""

    coefficients: tuple[float, ...]
    sense: str
    rhs: float

    def __post_init__(self) -> None:
        """Validate Constraint invariants."""
        object.__setattr__(
            self, "coefficients", _as_coefficients(self.coefficients, "Constraint")
        )
        if self.sense not in SENSES:
            raise ValueError(f"sense must be one of {SENSES}, got {self.sense!r}")
        rhs = float(self.rhs)
        if not np.isfinite(rhs):
            raise ValueError("Constraint right-hand side must be finite")
        object.__setattr__(self, "rhs", rhs)

    def normalized(self) -> "Constraint":
        """Equivalent constraint with a nonnegative right-hand side."""
        if self.rhs >= 0:
            return self
        flipped = {"<=": ">=", ">=": "<=", "=": "="}[self.sense]
        return Constraint(tuple(-c for c in self.coefficients), flipped, -self.rhs)


@dataclass(frozen=True)
class LinearProgram:
    """
    Linear program over nonnegative variables ``x1 .. xn``.

    Args:
        objective: Objective coefficients ``c``.
        constraints: Constraint rows, each with ``n`` coefficients.
        maximize: Maximize ``c . x`` when True (default), minimize otherwise.
    """

    objective: tuple[float, ...]
    constraints: tuple[Constraint, ...]
    maximize: bool = True

    def __post_init__(self) -> None:
        """Validate LinearProgram invariants."""
        object.__setattr__(self, "objective", _as_coefficients(self.objective, "Objective"))
        rows = tuple(self.constraints)
        if not rows:
            raise ValueError("A linear program needs at least one constraint")
        for i, row in enumerate(rows):
            if not isinstance(row, Constraint):
                raise ValueError(f"Constraint {i} is not a Constraint instance")
            if len(row.coefficients) != len(self.objective):
                raise ValueError(
                    f"Constraint {i} has {len(row.coefficients)} coefficients, "
                    f"expected {len(self.objective)}"
                )
        object.__setattr__(self, "constraints", rows)

    @property
    def n_vars(self) -> int:
        return len(self.objective)

    @property
    def n_constraints(self) -> int:
        return len(self.constraints)


@dataclass(frozen=True, eq=False)
class PivotStep:
    """
    One pivot of the Simplex method.

    ``ratios`` is the minimum-ratio column (``inf`` where the entry was not
    positive) and is ``None`` for the pivots that drive artificial variables
    out of the basis. ``tableau`` is a read-only snapshot taken after the pivot.
    """

    phase: int
    iteration: int
    entering: str
    leaving: str
    pivot: float
    ratios: Optional[np.ndarray]
    tableau: np.ndarray
    headers: tuple[str, ...]
    basis: tuple[str, ...]


@dataclass
class SimplexResult(ResultMixin):
    """
    Solution container for :func:`~numlab.lp.simplex`.

    Attributes:
        x: Decision variables ``x1 .. xn`` (``None`` unless optimal).
        objective: Objective value ``c . x`` in the caller's sense.
        status: ``OK``, ``INFEASIBLE``, ``UNBOUNDED``, ``MAX_ITER`` or
            ``INVALID_INPUT``.
        message: Human-readable explanation of the status.
        variables: Value of every decision, slack and surplus variable.
        basis: Basic variable of each constraint row in the final tableau.
        nit: Pivots performed over both phases.
        steps: Every pivot in order.
        tableau: Final tableau and its column ``headers``.
    """

    x: Optional[np.ndarray]
    objective: Optional[float]
    status: Status
    message: str
    variables: dict[str, float] = field(default_factory=dict)
    basis: tuple[str, ...] = ()
    nit: int = 0
    steps: list[PivotStep] = field(default_factory=list)
    tableau: Optional[np.ndarray] = None
    headers: tuple[str, ...] = ()
    detail: dict[str, Any] = field(default_factory=dict)
    trace: Trace = field(default_factory=Trace)

    @property
    def slack(self) -> dict[str, float]:
        """Slack (``s``) and surplus (``e``) variable values."""
        return {k: v for k, v in self.variables.items() if k[0] in "se"}


__all__ = ["Constraint", "LinearProgram", "PivotStep", "SENSES", "SimplexResult"]
