"""
Two-phase tableau Simplex method.

The problem is brought to a tableau with one row per constraint and a final
reduced-cost row. Every constraint contributes a slack ``s_i`` (``<=``), a
surplus ``e_i`` and an artificial ``a_i`` (``>=``) or an artificial alone
(``=``); the index ``i`` is the constraint's position. Internally the method
always minimizes, so a maximization problem has its objective negated.

Phase I minimizes the sum of the artificial variables. A positive optimum
means the constraints are infeasible. Artificial variables still basic at
level zero are pivoted out where possible and their columns are dropped
before Phase II optimizes the real objective.

Example:
    >>> from numlab.lp import Constraint, LinearProgram, simplex
    >>> lp = LinearProgram(
    ...     objective=(3.0, 5.0),
    ...     constraints=(
    ...         Constraint((1.0, 0.0), "<=", 4.0),
    ...         Constraint((0.0, 2.0), "<=", 12.0),
    ...         Constraint((3.0, 2.0), "<=", 18.0),
    ...     ),
    ... )
    >>> res = simplex(lp)
    >>> res.objective, res.x.tolist()
    (36.0, [2.0, 6.0])
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..config import DEFAULT_CONFIG
from ..core import SolverError, Status, Trace
from ..logging import get_logger
from .core import LinearProgram, PivotStep, SimplexResult

logger = get_logger(__name__)


@dataclass
class _Tableau:
    table: np.ndarray
    headers: list[str]
    basis: list[str]

    @property
    def rows(self) -> int:
        return self.table.shape[0] - 1

    def column(self, name: str) -> int:
        return self.headers.index(name)

    def pivot(self, row: int, col: int) -> float:
        value = float(self.table[row, col])
        self.table[row] /= value
        for i in range(self.table.shape[0]):
            if i != row and self.table[i, col] != 0.0:
                self.table[i] -= self.table[i, col] * self.table[row]
        self.basis[row] = self.headers[col]
        return value

    def price_out(self, costs: np.ndarray) -> None:
        """Install ``costs`` as the objective row and zero it on basic columns."""
        self.table[-1, :] = 0.0
        self.table[-1, : costs.size] = costs
        for i, name in enumerate(self.basis):
            if name in self.headers:
                j = self.column(name)
                if self.table[-1, j] != 0.0:
                    self.table[-1] -= self.table[-1, j] * self.table[i]

    def drop_columns(self, names: list[str]) -> None:
        keep = [j for j, h in enumerate(self.headers) if h not in names]
        self.table = self.table[:, keep]
        self.headers = [self.headers[j] for j in keep]


def _build_tableau(problem: LinearProgram) -> tuple[_Tableau, list[str], np.ndarray]:
    """Return the initial tableau, the artificial names and the cost vector."""
    rows = [c.normalized() for c in problem.constraints]
    m, n = len(rows), problem.n_vars

    names = [f"x{j + 1}" for j in range(n)]
    extra: list[tuple[str, int, float]] = []
    artificial: list[tuple[str, int]] = []
    basis: list[str] = []
    for i, con in enumerate(rows):
        if con.sense == "<=":
            extra.append((f"s{i + 1}", i, 1.0))
            basis.append(f"s{i + 1}")
        else:
            if con.sense == ">=":
                extra.append((f"e{i + 1}", i, -1.0))
            artificial.append((f"a{i + 1}", i))
            basis.append(f"a{i + 1}")

    headers = names + [name for name, _, _ in extra] + [name for name, _ in artificial] + ["RHS"]
    table = np.zeros((m + 1, len(headers)), dtype=float)
    for i, con in enumerate(rows):
        table[i, :n] = con.coefficients
        table[i, -1] = con.rhs
    for name, i, sign in extra:
        table[i, headers.index(name)] = sign
    for name, i in artificial:
        table[i, headers.index(name)] = 1.0

    sign = -1.0 if problem.maximize else 1.0
    costs = sign * np.asarray(problem.objective, dtype=float)
    return _Tableau(table, headers, basis), [name for name, _ in artificial], costs


def _iterate(
    tab: _Tableau,
    phase: int,
    nit: int,
    maxiter: int,
    tol: float,
    steps: list[PivotStep],
    trace: Trace,
) -> int:
    """Pivot until the reduced costs are nonnegative; return the pivot count."""
    while True:
        reduced = tab.table[-1, :-1]
        col = int(np.argmin(reduced))
        if reduced[col] >= -tol:
            return nit
        if nit >= maxiter:
            raise SolverError(
                Status.MAX_ITER, f"Pivot budget of {maxiter} exhausted in phase {phase}."
            )
        entries = tab.table[:-1, col]
        rhs = tab.table[:-1, -1]
        ratios = np.full(tab.rows, np.inf)
        positive = entries > tol
        ratios[positive] = rhs[positive] / entries[positive]
        if not np.any(positive):
            raise SolverError(
                Status.UNBOUNDED,
                f"Problem is unbounded: column {tab.headers[col]} has no positive entry.",
                column=tab.headers[col],
            )
        row = int(np.argmin(ratios))
        nit += 1
        _record(tab, row, col, phase, nit, ratios, steps, trace)


def _record(
    tab: _Tableau,
    row: int,
    col: int,
    phase: int,
    nit: int,
    ratios: Optional[np.ndarray],
    steps: list[PivotStep],
    trace: Trace,
) -> None:
    leaving = tab.basis[row]
    entering = tab.headers[col]
    value = tab.pivot(row, col)
    snapshot = tab.table.copy()
    snapshot.setflags(write=False)
    if ratios is not None:
        ratios = ratios.copy()
        ratios.setflags(write=False)
    steps.append(
        PivotStep(
            phase=phase,
            iteration=nit,
            entering=entering,
            leaving=leaving,
            pivot=value,
            ratios=ratios,
            tableau=snapshot,
            headers=tuple(tab.headers),
            basis=tuple(tab.basis),
        )
    )
    trace.record(
        nit,
        phase=phase,
        entering=entering,
        leaving=leaving,
        pivot=value,
        ratios=ratios,
        tableau=snapshot,
    )
    logger.debug(
        "phase %d pivot %d: %s enters, %s leaves (pivot %.6g)", phase, nit, entering, leaving, value
    )


def _drive_out_artificials(
    tab: _Tableau,
    artificial: list[str],
    nit: int,
    tol: float,
    steps: list[PivotStep],
    trace: Trace,
) -> int:
    """Pivot zero-level artificial variables out of the basis where possible."""
    real = [j for j, h in enumerate(tab.headers[:-1]) if h not in artificial]
    for i in range(tab.rows):
        if tab.basis[i] not in artificial:
            continue
        for j in real:
            if abs(tab.table[i, j]) > tol:
                nit += 1
                _record(tab, i, j, 1, nit, None, steps, trace)
                break
        else:
            logger.debug("row %d is redundant; %s stays basic at zero", i + 1, tab.basis[i])
    return nit


def _extract(tab: _Tableau, problem: LinearProgram) -> tuple[np.ndarray, dict[str, float]]:
    values = {h: 0.0 for h in tab.headers[:-1]}
    for i, name in enumerate(tab.basis):
        if name in values:
            values[name] = float(tab.table[i, -1])
    x = np.array([values[f"x{j + 1}"] for j in range(problem.n_vars)])
    return x, values


def simplex(
    problem: LinearProgram,
    maxiter: int = DEFAULT_CONFIG.simplex_maxiter,
    tol: float = 1e-9,
) -> SimplexResult:
    """
    Solve ``problem`` with the two-phase tableau Simplex method.

    Entering variable: most negative reduced cost (first on ties). Leaving
    variable: minimum ratio over strictly positive column entries (first on
    ties). ``maxiter`` bounds the pivots of both phases together.
    """
    if not isinstance(problem, LinearProgram):
        return SimplexResult(None, None, Status.INVALID_INPUT, "Expected a LinearProgram.")
    if maxiter < 1 or tol <= 0:
        return SimplexResult(
            None, None, Status.INVALID_INPUT, "maxiter must be at least 1 and tol positive."
        )

    tab, artificial, costs = _build_tableau(problem)
    steps: list[PivotStep] = []
    trace = Trace()
    nit = 0

    def failed(status: Status, message: str, **detail: object) -> SimplexResult:
        return SimplexResult(
            None,
            None,
            status,
            message,
            basis=tuple(tab.basis),
            nit=len(steps),
            steps=steps,
            tableau=tab.table.copy(),
            headers=tuple(tab.headers),
            detail=dict(detail),
            trace=trace,
        )

    try:
        if artificial:
            phase_one = np.array([1.0 if h in artificial else 0.0 for h in tab.headers[:-1]])
            tab.price_out(phase_one)
            nit = _iterate(tab, 1, nit, maxiter, tol, steps, trace)
            infeasibility = -float(tab.table[-1, -1])
            if infeasibility > tol:
                logger.info("simplex: phase I optimum %.3e > 0, infeasible", infeasibility)
                return failed(
                    Status.INFEASIBLE,
                    f"Problem is infeasible (phase I optimum {infeasibility:.6g} > 0).",
                    phase_one_objective=infeasibility,
                )
            nit = _drive_out_artificials(tab, artificial, nit, tol, steps, trace)
            tab.drop_columns(artificial)

        tab.price_out(costs)
        nit = _iterate(tab, 2, nit, maxiter, tol, steps, trace)
    except SolverError as exc:
        if exc.status is Status.MAX_ITER:
            logger.warning("simplex: %s", exc.message)
        return failed(exc.status, exc.message, **exc.detail)

    x, values = _extract(tab, problem)
    objective = float(np.dot(problem.objective, x))
    logger.info("simplex: optimum %.6g after %d pivots", objective, nit)
    return SimplexResult(
        x=x,
        objective=objective,
        status=Status.OK,
        message="Optimal solution found",
        variables=values,
        basis=tuple(tab.basis),
        nit=nit,
        steps=steps,
        tableau=tab.table.copy(),
        headers=tuple(tab.headers),
        trace=trace,
    )


__all__ = ["simplex"]
