"""Solver exit statuses and the internal exception used to signal them.

Every public solve function in numlab returns a result carrying one of these
statuses. Internally, a failure discovered mid-algorithm is raised as a
:class:`SolverError` and converted to a result at the public boundary, so no
exception escapes to the caller for bad input or numerical degeneracy.
"""

from __future__ import annotations

from enum import Enum


class Status(Enum):
    """Exit status shared by every numlab solver."""

    OK = "ok"
    INVALID_INPUT = "invalid_input"
    EVAL_ERROR = "eval_error"

    # Direct linear solvers
    SINGULAR = "singular"
    INCONSISTENT = "inconsistent"
    INFINITE_SOLUTIONS = "infinite_solutions"
    NOT_SYMMETRIC = "not_symmetric"
    NOT_POSITIVE_DEFINITE = "not_positive_definite"

    # Iterative methods
    ZERO_DIAGONAL = "zero_diagonal"
    NOT_CONVERGED = "not_converged"
    MAX_ITER = "max_iter"

    # Root finding and optimization
    NO_SIGN_CHANGE = "no_sign_change"
    NO_BRACKET_FOUND = "no_bracket_found"
    ZERO_DERIVATIVE = "zero_derivative"
    DEGENERATE_SEEDS = "degenerate_seeds"
    ZERO_DENOMINATOR = "zero_denominator"
    NON_FINITE = "non_finite"
    DIVERGED = "diverged"
    NONE_CONVERGED = "none_converged"
    ZERO_SECOND_DERIVATIVE = "zero_second_derivative"

    # Linear programming
    INFEASIBLE = "infeasible"
    UNBOUNDED = "unbounded"

    # Interpolation and fitting
    DUPLICATE_ABSCISSAS = "duplicate_abscissas"
    DEGENERATE_ABSCISSAS = "degenerate_abscissas"

    # Floating-point representation
    OVERFLOW = "overflow"
    UNDERFLOW = "underflow"


class SolverError(Exception):
    """Raised inside an algorithm when it must halt with a non-OK status."""

    def __init__(self, status: Status, message: str, **detail: object) -> None:
        super().__init__(message)
        self.status = status
        self.message = message
        self.detail = detail


class ResultMixin:
    """Adds the ``success`` shortcut to result dataclasses."""

    status: Status

    @property
    def success(self) -> bool:
        return self.status is Status.OK


__all__ = ["ResultMixin", "SolverError", "Status"]
