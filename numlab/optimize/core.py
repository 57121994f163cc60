"""Core interfaces shared across the unconstrained optimizers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence, Union

import numpy as np

from ..core import ResultMixin, Status, Trace
from ..expr import (
    ExpressionEngine,
    FunctionLike,
    approx_grad,
    default_engine,
    guard_callable,
    symbolic_derivative,
)

Array = np.ndarray
Objective = Callable[[Array], float]
Gradient = Callable[[Array], Array]


@dataclass(frozen=True)
class Problem:
    """Objective of several variables together with its gradient."""

    fun: Objective
    grad: Optional[Gradient] = None
    dim: Optional[int] = None


@dataclass
class OptimizeResult(ResultMixin):
    """
    Result object returned by the optimizers in this module.

    Attributes:
        x: Final point (an array for multivariate methods, a float for the
            scalar Newton method).
        fun: Objective value at ``x``.
        status: Exit status.
        message: Human-readable explanation of the status.
        method: Name of the algorithm used.
        nit: Number of iterations performed.
        grad_norm: Euclidean norm of the last gradient evaluated.
        error: Last relative percentage step error.
        classification: ``"minimum"``, ``"maximum"`` or ``"saddle"`` for
            Newton critical points.
        nfev: Objective evaluations (line-search trials included).
        trace: One record per iteration.
    """

    x: Optional[Union[Array, float]]
    fun: Optional[float]
    status: Status
    message: str
    method: str
    nit: int = 0
    grad_norm: Optional[float] = None
    error: Optional[float] = None
    classification: Optional[str] = None
    nfev: int = 0
    detail: dict[str, Any] = field(default_factory=dict)
    trace: Trace = field(default_factory=Trace)


def build_problem(
    f: FunctionLike,
    grad: Union[Gradient, Sequence[str], None] = None,
    variables: Sequence[str] = ("x", "y"),
    engine: ExpressionEngine | None = None,
) -> Problem:
    """
    Assemble a :class:`Problem` from an expression or a vector callable.

    Expressions in ``variables`` get their gradient by symbolic
    differentiation; callables use ``grad`` when given and central
    differences otherwise. ``grad`` may also be a sequence of partial
    derivative expressions. A user objective or gradient that raises an
    arithmetic or domain error evaluates to NaN there, which the optimizers
    report as ``NON_FINITE``.

    Raises:
        EvalError: If an expression cannot be parsed.
    """
    engine = engine or default_engine()
    names = list(variables)

    if isinstance(f, str):
        compiled = engine.compile(f, names)

        def fun(v: Array) -> float:
            return compiled(*v)

        if grad is None:
            grad = [symbolic_derivative(f, name, engine=engine) for name in names]
        dim: Optional[int] = len(names)
    else:
        objective = guard_callable(f)

        def fun(v: Array) -> float:
            return objective(np.asarray(v, dtype=float))

        dim = None

    if grad is None:
        def gradient(v: Array) -> Array:
            return approx_grad(fun, v)

    elif callable(grad):
        user_grad = grad

        def gradient(v: Array) -> Array:
            v = np.asarray(v, dtype=float)
            try:
                return np.asarray(user_grad(v), dtype=float)
            except (ArithmeticError, ValueError):
                return np.full(v.shape, np.nan)

    else:
        partials = [engine.compile(expr, names) for expr in grad]

        def gradient(v: Array) -> Array:
            return np.array([p(*v) for p in partials], dtype=float)

    return Problem(fun=fun, grad=gradient, dim=dim)


__all__ = ["Array", "Gradient", "Objective", "OptimizeResult", "Problem", "build_problem"]
