"""Result container and shared plumbing for scalar root-finders."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..core import ResultMixin, Status, Trace
from ..expr import EvalError, ExpressionEngine, FunctionLike, ScalarFunction, scalar_function


@dataclass
class RootResult(ResultMixin):
    """
    Outcome of a root-finding (or fixed-point) iteration.

    Attributes:
        root: Best approximation found, or ``None`` when the method could not
            start.
        status: Exit status.
        message: Human-readable explanation of the status.
        method: Name of the algorithm used.
        nit: Number of recorded iterations.
        fun: Function value at ``root`` when available.
        error: Last relative percentage error.
        detail: Extra context (bracket used, candidate expression...).
        trace: One record per iteration.
    """

    root: Optional[float]
    status: Status
    message: str
    method: str
    nit: int = 0
    fun: Optional[float] = None
    error: Optional[float] = None
    detail: dict[str, Any] = field(default_factory=dict)
    trace: Trace = field(default_factory=Trace)


def resolve(f: FunctionLike, engine: ExpressionEngine | None = None) -> ScalarFunction:
    """Compile ``f``; raises :class:`EvalError` for malformed expressions."""
    return scalar_function(f, engine=engine)


def failure(method: str, status: Status, message: str, **kwargs: Any) -> RootResult:
    return RootResult(root=None, status=status, message=message, method=method, **kwargs)


def eval_failure(method: str, exc: EvalError) -> RootResult:
    return failure(method, Status.EVAL_ERROR, str(exc))


__all__ = ["RootResult", "eval_failure", "failure", "resolve"]
