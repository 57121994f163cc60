"""
Fixed-point iteration ``x_{k+1} = g(x_k)`` and the try-every-rearrangement
driver built on top of it.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence, Union

from ..config import DEFAULT_CONFIG
from ..core import Status, Trace, is_finite, relative_error_pct
from ..expr import (
    EvalError,
    ExpressionEngine,
    FunctionLike,
    Rearrangement,
    SympyEngine,
    fixed_point_candidates,
)
from ..logging import get_logger
from .core import RootResult, eval_failure, failure, resolve

logger = get_logger(__name__)

Candidate = Union[FunctionLike, Rearrangement]


def fixed_point(
    g: FunctionLike,
    x0: float,
    tol: float = DEFAULT_CONFIG.error_pct,
    maxiter: int = DEFAULT_CONFIG.maxiter,
    engine: ExpressionEngine | None = None,
) -> RootResult:
    """
    Iterate ``x = g(x)`` from ``x0``.

    Record ``k`` holds ``x_k``, ``g(x_k)`` and the relative percentage error of
    ``x_k`` against ``x_{k-1}`` (``inf`` at ``k = 0``). A non-finite ``g(x_k)``
    stops the run with ``DIVERGED``.
    """
    method = "fixed-point"
    try:
        func = resolve(g, engine)
    except EvalError as exc:
        return eval_failure(method, exc)
    if tol <= 0 or maxiter < 1:
        return failure(method, Status.INVALID_INPUT, "tol must be positive and maxiter at least 1.")

    trace = Trace()
    x = float(x0)
    x_prev: Optional[float] = None
    err = math.inf
    for k in range(maxiter):
        gx = func(x)
        if not is_finite(gx):
            logger.debug("fixed point diverged at iteration %d (x=%.6g)", k, x)
            return RootResult(
                root=x,
                status=Status.DIVERGED,
                message=f"g(x) is not finite at iteration {k}; the iteration diverged.",
                method=method,
                nit=k,
                error=err,
                trace=trace,
            )
        err = relative_error_pct(x, x_prev)
        trace.record(k, x=x, gx=gx, error=err)
        if err <= tol:
            logger.info("fixed point converged to %.12g in %d iterations", gx, k + 1)
            return RootResult(
                root=gx,
                status=Status.OK,
                message=f"Converged in {k + 1} iterations",
                method=method,
                nit=k + 1,
                error=err,
                trace=trace,
            )
        x_prev, x = x, gx

    return RootResult(
        root=x,
        status=Status.NOT_CONVERGED,
        message=f"Did not converge in {maxiter} iterations.",
        method=method,
        nit=maxiter,
        error=err,
        trace=trace,
    )


def _label(candidate: Candidate) -> str:
    if isinstance(candidate, Rearrangement):
        return candidate.expression
    if isinstance(candidate, str):
        return candidate
    return getattr(candidate, "__name__", repr(candidate))


def fixed_point_all(
    equation_or_candidates: Union[str, Sequence[Candidate]],
    x0: float,
    tol: float = DEFAULT_CONFIG.error_pct,
    maxiter: int = DEFAULT_CONFIG.maxiter,
    engine: ExpressionEngine | None = None,
) -> RootResult:
    """
    Try each rearrangement ``x = g(x)`` in turn and return the first that
    converges.

    ``equation_or_candidates`` is either an equation (``"x^2 - 3x + 2 = 0"``,
    candidates derived by :func:`~numlab.expr.fixed_point_candidates`) or an
    explicit sequence of ``g`` expressions/callables. When none converges the
    result is the attempt with the smallest final error and status
    ``NONE_CONVERGED``. ``detail["attempts"]`` lists every attempt in order.
    """
    method = "fixed-point-all"
    if isinstance(equation_or_candidates, str):
        sympy_engine = engine if isinstance(engine, SympyEngine) else None
        try:
            candidates: Sequence[Candidate] = fixed_point_candidates(
                equation_or_candidates, engine=sympy_engine
            )
        except EvalError as exc:
            return eval_failure(method, exc)
    else:
        candidates = list(equation_or_candidates)
    if not candidates:
        return failure(method, Status.INVALID_INPUT, "No candidate rearrangement to try.")

    attempts = []
    best: Optional[RootResult] = None
    best_label = None
    for idx, candidate in enumerate(candidates):
        label = _label(candidate)
        g = candidate.expression if isinstance(candidate, Rearrangement) else candidate
        res = fixed_point(g, x0, tol=tol, maxiter=maxiter, engine=engine)
        attempts.append({"candidate": label, "status": res.status, "error": res.error})
        logger.debug("fixed point candidate %d (%s): %s", idx, label, res.status.value)
        if res.success:
            res.method = method
            res.detail = {"candidate": label, "index": idx, "attempts": attempts}
            return res
        if res.error is not None and math.isfinite(res.error):
            if best is None or res.error < best.error:
                best, best_label = res, label

    logger.warning("fixed point: none of %d candidates converged", len(candidates))
    if best is None:
        return failure(
            method,
            Status.NONE_CONVERGED,
            "No candidate produced a finite iteration.",
            detail={"attempts": attempts},
        )
    return RootResult(
        root=best.root,
        status=Status.NONE_CONVERGED,
        message=f"No candidate converged; closest was x = {best_label}.",
        method=method,
        nit=best.nit,
        error=best.error,
        detail={"candidate": best_label, "attempts": attempts},
        trace=best.trace,
    )


__all__ = ["fixed_point", "fixed_point_all"]
