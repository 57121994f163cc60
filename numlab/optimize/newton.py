"""Newton's method for critical points of a function of one variable."""

from __future__ import annotations

from typing import Optional

from ..config import DEFAULT_CONFIG
from ..core import Status, Trace, is_finite, relative_error_pct
from ..expr import EvalError, ExpressionEngine, FunctionLike, derivative_function, scalar_function
from ..logging import get_logger
from .core import OptimizeResult

logger = get_logger(__name__)


def classify_critical_point(curvature: float, eps: float = DEFAULT_CONFIG.pivot_eps) -> str:
    """Second-derivative test: ``minimum``, ``maximum`` or ``saddle``."""
    if curvature > eps:
        return "minimum"
    if curvature < -eps:
        return "maximum"
    return "saddle"


def newton_critical_point(
    f: FunctionLike,
    x0: float,
    df: Optional[FunctionLike] = None,
    d2f: Optional[FunctionLike] = None,
    tol: float = DEFAULT_CONFIG.error_pct,
    maxiter: int = DEFAULT_CONFIG.maxiter,
    engine: Optional[ExpressionEngine] = None,
) -> OptimizeResult:
    """
    Find a stationary point of ``f`` with ``x_{k+1} = x_k - f'(x_k) / f''(x_k)``.

    Derivatives not supplied are obtained symbolically for expressions and by
    central differences for callables. A second derivative that is exactly
    zero stops the run with ``ZERO_SECOND_DERIVATIVE``. On convergence the
    point is classified by the sign of ``f''`` there.
    """
    method = "newton-critical-point"
    trace = Trace()
    try:
        func = scalar_function(f, engine)
        d1 = derivative_function(f, df, engine)
        if d2f is not None:
            d2 = scalar_function(d2f, engine)
        elif df is not None and not isinstance(f, str):
            d2 = derivative_function(df, engine=engine)
        else:
            d2 = derivative_function(f, engine=engine, order=2)
    except EvalError as exc:
        return OptimizeResult(None, None, Status.EVAL_ERROR, str(exc), method, trace=trace)
    if tol <= 0 or maxiter < 1:
        return OptimizeResult(
            None,
            None,
            Status.INVALID_INPUT,
            "tol must be positive and maxiter at least 1.",
            method,
            trace=trace,
        )

    x = float(x0)
    err = None
    for k in range(1, maxiter + 1):
        g, h = d1(x), d2(x)
        if not is_finite(g, h):
            return OptimizeResult(
                x,
                func(x),
                Status.NON_FINITE,
                f"f' or f'' is not finite at x={x:.12g}.",
                method,
                nit=k - 1,
                error=err,
                trace=trace,
            )
        if h == 0.0:
            return OptimizeResult(
                x,
                func(x),
                Status.ZERO_SECOND_DERIVATIVE,
                f"Second derivative vanished at x={x:.12g}; cannot continue.",
                method,
                nit=k - 1,
                error=err,
                detail={"x": x},
                trace=trace,
            )
        x_next = x - g / h
        err = relative_error_pct(x_next, x)
        trace.record(k, x=x, df=g, d2f=h, x_next=x_next, error=err)
        logger.debug("newton critical point %d: x=%.12g err=%.3e", k, x_next, err)
        x = x_next
        if err <= tol:
            kind = classify_critical_point(d2(x))
            logger.info("newton critical point: %s at x=%.12g", kind, x)
            return OptimizeResult(
                x,
                func(x),
                Status.OK,
                f"Converged to a {kind} in {k} iterations",
                method,
                nit=k,
                error=err,
                classification=kind,
                trace=trace,
            )

    logger.warning("newton critical point did not converge in %d iterations", maxiter)
    return OptimizeResult(
        x,
        func(x),
        Status.NOT_CONVERGED,
        f"Did not converge in {maxiter} iterations.",
        method,
        nit=maxiter,
        error=err,
        trace=trace,
    )


__all__ = ["classify_critical_point", "newton_critical_point"]
