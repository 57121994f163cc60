"""
Open root-finding methods: Newton-Raphson and secant.

Neither method keeps a bracket, so both can wander off; every evaluation is
checked and a non-finite value ends the run with ``NON_FINITE``.
"""

from __future__ import annotations

import math
from typing import Optional

from ..config import DEFAULT_CONFIG
from ..core import MACHINE_EPS, Status, Trace, is_finite, relative_error_pct
from ..expr import EvalError, ExpressionEngine, FunctionLike, derivative_function
from ..logging import get_logger
from .core import RootResult, eval_failure, failure, resolve

logger = get_logger(__name__)


def newton_raphson(
    f: FunctionLike,
    x0: float,
    df: Optional[FunctionLike] = None,
    tol: float = DEFAULT_CONFIG.error_pct,
    maxiter: int = DEFAULT_CONFIG.maxiter,
    engine: ExpressionEngine | None = None,
) -> RootResult:
    """
    Newton-Raphson iteration ``x_{k+1} = x_k - f(x_k) / f'(x_k)``.

    Record ``k`` holds ``x_k``, ``f(x_k)``, ``f'(x_k)``, ``x_{k+1}`` and the
    relative percentage error of ``x_k`` against ``x_{k-1}`` (``inf`` for the
    starting point). A derivative that is exactly zero stops the run with
    ``ZERO_DERIVATIVE``.

    Example:
        >>> round(newton_raphson("x^2 - 2", 1.0).root, 10)
        1.4142135624
    """
    method = "newton-raphson"
    try:
        func = resolve(f, engine)
        dfunc = derivative_function(f, df, engine)
    except EvalError as exc:
        return eval_failure(method, exc)
    if tol <= 0 or maxiter < 1:
        return failure(method, Status.INVALID_INPUT, "tol must be positive and maxiter at least 1.")

    trace = Trace()
    x = float(x0)
    x_prev: Optional[float] = None
    fx, err = math.nan, math.inf
    for k in range(maxiter):
        fx, dfx = func(x), dfunc(x)
        if not is_finite(fx, dfx):
            return RootResult(
                root=x,
                status=Status.NON_FINITE,
                message=f"f or f' is not finite at x={x:.12g}.",
                method=method,
                nit=k,
                trace=trace,
            )
        if dfx == 0.0:
            logger.info("newton-raphson: zero derivative at x=%.12g", x)
            return RootResult(
                root=x,
                status=Status.ZERO_DERIVATIVE,
                message=f"Derivative vanished at x={x:.12g}; cannot continue.",
                method=method,
                nit=k,
                fun=fx,
                detail={"x": x},
                trace=trace,
            )
        x_next = x - fx / dfx
        err = relative_error_pct(x, x_prev)
        trace.record(k, x=x, fx=fx, dfx=dfx, x_next=x_next, error=err)
        logger.debug("newton-raphson %d: x=%.12g f=%.3e err=%.3e", k, x, fx, err)
        if err <= tol:
            logger.info("newton-raphson converged to %.12g in %d iterations", x_next, k + 1)
            return RootResult(
                root=x_next,
                status=Status.OK,
                message=f"Converged in {k + 1} iterations",
                method=method,
                nit=k + 1,
                fun=func(x_next),
                error=err,
                trace=trace,
            )
        x_prev, x = x, x_next

    logger.warning("newton-raphson did not converge in %d iterations", maxiter)
    return RootResult(
        root=x,
        status=Status.NOT_CONVERGED,
        message=f"Did not converge in {maxiter} iterations.",
        method=method,
        nit=maxiter,
        fun=fx,
        error=err,
        trace=trace,
    )


def secant(
    f: FunctionLike,
    x0: float,
    x1: float,
    tol: float = DEFAULT_CONFIG.error_pct,
    maxiter: int = DEFAULT_CONFIG.maxiter,
    engine: ExpressionEngine | None = None,
) -> RootResult:
    """
    Secant iteration ``x_{k+1} = x_k - f(x_k)(x_k - x_{k-1}) / (f(x_k) - f(x_{k-1}))``.

    Fails with ``DEGENERATE_SEEDS`` when ``x0 == x1`` and with
    ``ZERO_DENOMINATOR`` when ``|f(x_k) - f(x_{k-1})|`` falls below machine
    epsilon. The error of each record compares ``x_{k+1}`` with ``x_k``.
    """
    method = "secant"
    try:
        func = resolve(f, engine)
    except EvalError as exc:
        return eval_failure(method, exc)
    x_prev, x = float(x0), float(x1)
    if x_prev == x:
        return failure(method, Status.DEGENERATE_SEEDS, "The two seeds must differ.")
    if tol <= 0 or maxiter < 1:
        return failure(method, Status.INVALID_INPUT, "tol must be positive and maxiter at least 1.")

    f_prev, fx = func(x_prev), func(x)
    if not is_finite(f_prev, fx):
        return failure(method, Status.NON_FINITE, "f is not finite at the seeds.")

    trace = Trace()
    err = math.inf
    for k in range(1, maxiter + 1):
        denom = fx - f_prev
        if abs(denom) < MACHINE_EPS:
            return RootResult(
                root=x,
                status=Status.ZERO_DENOMINATOR,
                message=f"f(x_k) - f(x_k-1) vanished at iteration {k}.",
                method=method,
                nit=k - 1,
                fun=fx,
                error=err,
                trace=trace,
            )
        x_next = x - fx * (x - x_prev) / denom
        f_next = func(x_next)
        if not is_finite(x_next, f_next):
            return RootResult(
                root=x,
                status=Status.NON_FINITE,
                message=f"Non-finite iterate at iteration {k}.",
                method=method,
                nit=k - 1,
                fun=fx,
                error=err,
                trace=trace,
            )
        err = relative_error_pct(x_next, x)
        trace.record(
            k, x_prev=x_prev, x=x, f_prev=f_prev, fx=fx, x_next=x_next, f_next=f_next, error=err
        )
        logger.debug("secant %d: x=%.12g f=%.3e err=%.3e", k, x_next, f_next, err)
        if err <= tol or f_next == 0.0:
            logger.info("secant converged to %.12g in %d iterations", x_next, k)
            return RootResult(
                root=x_next,
                status=Status.OK,
                message=f"Converged in {k} iterations",
                method=method,
                nit=k,
                fun=f_next,
                error=err,
                trace=trace,
            )
        x_prev, f_prev, x, fx = x, fx, x_next, f_next

    logger.warning("secant did not converge in %d iterations", maxiter)
    return RootResult(
        root=x,
        status=Status.NOT_CONVERGED,
        message=f"Did not converge in {maxiter} iterations.",
        method=method,
        nit=maxiter,
        fun=fx,
        error=err,
        trace=trace,
    )


__all__ = ["newton_raphson", "secant"]
