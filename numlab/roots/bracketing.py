"""
False position (regula falsi) and integer-grid bracket scanning.

Example:
    >>> from numlab.roots import false_position
    >>> res = false_position("x^2 - 2", 1, 2)
    >>> round(res.root, 6)
    1.414214
"""

from __future__ import annotations

import math
from typing import Optional

from ..config import DEFAULT_CONFIG
from ..core import Status, Trace, is_finite, relative_error_pct
from ..expr import EvalError, ExpressionEngine, FunctionLike
from ..logging import get_logger
from .core import RootResult, eval_failure, failure, resolve

logger = get_logger(__name__)


def find_brackets(
    f: FunctionLike,
    start: float = -100,
    stop: float = 100,
    step: float = 1,
    engine: ExpressionEngine | None = None,
) -> list[tuple[float, float]]:
    """
    Scan ``[start, stop]`` on a grid of spacing ``step`` for sign changes.

    Returns every ``(a, a + step)`` with ``f(a) * f(a + step) < 0``, in
    increasing order. Grid points where ``f`` is not finite are skipped.

    Raises:
        ValueError: If ``step`` is not positive or ``start >= stop``.
        EvalError: If ``f`` is a malformed expression.
    """
    if step <= 0:
        raise ValueError("step must be positive")
    if start >= stop:
        raise ValueError("start must be smaller than stop")
    func = resolve(f, engine)
    count = int(math.floor((stop - start) / step + 1e-9))
    grid = [start + i * step for i in range(count + 1)]
    values = [func(x) for x in grid]

    brackets = []
    for (a, fa), (b, fb) in zip(zip(grid, values), zip(grid[1:], values[1:])):
        if is_finite(fa, fb) and fa * fb < 0:
            brackets.append((float(a), float(b)))
    return brackets


def false_position(
    f: FunctionLike,
    a: Optional[float] = None,
    b: Optional[float] = None,
    tol: float = DEFAULT_CONFIG.error_pct,
    maxiter: int = DEFAULT_CONFIG.maxiter,
    engine: ExpressionEngine | None = None,
) -> RootResult:
    """
    Find a root of ``f`` in ``[a, b]`` by the method of false position.

    Each iterate ``x_k = (a f(b) - b f(a)) / (f(b) - f(a))`` replaces the
    endpoint whose value has the same sign as ``f(x_k)``. Iteration stops
    when the relative percentage error drops to ``tol`` or when ``f(x_k)`` is
    exactly zero.

    When ``a`` and ``b`` are both omitted, the first bracket returned by
    :func:`find_brackets` on ``[-100, 100]`` is used.
    """
    method = "false-position"
    try:
        func = resolve(f, engine)
    except EvalError as exc:
        return eval_failure(method, exc)

    detail = {}
    if a is None and b is None:
        try:
            brackets = find_brackets(func)
        except ValueError as exc:
            return failure(method, Status.INVALID_INPUT, str(exc))
        if not brackets:
            return failure(
                method, Status.NO_BRACKET_FOUND, "No sign change found on [-100, 100]."
            )
        a, b = brackets[0]
        detail["bracket"] = (a, b)
        logger.debug("false position: using scanned bracket [%g, %g]", a, b)
    elif a is None or b is None:
        return failure(method, Status.INVALID_INPUT, "Provide both bracket endpoints or neither.")

    a, b = float(a), float(b)
    if not a < b:
        return failure(method, Status.INVALID_INPUT, f"Require a < b, got a={a}, b={b}.")
    if tol <= 0 or maxiter < 1:
        return failure(method, Status.INVALID_INPUT, "tol must be positive and maxiter at least 1.")

    fa, fb = func(a), func(b)
    if not is_finite(fa, fb):
        return failure(method, Status.NON_FINITE, "f is not finite at the bracket endpoints.")
    if fa * fb >= 0:
        return failure(
            method,
            Status.NO_SIGN_CHANGE,
            f"f(a) and f(b) must have opposite signs (f(a)={fa:.6g}, f(b)={fb:.6g}).",
        )

    trace = Trace()
    x_old = None
    x_k, fx, err = math.nan, math.nan, math.inf
    for k in range(1, maxiter + 1):
        x_k = (a * fb - b * fa) / (fb - fa)
        fx = func(x_k)
        if not is_finite(x_k, fx):
            return failure(
                method,
                Status.NON_FINITE,
                f"Non-finite value at iteration {k}.",
                nit=k - 1,
                detail=detail,
                trace=trace,
            )
        err = relative_error_pct(x_k, x_old)
        trace.record(k, a=a, b=b, fa=fa, fb=fb, x=x_k, fx=fx, error=err)
        logger.debug("false position %d: x=%.12g f=%.3e err=%.3e", k, x_k, fx, err)

        if fx == 0.0 or err <= tol:
            logger.info("false position converged to %.12g in %d iterations", x_k, k)
            return RootResult(
                root=x_k,
                status=Status.OK,
                message=f"Converged in {k} iterations",
                method=method,
                nit=k,
                fun=fx,
                error=err,
                detail=detail,
                trace=trace,
            )
        if fa * fx < 0:
            b, fb = x_k, fx
        else:
            a, fa = x_k, fx
        x_old = x_k

    logger.warning("false position did not converge in %d iterations", maxiter)
    return RootResult(
        root=x_k,
        status=Status.NOT_CONVERGED,
        message=f"Did not converge in {maxiter} iterations.",
        method=method,
        nit=maxiter,
        fun=fx,
        error=err,
        detail=detail,
        trace=trace,
    )


__all__ = ["false_position", "find_brackets"]
