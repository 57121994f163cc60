"""
Explicit one-step methods: Euler, Heun and midpoint (RK2).

The three methods share one driver; each supplies a step function returning
the next ``y`` and the intermediate slopes it used. The mesh advances by
``min(h, x_final - x)`` so the last step lands exactly on ``x_final``.

Example:
    >>> from numlab.ode import heun
    >>> res = heun("x + y", 0.0, 1.0, 0.1, 1.0)
    >>> res.nit, round(res.y_final, 4)
    (10, 3.4282)
"""

from __future__ import annotations

import math
from typing import Callable

import numpy as np

from ..config import DEFAULT_CONFIG
from ..core import SolverError, Status, Trace
from ..expr import (
    BivariateFunction,
    EvalError,
    ExpressionEngine,
    FunctionLike,
    bivariate_function,
)
from ..logging import get_logger
from .core import ODEResult

logger = get_logger(__name__)

# A remaining distance at or below ARRIVAL_RTOL * h counts as having reached x_final.
ARRIVAL_RTOL = 1e-12

Step = Callable[[BivariateFunction, float, float, float], tuple[float, dict[str, float]]]


def _slope(f: BivariateFunction, x: float, y: float) -> float:
    value = f(x, y)
    if math.isnan(value):
        raise SolverError(
            Status.EVAL_ERROR, f"f could not be evaluated at x = {x:g}, y = {y:g}.", x=x, y=y
        )
    return value


def euler_step(
    f: BivariateFunction, x: float, y: float, h: float
) -> tuple[float, dict[str, float]]:
    """``y + h f(x, y)``."""
    k1 = _slope(f, x, y)
    return y + h * k1, {"k1": k1}


def heun_step(
    f: BivariateFunction, x: float, y: float, h: float
) -> tuple[float, dict[str, float]]:
    """Euler predictor, trapezoidal corrector."""
    k1 = _slope(f, x, y)
    predictor = y + h * k1
    k2 = _slope(f, x + h, predictor)
    return y + 0.5 * h * (k1 + k2), {"k1": k1, "k2": k2, "predictor": predictor}


def midpoint_step(
    f: BivariateFunction, x: float, y: float, h: float
) -> tuple[float, dict[str, float]]:
    """Slope taken at the half step ``(x + h/2, y + h/2 k1)``."""
    k1 = _slope(f, x, y)
    predictor = y + 0.5 * h * k1
    k2 = _slope(f, x + 0.5 * h, predictor)
    return y + h * k2, {"k1": k1, "k2": k2, "predictor": predictor}


def _integrate(
    method: str,
    step: Step,
    f: FunctionLike,
    x0: float,
    y0: float,
    h: float,
    x_final: float,
    max_steps: int,
    engine: ExpressionEngine | None,
) -> ODEResult:
    def invalid(message: str, status: Status = Status.INVALID_INPUT) -> ODEResult:
        return ODEResult(None, None, status, message, method)

    try:
        x0, y0, h, x_final = float(x0), float(y0), float(h), float(x_final)
    except (TypeError, ValueError):
        return invalid("x0, y0, h and x_final must be numbers.")
    if not all(math.isfinite(v) for v in (x0, y0, h, x_final)):
        return invalid("x0, y0, h and x_final must be finite.")
    if h <= 0:
        return invalid("Step size h must be positive.")
    if x_final <= x0:
        return invalid("x_final must be greater than x0.")
    if max_steps < 1:
        return invalid("max_steps must be at least 1.")
    try:
        func = bivariate_function(f, engine)
    except EvalError as exc:
        return invalid(str(exc), Status.EVAL_ERROR)

    xs, ys = [x0], [y0]
    trace = Trace()
    trace.record(0, x=x0, y=y0)
    x, y = x0, y0
    nit = 0

    def partial(status: Status, message: str, **detail: object) -> ODEResult:
        return ODEResult(
            np.array(xs),
            np.array(ys),
            status,
            message,
            method,
            nit=nit,
            detail=dict(detail),
            trace=trace,
        )

    while x_final - x > ARRIVAL_RTOL * h:
        if nit >= max_steps:
            logger.warning("%s: step budget of %d exhausted at x = %g", method, max_steps, x)
            return partial(
                Status.MAX_ITER,
                f"Step budget of {max_steps} exhausted at x = {x:g} before reaching {x_final:g}.",
                x=x,
            )
        remaining = x_final - x
        size = min(h, remaining)
        try:
            y_next, slopes = step(func, x, y, size)
        except SolverError as exc:
            logger.warning("%s: %s", method, exc.message)
            return partial(exc.status, exc.message, **exc.detail)
        x_next = x + size
        if x_final - x_next <= ARRIVAL_RTOL * h:
            x_next = x_final
        nit += 1
        if not (math.isfinite(y_next) and all(math.isfinite(v) for v in slopes.values())):
            trace.record(nit, x=x_next, y=y_next, **slopes)
            logger.warning("%s: solution became non-finite at x = %g", method, x_next)
            return partial(
                Status.NON_FINITE, f"Solution became non-finite at x = {x_next:g}.", x=x_next
            )
        x, y = x_next, y_next
        xs.append(x)
        ys.append(y)
        trace.record(nit, x=x, y=y, **slopes)

    logger.info("%s: reached x = %g in %d steps, y = %.6g", method, x, nit, y)
    return ODEResult(
        xs=np.array(xs),
        ys=np.array(ys),
        status=Status.OK,
        message=f"Integrated to x = {x:g} in {nit} steps",
        method=method,
        nit=nit,
        trace=trace,
    )


def euler(
    f: FunctionLike,
    x0: float,
    y0: float,
    h: float,
    x_final: float,
    max_steps: int = DEFAULT_CONFIG.ode_max_steps,
    engine: ExpressionEngine | None = None,
) -> ODEResult:
    """
    Integrate ``y' = f(x, y)`` from ``(x0, y0)`` to ``x_final`` with Euler's method.

    ``f`` is an expression in ``x`` and ``y`` or a callable ``f(x, y)``.
    Fails with ``INVALID_INPUT`` unless ``h > 0`` and ``x_final > x0``,
    ``EVAL_ERROR`` when ``f`` cannot be parsed or evaluated, and ``MAX_ITER``
    when more than ``max_steps`` steps would be needed.
    """
    return _integrate("euler", euler_step, f, x0, y0, h, x_final, max_steps, engine)


def heun(
    f: FunctionLike,
    x0: float,
    y0: float,
    h: float,
    x_final: float,
    max_steps: int = DEFAULT_CONFIG.ode_max_steps,
    engine: ExpressionEngine | None = None,
) -> ODEResult:
    """Heun's predictor-corrector method; same contract as :func:`euler`."""
    return _integrate("heun", heun_step, f, x0, y0, h, x_final, max_steps, engine)


def midpoint(
    f: FunctionLike,
    x0: float,
    y0: float,
    h: float,
    x_final: float,
    max_steps: int = DEFAULT_CONFIG.ode_max_steps,
    engine: ExpressionEngine | None = None,
) -> ODEResult:
    """Midpoint (second-order Runge-Kutta) method; same contract as :func:`euler`."""
    return _integrate("midpoint", midpoint_step, f, x0, y0, h, x_final, max_steps, engine)


__all__ = [
    "ARRIVAL_RTOL",
    "euler",
    "euler_step",
    "heun",
    "heun_step",
    "midpoint",
    "midpoint_step",
]
