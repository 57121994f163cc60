"""Steepest descent / ascent with Armijo backtracking."""

from __future__ import annotations

from typing import Optional, Sequence, Union

import numpy as np

from ..core import Status, Trace, as_vector
from ..expr import EvalError, ExpressionEngine, FunctionLike
from ..logging import get_logger
from .core import Gradient, OptimizeResult, build_problem
from .line_search import backtracking_armijo

logger = get_logger(__name__)


def _step_error(x: np.ndarray, x_new: np.ndarray) -> float:
    """Relative step size in percent, ``||dx|| / max(1, ||x_new||) * 100``."""
    return float(np.linalg.norm(x_new - x) / max(1.0, float(np.linalg.norm(x_new))) * 100.0)


def gradient_method(
    f: FunctionLike,
    x0,
    grad: Union[Gradient, Sequence[str], None] = None,
    maximize: bool = False,
    tol: float = 0.01,
    grad_tol: float = 1e-12,
    maxiter: int = 200,
    variables: Sequence[str] = ("x", "y"),
    engine: Optional[ExpressionEngine] = None,
) -> OptimizeResult:
    """
    Gradient descent (or ascent with ``maximize=True``) with Armijo steps.

    ``f`` is an expression in ``variables`` or a callable on a vector. Each
    iteration moves along ``-grad f`` (``+grad f`` when maximizing) with the
    step length chosen by :func:`backtracking_armijo` (``rho=0.5``,
    ``c=1e-4``). The run stops at a stationary point (``||grad f|| < grad_tol``),
    when the relative step error drops to ``tol`` percent, or after
    ``maxiter`` iterations (``NOT_CONVERGED``).

    Example:
        >>> res = gradient_method("(x - 1)^2 + (y + 2)^2", [0.0, 0.0])
        >>> [round(v, 6) for v in res.x]
        [1.0, -2.0]
    """
    method = "gradient-ascent" if maximize else "gradient-descent"
    trace = Trace()
    try:
        problem = build_problem(f, grad, variables=variables, engine=engine)
        x = as_vector(x0, problem.dim)
    except EvalError as exc:
        return OptimizeResult(None, None, Status.EVAL_ERROR, str(exc), method, trace=trace)
    except ValueError as exc:
        return OptimizeResult(None, None, Status.INVALID_INPUT, str(exc), method, trace=trace)
    if tol <= 0 or grad_tol <= 0 or maxiter < 1:
        return OptimizeResult(
            None,
            None,
            Status.INVALID_INPUT,
            "tol and grad_tol must be positive and maxiter at least 1.",
            method,
            trace=trace,
        )

    fx = problem.fun(x)
    nfev = 1
    if not np.isfinite(fx):
        return OptimizeResult(
            x, fx, Status.NON_FINITE, "Objective is not finite at the starting point.", method
        )

    grad_norm = None
    err = None
    for k in range(maxiter):
        g = problem.grad(x)
        grad_norm = float(np.linalg.norm(g))
        if not np.isfinite(grad_norm):
            return OptimizeResult(
                x,
                fx,
                Status.NON_FINITE,
                f"Gradient is not finite at iteration {k}.",
                method,
                nit=k,
                grad_norm=grad_norm,
                error=err,
                nfev=nfev,
                trace=trace,
            )
        if grad_norm < grad_tol:
            logger.info("%s: stationary point reached after %d iterations", method, k)
            return OptimizeResult(
                x,
                fx,
                Status.OK,
                "Gradient vanished: stationary point reached.",
                method,
                nit=k,
                grad_norm=grad_norm,
                error=err,
                nfev=nfev,
                trace=trace,
            )

        direction = g if maximize else -g
        alpha, ls_evals = backtracking_armijo(problem.fun, x, direction, g, maximize=maximize)
        nfev += ls_evals + 1
        x_new = x + alpha * direction
        f_new = problem.fun(x_new)
        nfev += 1
        if not np.isfinite(f_new):
            return OptimizeResult(
                x,
                fx,
                Status.NON_FINITE,
                f"Line search produced a non-finite value at iteration {k}.",
                method,
                nit=k,
                grad_norm=grad_norm,
                error=err,
                nfev=nfev,
                trace=trace,
            )
        err = _step_error(x, x_new)
        trace.record(
            k,
            x=x,
            f=fx,
            grad=g,
            grad_norm=grad_norm,
            direction=direction,
            alpha=alpha,
            x_next=x_new,
            f_next=f_new,
            error=err,
        )
        logger.debug("%s %d: f=%.6g alpha=%.3e err=%.3e", method, k, f_new, alpha, err)
        x, fx = x_new, f_new
        if err <= tol:
            logger.info("%s converged in %d iterations", method, k + 1)
            return OptimizeResult(
                x,
                fx,
                Status.OK,
                f"Step error below {tol}% after {k + 1} iterations.",
                method,
                nit=k + 1,
                grad_norm=grad_norm,
                error=err,
                nfev=nfev,
                trace=trace,
            )

    logger.warning("%s did not converge in %d iterations", method, maxiter)
    return OptimizeResult(
        x,
        fx,
        Status.NOT_CONVERGED,
        f"Did not converge in {maxiter} iterations.",
        method,
        nit=maxiter,
        grad_norm=grad_norm,
        error=err,
        nfev=nfev,
        trace=trace,
    )


__all__ = ["gradient_method"]
