"""Capability interface for expression evaluation and differentiation.

Solvers never depend on a concrete expression library. They accept either a
plain Python callable or an expression string; strings are compiled through an
:class:`ExpressionEngine` (by default :class:`~numlab.expr.sympy_engine.SympyEngine`).
"""

from __future__ import annotations

import math
from typing import Callable, Mapping, Protocol, Sequence, Union, runtime_checkable

from .finite_diff import approx_derivative

ScalarFunction = Callable[[float], float]
BivariateFunction = Callable[[float, float], float]
FunctionLike = Union[str, Callable[..., float]]


class EvalError(ValueError):
    """Raised for malformed expressions or undefined symbols."""


@runtime_checkable
class ExpressionEngine(Protocol):
    """Evaluate and differentiate expression strings."""

    def evaluate(self, expression: str, bindings: Mapping[str, float]) -> float:
        ...

    def derivative(self, expression: str, variable: str) -> str:
        ...

    def compile(self, expression: str, variables: Sequence[str]) -> Callable[..., float]:
        ...


_default_engine: ExpressionEngine | None = None


def default_engine() -> ExpressionEngine:
    """Return the shared stateless sympy-backed engine."""
    global _default_engine
    if _default_engine is None:
        from .sympy_engine import SympyEngine

        _default_engine = SympyEngine()
    return _default_engine


def guard_callable(fun: Callable[..., float]) -> Callable[..., float]:
    """Wrap a user callable so arithmetic and domain errors evaluate to NaN."""

    def wrapper(*args: float) -> float:
        try:
            return float(fun(*args))
        except (ArithmeticError, ValueError):
            return math.nan

    return wrapper


def scalar_function(
    f: FunctionLike,
    engine: ExpressionEngine | None = None,
    variable: str = "x",
) -> ScalarFunction:
    """Turn an expression in ``variable`` or a callable into ``f(x) -> float``."""
    if isinstance(f, str):
        return (engine or default_engine()).compile(f, [variable])
    if callable(f):
        return guard_callable(f)
    raise EvalError(f"Expected an expression string or callable, got {type(f).__name__}.")


def bivariate_function(
    f: FunctionLike,
    engine: ExpressionEngine | None = None,
    variables: tuple[str, str] = ("x", "y"),
) -> BivariateFunction:
    """Turn an expression in two variables or a callable into ``f(x, y) -> float``."""
    if isinstance(f, str):
        return (engine or default_engine()).compile(f, list(variables))
    if callable(f):
        return guard_callable(f)
    raise EvalError(f"Expected an expression string or callable, got {type(f).__name__}.")


def symbolic_derivative(
    f: str,
    variable: str = "x",
    order: int = 1,
    engine: ExpressionEngine | None = None,
) -> str:
    """Differentiate ``f`` ``order`` times with respect to ``variable``."""
    engine = engine or default_engine()
    expression = f
    for _ in range(order):
        expression = engine.derivative(expression, variable)
    return expression


def derivative_function(
    f: FunctionLike,
    df: FunctionLike | None = None,
    engine: ExpressionEngine | None = None,
    variable: str = "x",
    order: int = 1,
) -> ScalarFunction:
    """
    Build the ``order``-th derivative of ``f`` as a scalar callable.

    An explicit ``df`` wins; expression strings are differentiated
    symbolically; plain callables fall back to a central difference.
    """
    if df is not None:
        return scalar_function(df, engine, variable)
    if isinstance(f, str):
        return scalar_function(symbolic_derivative(f, variable, order, engine), engine, variable)
    func = scalar_function(f, engine, variable)

    def central(x: float) -> float:
        return approx_derivative(func, x, order=order)

    return central


__all__ = [
    "BivariateFunction",
    "EvalError",
    "ExpressionEngine",
    "FunctionLike",
    "ScalarFunction",
    "bivariate_function",
    "default_engine",
    "derivative_function",
    "guard_callable",
    "scalar_function",
    "symbolic_derivative",
]
