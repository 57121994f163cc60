"""Expression evaluation capability and its sympy-backed engine.

Example
-------
>>> from numlab.expr import SympyEngine
>>> engine = SympyEngine()
>>> engine.evaluate("x^2 - 2", {"x": 3.0})
7.0
>>> engine.derivative("x^3", "x")
'3*x**2'
"""

from .core import (
    BivariateFunction,
    EvalError,
    ExpressionEngine,
    FunctionLike,
    ScalarFunction,
    bivariate_function,
    default_engine,
    derivative_function,
    guard_callable,
    scalar_function,
    symbolic_derivative,
)
from .finite_diff import approx_derivative, approx_grad
from .rearrange import RELAXATION_FACTORS, Rearrangement, fixed_point_candidates
from .sympy_engine import SympyEngine, normalize

__all__ = [
    "BivariateFunction",
    "EvalError",
    "ExpressionEngine",
    "FunctionLike",
    "RELAXATION_FACTORS",
    "Rearrangement",
    "ScalarFunction",
    "SympyEngine",
    "approx_derivative",
    "approx_grad",
    "bivariate_function",
    "default_engine",
    "derivative_function",
    "fixed_point_candidates",
    "guard_callable",
    "normalize",
    "scalar_function",
    "symbolic_derivative",
]
