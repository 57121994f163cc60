"""Unconstrained optimization: Armijo gradient methods and Newton critical points.

Example
-------
>>> from numlab.optimize import gradient_method, newton_critical_point
>>> res = gradient_method("-(x - 1)^2 - (y - 3)^2", [0.0, 0.0], maximize=True)
>>> [round(v, 4) for v in res.x]
[1.0, 3.0]
>>> newton_critical_point("x^3 - 3*x", 2.0).classification
'minimum'
"""

from .core import OptimizeResult, Problem, build_problem
from .gradient import gradient_method
from .line_search import backtracking_armijo
from .newton import classify_critical_point, newton_critical_point

__all__ = [
    "OptimizeResult",
    "Problem",
    "backtracking_armijo",
    "build_problem",
    "classify_critical_point",
    "gradient_method",
    "newton_critical_point",
]
