"""
Dense linear systems: direct elimination, factorizations and stationary
iterative methods.

Example:
    >>> from numlab.linalg import lu_solve, gauss_seidel
    >>> lu_solve([[4.0, 1.0, 1.0], [1.0, 3.0, 2.0]]).x
    array([0.09090909, 0.63636364])
    >>> gauss_seidel([[4.0, 1.0], [1.0, 3.0]], [1.0, 2.0]).success
    True
"""

from .cholesky import cholesky_decomposition, cholesky_solve
from .core import CholeskyResult, IterativeResult, LinearSystemResult, LUResult
from .gauss import gauss_elimination, gauss_jordan
from .iterative import gauss_seidel, gauss_seidel_step, jacobi, jacobi_step
from .lu import lu_decomposition, lu_solve
from .utils import (
    back_substitution,
    forward_substitution,
    is_diagonally_dominant,
    is_symmetric,
)

__all__ = [
    "CholeskyResult",
    "IterativeResult",
    "LUResult",
    "LinearSystemResult",
    "back_substitution",
    "cholesky_decomposition",
    "cholesky_solve",
    "forward_substitution",
    "gauss_elimination",
    "gauss_jordan",
    "gauss_seidel",
    "gauss_seidel_step",
    "is_diagonally_dominant",
    "is_symmetric",
    "jacobi",
    "jacobi_step",
    "lu_decomposition",
    "lu_solve",
]
