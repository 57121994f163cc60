"""Polynomial interpolation and least-squares line fitting."""

from .core import LagrangeResult, LinearFit, NewtonResult, check_distinct, validate_points
from .lagrange import lagrange
from .least_squares import least_squares_line
from .newton import divided_difference_table, newton_divided_differences
from .polynomial import NEGLIGIBLE, Polynomial

__all__ = [
    "LagrangeResult",
    "LinearFit",
    "NEGLIGIBLE",
    "NewtonResult",
    "Polynomial",
    "check_distinct",
    "divided_difference_table",
    "lagrange",
    "least_squares_line",
    "newton_divided_differences",
    "validate_points",
]
