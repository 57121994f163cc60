"""Scalar root-finding: bracketing, open and fixed-point methods."""

from .bracketing import false_position, find_brackets
from .core import RootResult
from .fixed_point import fixed_point, fixed_point_all
from .open_methods import newton_raphson, secant

__all__ = [
    "RootResult",
    "false_position",
    "find_brackets",
    "fixed_point",
    "fixed_point_all",
    "newton_raphson",
    "secant",
]
