"""Explicit solvers for scalar initial-value problems ``y' = f(x, y)``."""

from .core import ODEResult
from .explicit import ARRIVAL_RTOL, euler, euler_step, heun, heun_step, midpoint, midpoint_step

__all__ = [
    "ARRIVAL_RTOL",
    "ODEResult",
    "euler",
    "euler_step",
    "heun",
    "heun_step",
    "midpoint",
    "midpoint_step",
]
