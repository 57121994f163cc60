"""Linear programming with the two-phase tableau Simplex method."""

from .core import SENSES, Constraint, LinearProgram, PivotStep, SimplexResult
from .simplex import simplex

__all__ = ["Constraint", "LinearProgram", "PivotStep", "SENSES", "SimplexResult", "simplex"]
