"""Error theory and normalized floating-point systems."""

from .error import ErrorReport, approximation_error, round_significant
from .floating_point import MODES, FloatingPointSystem, FloatRepresentation

__all__ = [
    "ErrorReport",
    "FloatRepresentation",
    "FloatingPointSystem",
    "MODES",
    "approximation_error",
    "round_significant",
]
