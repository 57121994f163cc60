"""
Absolute, relative and percentage approximation error.

Example:
    >>> from numlab.analysis import approximation_error
    >>> rep = approximation_error(3.141592653589793, 3.14, 3)
    >>> rep.rounded["percent"]
    0.0507
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Optional

from ..core import ResultMixin, Status
from ..logging import get_logger

logger = get_logger(__name__)


def round_significant(value: float, figures: int) -> float:
    """Round ``value`` to ``figures`` significant figures (0 stays 0)."""
    if figures < 1:
        raise ValueError("figures must be at least 1")
    if value == 0 or not math.isfinite(value):
        return value
    return float(f"{value:.{figures - 1}e}")


@dataclass
class ErrorReport(ResultMixin):
    """
    Errors of ``approx_value`` against ``true_value``.

    Attributes:
        absolute: ``Et = v - va`` (signed).
        relative: ``Et / v``.
        percent: ``100 * Et / v``.
        rounded: The three errors rounded to ``significant_figures``.
    """

    status: Status
    message: str
    true_value: Optional[float] = None
    approx_value: Optional[float] = None
    significant_figures: Optional[int] = None
    absolute: Optional[float] = None
    relative: Optional[float] = None
    percent: Optional[float] = None
    rounded: dict[str, float] = field(default_factory=dict)
    detail: dict[str, Any] = field(default_factory=dict)


def approximation_error(
    true_value: float, approx_value: float, significant_figures: int = 4
) -> ErrorReport:
    """
    Compare an approximation with the true value.

    Returns ``INVALID_INPUT`` when either value is not a finite number, when
    ``true_value`` is zero (the relative error is undefined) or when
    ``significant_figures`` is not a positive integer.
    """
    if isinstance(significant_figures, bool) or not isinstance(significant_figures, int):
        return ErrorReport(Status.INVALID_INPUT, "significant_figures must be an integer.")
    if significant_figures < 1:
        return ErrorReport(Status.INVALID_INPUT, "significant_figures must be at least 1.")
    try:
        v, va = float(true_value), float(approx_value)
    except (TypeError, ValueError):
        return ErrorReport(Status.INVALID_INPUT, "Values must be numbers.")
    if not (math.isfinite(v) and math.isfinite(va)):
        return ErrorReport(Status.INVALID_INPUT, "Values must be finite.")
    if v == 0:
        return ErrorReport(
            Status.INVALID_INPUT, "The true value is zero; the relative error is undefined."
        )

    absolute = v - va
    relative = absolute / v
    percent = relative * 100.0
    rounded = {
        "absolute": round_significant(absolute, significant_figures),
        "relative": round_significant(relative, significant_figures),
        "percent": round_significant(percent, significant_figures),
    }
    logger.debug("error: Et=%g Er=%g (%g%%)", absolute, relative, percent)
    return ErrorReport(
        status=Status.OK,
        message="Errors computed",
        true_value=v,
        approx_value=va,
        significant_figures=significant_figures,
        absolute=absolute,
        relative=relative,
        percent=percent,
        rounded=rounded,
    )


__all__ = ["ErrorReport", "approximation_error", "round_significant"]
