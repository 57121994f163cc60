"""Result container for initial-value problem solvers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

import numpy as np

from ..core import ResultMixin, Status, Trace


@dataclass
class ODEResult(ResultMixin):
    """
    Discrete solution of ``y' = f(x, y)``, ``y(x0) = y0``.

    Attributes:
        xs: Mesh points, starting at ``x0``; the last equals ``x_final`` on success.
        ys: Approximations ``y_i`` at each mesh point.
        status: ``OK``, ``INVALID_INPUT``, ``EVAL_ERROR``, ``NON_FINITE`` or
            ``MAX_ITER``. On failure ``xs``/``ys`` hold the points computed
            before the method stopped.
        method: ``"euler"``, ``"heun"`` or ``"midpoint"``.
        nit: Number of steps taken.
        trace: One record per step with ``x``, ``y`` and the method's slopes.
    """

    xs: Optional[np.ndarray]
    ys: Optional[np.ndarray]
    status: Status
    message: str
    method: str
    nit: int = 0
    detail: dict[str, Any] = field(default_factory=dict)
    trace: Trace = field(default_factory=Trace)

    @property
    def x_final(self) -> Optional[float]:
        return None if self.xs is None or self.xs.size == 0 else float(self.xs[-1])

    @property
    def y_final(self) -> Optional[float]:
        return None if self.ys is None or self.ys.size == 0 else float(self.ys[-1])


__all__ = ["ODEResult"]
