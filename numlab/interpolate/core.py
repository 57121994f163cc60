"""Input validation and result containers for interpolation and fitting."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

import numpy as np

from ..core import ResultMixin, SolverError, Status, Trace, as_vector
from .polynomial import Polynomial


def validate_points(xs, ys, min_points: int = 2) -> tuple[np.ndarray, np.ndarray]:
    """
    Copy and check a data set ``(xs, ys)``.

    Raises:
        ValueError: Unequal lengths, too few points or non-finite values.
    """
    x = as_vector(xs)
    y = as_vector(ys)
    if x.shape != y.shape:
        raise ValueError(f"xs and ys must have equal length, got {x.size} and {y.size}.")
    if x.size < min_points:
        raise ValueError(f"At least {min_points} points are required, got {x.size}.")
    return x, y


def check_distinct(x: np.ndarray) -> None:
    """Raise ``DUPLICATE_ABSCISSAS`` when two abscissas coincide."""
    values, counts = np.unique(x, return_counts=True)
    if np.any(counts > 1):
        dup = float(values[np.argmax(counts > 1)])
        raise SolverError(
            Status.DUPLICATE_ABSCISSAS,
            f"Abscissas must be pairwise distinct; x = {dup:g} is repeated.",
            x=dup,
        )


@dataclass
class LagrangeResult(ResultMixin):
    """
    Lagrange interpolating polynomial.

    ``basis[i]`` is ``L_i(x)``, equal to 1 at ``xs[i]`` and 0 at every other
    node, and ``polynomial = sum(ys[i] * basis[i])``.
    """

    polynomial: Optional[Polynomial]
    status: Status
    message: str
    basis: list[Polynomial] = field(default_factory=list)
    xs: Optional[np.ndarray] = None
    ys: Optional[np.ndarray] = None
    detail: dict[str, Any] = field(default_factory=dict)
    trace: Trace = field(default_factory=Trace)

    def __call__(self, x):
        if self.polynomial is None:
            raise ValueError(f"Interpolation failed: {self.message}")
        return self.polynomial(x)


@dataclass
class NewtonResult(ResultMixin):
    """
    Newton divided-difference interpolant.

    Attributes:
        coefficients: ``f[x0], f[x0,x1], ...`` (first row of the table).
        nodes: Abscissas sorted in increasing order.
        table: Divided-difference table; entry ``[i, j]`` is
            ``f[x_i, ..., x_{i+j}]`` (NaN below the anti-diagonal).
    """

    coefficients: Optional[np.ndarray]
    status: Status
    message: str
    nodes: Optional[np.ndarray] = None
    values: Optional[np.ndarray] = None
    table: Optional[np.ndarray] = None
    detail: dict[str, Any] = field(default_factory=dict)
    trace: Trace = field(default_factory=Trace)

    def _require(self) -> tuple[np.ndarray, np.ndarray]:
        if self.coefficients is None or self.nodes is None:
            raise ValueError(f"Interpolation failed: {self.message}")
        return self.coefficients, self.nodes

    def __call__(self, x):
        """Nested multiplication ``a0 + (x-x0)(a1 + (x-x1)(a2 + ...))``."""
        a, nodes = self._require()
        x = np.asarray(x, dtype=float)
        result = np.zeros_like(x) + a[-1]
        for k in range(a.size - 2, -1, -1):
            result = result * (x - nodes[k]) + a[k]
        return float(result) if np.ndim(result) == 0 else result

    def to_standard(self) -> Polynomial:
        """Expand the Newton form into monomial coefficients."""
        a, nodes = self._require()
        poly = Polynomial.constant(a[-1])
        for k in range(a.size - 2, -1, -1):
            poly = poly * Polynomial.linear_factor(nodes[k]) + a[k]
        return poly

    def to_string(self, variable: str = "x", decimals: int = 6) -> str:
        """Newton form, e.g. ``1.0 + 2.0·(x - 0.0) - (x - 0.0)·(x - 1.0)``."""
        a, nodes = self._require()
        eps = 10.0 ** (-decimals)
        parts: list[str] = []
        for k, ak in enumerate(a):
            ak = round(float(ak), decimals)
            if abs(ak) < eps:
                continue
            if k == 0:
                parts.append(f"{ak:.{decimals}f}")
                continue
            factors = "·".join(f"({variable} - {nodes[j]:.{decimals}f})" for j in range(k))
            mag = abs(ak)
            coef = "" if abs(mag - 1.0) < eps else f"{mag:.{decimals}f}·"
            parts.append(f"{'+' if ak > 0 else '-'} {coef}{factors}")
        if not parts:
            return "0"
        text = " ".join(parts)
        if text.startswith("+ "):
            text = text[2:]
        elif text.startswith("- "):
            text = "-" + text[2:]
        return text


@dataclass
class LinearFit(ResultMixin):
    """Least-squares line ``y = intercept + slope * x`` with the sums used."""

    intercept: Optional[float]
    slope: Optional[float]
    status: Status
    message: str
    sums: dict[str, float] = field(default_factory=dict)
    detail: dict[str, Any] = field(default_factory=dict)
    trace: Trace = field(default_factory=Trace)

    def predict(self, x):
        if self.slope is None or self.intercept is None:
            raise ValueError(f"Fit failed: {self.message}")
        y = self.intercept + self.slope * np.asarray(x, dtype=float)
        return float(y) if np.ndim(y) == 0 else y

    @property
    def polynomial(self) -> Optional[Polynomial]:
        if self.slope is None or self.intercept is None:
            return None
        return Polynomial([self.intercept, self.slope])


__all__ = [
    "LagrangeResult",
    "LinearFit",
    "NewtonResult",
    "check_distinct",
    "validate_points",
]
