"""Dense polynomials in monomial form, lowest power first."""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np

# Coefficients at or below this magnitude do not count towards the degree.
NEGLIGIBLE = 1e-12

Number = Union[int, float]


class Polynomial:
    """
    Polynomial ``c0 + c1 x + ... + cn x^n`` stored as a read-only array.

    Supports evaluation (Horner), addition, subtraction, multiplication by
    another polynomial or a scalar. Instances are immutable; every operation
    returns a new polynomial.

    Example:
        >>> p = Polynomial([1.0, 0.0, 2.0])
        >>> p(3.0)
        19.0
        >>> (p * Polynomial([-1.0, 1.0])).to_string(decimals=1)
        '-1.0 + x - 2.0·x^2 + 2.0·x^3'
    """

    __slots__ = ("_coeffs",)

    def __init__(self, coefficients: Sequence[float]) -> None:
        coeffs = np.array(coefficients, dtype=float).reshape(-1)
        if coeffs.size == 0:
            raise ValueError("A polynomial needs at least one coefficient")
        if not np.all(np.isfinite(coeffs)):
            raise ValueError("Polynomial coefficients must be finite")
        coeffs.setflags(write=False)
        self._coeffs = coeffs

    @classmethod
    def constant(cls, value: float) -> "Polynomial":
        return cls([value])

    @classmethod
    def linear_factor(cls, root: float) -> "Polynomial":
        """The monic polynomial ``x - root``."""
        return cls([-float(root), 1.0])

    @property
    def coefficients(self) -> np.ndarray:
        return self._coeffs

    @property
    def degree(self) -> int:
        """Highest power with a coefficient above :data:`NEGLIGIBLE` (0 for the zero polynomial)."""
        significant = np.flatnonzero(np.abs(self._coeffs) > NEGLIGIBLE)
        return int(significant[-1]) if significant.size else 0

    def trim(self, tol: float = NEGLIGIBLE) -> "Polynomial":
        """Drop trailing coefficients with magnitude at most ``tol``."""
        significant = np.flatnonzero(np.abs(self._coeffs) > tol)
        if significant.size == 0:
            return Polynomial([0.0])
        return Polynomial(self._coeffs[: significant[-1] + 1])

    def __call__(self, x):
        """Evaluate with Horner's rule; accepts scalars or arrays."""
        x = np.asarray(x, dtype=float)
        result = np.zeros_like(x) + self._coeffs[-1]
        for c in self._coeffs[-2::-1]:
            result = result * x + c
        if np.ndim(result) == 0:
            return float(result)
        return result

    def _coerce(self, other: Union["Polynomial", Number]) -> "Polynomial":
        if isinstance(other, Polynomial):
            return other
        if isinstance(other, (int, float, np.integer, np.floating)):
            return Polynomial([float(other)])
        return NotImplemented

    def __add__(self, other: Union["Polynomial", Number]) -> "Polynomial":
        rhs = self._coerce(other)
        if rhs is NotImplemented:
            return NotImplemented
        size = max(self._coeffs.size, rhs._coeffs.size)
        total = np.zeros(size)
        total[: self._coeffs.size] += self._coeffs
        total[: rhs._coeffs.size] += rhs._coeffs
        return Polynomial(total)

    __radd__ = __add__

    def __neg__(self) -> "Polynomial":
        return Polynomial(-self._coeffs)

    def __sub__(self, other: Union["Polynomial", Number]) -> "Polynomial":
        rhs = self._coerce(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self + (-rhs)

    def __rsub__(self, other: Number) -> "Polynomial":
        return (-self) + other

    def __mul__(self, other: Union["Polynomial", Number]) -> "Polynomial":
        if isinstance(other, Polynomial):
            return Polynomial(np.convolve(self._coeffs, other._coeffs))
        if isinstance(other, (int, float, np.integer, np.floating)):
            return Polynomial(self._coeffs * float(other))
        return NotImplemented

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Polynomial):
            return NotImplemented
        a, b = self.trim(0.0)._coeffs, other.trim(0.0)._coeffs
        return a.shape == b.shape and bool(np.all(a == b))

    __hash__ = None  # type: ignore[assignment]

    def allclose(self, other: "Polynomial", atol: float = 1e-9) -> bool:
        """Coefficient-wise comparison after padding to a common length."""
        size = max(self._coeffs.size, other._coeffs.size)
        a = np.zeros(size)
        b = np.zeros(size)
        a[: self._coeffs.size] = self._coeffs
        b[: other._coeffs.size] = other._coeffs
        return bool(np.allclose(a, b, atol=atol))

    def to_string(self, variable: str = "x", decimals: int = 6) -> str:
        """Human-readable form, lowest power first; coefficients rounded to ``decimals``."""
        eps = 10.0 ** (-decimals)
        parts: list[tuple[str, str]] = []
        for k, c in enumerate(self._coeffs):
            c = round(float(c), decimals)
            if abs(c) < eps:
                continue
            mag = abs(c)
            if k == 0:
                coef = f"{mag:.{decimals}f}"
            else:
                coef = "" if abs(mag - 1.0) < eps else f"{mag:.{decimals}f}·"
            power = "" if k == 0 else variable if k == 1 else f"{variable}^{k}"
            parts.append(("+" if c > 0 else "-", f"{coef}{power}"))
        if not parts:
            return "0"
        sign, term = parts[0]
        text = term if sign == "+" else f"-{term}"
        for sign, term in parts[1:]:
            text += f" {sign} {term}"
        return text

    def __repr__(self) -> str:
        return f"Polynomial({self._coeffs.tolist()!r})"


__all__ = ["NEGLIGIBLE", "Polynomial"]
