"""
Normalized floating-point systems ``F(base, digits, min_exp, max_exp)``.

A nonzero element is ``+/- 0.d1 d2 ... dt x base^e`` with ``d1 != 0`` and
``min_exp <= e <= max_exp``.

Example:
    >>> from numlab.analysis import FloatingPointSystem
    >>> fps = FloatingPointSystem(base=10, digits=3, min_exp=-5, max_exp=5)
    >>> fps.cardinality
    19801
    >>> fps.represent(3.14159, mode="round").value
    3.14
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Optional

from ..core import ResultMixin, Status
from ..logging import get_logger

logger = get_logger(__name__)

MODES = ("chop", "round")

# Scaled mantissas this close to an integer are snapped to it before chopping.
_SNAP_RTOL = 1e-9


@dataclass
class FloatRepresentation(ResultMixin):
    """
    A real number stored in a :class:`FloatingPointSystem`.

    ``digits`` are the mantissa digits ``d1 .. dt`` in the system's base and
    ``value`` is the represented number. On ``OVERFLOW``/``UNDERFLOW`` only
    ``original`` and the status are set.
    """

    original: float
    status: Status
    message: str
    mode: str = "chop"
    value: Optional[float] = None
    sign: int = 1
    digits: tuple[int, ...] = ()
    exponent: Optional[int] = None
    abs_error: Optional[float] = None
    rel_error: Optional[float] = None
    detail: dict[str, Any] = field(default_factory=dict)

    def to_string(self, base: int = 10) -> str:
        """Positional form, e.g. ``-0.314 x 10^1``."""
        if self.value is None:
            return self.status.value
        if not self.digits:
            return "0"
        body = "".join(str(d) if d < 10 else f"[{d}]" for d in self.digits)
        sign = "-" if self.sign < 0 else ""
        return f"{sign}0.{body} x {base}^{self.exponent}"


@dataclass(frozen=True)
class FloatingPointSystem:
    """
    Floating-point system with base ``base``, ``digits`` mantissa digits and
    exponent range ``[min_exp, max_exp]``.
    """

    base: int
    digits: int
    min_exp: int
    max_exp: int

    def __post_init__(self) -> None:
        """Validate FloatingPointSystem invariants."""
        for name in ("base", "digits", "min_exp", "max_exp"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if self.base < 2:
            raise ValueError(f"base must be >= 2, got {self.base}")
        if self.digits < 1:
            raise ValueError(f"digits must be >= 1, got {self.digits}")
        if self.min_exp >= self.max_exp:
            raise ValueError(
                f"min_exp must be smaller than max_exp, got {self.min_exp} >= {self.max_exp}"
            )

    @property
    def notation(self) -> str:
        return f"F({self.base}, {self.digits}, {self.min_exp}, {self.max_exp})"

    @property
    def cardinality(self) -> int:
        """Number of elements, zero included: ``2 (b-1) (M-m+1) b^(t-1) + 1``."""
        b, t = self.base, self.digits
        return 2 * (b - 1) * (self.max_exp - self.min_exp + 1) * b ** (t - 1) + 1

    @property
    def largest(self) -> float:
        """``(1 - b^-t) b^M``."""
        return (1.0 - float(self.base) ** -self.digits) * float(self.base) ** self.max_exp

    @property
    def smallest(self) -> float:
        """Smallest positive normalized element ``b^(m-1)``."""
        return float(self.base) ** (self.min_exp - 1)

    def represent(self, value: float, mode: str = "chop") -> FloatRepresentation:
        """
        Store ``value`` with ``digits`` mantissa digits by chopping or rounding.

        Magnitudes above :attr:`largest` give ``OVERFLOW`` and nonzero
        magnitudes below :attr:`smallest` give ``UNDERFLOW``. Rounding that
        carries past the largest exponent also overflows.
        """
        if mode not in MODES:
            return FloatRepresentation(
                float("nan"), Status.INVALID_INPUT, f"mode must be one of {MODES}, got {mode!r}."
            )
        try:
            x = float(value)
        except (TypeError, ValueError):
            return FloatRepresentation(
                float("nan"), Status.INVALID_INPUT, "value must be a number.", mode
            )
        if not math.isfinite(x):
            return FloatRepresentation(x, Status.INVALID_INPUT, "value must be finite.", mode)
        if x == 0.0:
            return FloatRepresentation(
                x,
                Status.OK,
                "Zero is exactly representable",
                mode=mode,
                value=0.0,
                exponent=0,
                abs_error=0.0,
                rel_error=0.0,
            )

        magnitude = abs(x)
        if magnitude > self.largest:
            return self._out_of_range(x, mode, Status.OVERFLOW, ">", self.largest)
        if magnitude < self.smallest:
            return self._out_of_range(x, mode, Status.UNDERFLOW, "<", self.smallest)

        b, t = self.base, self.digits
        exponent = math.floor(math.log(magnitude, b)) + 1
        # log rounding can land one off; normalize so the mantissa is in [1/b, 1)
        while magnitude / float(b) ** exponent >= 1.0:
            exponent += 1
        while magnitude / float(b) ** exponent < 1.0 / b:
            exponent -= 1

        scaled = magnitude / float(b) ** exponent * float(b) ** t
        nearest = round(scaled)
        if abs(scaled - nearest) <= _SNAP_RTOL * scaled:
            scaled = float(nearest)
        integer = math.floor(scaled) if mode == "chop" else math.floor(scaled + 0.5)
        if integer >= b**t:
            integer //= b
            exponent += 1
        if exponent > self.max_exp:
            return self._out_of_range(x, mode, Status.OVERFLOW, ">", self.largest)

        digits = []
        rest = integer
        for _ in range(t):
            rest, d = divmod(rest, b)
            digits.append(int(d))
        digits.reverse()

        sign = -1 if x < 0 else 1
        shift = exponent - t
        stored = sign * (float(integer * b**shift) if shift >= 0 else integer / b ** (-shift))
        abs_error = abs(x - stored)
        logger.debug("%s: %r -> %r (%s)", self.notation, x, stored, mode)
        return FloatRepresentation(
            original=x,
            status=Status.OK,
            message=f"Represented in {self.notation} by {mode}",
            mode=mode,
            value=stored,
            sign=sign,
            digits=tuple(digits),
            exponent=exponent,
            abs_error=abs_error,
            rel_error=abs_error / magnitude,
        )

    def _out_of_range(
        self, x: float, mode: str, status: Status, op: str, bound: float
    ) -> FloatRepresentation:
        return FloatRepresentation(
            x,
            status,
            f"|{x:g}| {op} {bound:g}: {status.value} in {self.notation}.",
            mode,
            detail={"bound": bound},
        )


__all__ = ["FloatRepresentation", "FloatingPointSystem", "MODES"]
