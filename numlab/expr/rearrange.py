"""Candidate rearrangements ``x = g(x)`` for fixed-point iteration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import sympy as sp

from .core import EvalError
from .sympy_engine import SympyEngine

RELAXATION_FACTORS = (1.0, 0.5, 0.2, 0.1)


@dataclass(frozen=True)
class Rearrangement:
    """A fixed-point form ``x = expression`` and how it was obtained."""

    expression: str
    note: str


def fixed_point_candidates(
    equation: str,
    variable: str = "x",
    relaxation: Sequence[float] = RELAXATION_FACTORS,
    engine: SympyEngine | None = None,
) -> list[Rearrangement]:
    """Derive fixed-point forms of ``F(x) = 0`` (or ``lhs = rhs``).

    Every term ``c*x`` of ``F`` with a numeric coefficient ``c`` yields the
    isolation ``x = -(F - c*x) / c``; this covers ``x = g(x)`` written either
    way round as well as ``g(x) - x = 0``. When no such term exists, the
    relaxation forms ``x - lambda*F(x)`` are offered instead.

    Raises:
        EvalError: If the equation cannot be parsed.
    """
    engine = engine or SympyEngine()
    F = engine.parse(equation)
    x = sp.Symbol(variable)
    if x not in F.free_symbols:
        raise EvalError(f"Equation {equation!r} does not involve {variable!r}.")

    candidates: list[Rearrangement] = []
    seen: set[str] = set()

    def push(expr: sp.Expr, note: str) -> None:
        key = str(expr)
        if key in seen or key == variable:
            return
        seen.add(key)
        candidates.append(Rearrangement(expression=key, note=note))

    expanded = sp.expand(F)
    for term in sp.Add.make_args(expanded):
        coeff, rest = term.as_coeff_Mul()
        if rest == x and coeff != 0:
            isolated = -(expanded - term) / coeff
            push(sp.simplify(isolated), f"isolated linear term {term}")

    if not candidates:
        for lam in relaxation:
            push(x - sp.Rational(str(lam)) * F, f"relaxation x - {lam}*F(x)")
    return candidates


__all__ = ["RELAXATION_FACTORS", "Rearrangement", "fixed_point_candidates"]
