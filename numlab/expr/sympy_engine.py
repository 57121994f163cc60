"""Expression engine backed by sympy.

Accepted syntax is sympy's, extended with the notation students type into a
calculator: ``^`` for powers, ``ln`` for the natural logarithm, implicit
multiplication (``2x``) and equations ``lhs = rhs`` (read as ``lhs - rhs``).
"""

from __future__ import annotations

import math
from tokenize import TokenError
from typing import Callable, Mapping, Sequence

import sympy as sp
from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication,
    parse_expr,
    standard_transformations,
)

from .core import EvalError

_TRANSFORMATIONS = standard_transformations + (implicit_multiplication, convert_xor)

_NAMESPACE: dict[str, object] = {
    "sin": sp.sin,
    "cos": sp.cos,
    "tan": sp.tan,
    "asin": sp.asin,
    "acos": sp.acos,
    "atan": sp.atan,
    "sinh": sp.sinh,
    "cosh": sp.cosh,
    "tanh": sp.tanh,
    "exp": sp.exp,
    "log": sp.log,
    "ln": sp.log,
    "sqrt": sp.sqrt,
    "abs": sp.Abs,
    "Abs": sp.Abs,
    "pi": sp.pi,
    "e": sp.E,
    "E": sp.E,
}


def normalize(expression: str) -> str:
    """Rewrite calculator notation into a single sympy-parsable expression."""
    if expression is None or not str(expression).strip():
        raise EvalError("Expression cannot be empty.")
    text = str(expression).strip()
    if text.count("=") > 1:
        raise EvalError(f"Expected at most one '=' in {expression!r}.")
    if "=" in text:
        lhs, rhs = (side.strip() for side in text.split("="))
        if not lhs or not rhs:
            raise EvalError(f"Both sides of {expression!r} must be non-empty.")
        text = f"({lhs}) - ({rhs})"
    return text


def _to_float(value: object) -> float:
    if isinstance(value, complex):
        if abs(value.imag) > 1e-12:
            return math.nan
        return float(value.real)
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


class SympyEngine:
    """:class:`~numlab.expr.core.ExpressionEngine` implementation using sympy."""

    def __init__(self, namespace: Mapping[str, object] | None = None) -> None:
        self._namespace = dict(_NAMESPACE)
        self._namespace["log10"] = lambda arg: sp.log(arg, 10)
        self._namespace["log2"] = lambda arg: sp.log(arg, 2)
        if namespace:
            self._namespace.update(namespace)

    def parse(self, expression: str) -> sp.Expr:
        """Parse ``expression`` into a sympy expression or raise :class:`EvalError`."""
        text = normalize(expression)
        local_dict = dict(self._namespace)
        try:
            parsed = parse_expr(text, local_dict=local_dict, transformations=_TRANSFORMATIONS)
        except (
            SyntaxError,
            TokenError,
            TypeError,
            ValueError,
            AttributeError,
            sp.SympifyError,
        ) as exc:
            raise EvalError(f"Invalid expression {expression!r}: {exc}") from exc
        if not isinstance(parsed, sp.Expr):
            raise EvalError(f"Expression {expression!r} is not a scalar expression.")
        return parsed

    def _check_symbols(self, parsed: sp.Expr, names: Sequence[str], expression: str) -> None:
        unknown = sorted(str(sym) for sym in parsed.free_symbols if str(sym) not in names)
        if unknown:
            raise EvalError(
                f"Undefined symbol(s) {', '.join(unknown)} in {expression!r}; "
                f"available: {', '.join(names) or 'none'}."
            )

    def evaluate(self, expression: str, bindings: Mapping[str, float]) -> float:
        """Evaluate ``expression`` with numeric ``bindings``.

        Returns NaN for points outside the real domain (e.g. ``log(-1)``).
        """
        parsed = self.parse(expression)
        self._check_symbols(parsed, list(bindings), expression)
        subs = {sp.Symbol(name): float(value) for name, value in bindings.items()}
        try:
            value = complex(parsed.evalf(subs=subs))
        except TypeError:
            return math.nan
        return _to_float(value)

    def derivative(self, expression: str, variable: str) -> str:
        """Return the symbolic derivative of ``expression`` as a string."""
        parsed = self.parse(expression)
        return str(sp.diff(parsed, sp.Symbol(variable)))

    def compile(self, expression: str, variables: Sequence[str]) -> Callable[..., float]:
        """Compile ``expression`` into a fast positional callable via ``lambdify``.

        Domain errors at evaluation time produce NaN so callers can report a
        non-finite value instead of crashing.
        """
        parsed = self.parse(expression)
        names = list(variables)
        self._check_symbols(parsed, names, expression)
        symbols = [sp.Symbol(name) for name in names]
        func = sp.lambdify(symbols, parsed, "math")

        def wrapper(*args: float) -> float:
            if len(args) != len(symbols):
                raise TypeError(f"Expected {len(symbols)} argument(s), got {len(args)}.")
            try:
                return _to_float(func(*(float(a) for a in args)))
            except (ValueError, ZeroDivisionError, OverflowError, TypeError):
                return math.nan

        wrapper.expression = str(parsed)  # type: ignore[attr-defined]
        return wrapper


__all__ = ["SympyEngine", "normalize"]
