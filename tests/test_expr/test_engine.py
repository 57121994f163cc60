import math

import numpy as np
import pytest

from numlab.expr import (
    EvalError,
    Rearrangement,
    SympyEngine,
    approx_derivative,
    approx_grad,
    bivariate_function,
    derivative_function,
    fixed_point_candidates,
    normalize,
    scalar_function,
    symbolic_derivative,
)


@pytest.fixture
def engine() -> SympyEngine:
    return SympyEngine()


def test_calculator_notation(engine):
    f = engine.compile("2x^2 + ln(e)", ["x"])
    assert f(3.0) == pytest.approx(19.0)
    assert engine.evaluate("sqrt(x) + y", {"x": 4.0, "y": 1.0}) == pytest.approx(3.0)


def test_equation_is_moved_to_one_side():
    assert normalize("x^2 = 2") == "(x^2) - (2)"
    with pytest.raises(EvalError):
        normalize("x = 1 = 2")
    with pytest.raises(EvalError):
        normalize("   ")


def test_invalid_expressions_raise_eval_error(engine):
    with pytest.raises(EvalError):
        engine.parse("x + * 2")
    with pytest.raises(EvalError):
        engine.compile("x + z", ["x"])


def test_domain_errors_become_nan(engine):
    f = engine.compile("log(x)", ["x"])
    assert math.isnan(f(-1.0))
    g = scalar_function(lambda x: 1.0 / x)
    assert math.isnan(g(0.0))


def test_symbolic_derivative_orders():
    d1 = scalar_function(symbolic_derivative("x^3"))
    d2 = scalar_function(symbolic_derivative("x^3", order=2))
    assert d1(2.0) == pytest.approx(12.0)
    assert d2(2.0) == pytest.approx(12.0)


def test_derivative_function_prefers_explicit_derivative():
    df = derivative_function("x^2", df=lambda x: 0.0)
    assert df(3.0) == 0.0
    numeric = derivative_function(lambda x: x**3)
    assert numeric(2.0) == pytest.approx(12.0, rel=1e-6)


def test_bivariate_function_from_string_and_callable():
    f = bivariate_function("x + y")
    g = bivariate_function(lambda x, y: x * y)
    assert f(1.0, 2.0) == 3.0
    assert g(2.0, 3.0) == 6.0
    with pytest.raises(EvalError):
        bivariate_function(42)


def test_finite_differences():
    assert approx_derivative(math.sin, 0.0) == pytest.approx(1.0, rel=1e-8)
    assert approx_derivative(math.sin, 0.5, order=2) == pytest.approx(-math.sin(0.5), rel=1e-4)
    grad = approx_grad(lambda v: v[0] ** 2 + 3 * v[1], np.array([1.0, 2.0]))
    assert np.allclose(grad, [2.0, 3.0], atol=1e-6)
    with pytest.raises(ValueError):
        approx_derivative(math.sin, 0.0, order=3)


def test_fixed_point_candidates_isolate_linear_terms():
    candidates = fixed_point_candidates("x^2 - 3x + 2 = 0")
    assert candidates
    assert all(isinstance(c, Rearrangement) for c in candidates)
    g = scalar_function(candidates[0].expression)
    # x = (x^2 + 2) / 3 has the fixed points 1 and 2
    assert g(1.0) == pytest.approx(1.0)
    assert g(2.0) == pytest.approx(2.0)


def test_fixed_point_candidates_fall_back_to_relaxation():
    candidates = fixed_point_candidates("exp(x) - 2")
    assert len(candidates) == 4
    assert all(c.note.startswith("relaxation") for c in candidates)
    with pytest.raises(EvalError):
        fixed_point_candidates("3 + 4")
