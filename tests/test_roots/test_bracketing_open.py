import math

import pytest

from numlab.core import Status
from numlab.roots import false_position, find_brackets, newton_raphson, secant

SQRT2 = math.sqrt(2.0)


def test_find_brackets_scans_integer_grid():
    assert find_brackets("x^2 - 2") == [(-2.0, -1.0), (1.0, 2.0)]
    assert find_brackets(lambda x: x - 0.5, start=0, stop=3) == [(0.0, 1.0)]
    with pytest.raises(ValueError):
        find_brackets("x", step=0)
    with pytest.raises(ValueError):
        find_brackets("x", start=1, stop=1)


def test_false_position_converges():
    res = false_position("x^2 - 2", 1, 2)
    assert res.status is Status.OK
    assert res.root == pytest.approx(SQRT2, rel=1e-5)
    assert res.error <= 1e-4
    assert res.trace[0]["error"] == math.inf
    # the bracket always contains the root
    for record in res.trace:
        assert record["a"] <= SQRT2 <= record["b"]


def test_false_position_uses_first_scanned_bracket():
    res = false_position("x^2 - 2")
    assert res.success
    assert res.detail["bracket"] == (-2.0, -1.0)
    assert res.root == pytest.approx(-SQRT2, rel=1e-5)


def test_false_position_stops_on_exact_root():
    res = false_position("x - 1", 0, 3)
    assert res.success
    assert res.nit == 1
    assert res.root == 1.0
    assert res.fun == 0.0


@pytest.mark.parametrize(
    "args, status",
    [
        (("x^2 + 1",), Status.NO_BRACKET_FOUND),
        (("x^2 - 2", 2, 3), Status.NO_SIGN_CHANGE),
        (("x^2 - 2", 2, 1), Status.INVALID_INPUT),
        (("x^2 - 2", 1, None), Status.INVALID_INPUT),
        (("x +* 2", 0, 1), Status.EVAL_ERROR),
    ],
)
def test_false_position_failures(args, status):
    res = false_position(*args)
    assert res.status is status
    assert res.root is None


def test_newton_raphson_converges_quadratically():
    res = newton_raphson("x^2 - 2", 1.0)
    assert res.status is Status.OK
    assert res.root == pytest.approx(SQRT2, rel=1e-12)
    errors = res.trace.column("error")
    assert errors[0] == math.inf
    assert errors[-1] <= 1e-4
    assert res.nit <= 6


def test_newton_raphson_zero_derivative():
    res = newton_raphson("x^3", 0.0)
    assert res.status is Status.ZERO_DERIVATIVE
    assert res.nit == 0
    assert res.detail["x"] == 0.0


def test_newton_raphson_with_callables():
    res = newton_raphson(lambda x: x * x - 2.0, 1.0, df=lambda x: 2.0 * x)
    assert res.root == pytest.approx(SQRT2, rel=1e-12)
    numeric = newton_raphson(lambda x: x * x - 2.0, 1.0)
    assert numeric.root == pytest.approx(SQRT2, rel=1e-9)


def test_newton_raphson_non_finite_start():
    res = newton_raphson("log(x)", -1.0)
    assert res.status is Status.NON_FINITE


def test_secant_converges():
    res = secant("x^2 - 2", 1.0, 2.0)
    assert res.status is Status.OK
    assert res.root == pytest.approx(SQRT2, rel=1e-10)
    assert math.isfinite(res.trace[0]["error"])


def test_secant_failures():
    assert secant("x^2 - 2", 1.0, 1.0).status is Status.DEGENERATE_SEEDS
    flat = secant(lambda x: 3.0, 0.0, 1.0)
    assert flat.status is Status.ZERO_DENOMINATOR
    assert flat.nit == 0
    assert secant("x^2", 1.0, 2.0, maxiter=2).status is Status.NOT_CONVERGED


def test_secant_leaving_the_domain():
    # the first secant step from (4, 5) lands near x = -2.2 where log is undefined
    res = secant("log(x)", 4.0, 5.0)
    assert res.status is Status.NON_FINITE
    assert res.nit == 0
    assert res.root == 5.0
    assert secant(lambda x: math.log(x), -1.0, 1.0).status is Status.NON_FINITE
