import numpy as np
import pytest

from numlab.core import Status
from numlab.optimize import (
    backtracking_armijo,
    build_problem,
    classify_critical_point,
    gradient_method,
    newton_critical_point,
)


def quadratic_fun(x: np.ndarray) -> float:
    return float(x.T @ x)


def quadratic_grad(x: np.ndarray) -> np.ndarray:
    return 2 * x


def test_backtracking_armijo_monotone():
    x = np.array([1.0, -2.0])
    grad = quadratic_grad(x)
    direction = -grad
    alpha, nevals = backtracking_armijo(quadratic_fun, x, direction, grad)
    assert 0 < alpha <= 1.0
    assert quadratic_fun(x + alpha * direction) <= quadratic_fun(x)
    assert nevals > 0


def test_backtracking_armijo_ascent():
    def neg(v: np.ndarray) -> float:
        return -quadratic_fun(v)

    x = np.array([1.0])
    grad = -quadratic_grad(x)
    alpha, _ = backtracking_armijo(neg, x, grad, grad, maximize=True)
    assert neg(x + alpha * grad) >= neg(x)


def test_backtracking_armijo_raises_on_invalid_params():
    x = np.array([1.0])
    grad = quadratic_grad(x)
    with pytest.raises(ValueError):
        backtracking_armijo(quadratic_fun, x, -grad, grad, c=1.5)
    with pytest.raises(ValueError):
        backtracking_armijo(quadratic_fun, x, -grad, grad, rho=1.1)


def test_build_problem_symbolic_gradient():
    problem = build_problem("x^2 + 3*x*y")
    v = np.array([1.0, 2.0])
    assert problem.fun(v) == pytest.approx(7.0)
    assert np.allclose(problem.grad(v), [8.0, 3.0])
    assert problem.dim == 2


def test_build_problem_with_partial_expressions():
    problem = build_problem("x^2 + y^2", grad=["2*x", "2*y"])
    assert np.allclose(problem.grad(np.array([1.0, -1.0])), [2.0, -2.0])


def test_gradient_descent_reaches_minimum():
    res = gradient_method("(x - 1)^2 + (y + 2)^2", [0.0, 0.0])
    assert res.status is Status.OK
    assert np.allclose(res.x, [1.0, -2.0], atol=1e-8)
    assert res.fun == pytest.approx(0.0, abs=1e-12)
    assert res.trace[0]["alpha"] == 0.5


def test_gradient_ascent_reaches_maximum():
    res = gradient_method("-(x - 1)^2 - (y + 2)^2", [0.0, 0.0], maximize=True)
    assert res.success
    assert res.method == "gradient-ascent"
    assert np.allclose(res.x, [1.0, -2.0], atol=1e-8)


def test_gradient_method_with_callables():
    res = gradient_method(quadratic_fun, [1.0, -2.0])
    assert res.success
    assert np.allclose(res.x, [0.0, 0.0], atol=1e-8)
    with_grad = gradient_method(quadratic_fun, [1.0, -2.0], grad=quadratic_grad)
    assert np.allclose(with_grad.x, [0.0, 0.0], atol=1e-8)


def test_gradient_method_descends_monotonically():
    res = gradient_method("(x - 1)^2 + 10*(y + 2)^2", [0.0, 0.0], tol=1e-6, maxiter=500)
    values = [record["f"] for record in res.trace]
    assert all(b <= a for a, b in zip(values, values[1:]))
    assert np.allclose(res.x, [1.0, -2.0], atol=1e-4)


def test_gradient_method_failures():
    assert gradient_method("x^2 + y^2", [0.0, 0.0, 0.0]).status is Status.INVALID_INPUT
    assert gradient_method("x +* y", [0.0, 0.0]).status is Status.EVAL_ERROR
    res = gradient_method("(x - 1)^2 + 10*(y + 2)^2", [0.0, 0.0], maxiter=1)
    assert res.status is Status.NOT_CONVERGED
    assert res.nit == 1


def test_classify_critical_point():
    assert classify_critical_point(2.0) == "minimum"
    assert classify_critical_point(-2.0) == "maximum"
    assert classify_critical_point(0.0) == "saddle"


@pytest.mark.parametrize("x0, expected, kind", [(2.0, 1.0, "minimum"), (-2.0, -1.0, "maximum")])
def test_newton_critical_point(x0, expected, kind):
    res = newton_critical_point("x^3 - 3x", x0)
    assert res.status is Status.OK
    assert res.x == pytest.approx(expected, rel=1e-8)
    assert res.classification == kind


def test_newton_critical_point_with_callables():
    res = newton_critical_point(
        lambda x: (x - 3.0) ** 2, 0.0, df=lambda x: 2 * (x - 3.0), d2f=lambda x: 2.0
    )
    assert res.success
    assert res.x == pytest.approx(3.0)
    assert res.nit == 2


def test_newton_critical_point_zero_second_derivative():
    res = newton_critical_point("x^3", 0.0)
    assert res.status is Status.ZERO_SECOND_DERIVATIVE
    assert res.detail["x"] == 0.0


def test_raising_objective_reports_non_finite():
    res = gradient_method(lambda v: 1.0 / float(v[0]) + float(v[1]) ** 2, [0.0, 1.0])
    assert res.status is Status.NON_FINITE
    assert res.nit == 0
    problem = build_problem(lambda v: 1.0 / float(v[0]))
    assert np.isnan(problem.fun(np.array([0.0])))


def test_non_finite_gradient_is_reported():
    res = gradient_method(quadratic_fun, [1.0, 1.0], grad=lambda v: np.array([np.inf, 0.0]))
    assert res.status is Status.NON_FINITE
    assert res.nit == 0

    def singular_grad(v: np.ndarray) -> np.ndarray:
        return np.array([1.0 / (float(v[0]) - 1.0), 0.0])

    raising = gradient_method(quadratic_fun, [1.0, 1.0], grad=singular_grad)
    assert raising.status is Status.NON_FINITE
    assert np.isnan(raising.grad_norm)


def test_line_search_leaving_the_domain_is_reported():
    def spike(v: np.ndarray) -> float:
        if v[0] != 1.0:
            raise ValueError("outside the domain")
        return 0.0

    res = gradient_method(spike, [1.0], grad=lambda v: np.array([1.0]))
    assert res.status is Status.NON_FINITE
    assert res.x.tolist() == [1.0]
    assert res.fun == 0.0
    assert "Line search" in res.message
