import math

import numpy as np
import pytest

from numlab.core import Status
from numlab.ode import euler, euler_step, heun, midpoint


def exact(x):
    return 2.0 * np.exp(x) - x - 1.0


def test_heun_reference_value():
    res = heun("x + y", 0.0, 1.0, 0.1, 1.0)
    assert res.status is Status.OK
    assert res.nit == 10
    assert round(res.y_final, 4) == 3.4282
    assert res.x_final == 1.0
    assert res.method == "heun"


@pytest.mark.parametrize("method", [heun, midpoint])
def test_second_order_methods_beat_euler(method):
    target = exact(1.0)
    first = abs(euler("x + y", 0.0, 1.0, 0.1, 1.0).y_final - target)
    second = abs(method("x + y", 0.0, 1.0, 0.1, 1.0).y_final - target)
    assert second < first / 10


@pytest.mark.parametrize("method", [euler, heun, midpoint])
def test_error_shrinks_with_step(method):
    coarse = abs(method("x + y", 0.0, 1.0, 0.1, 1.0).y_final - exact(1.0))
    fine = abs(method("x + y", 0.0, 1.0, 0.05, 1.0).y_final - exact(1.0))
    assert fine < coarse


def test_last_step_is_shortened():
    res = euler("x + y", 0.0, 1.0, 0.3, 1.0)
    assert res.nit == 4
    assert res.xs[-1] == 1.0
    assert np.allclose(np.diff(res.xs), [0.3, 0.3, 0.3, 0.1])
    assert res.trace[0]["y"] == 1.0
    assert "k1" in res.trace[1]


def test_heun_trace_holds_predictor():
    res = heun(lambda x, y: y, 0.0, 1.0, 0.5, 0.5)
    record = res.trace[1]
    assert record["k1"] == 1.0
    assert record["predictor"] == 1.5
    assert record["k2"] == 1.5
    assert res.y_final == pytest.approx(1.625)


def test_euler_step_function():
    y_next, slopes = euler_step(lambda x, y: x + y, 0.0, 1.0, 0.1)
    assert y_next == pytest.approx(1.1)
    assert slopes == {"k1": 1.0}


@pytest.mark.parametrize(
    "args",
    [
        (0.0, 1.0, 0.0, 1.0),
        (0.0, 1.0, -0.1, 1.0),
        (0.0, 1.0, 0.1, 0.0),
        (0.0, 1.0, 0.1, -1.0),
        (0.0, "one", 0.1, 1.0),
        (0.0, math.inf, 0.1, 1.0),
    ],
)
def test_invalid_arguments(args):
    res = euler("x + y", *args)
    assert res.status is Status.INVALID_INPUT
    assert res.xs is None
    assert res.y_final is None


def test_step_budget_keeps_partial_solution():
    res = euler("x + y", 0.0, 1.0, 0.1, 1.0, max_steps=3)
    assert res.status is Status.MAX_ITER
    assert res.nit == 3
    assert res.xs.size == 4
    assert res.detail["x"] == pytest.approx(0.3)
    assert euler("x + y", 0.0, 1.0, 0.1, 1.0, max_steps=0).status is Status.INVALID_INPUT


def test_evaluation_failures():
    assert heun("x +* y", 0.0, 1.0, 0.1, 1.0).status is Status.EVAL_ERROR
    res = euler(lambda x, y: 1.0 / (x - 0.2), 0.0, 1.0, 0.1, 1.0)
    assert res.status is Status.EVAL_ERROR
    assert res.nit == 2
    assert res.xs.size == 3


def test_blow_up_is_reported():
    res = euler(lambda x, y: y * y, 0.0, 1.0, 0.5, 10.0)
    assert res.status is Status.NON_FINITE
    assert np.all(np.isfinite(res.ys))


def test_repeated_runs_are_identical():
    first = midpoint("x*y - y^2", 0.0, 0.5, 0.05, 2.0)
    second = midpoint("x*y - y^2", 0.0, 0.5, 0.05, 2.0)
    assert np.array_equal(first.ys, second.ys)
    assert first.trace.column("k2") == second.trace.column("k2")
