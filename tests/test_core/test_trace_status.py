import math

import numpy as np
import pytest

from numlab.config import DEFAULT_CONFIG, SolverConfig
from numlab.core import (
    SolverError,
    Status,
    Trace,
    as_augmented,
    as_matrix,
    as_vector,
    augment,
    relative_error_pct,
    split_augmented,
)


def test_trace_records_are_ordered_and_frozen():
    trace = Trace()
    values = np.array([1.0, 2.0])
    trace.record(0, x=values, error=math.inf)
    values[0] = 99.0
    trace.record(1, x=values, error=0.5)

    assert len(trace) == 2
    assert trace[0]["x"][0] == 1.0
    with pytest.raises(ValueError):
        trace[0]["x"][0] = 5.0
    with pytest.raises(TypeError):
        trace[0].values["error"] = 1.0
    assert trace.column("error") == [math.inf, 0.5]
    assert trace.last.index == 1


def test_trace_rejects_decreasing_indices():
    trace = Trace()
    trace.record(3)
    with pytest.raises(ValueError):
        trace.record(2)


def test_trace_extend_copies_records():
    first, second = Trace(), Trace()
    first.record(0, phase=1)
    second.record(1, phase=2)
    first.extend(second)
    assert [r["phase"] for r in first] == [1, 2]


def test_solver_error_carries_status_and_detail():
    err = SolverError(Status.SINGULAR, "no pivot", column=2)
    assert err.status is Status.SINGULAR
    assert err.detail == {"column": 2}
    assert str(err) == "no pivot"


def test_status_values_are_strings():
    assert Status.OK.value == "ok"
    assert Status("not_positive_definite") is Status.NOT_POSITIVE_DEFINITE


def test_as_matrix_validation():
    with pytest.raises(ValueError):
        as_matrix([[1.0, 2.0], [3.0]])
    with pytest.raises(ValueError):
        as_matrix([[1.0, np.nan]])
    with pytest.raises(ValueError):
        as_matrix([[1.0, 2.0]], square=True)
    with pytest.raises(ValueError):
        as_augmented([[1.0, 2.0], [3.0, 4.0]])
    with pytest.raises(ValueError):
        as_vector([1.0, 2.0], n=3)


def test_inputs_are_copied():
    data = np.array([[1.0, 2.0], [3.0, 4.0]])
    copy = as_matrix(data)
    copy[0, 0] = 10.0
    assert data[0, 0] == 1.0
    aug = augment(data, [5.0, 6.0])
    assert aug.shape == (2, 3)
    a, b = split_augmented(aug)
    a[0, 0] = 9.0
    b[1] = 9.0
    assert aug[0, 0] == 1.0 and aug[1, 2] == 6.0
    assert a.shape == (2, 2) and b.shape == (2,)


def test_relative_error_pct():
    assert relative_error_pct(2.0, None) == math.inf
    assert relative_error_pct(2.0, 1.0) == pytest.approx(50.0)
    assert relative_error_pct(0.0, 0.01) == pytest.approx(1.0)


def test_solver_config_defaults_and_validation():
    assert DEFAULT_CONFIG.pivot_eps == 1e-12
    assert DEFAULT_CONFIG.ode_max_steps == 10_000
    assert SolverConfig(maxiter=5).maxiter == 5
    with pytest.raises(ValueError):
        SolverConfig(tol=0.0)
    with pytest.raises(ValueError):
        SolverConfig(simplex_maxiter=0)
