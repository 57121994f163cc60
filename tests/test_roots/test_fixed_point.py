import math

import pytest

from numlab.core import Status
from numlab.roots import fixed_point, fixed_point_all

DOTTIE = 0.7390851332151607


def test_fixed_point_cosine():
    res = fixed_point("cos(x)", 1.0)
    assert res.status is Status.OK
    assert res.root == pytest.approx(DOTTIE, rel=1e-5)
    assert res.trace[0]["error"] == math.inf
    assert res.trace[0]["gx"] == pytest.approx(math.cos(1.0))


def test_fixed_point_divergence_is_reported():
    res = fixed_point("exp(x)", 1.0)
    assert res.status is Status.DIVERGED


def test_fixed_point_budget():
    res = fixed_point("2*x", 1.0, maxiter=10)
    assert res.status is Status.NOT_CONVERGED
    assert res.nit == 10


def test_fixed_point_all_derives_rearrangements():
    res = fixed_point_all("x^2 - 3x + 2 = 0", 0.5)
    assert res.status is Status.OK
    assert res.root == pytest.approx(1.0, rel=1e-5)
    assert res.detail["index"] == 0
    assert len(res.detail["attempts"]) == 1


def test_fixed_point_all_skips_failing_candidates():
    res = fixed_point_all(["exp(x)", "cos(x)"], 1.0)
    assert res.success
    assert res.detail["candidate"] == "cos(x)"
    assert [a["status"] for a in res.detail["attempts"]] == [Status.DIVERGED, Status.OK]


def test_fixed_point_all_reports_closest_failure():
    res = fixed_point_all(["2*x", "3*x"], 1.0, maxiter=5)
    assert res.status is Status.NONE_CONVERGED
    assert res.detail["candidate"] == "2*x"
    assert res.root is not None


def test_fixed_point_all_requires_candidates():
    assert fixed_point_all([], 1.0).status is Status.INVALID_INPUT
    assert fixed_point_all("1 = 2", 1.0).status is Status.EVAL_ERROR
