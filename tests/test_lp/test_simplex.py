import numpy as np
import pytest

from numlab.core import Status
from numlab.lp import Constraint, LinearProgram, simplex


def canonical() -> LinearProgram:
    return LinearProgram(
        objective=(3.0, 5.0),
        constraints=(
            Constraint((2.0, 3.0), "<=", 8.0),
            Constraint((2.0, 1.0), "<=", 4.0),
            Constraint((1.0, 2.0), "<=", 5.0),
        ),
    )


def test_simplex_canonical_example():
    lp = canonical()
    res = simplex(lp)
    assert res.status is Status.OK
    assert res.objective == pytest.approx(13.0)
    assert np.allclose(res.x, [1.0, 2.0])
    for con in lp.constraints:
        assert np.dot(con.coefficients, res.x) <= con.rhs + 1e-9


def test_simplex_canonical_pivot_sequence():
    res = simplex(canonical())
    assert res.nit == 2
    assert [(s.entering, s.leaving) for s in res.steps] == [("x2", "s3"), ("x1", "s1")]
    # the second pivot breaks an exact ratio tie in favour of the first row
    assert res.steps[1].ratios[0] == res.steps[1].ratios[1] == 1.0
    assert all(v == pytest.approx(0.0) for v in res.slack.values())
    assert res.headers[-1] == "RHS"


def test_pivot_snapshots_are_read_only():
    res = simplex(canonical())
    with pytest.raises(ValueError):
        res.steps[0].tableau[0, 0] = 1.0
    assert len(res.trace) == len(res.steps)


def test_simplex_infeasible():
    lp = LinearProgram(
        objective=(1.0,),
        constraints=(Constraint((1.0,), "<=", 1.0), Constraint((1.0,), ">=", 2.0)),
    )
    res = simplex(lp)
    assert res.status is Status.INFEASIBLE
    assert res.x is None
    assert res.detail["phase_one_objective"] == pytest.approx(1.0)


def test_simplex_unbounded_problem():
    lp = LinearProgram(objective=(1.0, 1.0), constraints=(Constraint((1.0, -1.0), "<=", 1.0),))
    res = simplex(lp)
    assert res.status is Status.UNBOUNDED
    assert res.detail["column"] == "x2"


def test_simplex_minimize_with_surplus_constraints():
    lp = LinearProgram(
        objective=(2.0, 3.0),
        constraints=(
            Constraint((1.0, 1.0), ">=", 4.0),
            Constraint((1.0, 3.0), ">=", 6.0),
        ),
        maximize=False,
    )
    res = simplex(lp)
    assert res.status is Status.OK
    assert res.objective == pytest.approx(9.0)
    assert np.allclose(res.x, [3.0, 1.0])
    assert not any(h.startswith("a") for h in res.headers)


def test_simplex_handles_equalities():
    lp = LinearProgram(
        objective=(1.0, 2.0),
        constraints=(Constraint((1.0, 1.0), "=", 3.0), Constraint((1.0, 0.0), "<=", 2.0)),
    )
    res = simplex(lp)
    assert res.success
    assert res.objective == pytest.approx(6.0)
    assert np.allclose(res.x, [0.0, 3.0])


def test_negative_right_hand_side_is_normalized():
    con = Constraint((-1.0, -1.0), "<=", -2.0)
    assert con.normalized() == Constraint((1.0, 1.0), ">=", 2.0)
    lp = LinearProgram(objective=(1.0, 1.0), constraints=(con,), maximize=False)
    res = simplex(lp)
    assert res.objective == pytest.approx(2.0)


def test_simplex_pivot_budget():
    res = simplex(canonical(), maxiter=1)
    assert res.status is Status.MAX_ITER
    assert res.nit == 1
    assert res.x is None


def test_problem_validation():
    with pytest.raises(ValueError):
        Constraint((1.0,), "<", 1.0)
    with pytest.raises(ValueError):
        Constraint((1.0, np.nan), "<=", 1.0)
    with pytest.raises(ValueError):
        LinearProgram(objective=(1.0, 2.0), constraints=(Constraint((1.0,), "<=", 1.0),))
    with pytest.raises(ValueError):
        LinearProgram(objective=(1.0,), constraints=())
    assert simplex("max x").status is Status.INVALID_INPUT


def test_redundant_equality_keeps_artificial_at_zero():
    lp = LinearProgram(
        objective=(1.0, 1.0),
        constraints=(Constraint((1.0, 1.0), "=", 2.0), Constraint((2.0, 2.0), "=", 4.0)),
        maximize=False,
    )
    res = simplex(lp)
    assert res.status is Status.OK
    assert res.objective == pytest.approx(2.0)
    assert sum(res.x) == pytest.approx(2.0)
    # the dependent row cannot pivot on a real column and stays basic at zero
    assert "a2" in res.basis
    assert not any(h.startswith("a") for h in res.headers)


def test_zero_level_artificial_is_driven_out():
    lp = LinearProgram(
        objective=(1.0, 1.0),
        constraints=(
            Constraint((1.0, -1.0), "=", 0.0),
            Constraint((-1.0, 1.0), "=", 0.0),
            Constraint((1.0, 0.0), "<=", 3.0),
        ),
    )
    res = simplex(lp)
    assert res.status is Status.OK
    assert res.objective == pytest.approx(6.0)
    assert np.allclose(res.x, [3.0, 3.0])
    first = res.steps[0]
    assert (first.phase, first.entering, first.leaving) == (1, "x1", "a1")
    assert first.ratios is None
    assert [s.phase for s in res.steps] == [1, 2]
