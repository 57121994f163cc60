import numpy as np
import pytest

from numlab.core import Status
from numlab.linalg import gauss_seidel, gauss_seidel_step, jacobi, jacobi_step

A = np.array(
    [
        [10.0, -1.0, 2.0, 0.0],
        [-1.0, 11.0, -1.0, 3.0],
        [2.0, -1.0, 10.0, -1.0],
        [0.0, 3.0, -1.0, 8.0],
    ]
)
B = np.array([6.0, 25.0, -11.0, 15.0])
SOLUTION = np.array([1.0, 2.0, -1.0, 1.0])


@pytest.mark.parametrize("solver", [jacobi, gauss_seidel])
def test_converges_on_dominant_system(solver):
    res = solver(A, B, tol=1e-8)
    assert res.status is Status.OK
    assert res.diagonally_dominant is True
    assert np.allclose(res.x, SOLUTION, atol=1e-6)
    assert res.nit == len(res.trace)
    assert res.trace.last["max_error"] <= 1e-8


def test_gauss_seidel_needs_no_more_iterations_than_jacobi():
    j = jacobi(A, B, tol=1e-8)
    gs = gauss_seidel(A, B, tol=1e-8)
    assert gs.nit <= j.nit


def test_first_sweeps_from_zero():
    x0 = np.zeros(4)
    assert np.allclose(jacobi_step(A, B, x0), [0.6, 25.0 / 11.0, -1.1, 1.875])
    gs = gauss_seidel_step(A, B, x0)
    assert gs[0] == pytest.approx(0.6)
    assert gs[1] == pytest.approx((25.0 + 0.6) / 11.0)


def test_zero_diagonal_is_rejected_before_iterating():
    res = jacobi([[0.0, 1.0], [1.0, 2.0]], [1.0, 1.0])
    assert res.status is Status.ZERO_DIAGONAL
    assert res.detail["rows"] == [0]
    assert len(res.trace) == 0


def test_non_dominant_system_still_iterates():
    res = gauss_seidel([[1.0, 3.0], [2.0, 1.0]], [1.0, 1.0], maxiter=10)
    assert res.diagonally_dominant is False
    assert res.status is Status.NOT_CONVERGED
    assert res.x is not None


def test_not_converged_keeps_last_iterate():
    res = jacobi(A, B, tol=1e-14, maxiter=3)
    assert res.status is Status.NOT_CONVERGED
    assert res.nit == 3
    assert np.allclose(res.x, res.trace.last["x"])


def test_invalid_arguments():
    assert jacobi(A, B[:3]).status is Status.INVALID_INPUT
    assert gauss_seidel(A, B, tol=0.0).status is Status.INVALID_INPUT
    assert jacobi(A, B, x0=[1.0, 2.0]).status is Status.INVALID_INPUT
