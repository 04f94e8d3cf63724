import numpy as np
import pytest

from qpkit.decomposition import QR
from qpkit.diagnostics import orthogonality_error


@pytest.mark.parametrize("shape", [(5, 3), (3, 5), (4, 4)])
def test_qr_factorises_with_pivots(rng, shape):
    matrix = rng.standard_normal(shape)
    qr = QR()
    qr.compute(matrix)
    q_mat, r_mat, pivots = qr.get_q(), qr.get_r(), qr.get_pivots()
    assert q_mat.shape == (shape[0], shape[0])
    assert orthogonality_error(q_mat) < 1e-12
    assert np.allclose(np.tril(r_mat, -1), 0.0)
    assert np.allclose(q_mat @ r_mat, matrix[:, pivots])
    assert qr.get_rank() == min(shape)


def test_qr_pivoting_orders_diagonal(rng):
    matrix = rng.standard_normal((6, 4))
    qr = QR()
    qr.compute(matrix)
    diagonal = np.abs(np.diag(qr.get_r()))
    assert np.all(diagonal[:-1] >= diagonal[1:] - 1e-12)


def test_qr_without_pivoting(rng):
    matrix = rng.standard_normal((4, 3))
    qr = QR(pivoting=False)
    qr.compute(matrix)
    assert np.array_equal(qr.get_pivots(), np.arange(3))
    assert np.allclose(qr.get_q() @ qr.get_r(), matrix)


def test_qr_rank_deficient():
    matrix = np.array([[1.0, 2.0, 3.0], [2.0, 4.0, 6.0], [1.0, 0.0, 1.0]]).T
    qr = QR()
    qr.compute(matrix)
    assert qr.get_rank() == 2
    assert not qr.is_full_rank()


def test_qr_solve_least_squares(rng):
    matrix = rng.standard_normal((6, 3))
    rhs = rng.standard_normal(6)
    qr = QR()
    qr.compute(matrix)
    assert qr.is_full_rank()
    expected, *_ = np.linalg.lstsq(matrix, rhs, rcond=None)
    assert np.allclose(qr.solve(rhs), expected)


def test_qr_range_and_null_space(rng):
    matrix = rng.standard_normal((5, 2))
    qr = QR()
    qr.compute(matrix)
    null_basis = qr.get_q()[:, qr.get_rank():]
    assert null_basis.shape == (5, 3)
    assert np.allclose(matrix.T @ null_basis, 0.0, atol=1e-12)


def test_qr_zero_matrix():
    qr = QR()
    qr.compute(np.zeros((3, 2)))
    assert qr.get_rank() == 0
    assert np.allclose(qr.solve(np.ones(3)), 0.0)


def test_qr_requires_compute():
    with pytest.raises(ValueError, match="not computed"):
        QR().get_q()
