import numpy as np
import pytest

from qpkit.decomposition import SingularValue


def test_svd_least_norm_solution():
    matrix = np.array([[1.0, 1.0]])
    svd = SingularValue()
    svd.compute(matrix)
    assert svd.get_rank() == 1
    assert svd.is_full_rank()
    assert np.allclose(svd.solve(np.array([1.0])), [0.5, 0.5])


def test_svd_matches_minimum_norm_least_squares(rng):
    matrix = rng.standard_normal((3, 5))
    matrix[2] = matrix[0] + matrix[1]
    rhs = rng.standard_normal(3)
    svd = SingularValue()
    svd.compute(matrix)
    assert svd.get_rank() == 2
    assert not svd.is_full_rank()
    expected, *_ = np.linalg.lstsq(matrix, rhs, rcond=1e-10)
    assert np.allclose(svd.solve(rhs), expected)


def test_svd_factors(rng):
    matrix = rng.standard_normal((4, 3))
    svd = SingularValue()
    svd.compute(matrix)
    values = svd.get_singular_values()
    assert np.allclose(svd.get_u() @ np.diag(values) @ svd.get_v().T, matrix)
    assert np.all(values[:-1] >= values[1:])


def test_svd_empty_matrix():
    svd = SingularValue()
    svd.compute(np.zeros((0, 3)))
    assert svd.get_rank() == 0
    assert np.allclose(svd.solve(np.zeros(0)), np.zeros(3))


def test_svd_requires_compute():
    with pytest.raises(ValueError, match="not computed"):
        SingularValue().get_rank()
