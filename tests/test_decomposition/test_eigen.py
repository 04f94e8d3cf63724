import numpy as np
import pytest

from qpkit.decomposition import Eigenvalue


@pytest.mark.parametrize("method", ["numpy", "jacobi"])
def test_eigen_reconstructs(rng, method):
    base = rng.standard_normal((5, 5))
    matrix = base + base.T
    eigen = Eigenvalue(method=method)
    eigen.compute(matrix)
    v_mat = eigen.get_v()
    assert np.allclose(v_mat @ eigen.get_d() @ v_mat.T, matrix, atol=1e-10)
    assert eigen.is_solvable()


def test_eigen_unknown_method():
    with pytest.raises(ValueError, match="Unknown method"):
        Eigenvalue(method="lapack")


def test_eigen_requires_compute():
    with pytest.raises(ValueError, match="not computed"):
        Eigenvalue().get_eigenvalues()


def test_eigen_singular_compatible_rhs():
    matrix = np.diag([2.0, 0.0])
    eigen = Eigenvalue()
    eigen.compute(matrix)
    assert eigen.get_rank() == 1
    assert not eigen.is_solvable()
    assert eigen.is_compatible(np.array([4.0, 0.0]))
    assert np.allclose(eigen.solve(np.array([4.0, 0.0])), [2.0, 0.0])


def test_eigen_singular_incompatible_rhs():
    eigen = Eigenvalue(method="jacobi")
    eigen.compute(np.array([[1.0, 1.0], [1.0, 1.0]]))
    assert eigen.get_rank() == 1
    assert eigen.is_compatible(np.array([1.0, 1.0]))
    assert not eigen.is_compatible(np.array([1.0, -1.0]))


def test_eigen_solve_matrix_rhs(rng):
    base = rng.standard_normal((3, 3))
    matrix = base @ base.T + np.eye(3)
    eigen = Eigenvalue()
    eigen.compute(matrix)
    rhs = rng.standard_normal((3, 2))
    assert np.allclose(eigen.solve(rhs), np.linalg.solve(matrix, rhs))


def test_eigen_zero_matrix_has_rank_zero():
    eigen = Eigenvalue()
    eigen.compute(np.zeros((3, 3)))
    assert eigen.get_rank() == 0
    assert not eigen.is_compatible(np.array([1.0, 0.0, 0.0]))
    assert eigen.is_compatible(np.zeros(3))
