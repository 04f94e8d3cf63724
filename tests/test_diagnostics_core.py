"""Tests for core diagnostic functions."""

import numpy as np
import pytest

from qpkit.diagnostics import (
    assert_finite,
    assert_symmetric,
    is_symmetric,
    orthogonality_error,
)


def test_is_symmetric_and_assert() -> None:
    """Test is_symmetric and assert_symmetric on symmetric matrices."""
    mat = np.array([[2.0, 1.0], [1.0, 3.0]])
    assert is_symmetric(mat)

    # Should not raise
    assert_symmetric(mat)

    non_sym = np.array([[0.0, 1.0], [0.0, 0.0]])
    assert not is_symmetric(non_sym)

    with pytest.raises(ValueError, match="not symmetric"):
        assert_symmetric(non_sym)


def test_is_symmetric_rejects_non_square() -> None:
    assert not is_symmetric(np.zeros((2, 3)))
    with pytest.raises(ValueError, match="square"):
        assert_symmetric(np.zeros((2, 3)))


def test_assert_finite() -> None:
    assert_finite(np.array([1.0, -2.0]))
    with pytest.raises(ValueError, match="x contains non-finite"):
        assert_finite(np.array([1.0, np.nan]), name="x")


def test_orthogonality_error(rng: np.random.Generator) -> None:
    q_mat, _ = np.linalg.qr(rng.standard_normal((4, 4)))
    assert orthogonality_error(q_mat) < 1e-12
    assert orthogonality_error(2.0 * q_mat) == pytest.approx(3.0)
    assert orthogonality_error(np.zeros((3, 0))) == 0.0
