"""Tests for debug mode functionality."""

import numpy as np
import pytest

from qpkit.convex import Status, solve_qp
from qpkit.diagnostics import (
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)


def test_debug_mode_toggle_and_context() -> None:
    """Test debug mode toggling and context manager."""
    original = is_debug_enabled()

    try:
        set_debug_enabled(False)
        assert not is_debug_enabled()

        with debug_context(True):
            assert is_debug_enabled()

        # Back to previous (False in this block)
        assert not is_debug_enabled()

        set_debug_enabled(True)
        assert is_debug_enabled()

        with debug_context(False):
            assert not is_debug_enabled()

        # Back to True
        assert is_debug_enabled()
    finally:
        set_debug_enabled(original)


def test_debug_context_nested() -> None:
    """Test nested debug contexts."""
    original = is_debug_enabled()

    try:
        set_debug_enabled(False)
        assert not is_debug_enabled()

        with debug_context(True):
            assert is_debug_enabled()

            with debug_context(False):
                assert not is_debug_enabled()

            # Back to True
            assert is_debug_enabled()

        # Back to False
        assert not is_debug_enabled()
    finally:
        set_debug_enabled(original)


def test_solver_symmetry_check_in_debug_mode(debug_mode) -> None:
    """Test that the solvers reject an asymmetric Q only in debug mode."""
    q_mat = np.array([[1.0, 0.5], [0.0, 1.0]])
    with pytest.raises(ValueError, match="not symmetric"):
        solve_qp(q_mat, np.zeros(2))

    with debug_context(False):
        result = solve_qp(q_mat, np.zeros(2))
    assert result.status is Status.DISTINCT


def test_active_set_runs_in_debug_mode(debug_mode) -> None:
    """Test that the extra checks in debug mode do not change the answer."""
    result = solve_qp(
        np.eye(2),
        np.zeros(2),
        ae=np.array([[1.0, 1.0]]),
        be=np.array([1.0]),
        ai=np.array([[1.0, 0.0]]),
        bi=np.array([0.8]),
    )
    assert result.status is Status.OPTIMAL
    assert np.allclose(result.x, [0.8, 0.2])
