"""
Integration tests for the QP solvers.

Tests that the solvers are reachable from the main package and agree with
each other and with the KKT diagnostics on realistic problems.
"""

import numpy as np

from qpkit import (
    OptimizeResult,
    Status,
    is_kkt_optimal,
    kkt_residuals,
    solve_qp,
)


def test_main_package_imports():
    """Test that the QP APIs are accessible from the main package."""
    assert solve_qp is not None
    assert kkt_residuals is not None
    assert is_kkt_optimal is not None
    assert OptimizeResult is not None
    assert Status is not None


def test_inactive_inequalities_match_equality_solution():
    """Adding inequalities that do not bind leaves the solution unchanged."""
    Q = np.array([[2.0, 0.5], [0.5, 1.0]])
    C = np.array([-1.0, -1.0])
    ae = np.array([[1.0, 1.0]])
    be = np.array([1.0])
    equality_only = solve_qp(Q, C, ae=ae, be=be)
    with_bounds = solve_qp(Q, C, ae=ae, be=be, ai=np.eye(2), bi=np.full(2, -10.0))
    assert with_bounds.status is Status.OPTIMAL
    assert with_bounds.active_set == ()
    assert np.allclose(with_bounds.x, equality_only.x)
    assert np.allclose(with_bounds.le, equality_only.le)


def test_portfolio_style_problem():
    """Minimum variance weights that sum to one and are non-negative."""
    cov = np.array(
        [
            [0.10, 0.02, 0.04],
            [0.02, 0.08, 0.01],
            [0.04, 0.01, 0.30],
        ]
    )
    ret = np.array([0.05, 0.07, 0.20])
    # Trade variance against expected return.
    result = solve_qp(
        2.0 * cov,
        -0.1 * ret,
        ae=np.ones((1, 3)),
        be=np.array([1.0]),
        ai=np.eye(3),
        bi=np.zeros(3),
    )
    assert result.status.is_optimal()
    assert np.isclose(result.x.sum(), 1.0)
    assert np.all(result.x >= -1e-10)
    assert is_kkt_optimal(
        2.0 * cov, -0.1 * ret, np.ones((1, 3)), np.array([1.0]), np.eye(3), np.zeros(3),
        result.x, le=result.le, li=result.li, tol=1e-8,
    )


def test_kkt_diagnostics_integration():
    """Test KKT diagnostics through main package import."""
    result = solve_qp(np.eye(2), np.zeros(2), ai=np.array([[1.0, 1.0]]), bi=np.array([2.0]))
    residuals = kkt_residuals(
        np.eye(2), np.zeros(2), None, None, np.array([[1.0, 1.0]]), np.array([2.0]),
        result.x, li=result.li,
    )
    assert np.allclose(result.x, [1.0, 1.0])
    assert all(value < 1e-10 for value in residuals.values())
