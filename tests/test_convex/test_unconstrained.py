import numpy as np
import pytest

from qpkit.convex import Options, QPProblem, Status, UnconstrainedSolver, run


def test_identity_gives_negated_linear_term(rng):
    C = rng.standard_normal(4)
    solver = UnconstrainedSolver(QPProblem(np.eye(4), C))
    result = run(solver)
    assert result.status is Status.DISTINCT
    assert result.nit == 1
    assert np.allclose(result.x, -C)
    assert result.dual_residual < 1e-12


def test_spd_matches_linear_solve(rng):
    base = rng.standard_normal((5, 5))
    Q = base @ base.T + np.eye(5)
    C = rng.standard_normal(5)
    result = run(UnconstrainedSolver(QPProblem(Q, C)))
    assert result.status is Status.DISTINCT
    assert np.allclose(result.x, np.linalg.solve(Q, -C))
    assert result.fun == pytest.approx(-0.5 * C @ np.linalg.solve(Q, C))


def test_needs_another_iteration_only_before_first():
    solver = UnconstrainedSolver(QPProblem(np.eye(2), np.ones(2)))
    assert solver.needs_another_iteration()
    run(solver)
    assert not solver.needs_another_iteration()


def test_zero_quadratic_with_linear_term_is_unbounded():
    result = run(UnconstrainedSolver(QPProblem(np.zeros((3, 3)), np.array([1.0, 0.0, 0.0]))))
    assert result.status is Status.UNBOUNDED
    assert np.array_equal(result.x, np.zeros(3))


def test_singular_compatible_is_optimal():
    result = run(UnconstrainedSolver(QPProblem(np.diag([2.0, 0.0]), np.array([-4.0, 0.0]))))
    assert result.status is Status.OPTIMAL
    assert np.allclose(result.x, [2.0, 0.0])


def test_singular_incompatible_is_unbounded():
    result = run(UnconstrainedSolver(QPProblem(np.diag([2.0, 0.0]), np.array([-4.0, 1.0]))))
    assert result.status is Status.UNBOUNDED


def test_indefinite_is_invalid():
    result = run(UnconstrainedSolver(QPProblem(np.diag([1.0, -1.0]), np.zeros(2))))
    assert result.status is Status.INVALID
    assert result.nit == 0


def test_semidefinite_passes_validation():
    solver = UnconstrainedSolver(QPProblem(np.array([[1.0, 1.0], [1.0, 1.0]]), np.zeros(2)))
    assert solver.validate()
    assert solver.state is Status.VALID


def test_validation_can_be_disabled():
    solver = UnconstrainedSolver(QPProblem(np.diag([1.0, -1.0]), np.zeros(2)), Options(validate=False))
    assert solver.validate()
    assert solver.state is Status.VALID


def test_kick_start_fills_x():
    solver = UnconstrainedSolver(QPProblem(np.eye(2), np.zeros(2)))
    previous = run(UnconstrainedSolver(QPProblem(np.eye(2), np.ones(2))))
    solver.initialise(previous)
    assert np.allclose(solver.system.X, [-1.0, -1.0])
