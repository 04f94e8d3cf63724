"""
Quadratic programming entry points.

:func:`make_solver` picks a strategy from the shape of the problem and
:func:`solve_qp` wraps problem construction, dispatch and the driver loop in
one call::

    result = solve_qp(np.eye(2), np.zeros(2), ae=[[1.0, 1.0]], be=[1.0],
                      ai=[[1.0, 0.0]], bi=[0.8])
    result.x          # array([0.8, 0.2])
    result.active_set # (0,)
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..logging import get_logger
from .active_set import ActiveSetSolver
from .base import SolverStrategy, run
from .core import OptimizeResult, Options, QPProblem
from .nullspace import NullspaceSolver
from .unconstrained import UnconstrainedSolver

logger = get_logger(__name__)


def make_solver(problem: QPProblem, options: Optional[Options] = None) -> SolverStrategy:
    """
    Select the solver strategy for ``problem``.

    Inequalities (with or without equalities) go to :class:`ActiveSetSolver`,
    equalities only to :class:`NullspaceSolver` and everything else to
    :class:`UnconstrainedSolver`.
    """
    if problem.has_inequality_constraints():
        return ActiveSetSolver(problem, options)
    if problem.has_equality_constraints():
        return NullspaceSolver(problem, options)
    return UnconstrainedSolver(problem, options)


def solve_qp(
    Q: np.ndarray,
    C: np.ndarray,
    ae: Optional[np.ndarray] = None,
    be: Optional[np.ndarray] = None,
    ai: Optional[np.ndarray] = None,
    bi: Optional[np.ndarray] = None,
    *,
    options: Optional[Options] = None,
    kick_start: Optional[OptimizeResult] = None,
) -> OptimizeResult:
    """
    Minimise ``1/2 xᵀ Q x + Cᵀ x`` subject to ``ae x = be`` and ``ai x >= bi``.

    Args:
        Q: Symmetric positive semidefinite ``(n, n)`` matrix.
        C: Linear term of length ``n``.
        ae, be: Optional equality constraints.
        ai, bi: Optional inequality constraints.
        options: Solver configuration; defaults to :class:`Options`.
        kick_start: A previous result used as warm start. Its ``x`` and
            ``active_set`` seed the active-set solver.

    Returns:
        :class:`OptimizeResult`. Infeasible, unbounded and non-convex
        problems are reported through ``status``, never raised.

    Raises:
        ValueError: If the arrays have inconsistent shapes.
    """
    problem = QPProblem(Q, C, ae, be, ai, bi)
    strategy = make_solver(problem, options)
    logger.debug(
        "Solving QP with %s: n=%d, %d equalities, %d inequalities",
        type(strategy).__name__,
        problem.n,
        problem.count_equality_constraints(),
        problem.count_inequality_constraints(),
    )
    return run(strategy, kick_start)


__all__ = ["make_solver", "solve_qp"]
