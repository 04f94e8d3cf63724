"""
Shared KKT state, the solver strategy interface and the generic driver loop.

Every solver owns a :class:`KKTSystem` holding the problem data together
with the current iterate ``X`` and the multipliers ``LE`` / ``LI``. The
driver :func:`run` is the only place that iterates:

```
validate -> initialise -> do { perform_iteration } while (needs_another_iteration
                                                         and nit < iterations_abort)
         -> build_result
```
"""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from typing import Dict, Optional, Sequence

import numpy as np

from ..decomposition import Cholesky, Eigenvalue
from ..diagnostics import assert_symmetric, is_debug_enabled
from ..logging import get_logger
from .core import OptimizeResult, Options, QPProblem, Status
from .kkt import kkt_residuals
from .utils import symmetrize

logger = get_logger(__name__)

_MESSAGES: Dict[Status, str] = {
    Status.UNEXPLORED: "Solver has not run",
    Status.VALID: "Problem validated, no iteration performed",
    Status.INVALID: "Quadratic term is not positive semidefinite",
    Status.INFEASIBLE: "Constraints cannot be satisfied",
    Status.UNBOUNDED: "Objective is unbounded below",
    Status.FAILED: "Solver failed",
    Status.APPROXIMATE: "Iteration limit reached before convergence",
    Status.FEASIBLE: "Feasible point found, optimality not established",
    Status.OPTIMAL: "KKT conditions satisfied",
    Status.DISTINCT: "Unique optimum found",
}


class KKTSystem:
    """
    Problem data plus the primal/dual iterate of a QP solver.

    ``Q`` is stored symmetrised. ``LI`` is indexed by the original
    inequality row and is zero on inactive rows.
    """

    def __init__(self, problem: QPProblem) -> None:
        self.Q = symmetrize(problem.Q)
        self.C = problem.C
        self.AE = problem.AE
        self.BE = problem.BE
        self.AI = problem.AI
        self.BI = problem.BI
        self.X = np.zeros(problem.n)
        self.LE = np.zeros(problem.count_equality_constraints())
        self.LI = np.zeros(problem.count_inequality_constraints())

    def reset_x(self) -> None:
        self.X[:] = 0.0

    def fill_x(self, values: np.ndarray) -> None:
        self.X[:] = np.asarray(values, dtype=float).reshape(-1)

    def get_se(self) -> np.ndarray:
        """Equality residual ``AE X - BE``."""
        return self.AE @ self.X - self.BE

    def get_si(self, indices: Optional[Sequence[int]] = None) -> np.ndarray:
        """Inequality slack ``AI X - BI``, optionally restricted to ``indices``."""
        if indices is None:
            return self.AI @ self.X - self.BI
        rows = np.asarray(indices, dtype=int)
        return self.AI[rows] @ self.X - self.BI[rows]

    def get_li(self, indices: Optional[Sequence[int]] = None) -> np.ndarray:
        if indices is None:
            return self.LI.copy()
        return self.LI[np.asarray(indices, dtype=int)]


class SolverStrategy(ABC):
    """
    One QP solution method, driven by :func:`run`.

    Subclasses implement :meth:`needs_another_iteration` and
    :meth:`perform_iteration`; the remaining steps have defaults here.
    ``options`` is copied so that a strategy can record its own iteration
    budget without touching the caller's instance.
    """

    def __init__(self, problem: QPProblem, options: Optional[Options] = None) -> None:
        self.problem = problem
        self.options = dataclasses.replace(options) if options is not None else Options()
        if self.options.iterations_abort is None:
            self.options.iterations_abort = self._default_iterations_abort()
        self.system = KKTSystem(problem)
        self.state = Status.UNEXPLORED
        self.iterations = 0

    def _default_iterations_abort(self) -> int:
        return 1

    @staticmethod
    def is_debug() -> bool:
        return is_debug_enabled()

    def validate(self) -> bool:
        """
        Check that ``Q`` is positive semidefinite.

        A Cholesky factorisation settles the positive definite case; otherwise
        the eigenvalues decide and any eigenvalue below ``-options.problem``
        tolerance makes the problem ``INVALID``.
        """
        if self.is_debug():
            assert_symmetric(self.problem.Q)

        if not self.options.validate or self.system.Q.size == 0:
            self.state = Status.VALID
            return True

        if Cholesky().compute(self.system.Q):
            self.state = Status.VALID
            return True

        eigen = Eigenvalue()
        eigen.compute(self.system.Q)
        values = eigen.get_eigenvalues()
        largest = float(np.max(np.abs(values)))
        negative = [v for v in values if v < 0.0 and not self.options.problem.is_small(largest, float(v))]
        if negative:
            logger.debug("Q has negative eigenvalues %s", negative)
            self.state = Status.INVALID
            return False

        self.state = Status.VALID
        return True

    def initialise(self, kick_start: Optional[OptimizeResult] = None) -> bool:
        if kick_start is not None and kick_start.x is not None:
            self.system.fill_x(kick_start.x)
        return True

    @abstractmethod
    def needs_another_iteration(self) -> bool:
        ...

    @abstractmethod
    def perform_iteration(self) -> None:
        ...

    def extract_solution(self) -> np.ndarray:
        return self.system.X.copy()

    def get_active_set(self) -> Sequence[int]:
        return ()

    def build_result(self) -> OptimizeResult:
        x = self.extract_solution()
        system = self.system
        residuals = kkt_residuals(
            system.Q, system.C, system.AE, system.BE, system.AI, system.BI, x, system.LE, system.LI
        )
        return OptimizeResult(
            x=x,
            fun=self.problem.objective(x),
            status=self.state,
            message=_MESSAGES[self.state],
            nit=self.iterations,
            le=system.LE.copy(),
            li=system.LI.copy(),
            slack=system.get_si(),
            active_set=tuple(int(i) for i in self.get_active_set()),
            primal_residual=max(residuals["primal_eq"], residuals["primal_ineq"]),
            dual_residual=residuals["dual"],
        )


def run(strategy: SolverStrategy, kick_start: Optional[OptimizeResult] = None) -> OptimizeResult:
    """
    Drive ``strategy`` to completion and return its result.

    At least one iteration is performed once the problem validates and
    initialises. When the iteration budget runs out first, the current
    (normally ``APPROXIMATE``) state is returned as is.
    """
    name = type(strategy).__name__
    if strategy.validate() and strategy.initialise(kick_start):
        while True:
            strategy.perform_iteration()
            strategy.iterations += 1
            if not strategy.needs_another_iteration():
                break
            if strategy.iterations >= strategy.options.iterations_abort:
                logger.warning(
                    "%s stopped after %d iterations (iterations_abort), state %s",
                    name,
                    strategy.iterations,
                    strategy.state.name,
                )
                break
    logger.debug("%s finished: state=%s nit=%d", name, strategy.state.name, strategy.iterations)
    return strategy.build_result()


__all__ = ["KKTSystem", "SolverStrategy", "run"]
