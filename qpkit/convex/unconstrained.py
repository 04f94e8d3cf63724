"""
Unconstrained quadratic minimisation: ``Q x = -C``.
"""

from __future__ import annotations

from ..decomposition import Cholesky, Eigenvalue
from ..logging import get_logger
from .base import SolverStrategy
from .core import Status

logger = get_logger(__name__)


class UnconstrainedSolver(SolverStrategy):
    """
    Single-shot solver for problems without constraints.

    A solvable Cholesky factorisation gives the unique minimiser
    (``DISTINCT``). A singular ``Q`` falls back to the eigenvalue
    decomposition: if ``-C`` lies in the range of ``Q`` the minimum-norm
    minimiser is returned (``OPTIMAL``), otherwise the objective decreases
    without bound along a null direction of ``Q`` and ``X`` is reset to zero
    (``UNBOUNDED``).
    """

    def needs_another_iteration(self) -> bool:
        return self.iterations == 0

    def perform_iteration(self) -> None:
        system = self.system
        rhs = -system.C

        cholesky = Cholesky()
        cholesky.compute(system.Q)
        if cholesky.is_solvable():
            system.fill_x(cholesky.solve(rhs))
            self.state = Status.DISTINCT
            return

        eigen = Eigenvalue()
        eigen.compute(system.Q)
        if eigen.is_compatible(rhs, self.options.solution):
            system.fill_x(eigen.solve(rhs))
            self.state = Status.OPTIMAL
        else:
            logger.debug("Linear term has a component along the null space of Q")
            system.reset_x()
            self.state = Status.UNBOUNDED


__all__ = ["UnconstrainedSolver"]
