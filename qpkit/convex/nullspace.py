"""
Equality constrained QP by null-space projection.

With ``AEᵀ P = [Q1 Q2] R`` the columns of ``Q2`` span the null space of
``AE``. Any feasible point is ``x = x_f + Q2 z`` for a particular solution
``x_f`` of ``AE x = BE``, and minimising the objective over ``z`` is the
unconstrained problem

```
(Q2ᵀ Q Q2) z = -Q2ᵀ (Q x_f + C)
```

References:
    - Nocedal & Wright, *Numerical Optimization* (2006), section 16.2.
"""

from __future__ import annotations

import numpy as np

from ..decomposition import QR, SingularValue
from ..logging import get_logger
from .base import SolverStrategy
from .core import Status

logger = get_logger(__name__)


class NullspaceSolver(SolverStrategy):
    """Single-pass solver for problems with equality constraints only."""

    def needs_another_iteration(self) -> bool:
        return False

    def _is_feasible(self, x: np.ndarray) -> bool:
        lhs = self.system.AE @ x
        context = self.options.feasibility
        return not any(context.is_different(float(b), float(v)) for b, v in zip(self.system.BE, lhs))

    def perform_iteration(self) -> None:
        system = self.system

        constraints = QR()
        constraints.compute(system.AE.T)
        rank = constraints.get_rank()
        null_basis = constraints.get_q()[:, rank:]

        least_norm = SingularValue()
        least_norm.compute(system.AE)
        x_feasible = least_norm.solve(system.BE)

        if not self._is_feasible(x_feasible):
            logger.debug("Equality constraints are inconsistent (rank %d of %d rows)", rank, system.AE.shape[0])
            system.reset_x()
            system.LE[:] = 0.0
            self.state = Status.INFEASIBLE
            return

        if null_basis.shape[1] == 0:
            solution = x_feasible
            self.state = Status.OPTIMAL
        else:
            reduced_q = null_basis.T @ system.Q @ null_basis
            reduced_c = null_basis.T @ (system.Q @ x_feasible + system.C)
            reduced = QR()
            reduced.compute(reduced_q)
            if reduced.is_full_rank():
                solution = x_feasible + null_basis @ reduced.solve(-reduced_c)
                if self._is_feasible(solution):
                    self.state = Status.OPTIMAL
                else:
                    logger.debug("Recombined solution drifted off the constraints; keeping the feasible point")
                    solution = x_feasible
                    self.state = Status.FEASIBLE
            else:
                logger.debug("Reduced Hessian is singular (dimension %d)", reduced_q.shape[0])
                solution = x_feasible
                self.state = Status.FEASIBLE

        system.fill_x(solution)
        system.LE[:] = constraints.solve(system.Q @ solution + system.C)


__all__ = ["NullspaceSolver"]
