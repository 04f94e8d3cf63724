"""
Primal active-set method for convex quadratic programs.

Every iteration treats the currently active inequality rows as equalities,
solves that equality constrained sub-problem and then adjusts the active
set: the most violated inactive row is added and the active row with the
most negative multiplier is dropped. Both moves may happen in the same
iteration. The method stops when neither move is suggested.

References:
    - Nocedal & Wright, *Numerical Optimization* (2006), section 16.5.
    - Goldfarb & Idnani, "A numerically stable dual method for solving
      strictly convex quadratic programs" (1983).
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

import numpy as np

from ..context import NumberContext
from ..diagnostics import assert_finite
from ..logging import get_logger
from .base import SolverStrategy, run
from .core import OptimizeResult, Options, QPProblem, Status
from .nullspace import NullspaceSolver
from .selector import IndexSelector
from .unconstrained import UnconstrainedSolver
from .utils import max_violation, stack_rows

logger = get_logger(__name__)


def _most_negative(indices: np.ndarray, values: np.ndarray, last: int, context: NumberContext) -> int:
    """
    Index (from ``indices``) of the most negative non-negligible value, or -1.

    ``last`` is only chosen when no other index qualifies.
    """
    retval = -1
    minimum = math.inf
    position_of_last = -1
    for position, index in enumerate(indices):
        if index == last:
            position_of_last = position
            continue
        value = float(values[position])
        if value < 0.0 and value < minimum and not context.is_zero(value):
            minimum = value
            retval = int(index)
    if retval < 0 and position_of_last >= 0:
        value = float(values[position_of_last])
        if value < 0.0 and not context.is_zero(value):
            retval = int(indices[position_of_last])
    return retval


class ActiveSetSolver(SolverStrategy):
    """
    Active-set solver for problems with inequality constraints.

    The iteration budget defaults to ``int(9 + sqrt(max(rows, cols)))²`` of
    ``AI``. Sub-problems go to :class:`NullspaceSolver` when any equality is
    present (original or active) and to :class:`UnconstrainedSolver`
    otherwise.

    Without a phase-1 pass the first iterate comes from the problem with no
    active rows. When that sub-problem is unbounded the result is
    ``UNBOUNDED`` even if the inequalities would bound the full problem, as
    for ``Q = diag(1, 0)``, ``C = (0, 1)`` and ``x2 >= 0``.
    """

    def __init__(self, problem: QPProblem, options: Optional[Options] = None) -> None:
        super().__init__(problem, options)
        self.activator = IndexSelector(problem.count_inequality_constraints())
        self._solved_set = np.empty(0, dtype=int)

    def _default_iterations_abort(self) -> int:
        limit = int(9.0 + math.sqrt(max(self.problem.AI.shape)))
        return limit * limit

    def _sub_options(self) -> Options:
        return Options(
            validate=False,
            problem=self.options.problem,
            solution=self.options.solution,
            slack=self.options.slack,
            feasibility=self.options.feasibility,
        )

    def _build_iteration_solver(self, included: np.ndarray) -> SolverStrategy:
        system = self.system
        sub_ae = stack_rows(system.AE, system.AI, included)
        sub_be = np.concatenate([system.BE, system.BI[included]])
        if sub_ae.shape[0]:
            sub_problem = QPProblem(system.Q, system.C, sub_ae, sub_be)
            return NullspaceSolver(sub_problem, self._sub_options())
        return UnconstrainedSolver(QPProblem(system.Q, system.C), self._sub_options())

    def initialise(self, kick_start: Optional[OptimizeResult] = None) -> bool:
        self.activator.exclude_all()
        if kick_start is not None:
            super().initialise(kick_start)
            if kick_start.is_active_set_defined():
                self.activator.include(kick_start.active_set)
            included = self.activator.get_included()
            slack = self.system.get_si(included)
            for index, value in zip(included, slack):
                if not self.options.slack.is_zero(float(value)):
                    self.activator.exclude(int(index))
            logger.debug("Warm start with %r", self.activator)
        return True

    def suggest_constraint_to_exclude(self) -> int:
        """Active row with the most negative multiplier, or -1."""
        included = self.activator.get_included()
        multipliers = self.system.get_li(included)
        if self.is_debug() and included.size:
            logger.debug("Looking for the most negative multiplier among %s", multipliers)
        return _most_negative(included, multipliers, self.activator.last_included, self.options.solution)

    def suggest_constraint_to_include(self) -> int:
        """Inactive row with the most negative slack (most violated), or -1."""
        excluded = self.activator.get_excluded()
        slack = self.system.get_si(excluded)
        if self.is_debug() and excluded.size:
            logger.debug("Looking for the most negative slack among %s", slack)
        return _most_negative(excluded, slack, self.activator.last_excluded, self.options.slack)

    def needs_another_iteration(self) -> bool:
        if self.state.is_failure():
            return False

        to_include = self.suggest_constraint_to_include()
        to_exclude = self.suggest_constraint_to_exclude()
        logger.debug("Suggested to include %d, to exclude %d; %r", to_include, to_exclude, self.activator)

        if to_include < 0 and to_exclude < 0:
            self.state = Status.OPTIMAL
            return False

        if to_exclude >= 0:
            self.activator.exclude(to_exclude)
        if to_include >= 0:
            self.activator.include(to_include)
        self.state = Status.APPROXIMATE
        return True

    def perform_iteration(self) -> None:
        system = self.system
        count_equalities = system.AE.shape[0]

        # Every retry removes at least one active row, so the last pass runs
        # with an empty active set.
        for _ in range(self.activator.count_included() + 1):
            included = self.activator.get_included()
            result = run(self._build_iteration_solver(included))

            if result.status.is_feasible():
                system.fill_x(result.x)
                system.LE[:] = result.le[:count_equalities]
                system.LI[:] = 0.0
                system.LI[included] = result.le[count_equalities:]
                self._solved_set = included
                self.state = Status.APPROXIMATE
                if self.is_debug():
                    assert_finite(system.X, "X")
                    logger.debug(
                        "Iterate %s: equality residual %.3e, inequality violation %.3e",
                        system.X,
                        max_violation(system.get_se()),
                        max_violation(np.minimum(system.get_si(), 0.0)),
                    )
                return

            if self.activator.count_included() == 0:
                self._solved_set = np.empty(0, dtype=int)
                if result.status is Status.UNBOUNDED:
                    self.state = Status.UNBOUNDED
                else:
                    system.reset_x()
                    self.state = Status.INFEASIBLE
                logger.debug("Sub-problem without active rows is %s", result.status.name)
                return

            if self.activator.count_included() > 2 and self.activator.is_last_included():
                self.activator.revert_last_inclusion()
            self.activator.shrink()
            logger.debug("Sub-problem %s, did shrink: %r", result.status.name, self.activator)

    def get_active_set(self) -> Sequence[int]:
        """Rows active in the sub-problem that produced the current iterate."""
        return self._solved_set


__all__ = ["ActiveSetSolver"]
