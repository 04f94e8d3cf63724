"""
Core problem, option and result containers for the QP solvers.

The problem convention is to minimise ``1/2 xᵀ Q x + Cᵀ x`` subject to
equality constraints ``AE x = BE`` and inequality constraints ``AI x >= BI``.
The inequality slack is ``SI = AI x - BI`` so a negative slack marks a
violated constraint. At a solution the stationarity condition reads
``Q x + C = AEᵀ LE + AIᵀ LI`` with ``LI`` zero on inactive rows.

References:
    - Nocedal & Wright, *Numerical Optimization* (2006), chapter 16.
    - Boyd & Vandenberghe, *Convex Optimization* (2004)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from ..context import NumberContext


class Status(Enum):
    """
    Solver state.

    Members are declared in increasing order of "how good": everything from
    ``APPROXIMATE`` on carries a usable iterate, everything from ``FEASIBLE``
    on satisfies the constraints.
    """

    UNEXPLORED = "unexplored"
    VALID = "valid"
    INVALID = "invalid"
    INFEASIBLE = "infeasible"
    UNBOUNDED = "unbounded"
    FAILED = "failed"
    APPROXIMATE = "approximate"
    FEASIBLE = "feasible"
    OPTIMAL = "optimal"
    DISTINCT = "distinct"

    def _rank(self) -> int:
        return list(Status).index(self)

    def is_approximate(self) -> bool:
        return self._rank() >= Status.APPROXIMATE._rank()

    def is_feasible(self) -> bool:
        return self._rank() >= Status.FEASIBLE._rank()

    def is_optimal(self) -> bool:
        return self in (Status.OPTIMAL, Status.DISTINCT)

    def is_failure(self) -> bool:
        return self in (Status.INVALID, Status.INFEASIBLE, Status.UNBOUNDED, Status.FAILED)


@dataclass
class Options:
    """
    Solver configuration.

    Attributes:
        iterations_abort: Iteration ceiling enforced by the driver loop.
            ``None`` lets each solver pick its own default.
        validate: Run the positive semidefinite check on ``Q`` first.
        problem: Tolerance for properties of the input (semidefiniteness).
        solution: Tolerance for Lagrange multipliers being zero.
        slack: Tolerance for inequality slack being zero.
        feasibility: Tolerance when verifying ``AE x = BE``.
    """

    iterations_abort: Optional[int] = None
    validate: bool = True
    problem: NumberContext = field(default_factory=lambda: NumberContext(epsilon=1e-12, zero=1e-10))
    solution: NumberContext = field(default_factory=lambda: NumberContext(epsilon=1e-10, zero=1e-10))
    slack: NumberContext = field(default_factory=lambda: NumberContext(epsilon=1e-10, zero=1e-8))
    feasibility: NumberContext = field(default_factory=lambda: NumberContext(epsilon=1e-10, zero=1e-8))

    def __post_init__(self) -> None:
        if self.iterations_abort is not None and self.iterations_abort < 1:
            raise ValueError(f"iterations_abort must be positive, got {self.iterations_abort}.")
        for name in ("problem", "solution", "slack", "feasibility"):
            if not isinstance(getattr(self, name), NumberContext):
                raise TypeError(f"{name} must be a NumberContext, got {type(getattr(self, name)).__name__}.")


def _matrix(mat: Optional[np.ndarray], n: int, name: str) -> np.ndarray:
    if mat is None:
        return np.zeros((0, n))
    arr = np.asarray(mat, dtype=float)
    if arr.ndim == 1 and arr.size == n:
        arr = arr.reshape(1, n)
    if arr.size == 0:
        return np.zeros((0, n))
    if arr.ndim != 2 or arr.shape[1] != n:
        raise ValueError(f"{name} must have {n} columns, got shape {arr.shape}")
    return arr


def _vector(vec: Optional[np.ndarray], rows: int, name: str) -> np.ndarray:
    if vec is None:
        return np.zeros(rows)
    arr = np.asarray(vec, dtype=float).reshape(-1)
    if arr.shape[0] != rows:
        raise ValueError(f"{name} must have {rows} entries, got {arr.shape[0]}")
    return arr


@dataclass
class QPProblem:
    """
    Convex quadratic program.

    ``Q`` should be symmetric positive semidefinite; the solvers report
    ``Status.INVALID`` otherwise. Constraint blocks are optional but must be
    given in pairs. Dimensions are checked once here and normalised so that
    missing blocks become zero-row arrays.
    """

    Q: np.ndarray
    C: np.ndarray
    AE: Optional[np.ndarray] = None
    BE: Optional[np.ndarray] = None
    AI: Optional[np.ndarray] = None
    BI: Optional[np.ndarray] = None

    def __post_init__(self) -> None:
        self.C = np.asarray(self.C, dtype=float).reshape(-1)
        n = self.C.shape[0]
        self.Q = np.asarray(self.Q, dtype=float)
        if self.Q.shape != (n, n):
            raise ValueError(f"Q must be square and match the dimension of C ({n}), got shape {self.Q.shape}")
        for a_name, b_name in (("AE", "BE"), ("AI", "BI")):
            if (getattr(self, a_name) is None) != (getattr(self, b_name) is None):
                raise ValueError(f"{a_name} and {b_name} must be given together")
        self.AE = _matrix(self.AE, n, "AE")
        self.BE = _vector(self.BE, self.AE.shape[0], "BE")
        self.AI = _matrix(self.AI, n, "AI")
        self.BI = _vector(self.BI, self.AI.shape[0], "BI")

    @property
    def n(self) -> int:
        return int(self.C.shape[0])

    def count_equality_constraints(self) -> int:
        return int(self.AE.shape[0])

    def count_inequality_constraints(self) -> int:
        return int(self.AI.shape[0])

    def has_equality_constraints(self) -> bool:
        return self.count_equality_constraints() > 0

    def has_inequality_constraints(self) -> bool:
        return self.count_inequality_constraints() > 0

    def objective(self, x: np.ndarray) -> float:
        return float(0.5 * x @ (self.Q @ x) + self.C @ x)


@dataclass
class OptimizeResult:
    """
    Solution container shared across all solvers.

    Attributes:
        x: Primal solution vector.
        fun: Objective value at ``x``.
        status: Final solver state.
        message: Human-readable string explaining the status.
        nit: Number of iterations performed.
        le: Equality constraint multipliers.
        li: Inequality constraint multipliers, zero for inactive rows.
        slack: Inequality slack ``AI x - BI``.
        active_set: Indices of the inequality constraints active at ``x``.
            Passing the result back as a kick start warm-starts a new solve.
        primal_residual: Largest equality or inequality violation.
        dual_residual: Largest stationarity violation.
    """

    x: Optional[np.ndarray]
    fun: Optional[float]
    status: Status
    message: str
    nit: int
    le: Optional[np.ndarray] = None
    li: Optional[np.ndarray] = None
    slack: Optional[np.ndarray] = None
    active_set: Tuple[int, ...] = ()
    primal_residual: Optional[float] = None
    dual_residual: Optional[float] = None

    @property
    def success(self) -> bool:
        return self.status.is_optimal()

    def is_active_set_defined(self) -> bool:
        return len(self.active_set) > 0


__all__ = ["Status", "Options", "QPProblem", "OptimizeResult"]
