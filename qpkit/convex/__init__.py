"""
Convex quadratic programming.

This subpackage provides the active-set solver family: an unconstrained
solver, a null-space solver for equality constrained problems and a primal
active-set solver for general linear inequalities, all sharing one KKT state
and one driver loop. KKT diagnostics are available for checking results.

Modules are NumPy-first; the linear algebra they need comes from
:mod:`qpkit.decomposition`.
"""

from . import active_set, base, core, kkt, nullspace, qp, selector, unconstrained, utils
from .active_set import ActiveSetSolver
from .base import KKTSystem, SolverStrategy, run
from .core import OptimizeResult, Options, QPProblem, Status
from .kkt import is_kkt_optimal, kkt_residuals
from .nullspace import NullspaceSolver
from .qp import make_solver, solve_qp
from .selector import IndexSelector
from .unconstrained import UnconstrainedSolver

__all__ = [
    "active_set",
    "base",
    "core",
    "kkt",
    "nullspace",
    "qp",
    "selector",
    "unconstrained",
    "utils",
    # Core types
    "Status",
    "Options",
    "QPProblem",
    "OptimizeResult",
    "IndexSelector",
    "KKTSystem",
    # Solvers
    "SolverStrategy",
    "UnconstrainedSolver",
    "NullspaceSolver",
    "ActiveSetSolver",
    "make_solver",
    "run",
    "solve_qp",
    # Diagnostics
    "kkt_residuals",
    "is_kkt_optimal",
]
