"""qpkit - NumPy-first active-set quadratic programming."""

__version__ = "0.1.0"

# Convex optimization
from .context import NumberContext
from .convex import (
    ActiveSetSolver,
    IndexSelector,
    NullspaceSolver,
    OptimizeResult,
    Options,
    QPProblem,
    SolverStrategy,
    Status,
    UnconstrainedSolver,
    is_kkt_optimal,
    kkt_residuals,
    make_solver,
    run,
    solve_qp,
)

# Decompositions
from .decomposition import QR, Cholesky, Eigenvalue, SingularValue

# Diagnostics
from .diagnostics import (
    assert_finite,
    assert_symmetric,
    debug_context,
    is_debug_enabled,
    is_symmetric,
    orthogonality_error,
    set_debug_enabled,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level

# Transformations
from .transform import (
    ElementaryFactor,
    Householder,
    IdentityFactor,
    InvertibleFactor,
    ProductForm,
    Rotation,
    jacobi_eigh,
    rotate_left,
    rotate_right,
    rotations_p,
    transform_hermitian,
    transform_left,
    transform_right,
    tridiagonalize,
)

__all__ = [
    "__version__",
    "NumberContext",
    # Convex optimization
    "Status",
    "Options",
    "QPProblem",
    "OptimizeResult",
    "IndexSelector",
    "SolverStrategy",
    "UnconstrainedSolver",
    "NullspaceSolver",
    "ActiveSetSolver",
    "make_solver",
    "run",
    "solve_qp",
    "kkt_residuals",
    "is_kkt_optimal",
    # Decompositions
    "Cholesky",
    "Eigenvalue",
    "QR",
    "SingularValue",
    # Diagnostics
    "is_symmetric",
    "assert_symmetric",
    "assert_finite",
    "orthogonality_error",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
    # Transformations
    "Householder",
    "transform_left",
    "transform_right",
    "transform_hermitian",
    "tridiagonalize",
    "Rotation",
    "rotate_left",
    "rotate_right",
    "rotations_p",
    "jacobi_eigh",
    "InvertibleFactor",
    "IdentityFactor",
    "ElementaryFactor",
    "ProductForm",
]
