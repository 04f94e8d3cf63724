"""
Dense matrix decompositions used by the QP solvers.

Each decomposition follows the same life cycle: construct (optionally with a
:class:`~qpkit.context.NumberContext` that decides what counts as
negligible), ``compute(matrix)``, then query and ``solve``.
"""

from .cholesky import Cholesky
from .eigen import EigenMethod, Eigenvalue
from .qr import QR
from .svd import SingularValue

__all__ = [
    "Cholesky",
    "Eigenvalue",
    "EigenMethod",
    "QR",
    "SingularValue",
]
