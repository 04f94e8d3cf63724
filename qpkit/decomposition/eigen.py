"""Symmetric eigenvalue decomposition."""

from __future__ import annotations

from typing import Literal, Optional

import numpy as np

from ..context import NumberContext
from ..transform.rotation import jacobi_eigh

EigenMethod = Literal["numpy", "jacobi"]

_DEFAULT_CONTEXT = NumberContext(epsilon=1e-12, zero=0.0)


class Eigenvalue:
    """
    ``A = V D Vᵀ`` for symmetric ``A``.

    ``method="numpy"`` delegates to LAPACK through ``numpy.linalg.eigh``;
    ``method="jacobi"`` runs the cyclic Jacobi sweep from
    :mod:`qpkit.transform.rotation`. Eigenvalues whose magnitude is
    negligible relative to the largest one are treated as zero by
    :meth:`solve` and :meth:`is_compatible`.
    """

    def __init__(self, method: EigenMethod = "numpy", context: Optional[NumberContext] = None) -> None:
        if method not in ("numpy", "jacobi"):
            raise ValueError(f"Unknown method: {method}. Use 'numpy' or 'jacobi'.")
        self._method = method
        self._context = context or _DEFAULT_CONTEXT
        self._values: Optional[np.ndarray] = None
        self._vectors: Optional[np.ndarray] = None

    def compute(self, matrix: np.ndarray) -> bool:
        matrix = np.asarray(matrix, dtype=float)
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
            raise ValueError(f"Expected a square matrix, got shape {matrix.shape}.")
        if self._method == "jacobi":
            self._values, self._vectors = jacobi_eigh(matrix)
        else:
            self._values, self._vectors = np.linalg.eigh(matrix)
        return True

    def _require(self) -> None:
        if self._values is None or self._vectors is None:
            raise ValueError("Eigenvalue decomposition not computed")

    def get_eigenvalues(self) -> np.ndarray:
        self._require()
        return self._values

    def get_d(self) -> np.ndarray:
        self._require()
        return np.diag(self._values)

    def get_v(self) -> np.ndarray:
        self._require()
        return self._vectors

    def _negligible(self) -> np.ndarray:
        values = self.get_eigenvalues()
        largest = float(np.max(np.abs(values))) if values.size else 0.0
        return np.array([self._context.is_small(largest, float(v)) for v in values], dtype=bool)

    def get_rank(self) -> int:
        return int(np.count_nonzero(~self._negligible()))

    def is_solvable(self) -> bool:
        """True when the matrix is numerically non-singular."""
        self._require()
        return self.get_rank() == self._values.shape[0]

    def is_compatible(self, rhs: np.ndarray, context: Optional[NumberContext] = None) -> bool:
        """
        True when ``A x = rhs`` has a solution, i.e. ``rhs`` has no component
        along the (numerical) null space of ``A``.
        """
        ctx = context or self._context
        rhs = np.asarray(rhs, dtype=float).reshape(-1)
        null_basis = self.get_v()[:, self._negligible()]
        if null_basis.shape[1] == 0:
            return True
        leak = float(np.linalg.norm(null_basis.T @ rhs))
        return ctx.is_small(max(float(np.linalg.norm(rhs)), 1.0), leak)

    def solve(self, rhs: np.ndarray) -> np.ndarray:
        """Minimum-norm least-squares solution ``V D⁺ Vᵀ rhs``."""
        values = self.get_eigenvalues()
        vectors = self.get_v()
        inverted = np.zeros_like(values)
        keep = ~self._negligible()
        inverted[keep] = 1.0 / values[keep]
        rhs = np.asarray(rhs, dtype=float)
        if rhs.ndim == 2:
            inverted = inverted[:, None]
        return vectors @ (inverted * (vectors.T @ rhs))

    def reset(self) -> None:
        self._values = None
        self._vectors = None


__all__ = ["Eigenvalue", "EigenMethod"]
