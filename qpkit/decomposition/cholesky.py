"""Cholesky decomposition with an explicit solvability query."""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..context import NumberContext

_DEFAULT_CONTEXT = NumberContext(epsilon=1e-8, zero=0.0)


class Cholesky:
    """
    ``A = L Lᵀ`` for symmetric positive definite ``A``.

    :meth:`compute` never raises on a matrix that is not positive definite; it
    returns False and :meth:`is_spd` reports the outcome. A factorisation
    whose diagonal spans more than ``1 / context.epsilon`` is SPD in exact
    arithmetic but treated as not solvable.
    """

    def __init__(self, context: Optional[NumberContext] = None) -> None:
        self._context = context or _DEFAULT_CONTEXT
        self._l: Optional[np.ndarray] = None
        self._spd = False

    def compute(self, matrix: np.ndarray) -> bool:
        matrix = np.asarray(matrix, dtype=float)
        self._l = None
        self._spd = False
        if matrix.size == 0:
            self._l = np.zeros((0, 0))
            self._spd = True
            return True
        try:
            self._l = np.linalg.cholesky(matrix)
            self._spd = bool(np.all(np.isfinite(self._l)))
        except np.linalg.LinAlgError:
            self._l = None
        return self._spd

    def is_computed(self) -> bool:
        return self._l is not None

    def is_spd(self) -> bool:
        return self._spd

    def is_solvable(self) -> bool:
        if not self._spd or self._l is None:
            return False
        if self._l.size == 0:
            return True
        diagonal = np.abs(np.diag(self._l))
        return not self._context.is_small(float(diagonal.max()), float(diagonal.min()))

    def get_l(self) -> np.ndarray:
        if self._l is None:
            raise ValueError("Cholesky factor not available; compute() failed or was not called")
        return self._l

    def solve(self, rhs: np.ndarray) -> np.ndarray:
        """Solve ``A x = rhs`` using the two triangular factors."""
        lower = self.get_l()
        rhs = np.asarray(rhs, dtype=float)
        if lower.size == 0:
            return np.zeros_like(rhs)
        return np.linalg.solve(lower.T, np.linalg.solve(lower, rhs))


__all__ = ["Cholesky"]
