"""Singular value decomposition and minimum-norm least squares."""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..context import NumberContext

_DEFAULT_CONTEXT = NumberContext(epsilon=1e-12, zero=0.0)


class SingularValue:
    """
    ``A = U diag(s) Vᵀ`` (thin form).

    :meth:`solve` returns the minimum-norm least-squares solution, which for
    a consistent system is the smallest ``x`` that satisfies ``A x = b``.
    Singular values negligible relative to the largest one are dropped.
    """

    def __init__(self, context: Optional[NumberContext] = None) -> None:
        self._context = context or _DEFAULT_CONTEXT
        self._u: Optional[np.ndarray] = None
        self._s: Optional[np.ndarray] = None
        self._vt: Optional[np.ndarray] = None
        self._shape = (0, 0)

    def compute(self, matrix: np.ndarray) -> bool:
        matrix = np.asarray(matrix, dtype=float)
        if matrix.ndim != 2:
            raise ValueError(f"Expected a 2-D matrix, got shape {matrix.shape}.")
        self._shape = matrix.shape
        if matrix.size == 0:
            m, n = matrix.shape
            self._u = np.zeros((m, 0))
            self._s = np.zeros(0)
            self._vt = np.zeros((0, n))
            return True
        self._u, self._s, self._vt = np.linalg.svd(matrix, full_matrices=False)
        return True

    def _require(self) -> None:
        if self._s is None:
            raise ValueError("Singular value decomposition not computed")

    def get_singular_values(self) -> np.ndarray:
        self._require()
        return self._s

    def get_u(self) -> np.ndarray:
        self._require()
        return self._u

    def get_v(self) -> np.ndarray:
        self._require()
        return self._vt.T

    def _kept(self) -> np.ndarray:
        values = self.get_singular_values()
        if values.size == 0:
            return np.zeros(0, dtype=bool)
        largest = float(values[0])
        return np.array([not self._context.is_small(largest, float(v)) for v in values], dtype=bool)

    def get_rank(self) -> int:
        return int(np.count_nonzero(self._kept()))

    def is_full_rank(self) -> bool:
        return self.get_rank() == min(self._shape)

    def solve(self, rhs: np.ndarray) -> np.ndarray:
        self._require()
        rhs = np.asarray(rhs, dtype=float)
        keep = self._kept()
        inverted = np.zeros_like(self._s)
        inverted[keep] = 1.0 / self._s[keep]
        projected = self._u.T @ rhs
        if projected.ndim == 2:
            inverted = inverted[:, None]
        return self._vt.T @ (inverted * projected)


__all__ = ["SingularValue"]
