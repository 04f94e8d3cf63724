"""
Householder QR decomposition with column pivoting.

``A P = Q R`` where ``Q`` is square orthogonal, ``R`` is upper trapezoidal
and ``P`` moves the column of largest remaining norm to the front at every
step, so the numerical rank can be read off the diagonal of ``R`` and the
first ``rank`` columns of ``Q`` span the range of ``A``.

References:
    - Businger & Golub, "Linear least squares solutions by Householder
      transformations" (1965).
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..context import NumberContext
from ..transform.householder import Householder, transform_left, transform_right

_DEFAULT_CONTEXT = NumberContext(epsilon=1e-12, zero=0.0)


class QR:
    """Rank-revealing QR decomposition built on :class:`Householder` reflections."""

    def __init__(self, pivoting: bool = True, context: Optional[NumberContext] = None) -> None:
        self._pivoting = pivoting
        self._context = context or _DEFAULT_CONTEXT
        self._q: Optional[np.ndarray] = None
        self._r: Optional[np.ndarray] = None
        self._pivots: Optional[np.ndarray] = None
        self._rank = 0

    def compute(self, matrix: np.ndarray) -> bool:
        work = np.array(matrix, dtype=float, copy=True)
        if work.ndim != 2:
            raise ValueError(f"Expected a 2-D matrix, got shape {work.shape}.")
        m, n = work.shape
        q_mat = np.eye(m)
        pivots = np.arange(n)

        for j in range(min(m, n)):
            if self._pivoting:
                norms = np.einsum("ij,ij->j", work[j:, j:], work[j:, j:])
                k = j + int(np.argmax(norms))
                if k != j:
                    work[:, [j, k]] = work[:, [k, j]]
                    pivots[[j, k]] = pivots[[k, j]]
            householder, alpha = Householder.make(work[:, j], first=j)
            if householder.beta == 0.0:
                continue
            transform_left(work, householder, first_column=j)
            work[j, j] = alpha
            work[j + 1 :, j] = 0.0
            transform_right(q_mat, householder)

        self._q = q_mat
        self._r = work
        self._pivots = pivots
        self._rank = self._count_rank(work)
        return True

    def _count_rank(self, r_mat: np.ndarray) -> int:
        diagonal = np.abs(np.diag(r_mat))
        if diagonal.size == 0:
            return 0
        largest = float(diagonal.max())
        if largest == 0.0:
            return 0
        if self._pivoting:
            # Pivoting makes |R_jj| non-increasing, so the rank is a prefix length.
            rank = 0
            for value in diagonal:
                if self._context.is_small(largest, float(value)):
                    break
                rank += 1
            return rank
        return int(sum(not self._context.is_small(largest, float(v)) for v in diagonal))

    def _require(self) -> None:
        if self._q is None or self._r is None or self._pivots is None:
            raise ValueError("QR decomposition not computed")

    def get_q(self) -> np.ndarray:
        self._require()
        return self._q

    def get_r(self) -> np.ndarray:
        self._require()
        return self._r

    def get_pivots(self) -> np.ndarray:
        self._require()
        return self._pivots

    def get_rank(self) -> int:
        self._require()
        return self._rank

    def is_full_rank(self) -> bool:
        """True when the columns of the decomposed matrix are linearly independent."""
        self._require()
        return self._rank == self._r.shape[1]

    def is_solvable(self) -> bool:
        return self.is_full_rank()

    def solve(self, rhs: np.ndarray) -> np.ndarray:
        """
        Least-squares solution of ``A x = rhs``.

        With full column rank this is the unique minimiser; otherwise the
        basic solution that is zero on the trailing pivot columns.
        """
        self._require()
        rhs = np.asarray(rhs, dtype=float)
        rank = self._rank
        n = self._r.shape[1]
        projected = self._q.T @ rhs
        solution = np.zeros((n,) + rhs.shape[1:])
        if rank > 0:
            solution[:rank] = np.linalg.solve(self._r[:rank, :rank], projected[:rank])
        retval = np.zeros_like(solution)
        retval[self._pivots] = solution
        return retval


__all__ = ["QR"]
