"""
Householder reflections.

A reflection ``H = I - beta * v * vᵀ`` is stored as the vector ``v``, the
scalar ``beta`` and an index ``first``: entries of ``v`` below ``first`` are
treated as zero whatever is stored there, which lets one instance be reused
across the trailing sub-problems of an in-place decomposition sweep.

The application functions take the matrix to mutate and the reflection as
separate arguments; a reflection never holds a reference to the matrix it
transforms.

References:
    - Golub & Van Loan, *Matrix Computations*, 4th edition, section 5.1.
"""

from __future__ import annotations

import math
from typing import Optional, Tuple

import numpy as np


class Householder:
    """Householder reflection ``I - beta * v * vᵀ`` acting on ``v[first:]``."""

    def __init__(self, dim: int) -> None:
        if dim < 0:
            raise ValueError(f"dim must be non-negative, got {dim}.")
        self.vector = np.zeros(dim)
        self.beta = 0.0
        self.first = 0

    @classmethod
    def make(cls, column: np.ndarray, first: int = 0) -> Tuple["Householder", float]:
        """
        Build the reflection that annihilates ``column[first + 1:]``.

        Returns the reflection together with the value left at ``first``
        once it has been applied to ``column``. A column that is already
        zero from ``first`` on yields the identity (``beta == 0``).
        """
        column = np.asarray(column, dtype=float).reshape(-1)
        retval = cls(column.shape[0])
        retval.first = first

        tail = column[first:]
        norm = float(np.linalg.norm(tail))
        if norm == 0.0:
            return retval, 0.0

        alpha = -math.copysign(norm, tail[0])
        retval.vector[first:] = tail
        retval.vector[first] -= alpha
        retval.beta = 2.0 / float(retval.vector[first:] @ retval.vector[first:])
        return retval, alpha

    def copy(self, source: "Householder", beta: Optional[float] = None) -> "Householder":
        """
        Copy ``source`` into this instance.

        Without ``beta`` the coefficient is recomputed as
        ``2 / sum(source.vector[first:] ** 2)``; pass a precalculated value
        to skip the norm computation when it is known analytically.
        """
        first = source.first
        self.first = first
        tail = source.vector[first:]
        self.vector[first:] = tail
        if beta is None:
            squared = float(tail @ tail)
            self.beta = 2.0 / squared if squared > 0.0 else 0.0
        else:
            self.beta = float(beta)
        return self

    def count(self) -> int:
        return int(self.vector.shape[0])

    def __len__(self) -> int:
        return self.count()

    def get(self, index: int) -> float:
        return 0.0 if index < self.first else float(self.vector[index])

    def effective_vector(self) -> np.ndarray:
        """Return a copy of ``v`` with the entries below ``first`` zeroed."""
        retval = self.vector.copy()
        retval[: self.first] = 0.0
        return retval

    def to_dense(self) -> np.ndarray:
        vec = self.effective_vector()
        return np.eye(vec.shape[0]) - self.beta * np.outer(vec, vec)

    def __repr__(self) -> str:
        return f"Householder(first={self.first}, beta={self.beta}, vector={self.effective_vector()})"


def transform_left(matrix: np.ndarray, householder: Householder, first_column: int = 0) -> None:
    """
    Overwrite ``matrix`` with ``H @ matrix``.

    Only rows ``householder.first:`` change. Columns before ``first_column``
    are skipped; callers pass the current sweep position when those columns
    are known to be zero below the diagonal already. 1-D input is treated as
    a single column.
    """
    first = householder.first
    vec = householder.vector[first:]
    beta = householder.beta
    if beta == 0.0:
        return
    if matrix.ndim == 1:
        matrix[first:] -= (beta * float(vec @ matrix[first:])) * vec
        return
    block = matrix[first:, first_column:]
    block -= beta * np.outer(vec, vec @ block)


def transform_right(matrix: np.ndarray, householder: Householder, first_row: int = 0) -> None:
    """Overwrite ``matrix`` with ``matrix @ H``; only columns ``first:`` change."""
    first = householder.first
    vec = householder.vector[first:]
    beta = householder.beta
    if beta == 0.0:
        return
    block = matrix[first_row:, first:]
    block -= beta * np.outer(block @ vec, vec)


def transform_hermitian(matrix: np.ndarray, householder: Householder) -> None:
    """
    Overwrite the symmetric ``matrix`` with the similarity ``H @ matrix @ H``.

    Uses the rank-2 update ``A - v wᵀ - w vᵀ`` with
    ``w = p - (beta / 2)(vᵀp) v`` and ``p = beta A v``, which keeps the
    result exactly symmetric.
    """
    beta = householder.beta
    if beta == 0.0:
        return
    vec = householder.effective_vector()
    worker = beta * (matrix @ vec)
    worker -= (0.5 * beta * float(vec @ worker)) * vec
    matrix -= np.outer(vec, worker) + np.outer(worker, vec)


def tridiagonalize(matrix: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Reduce a symmetric matrix to tridiagonal form.

    Returns
    -------
    (T, Q):
        Tridiagonal ``T`` and orthogonal ``Q`` with ``matrix = Q T Qᵀ``.
    """
    work = np.array(matrix, dtype=float, copy=True)
    n = work.shape[0]
    if work.shape != (n, n):
        raise ValueError(f"Expected a square matrix, got shape {work.shape}.")
    q_mat = np.eye(n)
    for j in range(n - 2):
        householder, _ = Householder.make(work[:, j], first=j + 1)
        transform_hermitian(work, householder)
        transform_right(q_mat, householder)
    # Entries outside the band are rounding noise at this point.
    band = np.abs(np.subtract.outer(np.arange(n), np.arange(n))) <= 1
    work[~band] = 0.0
    return work, q_mat


__all__ = [
    "Householder",
    "transform_left",
    "transform_right",
    "transform_hermitian",
    "tridiagonalize",
]
