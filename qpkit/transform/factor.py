"""
Invertible factors and the product form of the inverse.

An :class:`InvertibleFactor` represents some matrix ``[A]`` implicitly and
can solve with it: ``ftran(b)`` overwrites ``b`` with ``x`` such that
``[A] x = b`` and ``btran(b)`` overwrites it with ``x`` such that
``[A]ᵀ x = b``.

A :class:`ProductForm` represents ``[A] = [B][F1][F2]...[Fk]`` where ``[B]``
is a base factor (identity by default) and every ``[Fi]`` is an elementary
factor: the identity except for one column. Solving ``[A] x = b`` applies
``B⁻¹`` then ``F1⁻¹`` ... ``Fk⁻¹``; solving the transposed system applies
``Fk⁻ᵀ`` ... ``F1⁻ᵀ`` then ``B⁻ᵀ``. This is the classic basis-update scheme
of the revised simplex method: replacing column ``j`` of ``[A]`` by ``a``
appends ``E`` with column ``j`` equal to ``[A]⁻¹ a``.

References:
    - Chvátal, *Linear Programming* (1983), chapter 24.
    - Bertsimas & Tsitsiklis, *Introduction to Linear Optimization* (1997),
      section 3.3.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Mapping, Optional, Union

import numpy as np

SparseColumn = Union[np.ndarray, Mapping[int, float]]


class InvertibleFactor(ABC):
    """Implicit invertible matrix that can solve with itself and its transpose."""

    @property
    @abstractmethod
    def dim(self) -> int:
        """Number of rows (and columns) of the represented matrix."""

    @abstractmethod
    def _ftran(self, vector: np.ndarray) -> None:
        ...

    @abstractmethod
    def _btran(self, vector: np.ndarray) -> None:
        ...

    def ftran(self, vector: np.ndarray) -> np.ndarray:
        """
        Solve ``[A] x = vector`` in place.

        ``vector`` may be 1-D or 2-D; each column of a 2-D array is treated
        as a separate right-hand side. The (mutated) input is returned for
        convenience.
        """
        if vector.ndim == 2:
            for j in range(vector.shape[1]):
                column = vector[:, j].copy()
                self._ftran(column)
                vector[:, j] = column
        else:
            self._ftran(vector)
        return vector

    def btran(self, vector: np.ndarray) -> np.ndarray:
        """Solve ``[A]ᵀ x = vector`` in place; see :meth:`ftran`."""
        if vector.ndim == 2:
            for j in range(vector.shape[1]):
                column = vector[:, j].copy()
                self._btran(column)
                vector[:, j] = column
        else:
            self._btran(vector)
        return vector

    def to_dense(self) -> np.ndarray:
        """Materialise the represented matrix ``[A]``."""
        # Columns of [A]⁻¹ are ftran(e_j); inverting that gives [A] itself.
        inverse = np.eye(self.dim)
        self.ftran(inverse)
        return np.linalg.inv(inverse)


class IdentityFactor(InvertibleFactor):
    """The identity; the default base of a :class:`ProductForm`."""

    def __init__(self, dim: int) -> None:
        self._dim = int(dim)

    @property
    def dim(self) -> int:
        return self._dim

    def _ftran(self, vector: np.ndarray) -> None:
        pass

    def _btran(self, vector: np.ndarray) -> None:
        pass

    def to_dense(self) -> np.ndarray:
        return np.eye(self._dim)


class ElementaryFactor(InvertibleFactor):
    """
    Identity matrix with column ``col`` replaced by a (sparse) column.

    Only the off-pivot non-zeros are stored, so ``ftran`` and ``btran`` cost
    O(nnz). The pivot is cached negated and used as the divisor; it is not
    checked for being (near) zero.
    """

    def __init__(
        self,
        dim: int,
        col: int,
        indices: np.ndarray,
        values: np.ndarray,
        diagonal: float,
    ) -> None:
        self._dim = int(dim)
        self._col = int(col)
        self._indices = np.asarray(indices, dtype=int)
        self._values = np.asarray(values, dtype=float)
        self._negated_diagonal = -float(diagonal)

    @classmethod
    def from_column(cls, values: SparseColumn, col: int, dim: Optional[int] = None) -> "ElementaryFactor":
        """
        Build the factor from a column and the pivot index ``col``.

        ``values`` is either a dense 1-D array or a mapping ``{row: value}``;
        a mapping needs ``dim``.
        """
        if isinstance(values, Mapping):
            if dim is None:
                raise ValueError("dim is required when the column is given as a mapping")
            diagonal = float(values.get(col, 0.0))
            pairs = sorted((int(i), float(v)) for i, v in values.items() if int(i) != col and v != 0.0)
            indices = np.array([i for i, _ in pairs], dtype=int)
            entries = np.array([v for _, v in pairs], dtype=float)
            return cls(dim, col, indices, entries, diagonal)

        dense = np.asarray(values, dtype=float).reshape(-1)
        mask = dense != 0.0
        mask[col] = False
        indices = np.flatnonzero(mask)
        return cls(dense.shape[0], col, indices, dense[indices], float(dense[col]))

    @property
    def dim(self) -> int:
        return self._dim

    @property
    def col(self) -> int:
        return self._col

    @property
    def diagonal(self) -> float:
        return -self._negated_diagonal

    def count_nonzeros(self) -> int:
        return int(self._indices.shape[0]) + 1

    def _ftran(self, vector: np.ndarray) -> None:
        scale = vector[self._col] / self._negated_diagonal
        if self._indices.size:
            vector[self._indices] += scale * self._values
        vector[self._col] = -scale

    def _btran(self, vector: np.ndarray) -> None:
        dot = float(self._values @ vector[self._indices]) if self._indices.size else 0.0
        vector[self._col] = (dot - vector[self._col]) / self._negated_diagonal

    def to_dense(self) -> np.ndarray:
        retval = np.eye(self._dim)
        retval[self._indices, self._col] = self._values
        retval[self._col, self._col] = self.diagonal
        return retval

    def __repr__(self) -> str:
        return f"ElementaryFactor(dim={self._dim}, col={self._col}, nnz={self.count_nonzeros()})"


class ProductForm(InvertibleFactor):
    """Base factor followed by an ordered chain of elementary factors."""

    def __init__(self, base: Union[int, InvertibleFactor]) -> None:
        if isinstance(base, InvertibleFactor):
            self._base = base
        else:
            self._base = IdentityFactor(int(base))
        self._factors: List[ElementaryFactor] = []

    @property
    def dim(self) -> int:
        return self._base.dim

    @property
    def base(self) -> InvertibleFactor:
        return self._base

    def count(self) -> int:
        return len(self._factors)

    def __len__(self) -> int:
        return self.count()

    def reset(self, base: Optional[InvertibleFactor] = None) -> None:
        """Drop all elementary factors, optionally installing a new base."""
        self._factors.clear()
        if base is not None:
            if base.dim != self.dim:
                raise ValueError(f"Base dimension {base.dim} does not match {self.dim}")
            self._base = base

    def replace(self, values: SparseColumn, col: int) -> ElementaryFactor:
        """
        Replace column ``col`` of the represented matrix by ``values``.

        ``values`` is transformed through the current chain first; the new
        elementary factor is built from the result and appended.
        """
        if isinstance(values, Mapping):
            dense = np.zeros(self.dim)
            for index, value in values.items():
                dense[int(index)] = float(value)
        else:
            dense = np.array(values, dtype=float).reshape(-1)
        self.ftran(dense)
        factor = ElementaryFactor.from_column(dense, col)
        self._factors.append(factor)
        return factor

    def _ftran(self, vector: np.ndarray) -> None:
        self._base._ftran(vector)
        for factor in self._factors:
            factor._ftran(vector)

    def _btran(self, vector: np.ndarray) -> None:
        for factor in reversed(self._factors):
            factor._btran(vector)
        self._base._btran(vector)

    def to_dense(self) -> np.ndarray:
        retval = self._base.to_dense()
        for factor in self._factors:
            retval = retval @ factor.to_dense()
        return retval


__all__ = [
    "InvertibleFactor",
    "IdentityFactor",
    "ElementaryFactor",
    "ProductForm",
]
