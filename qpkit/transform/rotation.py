"""
Plane (Givens / Jacobi) rotations.

A :class:`Rotation` acts on two indices ``low`` and ``high`` only. Applied
from the left it replaces

```
    row[low]  <-  cos * row[low]  + sin * row[high]
    row[high] <-  cos * row[high] - sin * row[low]
```

i.e. it multiplies by ``G = [[cos, sin], [-sin, cos]]`` embedded in the
identity. Applied from the right the same formulas act on columns, which is
multiplication by ``Gᵀ``. ``rotate_left(A, g)`` followed by
``rotate_right(A, g)`` is therefore the similarity ``G A Gᵀ``.

References:
    - Golub & Van Loan, *Matrix Computations*, 4th edition, sections 5.1 and 8.5.
    - Brent & Luk, "The solution of singular-value and symmetric eigenvalue
      problems on multiprocessor arrays" (1985), for the 2x2 SVD step.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from ..context import NumberContext

_CONTEXT = NumberContext(epsilon=1e-15, zero=0.0)


@dataclass(frozen=True)
class Rotation:
    """Plane rotation on the index pair ``(low, high)``."""

    low: int
    high: int
    cos: float
    sin: float

    @classmethod
    def make_givens(cls, a: float, b: float, low: int, high: int) -> "Rotation":
        """Rotation that maps ``(a, b)`` at ``(low, high)`` to ``(hypot(a, b), 0)``."""
        radius = math.hypot(a, b)
        if radius == 0.0:
            return cls(low, high, 1.0, 0.0)
        return cls(low, high, a / radius, b / radius)

    def invert(self) -> "Rotation":
        return Rotation(self.low, self.high, self.cos, -self.sin)

    def to_dense(self, dim: int) -> np.ndarray:
        retval = np.eye(dim)
        retval[self.low, self.low] = self.cos
        retval[self.low, self.high] = self.sin
        retval[self.high, self.low] = -self.sin
        retval[self.high, self.high] = self.cos
        return retval


def rotate_left(matrix: np.ndarray, rotation: Rotation) -> None:
    """Overwrite ``matrix`` (or a 1-D vector) with ``G @ matrix``."""
    low, high = rotation.low, rotation.high
    cos, sin = rotation.cos, rotation.sin
    row_low = np.array(matrix[low], dtype=float)
    row_high = np.array(matrix[high], dtype=float)
    matrix[low] = cos * row_low + sin * row_high
    matrix[high] = cos * row_high - sin * row_low


def rotate_right(matrix: np.ndarray, rotation: Rotation) -> None:
    """Overwrite ``matrix`` with ``matrix @ Gᵀ``."""
    low, high = rotation.low, rotation.high
    cos, sin = rotation.cos, rotation.sin
    col_low = np.array(matrix[:, low], dtype=float)
    col_high = np.array(matrix[:, high], dtype=float)
    matrix[:, low] = cos * col_low + sin * col_high
    matrix[:, high] = cos * col_high - sin * col_low


def rotations_p(
    matrix: np.ndarray,
    low: int,
    high: int,
    context: Optional[NumberContext] = None,
) -> Tuple[Rotation, Rotation]:
    """
    One 2x2 step of a two-sided Jacobi sweep on the ``(low, high)`` block.

    A Givens rotation ``G`` first symmetrises the block, then a Jacobi
    rotation ``J`` annihilates the off-diagonal pair of ``G A``. Returns
    ``(combined, jacobi)`` where ``combined = J G``, so that applying
    ``combined`` from the left and ``jacobi`` from the right leaves the block
    diagonal. For a symmetric block with non-negative trace ``G`` is the
    identity and both rotations coincide.
    """
    ctx = context or _CONTEXT

    a00 = float(matrix[low, low])
    a01 = float(matrix[low, high])
    a10 = float(matrix[high, low])
    a11 = float(matrix[high, high])

    x = a00 + a11
    y = a10 - a01

    # Symmetrise - Givens
    if ctx.is_small(x, y):
        cos_g = math.copysign(1.0, x)
        sin_g = 0.0
    elif ctx.is_small(y, x):
        cos_g = 0.0
        sin_g = math.copysign(1.0, y)
    elif abs(y) > abs(x):
        t = x / y  # cot
        sin_g = math.copysign(1.0, y) / math.sqrt(1.0 + t * t)
        cos_g = sin_g * t
    else:
        t = y / x  # tan
        cos_g = math.copysign(1.0, x) / math.sqrt(1.0 + t * t)
        sin_g = cos_g * t

    b00 = cos_g * a00 + sin_g * a10
    b11 = cos_g * a11 - sin_g * a01
    b01 = 0.5 * ((cos_g * a01 + sin_g * a11) + (cos_g * a10 - sin_g * a00))

    # Annihilate - Jacobi
    if ctx.is_small(max(abs(b00), abs(b11)), b01):
        cos_j = 1.0
        sin_j = 0.0
    else:
        zeta = (b11 - b00) / (2.0 * b01)
        t = -math.copysign(1.0, zeta) / (abs(zeta) + math.sqrt(1.0 + zeta * zeta))
        cos_j = 1.0 / math.sqrt(1.0 + t * t)
        sin_j = cos_j * t

    jacobi = Rotation(low, high, cos_j, sin_j)
    combined = Rotation(
        low,
        high,
        cos_j * cos_g - sin_j * sin_g,
        cos_j * sin_g + sin_j * cos_g,
    )
    return combined, jacobi


def jacobi_eigh(
    matrix: np.ndarray,
    tol: float = 1e-14,
    max_sweeps: int = 64,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Cyclic Jacobi eigenvalue algorithm for a symmetric matrix.

    Returns
    -------
    (w, V):
        Eigenvalues in ascending order and the matching orthonormal
        eigenvectors as columns, ``matrix = V diag(w) Vᵀ``.
    """
    work = np.array(matrix, dtype=float, copy=True)
    n = work.shape[0]
    if work.shape != (n, n):
        raise ValueError(f"Expected a square matrix, got shape {work.shape}.")
    vectors = np.eye(n)
    scale = float(np.linalg.norm(work))

    for _ in range(max_sweeps):
        off = float(np.sqrt(max(np.sum(work**2) - np.sum(np.diag(work) ** 2), 0.0)))
        if off <= tol * max(scale, 1.0):
            break
        for low in range(n - 1):
            for high in range(low + 1, n):
                if work[low, high] == 0.0:
                    continue
                # Restore exact symmetry so that only the Jacobi rotation matters.
                work[high, low] = work[low, high]
                _, jacobi = rotations_p(work, low, high)
                rotate_left(work, jacobi)
                rotate_right(work, jacobi)
                work[low, high] = work[high, low] = 0.0
                rotate_right(vectors, jacobi)

    values = np.diag(work).copy()
    order = np.argsort(values)
    return values[order], vectors[:, order]


__all__ = [
    "Rotation",
    "rotate_left",
    "rotate_right",
    "rotations_p",
    "jacobi_eigh",
]
