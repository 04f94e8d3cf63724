"""
Small numerical helpers shared by the QP solvers.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np


def symmetrize(matrix: np.ndarray) -> np.ndarray:
    """
    Return the symmetric part of ``matrix``.

    The solvers assume exactly symmetric Hessians. This helper removes small
    asymmetries due to floating-point error by returning
    ``0.5 * (matrix + matrix.T)``.
    """

    return 0.5 * (matrix + matrix.T)


def stack_rows(top: np.ndarray, bottom: np.ndarray, rows: Sequence[int]) -> np.ndarray:
    """Return ``top`` with the selected ``rows`` of ``bottom`` appended below it."""

    return np.concatenate([top, bottom[np.asarray(rows, dtype=int)]], axis=0)


def max_violation(values: np.ndarray) -> float:
    """Infinity norm of ``values`` (``0.0`` for an empty array)."""

    values = np.asarray(values, dtype=float)
    return float(np.max(np.abs(values))) if values.size else 0.0


__all__ = ["symmetrize", "stack_rows", "max_violation"]
