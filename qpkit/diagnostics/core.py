"""Core diagnostic functions for matrices and solver iterates."""

from __future__ import annotations

import numpy as np


def is_symmetric(
    mat: np.ndarray,
    atol: float = 1e-10,
) -> bool:
    """
    Check whether a square matrix equals its transpose.

    Parameters
    ----------
    mat:
        Real matrix of shape (n, n).
    atol:
        Absolute tolerance for the comparison.

    Returns
    -------
    bool
        True if ``mat`` is square and symmetric within ``atol``.
    """
    mat = np.asarray(mat, dtype=float)
    if mat.ndim != 2 or mat.shape[0] != mat.shape[1]:
        return False
    return bool(np.allclose(mat, mat.T, atol=atol, rtol=0.0))


def assert_symmetric(
    mat: np.ndarray,
    atol: float = 1e-10,
) -> None:
    """
    Assert that a matrix is symmetric within a tolerance.

    Raises
    ------
    ValueError
        If the matrix is not square or not symmetric within ``atol``.
    """
    mat = np.asarray(mat, dtype=float)
    if mat.ndim != 2 or mat.shape[0] != mat.shape[1]:
        raise ValueError(f"Expected a square matrix, got shape {mat.shape}.")
    if not is_symmetric(mat, atol=atol):
        max_dev = float(np.max(np.abs(mat - mat.T)))
        raise ValueError(
            f"Matrix is not symmetric within tolerance {atol}. "
            f"Max deviation: {max_dev}"
        )


def assert_finite(values: np.ndarray, name: str = "array") -> None:
    """
    Assert that every entry of ``values`` is finite.

    Raises
    ------
    ValueError
        If any entry is NaN or infinite.
    """
    values = np.asarray(values, dtype=float)
    if not np.all(np.isfinite(values)):
        raise ValueError(f"{name} contains non-finite values.")


def orthogonality_error(q_mat: np.ndarray) -> float:
    """
    Return ``max |QᵀQ − I|`` for a matrix with (supposedly) orthonormal columns.
    """
    q_mat = np.asarray(q_mat, dtype=float)
    gram = q_mat.T @ q_mat
    return float(np.max(np.abs(gram - np.eye(gram.shape[0])))) if gram.size else 0.0
