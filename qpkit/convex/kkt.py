"""
Karush-Kuhn-Tucker diagnostics for convex quadratic programs.

Residuals follow the package convention: stationarity is
``Q x + C - AEᵀ LE - AIᵀ LI = 0``, inequalities read ``AI x >= BI`` and their
multipliers must be non-negative.
"""

from __future__ import annotations

from typing import Dict, Optional

import numpy as np

from .utils import symmetrize


def kkt_residuals(
    hessian: Optional[np.ndarray],
    c_vec: Optional[np.ndarray],
    ae_mat: Optional[np.ndarray],
    be_vec: Optional[np.ndarray],
    ai_mat: Optional[np.ndarray],
    bi_vec: Optional[np.ndarray],
    x: np.ndarray,
    le: Optional[np.ndarray] = None,
    li: Optional[np.ndarray] = None,
) -> Dict[str, float]:
    """
    Compute infinity norms of the KKT residuals at ``x``.

    Returns a dictionary with keys ``primal_eq``, ``primal_ineq``, ``dual``,
    ``complementary`` and ``dual_sign`` (the magnitude of the most negative
    inequality multiplier).
    """

    x = np.asarray(x, dtype=float).reshape(-1)
    n = x.shape[0]
    hess = np.zeros((n, n)) if hessian is None else symmetrize(np.asarray(hessian, dtype=float))
    c_lin = np.zeros(n) if c_vec is None else np.asarray(c_vec, dtype=float).reshape(-1)

    stationarity = hess @ x + c_lin

    primal_eq = 0.0
    if ae_mat is not None and np.size(ae_mat):
        mat_eq = np.asarray(ae_mat, dtype=float).reshape(-1, n)
        le_vec = np.zeros(mat_eq.shape[0]) if le is None else np.asarray(le, dtype=float).reshape(-1)
        stationarity -= mat_eq.T @ le_vec
        primal_eq = float(np.linalg.norm(mat_eq @ x - np.asarray(be_vec, dtype=float), ord=np.inf))

    primal_ineq = 0.0
    complementary = 0.0
    dual_sign = 0.0
    if ai_mat is not None and np.size(ai_mat):
        mat_ineq = np.asarray(ai_mat, dtype=float).reshape(-1, n)
        bi_rhs = np.zeros(mat_ineq.shape[0]) if bi_vec is None else np.asarray(bi_vec, dtype=float).reshape(-1)
        slack = mat_ineq @ x - bi_rhs
        li_vec = np.zeros(mat_ineq.shape[0]) if li is None else np.asarray(li, dtype=float).reshape(-1)
        stationarity -= mat_ineq.T @ li_vec
        primal_ineq = float(np.linalg.norm(np.minimum(slack, 0.0), ord=np.inf))
        complementary = float(np.linalg.norm(slack * li_vec, ord=np.inf))
        dual_sign = float(np.linalg.norm(np.minimum(li_vec, 0.0), ord=np.inf))

    return {
        "primal_eq": primal_eq,
        "primal_ineq": primal_ineq,
        "dual": float(np.linalg.norm(stationarity, ord=np.inf)),
        "complementary": complementary,
        "dual_sign": dual_sign,
    }


def is_kkt_optimal(
    hessian: Optional[np.ndarray],
    c_vec: Optional[np.ndarray],
    ae_mat: Optional[np.ndarray],
    be_vec: Optional[np.ndarray],
    ai_mat: Optional[np.ndarray],
    bi_vec: Optional[np.ndarray],
    x: np.ndarray,
    le: Optional[np.ndarray] = None,
    li: Optional[np.ndarray] = None,
    tol: float = 1e-6,
) -> bool:
    """
    Return True if all KKT residuals are below ``tol``.
    """

    residuals = kkt_residuals(hessian, c_vec, ae_mat, be_vec, ai_mat, bi_vec, x, le, li)
    return all(value <= tol for value in residuals.values())


__all__ = ["kkt_residuals", "is_kkt_optimal"]
