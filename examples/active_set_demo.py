"""
Example: Active-set quadratic programming with qpkit

This example walks through the solver family: an unconstrained problem, an
equality constrained problem, inequality constraints that do and do not bind,
a warm start from a previous result and the product-form factors that back
basis updates.
"""

import numpy as np

from qpkit import (
    ProductForm,
    Status,
    is_kkt_optimal,
    kkt_residuals,
    solve_qp,
)


def example_unconstrained():
    """Example: Unconstrained minimum of a strictly convex quadratic."""
    print("=" * 60)
    print("Example 1: Unconstrained - Q x = -C")
    print("=" * 60)

    Q = np.array([[4.0, 1.0], [1.0, 3.0]])
    C = np.array([-1.0, -2.0])

    result = solve_qp(Q, C)
    print(f"Status: {result.status}")
    print(f"Solution: x = {result.x}")
    print(f"Objective: {result.fun}")
    print()


def example_equality_constrained():
    """Example: Minimum norm point on a line."""
    print("=" * 60)
    print("Example 2: Equality Constrained - Null-Space Projection")
    print("=" * 60)

    # Minimize 0.5 * |x|^2 subject to x1 + x2 = 1
    result = solve_qp(np.eye(2), np.zeros(2), ae=np.array([[1.0, 1.0]]), be=np.array([1.0]))
    print(f"Status: {result.status}")
    print(f"Solution: x = {result.x}")
    print(f"Equality multiplier: {result.le}")
    print()


def example_active_set():
    """Example: Inequality constraints that do and do not bind."""
    print("=" * 60)
    print("Example 3: Active Set - Binding Inequality")
    print("=" * 60)

    Q = np.eye(2)
    C = np.zeros(2)
    ae = np.array([[1.0, 1.0]])
    be = np.array([1.0])

    # x1 >= 0, x2 >= 0 never bind at (0.5, 0.5)
    loose = solve_qp(Q, C, ae=ae, be=be, ai=np.eye(2), bi=np.zeros(2))
    print(f"Loose bounds: x = {loose.x}, active set = {loose.active_set}")

    # x1 >= 0.8 pushes the solution along the line
    ai = np.array([[1.0, 0.0]])
    bi = np.array([0.8])
    tight = solve_qp(Q, C, ae=ae, be=be, ai=ai, bi=bi)
    print(f"Status: {tight.status}")
    print(f"Tight bound: x = {tight.x}, active set = {tight.active_set}")
    print(f"Inequality multiplier: {tight.li}")
    print(f"Iterations: {tight.nit}")

    residuals = kkt_residuals(Q, C, ae, be, ai, bi, tight.x, le=tight.le, li=tight.li)
    print(f"KKT optimal: {is_kkt_optimal(Q, C, ae, be, ai, bi, tight.x, le=tight.le, li=tight.li)}")
    print(f"Dual residual: {residuals['dual']:.2e}")

    # Warm start from the previous result
    warm = solve_qp(Q, C, ae=ae, be=be, ai=ai, bi=bi, kick_start=tight)
    print(f"Warm start iterations: {warm.nit}")
    print()


def example_box_constraints():
    """Example: Projection onto a box."""
    print("=" * 60)
    print("Example 4: Box Constraints")
    print("=" * 60)

    target = np.array([0.8, -0.2, 1.2])
    ai = np.vstack([np.eye(3), -np.eye(3)])
    bi = np.concatenate([np.zeros(3), -np.ones(3)])

    result = solve_qp(np.eye(3), -target, ai=ai, bi=bi)
    print(f"Status: {result.status}")
    if result.status == Status.OPTIMAL:
        print(f"Optimal point: {result.x}")
        print(f"Expected (clipped target): {np.clip(target, 0.0, 1.0)}")
        print(f"Active set: {result.active_set}")
    print()


def example_product_form():
    """Example: Solving with a product-form factor chain."""
    print("=" * 60)
    print("Example 5: Product Form of the Inverse")
    print("=" * 60)

    basis = np.array([[4.0, 1.0, 0.0], [1.0, 3.0, 1.0], [0.0, 1.0, 2.0]])
    product = ProductForm(3)
    for j in range(3):
        product.replace(basis[:, j], j)

    rhs = np.array([1.0, 2.0, 3.0])
    x = product.ftran(rhs.copy())
    print(f"Factors: {len(product)}")
    print(f"ftran solution: {x}")
    print(f"Residual: {np.linalg.norm(basis @ x - rhs):.2e}")
    print()


if __name__ == "__main__":
    print("\n" + "=" * 60)
    print("qpkit - Active-Set Quadratic Programming Examples")
    print("=" * 60 + "\n")

    example_unconstrained()
    example_equality_constrained()
    example_active_set()
    example_box_constraints()
    example_product_form()

    print("=" * 60)
    print("All examples completed successfully!")
    print("=" * 60)
