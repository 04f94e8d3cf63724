"""Elementary orthogonal transformations and invertible factors."""

from .factor import ElementaryFactor, IdentityFactor, InvertibleFactor, ProductForm
from .householder import (
    Householder,
    transform_hermitian,
    transform_left,
    transform_right,
    tridiagonalize,
)
from .rotation import Rotation, jacobi_eigh, rotate_left, rotate_right, rotations_p

__all__ = [
    "Householder",
    "transform_left",
    "transform_right",
    "transform_hermitian",
    "tridiagonalize",
    "Rotation",
    "rotate_left",
    "rotate_right",
    "rotations_p",
    "jacobi_eigh",
    "InvertibleFactor",
    "IdentityFactor",
    "ElementaryFactor",
    "ProductForm",
]
