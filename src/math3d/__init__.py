"""
math3d: 3D vector and matrix primitives for geometric transforms.

This library provides a mutable 3-component vector type and a 3x3 matrix type
with the usual algebra (dot/cross products, projections, determinant, inverse,
transpose and products). Floating-point comparisons are tolerance-based.
"""

import jax
jax.config.update("jax_enable_x64", True)

from .errors import Math3DError, MatrixIndexError, SingularMatrixError
from .tolerance import DEFAULT_EPSILON, SINGULAR_EPSILON, is_almost_equal
from .vector3 import Vector3
from .matrix3 import Matrix3

from . import tolerance
from . import vector3
from . import matrix3

__version__ = "0.1.0"
__all__ = [
    "Vector3",
    "Matrix3",
    "Math3DError",
    "MatrixIndexError",
    "SingularMatrixError",
    "DEFAULT_EPSILON",
    "SINGULAR_EPSILON",
    "is_almost_equal",
    "tolerance",
    "vector3",
    "matrix3",
]
