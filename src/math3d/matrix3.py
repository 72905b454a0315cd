"""Matrix3 value type: 3x3 matrices for coordinate system transformations.

A matrix describes how a vector, point, line, plane or another transformation
moves from one coordinate system to another. Entries are stored row-major in
an immutable float64 jax array; every mutating operation rebinds that array,
so copies never share state.
"""

from __future__ import annotations

import logging
import operator

import jax
import jax.numpy as jnp
from jax.tree_util import register_pytree_node_class

from .errors import MatrixIndexError, SingularMatrixError
from .tolerance import DEFAULT_EPSILON, SINGULAR_EPSILON, is_almost_equal
from .vector3 import Vector3, cross, dot

logger = logging.getLogger(__name__)

Array = jax.Array


def _check_index(index) -> int:
    index = operator.index(index)
    if not 0 <= index < 3:
        raise MatrixIndexError(f"Index {index} out of range [0, 2]")
    return index


@register_pytree_node_class
class Matrix3:
    """
    A 3x3 matrix addressed by 0-indexed (row, column).

    ``m[row, col]`` reads or writes one entry, ``m[col]`` reads or writes a
    whole column as a :class:`Vector3`. Equality is approximate, entry by
    entry.
    """

    __slots__ = ("m",)

    def __init__(self, *entries: float):
        if not entries:
            self.m = jnp.zeros((3, 3), dtype=jnp.float64)
        elif len(entries) == 9:
            self.m = jnp.array(entries, dtype=jnp.float64).reshape(3, 3)
        else:
            raise ValueError(f"Matrix3 takes 0 or 9 entries, got {len(entries)}")

    # Constructors
    @classmethod
    def from_columns(cls, a: Vector3, b: Vector3, c: Vector3) -> "Matrix3":
        return cls(
            a.x, b.x, c.x,
            a.y, b.y, c.y,
            a.z, b.z, c.z,
        )

    @classmethod
    def from_array(cls, array) -> "Matrix3":
        array = jnp.asarray(array, dtype=jnp.float64)
        if array.shape != (3, 3):
            raise ValueError(f"array must have shape (3,3), got {array.shape}")
        return cls._wrap(array)

    @classmethod
    def identity(cls) -> "Matrix3":
        """Ones on the main diagonal, zeros elsewhere."""
        return cls._wrap(jnp.eye(3, dtype=jnp.float64))

    @classmethod
    def _wrap(cls, array) -> "Matrix3":
        obj = cls.__new__(cls)
        obj.m = array
        return obj

    def to_array(self) -> Array:
        return self.m

    def copy(self) -> "Matrix3":
        return Matrix3._wrap(self.m)

    __copy__ = copy

    # PyTree boiler-plate
    def tree_flatten(self):
        return (self.m,), None

    @classmethod
    def tree_unflatten(cls, aux, children):
        (m,) = children
        return cls._wrap(m)

    # Element and column access
    def __getitem__(self, key):
        if isinstance(key, tuple):
            row, col = key
            return float(self.m[_check_index(row), _check_index(col)])
        col = _check_index(key)
        return Vector3(*self.m[:, col].tolist())

    def __setitem__(self, key, value):
        if isinstance(key, tuple):
            row, col = key
            self.m = self.m.at[_check_index(row), _check_index(col)].set(value)
        else:
            col = _check_index(key)
            self.m = self.m.at[:, col].set(value.to_array())

    def row(self, index: int) -> Vector3:
        return Vector3(*self.m[_check_index(index)].tolist())

    # Member functions
    def determinant(self) -> float:
        """
        Determinant of this matrix.

        A sort of magnitude for the matrix, positive or negative depending on
        the orientation of its rows (or columns). Computed by expansion by
        minors along the first row.
        """
        (a00, a01, a02), (a10, a11, a12), (a20, a21, a22) = self.m.tolist()
        return (a00 * (a11 * a22 - a12 * a21)
                - a01 * (a10 * a22 - a12 * a20)
                + a02 * (a10 * a21 - a11 * a20))

    def inverse(self) -> "Matrix3":
        """
        Inverse of this matrix.

        With a, b, c the columns, the rows of the inverse are b x c, c x a
        and a x b divided by the determinant, which equals dot(a x b, c).

        Raises:
            SingularMatrixError: if |det| < SINGULAR_EPSILON
        """
        a, b, c = self[0], self[1], self[2]

        u = cross(b, c)
        v = cross(c, a)
        w = cross(a, b)

        det = dot(w, c)
        if is_almost_equal(det, 0.0, SINGULAR_EPSILON):
            logger.debug(f"Refusing to invert singular matrix, det={det!r}")
            raise SingularMatrixError(det)

        u /= det
        v /= det
        w /= det

        return Matrix3(u.x, u.y, u.z, v.x, v.y, v.z, w.x, w.y, w.z)

    def transposed(self) -> "Matrix3":
        """Transpose of this matrix as a new Matrix3."""
        return transpose(self.copy())

    def almost_equal(self, other: "Matrix3", epsilon: float = DEFAULT_EPSILON) -> bool:
        return bool(jnp.all(jnp.abs(self.m - other.m) < epsilon))

    # Arithmetic operators
    def __add__(self, other):
        if not isinstance(other, Matrix3):
            return NotImplemented
        return Matrix3._wrap(self.m + other.m)

    def __sub__(self, other):
        if not isinstance(other, Matrix3):
            return NotImplemented
        return Matrix3._wrap(self.m - other.m)

    def __iadd__(self, other):
        if not isinstance(other, Matrix3):
            return NotImplemented
        self.m = self.m + other.m
        return self

    def __isub__(self, other):
        if not isinstance(other, Matrix3):
            return NotImplemented
        self.m = self.m - other.m
        return self

    def __matmul__(self, other):
        if isinstance(other, Matrix3):
            return Matrix3._wrap(jnp.matmul(self.m, other.m))
        if isinstance(other, Vector3):
            result = jnp.einsum("ij,j->i", self.m, other.to_array())
            if isinstance(result, jax.core.Tracer):
                return Vector3._wrap(result[0], result[1], result[2])
            return Vector3(*result.tolist())
        return NotImplemented

    __mul__ = __matmul__

    # Comparison
    def __eq__(self, other):
        if not isinstance(other, Matrix3):
            return NotImplemented
        return self.almost_equal(other)

    __hash__ = None

    # Rendering
    def __str__(self) -> str:
        return "\n".join(
            "| " + " ".join(f"{value:9.3f}" for value in row) + " |"
            for row in self.m.tolist()
        )

    def __repr__(self) -> str:
        entries = ", ".join(repr(value) for row in self.m.tolist() for value in row)
        return f"Matrix3({entries})"


def transpose(matrix: Matrix3) -> Matrix3:
    """
    Transpose *matrix* in place, swapping entries across the main diagonal.

    Returns:
        *matrix* itself, for chaining
    """
    matrix.m = jnp.swapaxes(matrix.m, -1, -2)
    return matrix
