"""Vector3 value type and 3D vector algebra.

Vectors are small mutable value types holding three float components. The
free functions in this module (dot, cross, angle, ...) are pure: they never
modify their inputs, except for normalize() which works in place.

Division by zero raises ZeroDivisionError whatever the numeric type of the
operands. Inside ``jax.jit`` the values are traced and cannot be inspected,
so traced divisions follow IEEE semantics (Inf/NaN) instead.
"""

from __future__ import annotations

import math
from typing import Iterator

import jax
import jax.numpy as jnp
from jax.tree_util import register_pytree_node_class

from .tolerance import DEFAULT_EPSILON, clamp, is_almost_equal, rad2deg

Array = jax.Array


def _divide(numerator, denominator):
    if not isinstance(denominator, jax.core.Tracer) and denominator == 0:
        raise ZeroDivisionError("Vector3 division by zero")
    return numerator / denominator


@register_pytree_node_class
class Vector3:
    """
    A 3-component vector.

    Used to describe points in space, directions and coordinate transforms.
    Equality is approximate: components are compared with
    :func:`math3d.tolerance.is_almost_equal`.
    """

    __slots__ = ("x", "y", "z")

    # numpy scalars defer to __rmul__ instead of broadcasting over components
    __array_ufunc__ = None

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    # Factories
    @classmethod
    def zero(cls) -> "Vector3":
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def one(cls) -> "Vector3":
        return cls(1.0, 1.0, 1.0)

    @classmethod
    def right(cls) -> "Vector3":
        return cls(1.0, 0.0, 0.0)

    @classmethod
    def up(cls) -> "Vector3":
        return cls(0.0, 1.0, 0.0)

    @classmethod
    def forward(cls) -> "Vector3":
        return cls(0.0, 0.0, 1.0)

    @classmethod
    def left(cls) -> "Vector3":
        return cls(-1.0, 0.0, 0.0)

    @classmethod
    def down(cls) -> "Vector3":
        return cls(0.0, -1.0, 0.0)

    @classmethod
    def back(cls) -> "Vector3":
        return cls(0.0, 0.0, -1.0)

    @classmethod
    def from_array(cls, array) -> "Vector3":
        array = jnp.asarray(array, dtype=jnp.float64)
        if array.shape != (3,):
            raise ValueError(f"array must have shape (3,), got {array.shape}")
        return cls(*array.tolist())

    @classmethod
    def _wrap(cls, x, y, z) -> "Vector3":
        # Stores components as given, so traced values survive jax.jit.
        obj = cls.__new__(cls)
        obj.x = x
        obj.y = y
        obj.z = z
        return obj

    def to_array(self) -> Array:
        return jnp.array([self.x, self.y, self.z])

    def copy(self) -> "Vector3":
        return Vector3._wrap(self.x, self.y, self.z)

    __copy__ = copy

    # PyTree boiler-plate
    def tree_flatten(self):
        return (self.x, self.y, self.z), None

    @classmethod
    def tree_unflatten(cls, aux, children):
        return cls._wrap(*children)

    # Member functions
    def magnitude(self) -> float:
        """Length of the line segment represented by this vector."""
        return math.sqrt(self.sqr_magnitude())

    def sqr_magnitude(self) -> float:
        """
        Squared magnitude of this vector.

        Cheaper than :meth:`magnitude`; when comparing distances it is enough
        to compare squared magnitudes against squared distances.
        """
        return self.x * self.x + self.y * self.y + self.z * self.z

    def normalized(self) -> "Vector3":
        """Unit vector pointing in the same direction as this one."""
        return normalize(self.copy())

    def scale(self, other: "Vector3") -> None:
        """Multiply every component of this vector by the same component of *other*."""
        self.x *= other.x
        self.y *= other.y
        self.z *= other.z

    def almost_equal(self, other: "Vector3", epsilon: float = DEFAULT_EPSILON) -> bool:
        return (
            is_almost_equal(self.x, other.x, epsilon)
            and is_almost_equal(self.y, other.y, epsilon)
            and is_almost_equal(self.z, other.z, epsilon)
        )

    # Arithmetic operators
    def __add__(self, other):
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3._wrap(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other):
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3._wrap(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> "Vector3":
        return Vector3._wrap(-self.x, -self.y, -self.z)

    def __mul__(self, s):
        if isinstance(s, Vector3):
            return NotImplemented
        return Vector3._wrap(self.x * s, self.y * s, self.z * s)

    __rmul__ = __mul__

    def __truediv__(self, s):
        if isinstance(s, Vector3):
            return NotImplemented
        return Vector3._wrap(_divide(self.x, s), _divide(self.y, s), _divide(self.z, s))

    # Compound assignment operators
    def __iadd__(self, other):
        if not isinstance(other, Vector3):
            return NotImplemented
        self.x += other.x
        self.y += other.y
        self.z += other.z
        return self

    def __isub__(self, other):
        if not isinstance(other, Vector3):
            return NotImplemented
        self.x -= other.x
        self.y -= other.y
        self.z -= other.z
        return self

    def __imul__(self, s):
        if isinstance(s, Vector3):
            return NotImplemented
        self.x *= s
        self.y *= s
        self.z *= s
        return self

    def __itruediv__(self, s):
        if isinstance(s, Vector3):
            return NotImplemented
        self.x = _divide(self.x, s)
        self.y = _divide(self.y, s)
        self.z = _divide(self.z, s)
        return self

    # Comparison
    def __eq__(self, other):
        if not isinstance(other, Vector3):
            return NotImplemented
        return self.almost_equal(other)

    __hash__ = None

    # Sequence protocol
    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __len__(self) -> int:
        return 3

    def __getitem__(self, i: int) -> float:
        if i == 0:
            return self.x
        if i == 1:
            return self.y
        if i == 2:
            return self.z
        raise IndexError(f"Vector3 index {i} out of range")

    # Rendering
    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"

    def __repr__(self) -> str:
        return f"Vector3({self.x}, {self.y}, {self.z})"


def dot(v: Vector3, w: Vector3) -> float:
    """
    Dot product of two vectors.

    Positive when the angle between the inputs is below 90 degrees, zero when
    they are perpendicular and negative above 90 degrees. For unit vectors
    the result lies in [-1, 1].
    """
    return v.x * w.x + v.y * w.y + v.z * w.z


def cross(v: Vector3, w: Vector3) -> Vector3:
    """
    Cross product of two vectors.

    Zero when the inputs are parallel (same or opposite direction, or either
    is zero). Otherwise perpendicular to both inputs, oriented following the
    right-hand rule.
    """
    return Vector3._wrap(
        v.y * w.z - v.z * w.y,
        v.z * w.x - v.x * w.z,
        v.x * w.y - v.y * w.x,
    )


def angle(v: Vector3, w: Vector3) -> float:
    """
    Angle between two vectors in degrees, in the range [0, 180].

    Raises:
        ZeroDivisionError: if either input has zero magnitude
    """
    cos_angle = _divide(dot(v, w), v.magnitude() * w.magnitude())
    cos_angle = clamp(cos_angle, -1.0, 1.0)  # rounding can leave [-1, 1]
    return rad2deg(math.acos(cos_angle))


def distance(v: Vector3, w: Vector3) -> float:
    """Distance between two points."""
    return (v - w).magnitude()


def lerp(v: Vector3, w: Vector3, t: float) -> Vector3:
    """Linear interpolation between *v* and *w*, with *t* clamped to [0, 1]."""
    t = clamp(t, 0.0, 1.0)
    return v + (w - v) * t


def normalize(v: Vector3) -> Vector3:
    """
    Turn *v* into a unit vector in place.

    Returns:
        *v* itself, for chaining

    Raises:
        ZeroDivisionError: if *v* is the zero vector
    """
    v /= v.magnitude()
    return v


def project(v: Vector3, w: Vector3) -> Vector3:
    """
    Component of *v* parallel to *w*, scaled by the squared length of *w*.

    Computes ``w * (dot(v, w) * dot(w, w))``. This matches the orthogonal
    projection only when *w* is a unit vector; use :func:`vector_projection`
    for arbitrary *w*.
    """
    return w * (dot(v, w) * dot(w, w))


def reject(v: Vector3, w: Vector3) -> Vector3:
    """``v - project(v, w)``."""
    return v - project(v, w)


def vector_projection(v: Vector3, w: Vector3) -> Vector3:
    """
    Orthogonal projection of *v* onto *w*: ``w * (dot(v, w) / dot(w, w))``.

    Raises:
        ZeroDivisionError: if *w* is the zero vector
    """
    return w * _divide(dot(v, w), dot(w, w))


def vector_rejection(v: Vector3, w: Vector3) -> Vector3:
    """Component of *v* perpendicular to *w*."""
    return v - vector_projection(v, w)


def scale(v: Vector3, w: Vector3) -> Vector3:
    """Component-wise product of two vectors."""
    return Vector3._wrap(v.x * w.x, v.y * w.y, v.z * w.z)
