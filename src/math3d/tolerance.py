"""Tolerance-based float comparison and angle helpers shared by all types."""

import math

# Type aliases
Scalar = float

PI = math.pi

# General equality tolerance used by every approximate comparison.
DEFAULT_EPSILON = 0.001

# Determinant threshold below which a matrix is considered singular.
# Tighter than DEFAULT_EPSILON: a small determinant is a far more
# sensitive quantity than a single entry.
SINGULAR_EPSILON = 1e-6


def is_almost_equal(a: Scalar, b: Scalar, epsilon: Scalar = DEFAULT_EPSILON) -> bool:
    """
    Check whether two floats are reasonably close.

    Args:
        a: first value
        b: second value
        epsilon: strict upper bound on the absolute difference

    Returns:
        True if |a - b| < epsilon
    """
    return abs(a - b) < epsilon


def rad2deg(rad: Scalar) -> Scalar:
    """Convert radians to degrees."""
    return 180.0 * rad / PI


def deg2rad(deg: Scalar) -> Scalar:
    """Convert degrees to radians."""
    return PI * deg / 180.0


def clamp(value: Scalar, low: Scalar, high: Scalar) -> Scalar:
    """Clamp *value* to the closed interval [low, high]."""
    return min(max(value, low), high)
