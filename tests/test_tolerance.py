"""Tests for the tolerance helpers."""

import math

import pytest

import math3d
from math3d.tolerance import (
    DEFAULT_EPSILON,
    SINGULAR_EPSILON,
    clamp,
    deg2rad,
    is_almost_equal,
    rad2deg,
)


def test_is_almost_equal_default_epsilon():
    """Test comparison with the default tolerance."""
    assert is_almost_equal(1.0, 1.0005)
    assert not is_almost_equal(1.0, 1.002)


def test_is_almost_equal_is_strict():
    """Test that a difference equal to epsilon is not equal."""
    assert not is_almost_equal(0.0, 0.5, epsilon=0.5)
    assert is_almost_equal(0.0, 0.25, epsilon=0.5)


def test_is_almost_equal_explicit_epsilon():
    """Test comparison with an explicit tolerance."""
    assert not is_almost_equal(1e-5, 0.0, SINGULAR_EPSILON)
    assert is_almost_equal(1e-7, 0.0, SINGULAR_EPSILON)


def test_epsilons():
    """Test the tolerance constants."""
    assert DEFAULT_EPSILON == 0.001
    assert SINGULAR_EPSILON == 1e-6
    assert SINGULAR_EPSILON < DEFAULT_EPSILON


@pytest.mark.parametrize("rad, deg", [(0.0, 0.0), (math.pi / 2, 90.0), (math.pi, 180.0)])
def test_angle_conversions(rad, deg):
    """Test radians/degrees conversions both ways."""
    assert is_almost_equal(rad2deg(rad), deg)
    assert is_almost_equal(deg2rad(deg), rad)


def test_clamp():
    """Test clamping to a closed interval."""
    assert clamp(-0.5, 0.0, 1.0) == 0.0
    assert clamp(0.25, 0.0, 1.0) == 0.25
    assert clamp(1.5, 0.0, 1.0) == 1.0


def test_package_enables_x64():
    """Test that importing the package switches jax to 64-bit floats."""
    assert math3d.Matrix3.identity().to_array().dtype.name == "float64"
