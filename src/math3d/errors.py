"""Exceptions raised by math3d operations."""


class Math3DError(Exception):
    """Base class for all math3d errors."""


class SingularMatrixError(Math3DError, ValueError):
    """Raised when inverting a matrix whose determinant is (almost) zero."""

    def __init__(self, determinant: float):
        super().__init__(f"The determinant of the matrix is zero (det={determinant!r})")
        self.determinant = determinant


class MatrixIndexError(Math3DError, IndexError):
    """Raised when a matrix row or column index is outside [0, 2]."""
