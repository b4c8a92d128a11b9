"""
Dense matrix kernel for pyeconometrics.

All functions follow these conventions:
    - Inputs are 2D array-likes, outputs are new float64 numpy arrays
    - Shape problems raise DimensionError
    - A numerically singular matrix raises SingularMatrixError; there is
      no pseudo-inverse

Submodules:
    kernel: multiply, transpose, Gauss-Jordan inverse
"""

from pyeconometrics.core.compute.linalg.kernel import (
    multiply,
    transpose,
    inverse,
)

__all__ = [
    "multiply",
    "transpose",
    "inverse",
]
