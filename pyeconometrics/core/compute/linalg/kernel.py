"""
Dense matrix kernel: multiply, transpose, inverse.

Every estimator in the package inverts XᵗX (or an information matrix)
through inverse() below, so the singular-matrix failure mode is the same
everywhere: Gauss-Jordan elimination with partial pivoting, raising
SingularMatrixError as soon as the best available pivot is below
PIVOT_TOLERANCE. There is no pseudo-inverse fallback.

Inputs are 2D array-likes; outputs are new float64 arrays. Nothing is
modified in place and no state is kept between calls.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyeconometrics.core.exceptions import DimensionError, SingularMatrixError
from pyeconometrics.core.compute.tolerances import PIVOT_TOLERANCE


def _as_matrix(A: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    M = np.asarray(A, dtype=np.float64)
    if M.ndim != 2:
        raise DimensionError(
            f"{name}: expected 2D matrix, got {M.ndim}D with shape {M.shape}",
            expected=2,
            actual=M.ndim,
        )
    return M


def multiply(A: ArrayLike, B: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    Matrix product A·B.

    Args:
        A: (m x k) matrix
        B: (k x n) matrix

    Returns:
        (m x n) product

    Raises:
        DimensionError: If columns(A) != rows(B)
    """
    A = _as_matrix(A, 'A')
    B = _as_matrix(B, 'B')
    if A.shape[1] != B.shape[0]:
        raise DimensionError(
            f"Cannot multiply {A.shape} by {B.shape}: "
            f"columns(A)={A.shape[1]} != rows(B)={B.shape[0]}",
            expected=A.shape[1],
            actual=B.shape[0],
        )
    return A @ B


def transpose(A: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    Transpose of a non-empty matrix.

    Raises:
        DimensionError: If A is empty or not 2D
    """
    A = _as_matrix(A, 'A')
    if A.size == 0:
        raise DimensionError(f"Cannot transpose empty matrix of shape {A.shape}")
    return np.ascontiguousarray(A.T)


def inverse(
    A: ArrayLike,
    *,
    tol: float = PIVOT_TOLERANCE,
    name: str = 'A',
) -> NDArray[np.floating[Any]]:
    """
    Inverse of a square matrix by Gauss-Jordan elimination.

    Algorithm:
        1. Form the augmented matrix [A | I]
        2. For each column i: choose the row (i..n-1) with the largest
           |value| in column i, swap it into row i
        3. If that pivot is below tol, A is singular
        4. Normalize row i, eliminate column i from every other row
        5. The right half is now A⁻¹

    Args:
        A: Square matrix (n x n)
        tol: Pivot threshold below which A is treated as singular
        name: Matrix description carried on SingularMatrixError

    Returns:
        A⁻¹ (n x n)

    Raises:
        DimensionError: If A is not square or is empty
        SingularMatrixError: If a pivot falls below tol
    """
    A = _as_matrix(A, name)
    n, m = A.shape
    if n != m:
        raise DimensionError(
            f"{name}: cannot invert non-square matrix of shape {A.shape}",
            expected=(n, n),
            actual=A.shape,
        )
    if n == 0:
        raise DimensionError(f"{name}: cannot invert empty matrix")

    # Working copy; never escapes this call
    aug = np.hstack([A, np.eye(n)])

    for i in range(n):
        pivot_row = i + int(np.argmax(np.abs(aug[i:, i])))
        if pivot_row != i:
            aug[[i, pivot_row]] = aug[[pivot_row, i]]

        pivot = aug[i, i]
        if abs(pivot) < tol:
            raise SingularMatrixError(
                f"{name} is singular: pivot {abs(pivot):.3e} in column {i} "
                f"is below tolerance {tol:.0e}",
                matrix_name=name,
                pivot_index=i,
                pivot_value=float(abs(pivot)),
                tolerance=tol,
            )

        aug[i] /= pivot

        factors = aug[:, i].copy()
        factors[i] = 0.0
        aug -= np.outer(factors, aug[i])

    return aug[:, n:].copy()
