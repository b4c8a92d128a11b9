"""
Tests for the dense matrix kernel (multiply, transpose, Gauss-Jordan inverse).
"""

import numpy as np
import pytest

from pyeconometrics.core.compute.linalg import inverse, multiply, transpose
from pyeconometrics.core.compute.tolerances import PIVOT_TOLERANCE
from pyeconometrics.core.exceptions import DimensionError, SingularMatrixError


class TestMultiply:

    def test_matches_numpy(self, rng):
        A = rng.standard_normal((4, 3))
        B = rng.standard_normal((3, 5))
        np.testing.assert_allclose(multiply(A, B), A @ B, rtol=1e-14)

    def test_shape(self, rng):
        assert multiply(np.ones((2, 3)), np.ones((3, 7))).shape == (2, 7)

    def test_nonconformable_raises(self):
        with pytest.raises(DimensionError, match="Cannot multiply"):
            multiply(np.ones((2, 3)), np.ones((2, 3)))

    def test_1d_input_rejected(self):
        with pytest.raises(DimensionError):
            multiply(np.ones(3), np.ones((3, 1)))


class TestTranspose:

    def test_swaps_axes(self):
        A = np.arange(6.0).reshape(2, 3)
        At = transpose(A)
        assert At.shape == (3, 2)
        np.testing.assert_array_equal(At, A.T)

    def test_does_not_alias_input(self):
        A = np.arange(6.0).reshape(2, 3)
        At = transpose(A)
        At[0, 0] = 99.0
        assert A[0, 0] == 0.0

    def test_empty_rejected(self):
        with pytest.raises(DimensionError):
            transpose(np.zeros((0, 3)))


class TestInverse:

    def test_identity_product(self, rng):
        A = rng.standard_normal((5, 5)) + 5 * np.eye(5)
        A_inv = inverse(A)
        np.testing.assert_allclose(A @ A_inv, np.eye(5), atol=1e-10)
        np.testing.assert_allclose(A_inv @ A, np.eye(5), atol=1e-10)

    def test_matches_numpy(self, rng):
        A = rng.standard_normal((4, 4)) + 4 * np.eye(4)
        np.testing.assert_allclose(inverse(A), np.linalg.inv(A), rtol=1e-10, atol=1e-12)

    def test_ill_conditioned_hilbert(self):
        n = 6
        H = 1.0 / (np.arange(n)[:, None] + np.arange(n)[None, :] + 1.0)
        assert np.linalg.cond(H) > 1e4
        np.testing.assert_allclose(inverse(H) @ H, np.eye(n), rtol=1e-4, atol=1e-6)

    def test_requires_row_swap(self):
        # Zero in the (0, 0) position forces partial pivoting
        A = np.array([[0.0, 1.0], [2.0, 3.0]])
        np.testing.assert_allclose(inverse(A) @ A, np.eye(2), atol=1e-14)

    def test_input_not_modified(self, rng):
        A = rng.standard_normal((3, 3)) + 3 * np.eye(3)
        original = A.copy()
        inverse(A)
        np.testing.assert_array_equal(A, original)

    def test_one_by_one(self):
        np.testing.assert_allclose(inverse([[4.0]]), [[0.25]])

    def test_singular_raises_with_pivot_info(self):
        A = np.array([[1.0, 2.0], [2.0, 4.0]])
        with pytest.raises(SingularMatrixError) as exc_info:
            inverse(A, name="X'X")
        err = exc_info.value
        assert err.matrix_name == "X'X"
        assert err.pivot_index == 1
        assert err.pivot_value < PIVOT_TOLERANCE
        assert err.tolerance == PIVOT_TOLERANCE

    def test_collinear_normal_equations_singular(self, rng):
        x1 = rng.standard_normal(20)
        X = np.column_stack([np.ones(20), x1, 2.0 * x1])
        with pytest.raises(SingularMatrixError):
            inverse(X.T @ X)

    def test_zero_matrix_singular(self):
        with pytest.raises(SingularMatrixError):
            inverse(np.zeros((3, 3)))

    def test_non_square_rejected(self):
        with pytest.raises(DimensionError, match="non-square"):
            inverse(np.ones((2, 3)))

    def test_empty_rejected(self):
        with pytest.raises(DimensionError):
            inverse(np.zeros((0, 0)))
