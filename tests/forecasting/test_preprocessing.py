"""
Tests for series preprocessing helpers.
"""

import numpy as np
import pytest

from pyeconometrics.core.exceptions import EmptyDatasetError, ValidationError
from pyeconometrics.forecasting import (
    drop_missing,
    filter_iqr_outliers,
    iqr_bounds,
    log_transform,
    quantile,
)


class TestDropMissing:

    def test_removes_nan_and_inf(self):
        out = drop_missing([1.0, np.nan, 2.0, np.inf, -np.inf, 3.0])
        np.testing.assert_array_equal(out, [1.0, 2.0, 3.0])

    def test_all_missing(self):
        assert drop_missing([np.nan]).size == 0


class TestQuantile:

    def test_matches_numpy_linear(self, rng):
        x = rng.standard_normal(37)
        for q in (0.0, 0.1, 0.25, 0.5, 0.9, 1.0):
            assert quantile(x, q) == pytest.approx(np.quantile(x, q))

    def test_interpolates(self):
        assert quantile([1.0, 2.0, 3.0, 4.0], 0.5) == pytest.approx(2.5)

    def test_unsorted_input(self):
        assert quantile([4.0, 1.0, 3.0, 2.0], 0.25) == pytest.approx(1.75)

    def test_single_value(self):
        assert quantile([7.0], 0.3) == 7.0

    def test_unsorted_minimum(self):
        assert quantile([3.0, 1.0, 2.0], 0.0) == 1.0

    @pytest.mark.parametrize("q", [-0.1, 1.1])
    def test_bad_q(self, q):
        with pytest.raises(ValidationError):
            quantile([1.0, 2.0], q)

    def test_empty(self):
        with pytest.raises(EmptyDatasetError):
            quantile([], 0.5)


class TestIQR:

    def test_bounds(self):
        values = [1.0, 2.0, 3.0, 4.0, 5.0]
        lower, upper = iqr_bounds(values)
        # Q1 = 2, Q3 = 4, IQR = 2
        assert lower == pytest.approx(-1.0)
        assert upper == pytest.approx(7.0)

    def test_filter_drops_outlier_and_keeps_order(self):
        values = [5.0, 1.0, 100.0, 3.0, 2.0, 4.0]
        np.testing.assert_array_equal(filter_iqr_outliers(values), [5.0, 1.0, 3.0, 2.0, 4.0])

    def test_custom_multiplier(self):
        values = [1.0, 2.0, 3.0, 4.0, 5.0, 9.0]
        assert 9.0 in filter_iqr_outliers(values, multiplier=3.0)
        assert 9.0 not in filter_iqr_outliers(values, multiplier=0.5)


class TestLogTransform:

    def test_log(self):
        np.testing.assert_allclose(log_transform([1.0, np.e]), [0.0, 1.0])

    def test_floor_applied(self):
        out = log_transform([0.0, -5.0])
        np.testing.assert_allclose(out, np.log(0.001))

    def test_custom_floor(self):
        assert log_transform([0.0], floor=1.0)[0] == 0.0

    def test_bad_floor(self):
        with pytest.raises(ValidationError, match="floor"):
            log_transform([1.0], floor=0.0)
