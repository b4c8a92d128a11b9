"""
Tests for coefficient tables and goodness-of-fit statistics.
"""

import math

import numpy as np
import pytest
from scipy import stats

from pyeconometrics.regression import RegressionConfig, Significance, fit
from pyeconometrics.regression._fit import (
    binary_fit_statistics,
    build_coefficients,
    classify_significance,
    critical_value,
    linear_fit_statistics,
)


class TestSignificance:

    @pytest.mark.parametrize("p, tier", [
        (0.001, Significance.HIGHLY_SIGNIFICANT),
        (0.01, Significance.SIGNIFICANT),
        (0.049, Significance.SIGNIFICANT),
        (0.05, Significance.MARGINALLY_SIGNIFICANT),
        (0.099, Significance.MARGINALLY_SIGNIFICANT),
        (0.10, Significance.NOT_SIGNIFICANT),
        (0.8, Significance.NOT_SIGNIFICANT),
    ])
    def test_tiers(self, p, tier):
        assert classify_significance(p) is tier

    def test_nan_not_significant(self):
        assert classify_significance(float('nan')) is Significance.NOT_SIGNIFICANT

    def test_stars(self):
        assert Significance.HIGHLY_SIGNIFICANT.stars == '***'
        assert Significance.NOT_SIGNIFICANT.stars == ''


class TestCriticalValue:

    def test_normal_default(self):
        assert critical_value(0.95, 10, exact=False) == 1.96

    def test_exact_uses_t(self):
        assert critical_value(0.95, 10, exact=True) == pytest.approx(stats.t.ppf(0.975, 10))


class TestBuildCoefficients:

    def test_table(self):
        coefs = build_coefficients(
            ('(Intercept)', 'x'),
            np.array([1.0, 0.5]),
            np.diag([0.25, 0.01]),
            confidence_level=0.95,
            df_residual=50,
        )
        intercept, x = coefs
        assert intercept.standard_error == pytest.approx(0.5)
        assert intercept.t_statistic == pytest.approx(2.0)
        assert x.t_statistic == pytest.approx(5.0)
        assert x.conf_int == pytest.approx((0.5 - 1.96 * 0.1, 0.5 + 1.96 * 0.1))
        assert x.significance is Significance.HIGHLY_SIGNIFICANT

    def test_p_values_decrease_with_t(self):
        estimates = np.array([0.1, 0.5, 1.0, 2.0, 4.0])
        coefs = build_coefficients(
            tuple(f"b{i}" for i in range(5)), estimates, np.eye(5),
            confidence_level=0.95, df_residual=100,
        )
        p = [c.p_value for c in coefs]
        assert p == sorted(p, reverse=True)

    def test_zero_standard_error(self):
        (c,) = build_coefficients(
            ('x',), np.array([2.0]), np.zeros((1, 1)),
            confidence_level=0.95, df_residual=3,
        )
        assert math.isinf(c.t_statistic)
        assert c.p_value == pytest.approx(0.0, abs=1e-12)


class TestLinearFitStatistics:

    def test_matches_formulas(self, rng):
        y = rng.standard_normal(50)
        rss = 20.0
        fs = linear_fit_statistics(y, rss, 3)
        tss = float(np.sum((y - y.mean()) ** 2))
        mse = rss / 47
        assert fs.r_squared == pytest.approx(1 - rss / tss)
        assert fs.adjusted_r_squared == pytest.approx(1 - mse / (tss / 49))
        f = ((tss - rss) / 2) / mse
        assert fs.f_statistic == pytest.approx(f)
        assert fs.f_p_value == pytest.approx(stats.f.sf(f, 2, 47))
        ll = -25 * math.log(2 * math.pi) - 25 * math.log(mse) - rss / (2 * mse)
        assert fs.log_likelihood == pytest.approx(ll)
        assert fs.aic == pytest.approx(6 - 2 * ll)
        assert fs.bic == pytest.approx(math.log(50) * 3 - 2 * ll)
        assert fs.residual_standard_error == pytest.approx(math.sqrt(mse))

    def test_adjusted_not_above_r_squared(self, rng):
        y = rng.standard_normal(30)
        fs = linear_fit_statistics(y, 0.5 * float(np.sum((y - y.mean()) ** 2)), 4)
        assert fs.adjusted_r_squared <= fs.r_squared

    def test_perfect_fit(self):
        fs = linear_fit_statistics(np.array([2.0, 4.0, 6.0, 8.0]), 0.0, 2)
        assert fs.r_squared == 1.0
        assert math.isinf(fs.f_statistic)
        assert math.isinf(fs.log_likelihood)

    def test_intercept_only_has_no_f(self, rng):
        fs = linear_fit_statistics(rng.standard_normal(10), 5.0, 1)
        assert math.isnan(fs.f_statistic)
        assert math.isnan(fs.f_p_value)

    def test_uncentered_without_intercept(self, rng):
        y = 10.0 + rng.standard_normal(40)
        rss = 30.0
        fs = linear_fit_statistics(y, rss, 2, has_intercept=False)
        tss = float(y @ y)
        mse = rss / 38
        assert fs.r_squared == pytest.approx(1 - rss / tss)
        assert fs.adjusted_r_squared == pytest.approx(1 - mse / (tss / 40))
        f = ((tss - rss) / 2) / mse
        assert fs.f_statistic == pytest.approx(f)
        assert fs.f_p_value == pytest.approx(stats.f.sf(f, 2, 38))


class TestNoInterceptBounds:

    def test_r_squared_in_unit_interval(self, rng, make_rows):
        x = np.arange(1.0, 20.0)
        y = 10.0 + rng.uniform(-0.01, 0.01, x.size)
        sol = fit(
            make_rows(x=x, y=y),
            RegressionConfig(kind='ols', dependent='y', independent=('x',), intercept=False),
        )
        assert 0.0 <= sol.r_squared <= 1.0
        assert sol.fit.f_p_value < 0.001


class TestBinaryFitStatistics:

    def test_mcfadden(self):
        y = np.array([0.0, 1.0, 1.0, 0.0, 1.0])
        mu = np.array([0.2, 0.8, 0.7, 0.3, 0.6])
        fs = binary_fit_statistics(y, mu, -2.0, -4.0, 2)
        assert fs.r_squared == pytest.approx(0.5)
        assert fs.adjusted_r_squared == pytest.approx(1 - (-2.0 - 2) / -4.0)
        assert fs.f_statistic == pytest.approx(4.0)
        assert fs.f_p_value == pytest.approx(stats.chi2.sf(4.0, 1))
        assert fs.aic == pytest.approx(4 + 4.0)
