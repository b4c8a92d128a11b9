"""
Tests for two-stage least squares.
"""

import numpy as np
import pytest

from pyeconometrics.core.exceptions import MissingInstrumentsError, ValidationError
from pyeconometrics.regression import RegressionConfig, fit


def _iv_config(**kwargs):
    kwargs.setdefault('independent', ('x',))
    kwargs.setdefault('instruments', ('z',))
    return RegressionConfig(kind='2sls', dependent='y', **kwargs)


def _column(rows, name):
    return np.array([row[name] for row in rows])


class TestTwoStageLeastSquares:

    def test_corrects_endogeneity_bias(self, iv_rows):
        ols = fit(iv_rows, RegressionConfig(kind='ols', dependent='y', independent=('x',)))
        iv = fit(iv_rows, _iv_config())
        # cov(x, u) > 0 biases OLS upward
        assert ols.coefficient('x').estimate > 2.3
        assert iv.coefficient('x').estimate == pytest.approx(2.0, abs=0.15)
        assert iv.coefficient('(Intercept)').estimate == pytest.approx(1.0, abs=0.15)

    def test_matches_projection_formula(self, iv_rows):
        sol = fit(iv_rows, _iv_config())
        x, z, y = (_column(iv_rows, v) for v in ('x', 'z', 'y'))
        X = np.column_stack([np.ones_like(x), x])
        Z = np.column_stack([np.ones_like(z), z])
        P = Z @ np.linalg.inv(Z.T @ Z) @ Z.T
        X_hat = P @ X
        expected = np.linalg.solve(X_hat.T @ X_hat, X_hat.T @ y)
        np.testing.assert_allclose(sol.params, expected, rtol=1e-8)

    def test_structural_residuals_use_original_regressors(self, iv_rows):
        sol = fit(iv_rows, _iv_config())
        x, y = _column(iv_rows, 'x'), _column(iv_rows, 'y')
        expected = y - (sol.params[0] + sol.params[1] * x)
        np.testing.assert_allclose(sol.residuals, expected, rtol=1e-10, atol=1e-12)

    def test_standard_errors_use_structural_sigma(self, iv_rows):
        sol = fit(iv_rows, _iv_config())
        x, z = _column(iv_rows, 'x'), _column(iv_rows, 'z')
        Z = np.column_stack([np.ones_like(z), z])
        X = np.column_stack([np.ones_like(x), x])
        X_hat = Z @ np.linalg.solve(Z.T @ Z, Z.T @ X)
        e = sol.residuals
        sigma_sq = e @ e / (len(e) - 2)
        expected = np.sqrt(np.diag(sigma_sq * np.linalg.inv(X_hat.T @ X_hat)))
        np.testing.assert_allclose(sol.standard_errors, expected, rtol=1e-8)

    def test_info_reports_roles(self, iv_rows):
        sol = fit(iv_rows, _iv_config())
        assert sol.info['endogenous'] == ('x',)
        assert sol.info['exogenous'] == ()
        assert sol.info['excluded_instruments'] == ('z',)
        assert 0.0 < sol.info['first_stage_r_squared']['x'] < 1.0
        assert sol.backend_name == 'tsls'

    def test_exogenous_regressor_passes_through(self, rng, make_rows):
        n = 500
        z = rng.standard_normal(n)
        w = rng.standard_normal(n)
        u = rng.standard_normal(n)
        x = z + 0.5 * u
        y = 0.5 + 1.5 * x - 1.0 * w + u
        rows = make_rows(x=x, w=w, z=z, y=y)
        sol = fit(rows, _iv_config(independent=('x', 'w'), instruments=('z', 'w')))
        assert sol.info['endogenous'] == ('x',)
        assert sol.info['exogenous'] == ('w',)
        assert sol.coefficient('w').estimate == pytest.approx(-1.0, abs=0.2)
        assert sol.coefficient('x').estimate == pytest.approx(1.5, abs=0.2)

    def test_all_regressors_instrumented_equals_ols(self, regression_rows):
        config = _iv_config(independent=('x1', 'x2'), instruments=('x1', 'x2'))
        iv = fit(regression_rows, config)
        ols = fit(regression_rows, RegressionConfig(kind='ols', dependent='y', independent=('x1', 'x2')))
        np.testing.assert_allclose(iv.params, ols.params, rtol=1e-8)

    def test_robust_covariance(self, iv_rows):
        sol = fit(iv_rows, _iv_config(robust_standard_errors=True))
        assert sol.covariance_type == 'hc1'


class TestTwoStageFailures:

    def test_missing_instruments(self, iv_rows):
        with pytest.raises(MissingInstrumentsError):
            fit(iv_rows, _iv_config(instruments=()))

    def test_order_condition(self, rng, make_rows):
        rows = make_rows(
            x=rng.standard_normal(50), w=rng.standard_normal(50),
            z=rng.standard_normal(50), y=rng.standard_normal(50),
        )
        with pytest.raises(ValidationError, match="order condition"):
            fit(rows, _iv_config(independent=('x', 'w'), instruments=('z',)))
