"""
Tests for post-estimation diagnostics.

Each detector is checked on data built to trigger it, and the
computed/not-computed contract is checked on samples where tests cannot
run.
"""

import numpy as np
import pytest
from scipy import stats

from pyeconometrics.regression import RegressionConfig, fit
from pyeconometrics.regression.diagnostics import (
    DiagnosticTest,
    Diagnostics,
    jarque_bera,
)


def _ols(rows, independent=('x',)):
    return fit(rows, RegressionConfig(kind='ols', dependent='y', independent=independent))


class TestDiagnosticTest:

    def test_not_computed_has_no_verdict(self):
        t = DiagnosticTest.not_computed('white', "too few observations")
        assert not t.computed
        assert t.passed is None
        assert t.statistic is None

    def test_passed_is_inverse_of_flag(self):
        assert DiagnosticTest('x', True, 1.0, 0.5, flag=False).passed is True
        assert DiagnosticTest('x', True, 9.0, 0.001, flag=True).passed is False


class TestBundle:

    def test_every_test_present(self, regression_rows):
        diag = _ols(regression_rows, ('x1', 'x2')).diagnostics
        names = {t.name for t in diag.tests()}
        assert names == {
            'jarque_bera', 'shapiro_wilk', 'kolmogorov_smirnov',
            'breusch_pagan', 'white', 'goldfeld_quandt',
            'durbin_watson', 'ljung_box', 'breusch_godfrey',
            'vif', 'condition_number', 'influence',
            'reset', 'link_test', 'omitted_variables',
            'chow', 'cusum', 'cusum_squared',
        }

    def test_well_behaved_model_computes_everything(self, regression_rows):
        diag = _ols(regression_rows, ('x1', 'x2')).diagnostics
        assert [t.name for t in diag.not_computed()] == ['omitted_variables']

    def test_lookup(self, regression_rows):
        diag = _ols(regression_rows, ('x1', 'x2')).diagnostics
        assert diag['durbin_watson'] is diag.get('durbin_watson')
        with pytest.raises(KeyError):
            diag.get('nonexistent')

    def test_disabled(self, regression_rows):
        sol = fit(
            regression_rows,
            RegressionConfig(kind='ols', dependent='y', independent=('x1', 'x2')),
            diagnostics=False,
        )
        assert all(not t.computed for t in sol.diagnostics.tests())
        assert sol.diagnostics.get('vif').detail == "diagnostics disabled"

    def test_skipped_constructor(self):
        diag = Diagnostics.skipped("no data")
        assert len(diag.tests()) == 18
        assert diag.flagged() == ()

    def test_perfect_fit_keeps_design_tests_only(self, exact_line_rows):
        diag = _ols(exact_line_rows).diagnostics
        computed = {t.name for t in diag.tests() if t.computed}
        assert computed == {'vif', 'condition_number'}
        assert "perfect fit" in diag.get('jarque_bera').detail

    def test_small_sample_marks_tests_not_computed(self):
        rows = [
            {'x': 1.0, 'y': 1.2}, {'x': 2.0, 'y': 1.9},
            {'x': 3.0, 'y': 3.3}, {'x': 4.0, 'y': 3.8},
        ]
        diag = _ols(rows).diagnostics
        gq = diag.get('goldfeld_quandt')
        assert not gq.computed
        assert "requires at least" in gq.detail
        assert diag.get('durbin_watson').computed


class TestNormality:

    def test_jarque_bera_matches_scipy(self, rng):
        e = rng.standard_normal(300)
        ours = jarque_bera(e)
        ref = stats.jarque_bera(e)
        assert ours.statistic == pytest.approx(ref.statistic, rel=1e-10)
        assert ours.p_value == pytest.approx(ref.pvalue, rel=1e-6)
        assert ours.values['skewness'] == pytest.approx(stats.skew(e))
        assert ours.values['kurtosis'] == pytest.approx(stats.kurtosis(e, fisher=False))

    def test_skewed_residuals_flagged(self, rng, make_rows):
        x = rng.standard_normal(400)
        y = 1.0 + x + rng.exponential(1.0, 400)
        diag = _ols(make_rows(x=x, y=y)).diagnostics
        assert diag.get('jarque_bera').flag
        assert diag.get('shapiro_wilk').flag


class TestHeteroskedasticity:

    def test_variance_growing_with_regressor_flagged(self, rng, make_rows):
        n = 500
        x = rng.uniform(0.0, 3.0, n)
        y = 1.0 + 2.0 * x + rng.standard_normal(n) * (0.1 + x)
        diag = _ols(make_rows(x=x, y=y)).diagnostics
        assert diag.get('breusch_pagan').flag
        assert diag.get('white').flag
        assert diag.get('goldfeld_quandt').flag

    def test_breusch_pagan_is_n_r_squared(self, regression_rows):
        sol = _ols(regression_rows, ('x1', 'x2'))
        e2 = sol.residuals ** 2
        x1 = np.array([r['x1'] for r in regression_rows])
        x2 = np.array([r['x2'] for r in regression_rows])
        Z = np.column_stack([np.ones(200), x1, x2])
        coef, *_ = np.linalg.lstsq(Z, e2, rcond=None)
        resid = e2 - Z @ coef
        r2 = 1 - resid @ resid / np.sum((e2 - e2.mean()) ** 2)
        bp = sol.diagnostics.get('breusch_pagan')
        assert bp.statistic == pytest.approx(200 * r2, rel=1e-8)
        assert bp.p_value == pytest.approx(stats.chi2.sf(200 * r2, 2), rel=1e-6)


class TestAutocorrelation:

    def test_ar1_errors_flagged(self, rng, make_rows):
        n = 300
        x = rng.standard_normal(n)
        u = np.zeros(n)
        for t in range(1, n):
            u[t] = 0.9 * u[t - 1] + rng.standard_normal()
        diag = _ols(make_rows(x=x, y=1.0 + x + u)).diagnostics
        dw = diag.get('durbin_watson')
        assert dw.statistic < 1.5
        assert dw.flag
        assert dw.p_value is None
        assert diag.get('ljung_box').flag
        assert diag.get('breusch_godfrey').flag

    def test_durbin_watson_formula(self, regression_rows):
        sol = _ols(regression_rows, ('x1', 'x2'))
        e = sol.residuals
        expected = np.sum(np.diff(e) ** 2) / np.sum(e ** 2)
        assert sol.diagnostics.get('durbin_watson').statistic == pytest.approx(expected)


class TestMulticollinearity:

    def test_near_collinear_flagged(self, rng, make_rows):
        x1 = rng.standard_normal(200)
        x2 = x1 + rng.standard_normal(200) * 0.01
        y = x1 + rng.standard_normal(200)
        diag = _ols(make_rows(x1=x1, x2=x2, y=y), ('x1', 'x2')).diagnostics
        vif = diag.get('vif')
        assert vif.flag
        assert vif.values['vif']['x1'] > 10
        assert diag.get('condition_number').flag

    def test_orthogonal_regressors_near_one(self, regression_rows):
        vif = _ols(regression_rows, ('x1', 'x2')).diagnostics.get('vif')
        for value in vif.values['vif'].values():
            assert value == pytest.approx(1.0, abs=0.1)
        assert not vif.flag

    def test_single_regressor_vif_is_one(self, regression_rows):
        vif = _ols(regression_rows, ('x1',)).diagnostics.get('vif')
        assert vif.values['vif'] == {'x1': 1.0}


class TestInfluence:

    def test_outlier_reported(self, rng, make_rows):
        x = rng.standard_normal(100)
        y = 1.0 + x + rng.standard_normal(100) * 0.1
        y[10] += 10.0
        sol = _ols(make_rows(x=x, y=y))
        assert 10 in sol.diagnostics.influential_observations
        assert sol.diagnostics.get('influence').flag

    def test_cooks_distance_formula(self, regression_rows):
        sol = _ols(regression_rows, ('x1', 'x2'))
        x1 = np.array([r['x1'] for r in regression_rows])
        x2 = np.array([r['x2'] for r in regression_rows])
        X = np.column_stack([np.ones(200), x1, x2])
        H = X @ np.linalg.inv(X.T @ X) @ X.T
        h = np.diag(H)
        e = sol.residuals
        s2 = e @ e / (200 - 3)
        expected = e ** 2 / (3 * s2) * h / (1 - h) ** 2
        values = sol.diagnostics.get('influence').values
        np.testing.assert_allclose(values['cooks_distance'], expected, rtol=1e-8)
        np.testing.assert_allclose(values['leverage'], h, rtol=1e-8)


class TestSpecificationAndStability:

    def test_reset_detects_curvature(self, rng, make_rows):
        x = rng.uniform(0.0, 4.0, 200)
        y = x ** 2 + rng.standard_normal(200) * 0.1
        diag = _ols(make_rows(x=x, y=y)).diagnostics
        assert diag.get('reset').flag
        assert diag.get('link_test').flag

    def test_omitted_variables_never_computed(self, regression_rows):
        t = _ols(regression_rows, ('x1', 'x2')).diagnostics.get('omitted_variables')
        assert not t.computed
        assert t.flag is None

    def test_structural_break_flagged(self, rng, make_rows):
        x = rng.standard_normal(200)
        y = np.where(np.arange(200) < 100, x, 5.0 + 3.0 * x) + rng.standard_normal(200) * 0.1
        diag = _ols(make_rows(x=x, y=y)).diagnostics
        chow = diag.get('chow')
        assert chow.flag
        assert chow.values['break_point'] == 100
        assert diag.get('cusum').computed
        assert diag.get('cusum_squared').computed


class TestTwoStageLeastSquares:

    REFIT_TESTS = ('goldfeld_quandt', 'influence', 'reset', 'chow', 'cusum', 'cusum_squared')

    def _diagnostics(self, rows):
        config = RegressionConfig(
            kind='2sls', dependent='y', independent=('x',), instruments=('z',),
        )
        return fit(rows, config).diagnostics

    def test_least_squares_refits_not_computed(self, iv_rows):
        diag = self._diagnostics(iv_rows)
        for name in self.REFIT_TESTS:
            t = diag.get(name)
            assert not t.computed
            assert t.passed is None
            assert "2SLS" in t.detail
        assert diag.influential_observations == ()

    def test_residual_tests_use_structural_residuals(self, iv_rows):
        diag = self._diagnostics(iv_rows)
        ols_diag = _ols(iv_rows).diagnostics
        assert diag.get('jarque_bera').computed
        assert diag.get('breusch_pagan').computed
        assert diag.get('durbin_watson').statistic != pytest.approx(
            ols_diag.get('durbin_watson').statistic, rel=1e-9,
        )

    def test_ols_still_computes_refit_tests(self, iv_rows):
        diag = _ols(iv_rows).diagnostics
        for name in self.REFIT_TESTS:
            assert diag.get(name).computed
