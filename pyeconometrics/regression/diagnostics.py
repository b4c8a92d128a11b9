"""
Post-estimation diagnostics.

Every test returns a DiagnosticTest. A test either ran (computed=True,
with a statistic and usually a p-value) or it did not (computed=False,
with the reason in ``detail``). A test that did not run never reports a
pass or a fail.

Categories and tests:
    normality           jarque_bera, shapiro_wilk, kolmogorov_smirnov
    heteroskedasticity  breusch_pagan, white, goldfeld_quandt
    autocorrelation     durbin_watson, ljung_box, breusch_godfrey
    multicollinearity   vif, condition_number
    outliers            influence (leverage, studentized residuals,
                        Cook's distance, DFFITS, DFBETAS)
    specification       reset, link_test, omitted_variables
    stability           chow, cusum, cusum_squared

Autocorrelation and stability tests treat rows in dataset order as time
order. ``flag`` is True when the test detects a problem at the 5% level
(or, where no p-value exists, when the statistic crosses its rule-of-
thumb threshold).

Goldfeld-Quandt, influence, RESET, Chow and the CUSUM pair re-estimate
the model by least squares on subsets or augmented designs. They are
defined for OLS only and are marked not computed for 2SLS fits.

The standard tests delegate to statsmodels (het_breuschpagan, het_white,
acorr_ljungbox, OLSInfluence, recursive_olsresiduals) and scipy.stats.

References:
    Breusch, T. S., & Pagan, A. R. (1979). Econometrica 47(5).
    Brown, R. L., Durbin, J., & Evans, J. M. (1975). JRSS B 37(2).
    Belsley, D. A., Kuh, E., & Welsch, R. E. (1980). Regression Diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import Any, Callable
import numpy as np
from numpy.typing import NDArray
from scipy import stats as sp_stats
import statsmodels.api as sm
from statsmodels.stats.diagnostic import (
    acorr_ljungbox,
    het_breuschpagan,
    het_white,
    recursive_olsresiduals,
)
from statsmodels.stats.outliers_influence import OLSInfluence
from statsmodels.stats.stattools import durbin_watson as dw_statistic
from statsmodels.tsa.stattools import acf

from pyeconometrics.core.compute.distributions import (
    chi2_p_value,
    f_p_value,
    t_p_value,
)
from pyeconometrics.core.exceptions import PyEconometricsError
from pyeconometrics.regression._common import EstimatorKind
from pyeconometrics.regression.backends.ols import least_squares, r_squared
from pyeconometrics.regression.design import DesignMatrix
from pyeconometrics.regression.solution import RegressionParams


ALPHA = 0.05
DW_BOUNDS = (1.5, 2.5)
VIF_THRESHOLD = 10.0
CONDITION_THRESHOLD = 30.0
CUSUM_A = 0.948         # Brown-Durbin-Evans 5% boundary coefficient
KS_CRITICAL_5 = 1.358   # sup|Brownian bridge| 5% point


@dataclass(frozen=True)
class DiagnosticTest:
    """Outcome of one diagnostic test."""
    name: str
    computed: bool
    statistic: float | None = None
    p_value: float | None = None
    flag: bool | None = None
    detail: str = ''
    values: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def not_computed(cls, name: str, reason: str) -> DiagnosticTest:
        return cls(name=name, computed=False, detail=reason)

    @property
    def passed(self) -> bool | None:
        """True/False when computed, None when the test did not run."""
        if not self.computed or self.flag is None:
            return None
        return not self.flag


@dataclass(frozen=True)
class Diagnostics:
    """Bundle of diagnostic tests grouped by category."""
    normality: tuple[DiagnosticTest, ...]
    heteroskedasticity: tuple[DiagnosticTest, ...]
    autocorrelation: tuple[DiagnosticTest, ...]
    multicollinearity: tuple[DiagnosticTest, ...]
    outliers: tuple[DiagnosticTest, ...]
    specification: tuple[DiagnosticTest, ...]
    stability: tuple[DiagnosticTest, ...]
    influential_observations: tuple[int, ...] = ()

    CATEGORIES = (
        'normality', 'heteroskedasticity', 'autocorrelation',
        'multicollinearity', 'outliers', 'specification', 'stability',
    )

    def tests(self) -> tuple[DiagnosticTest, ...]:
        return tuple(t for cat in self.CATEGORIES for t in getattr(self, cat))

    def get(self, name: str) -> DiagnosticTest:
        for t in self.tests():
            if t.name == name:
                return t
        raise KeyError(f"No diagnostic test named {name!r}")

    def __getitem__(self, name: str) -> DiagnosticTest:
        return self.get(name)

    def flagged(self) -> tuple[DiagnosticTest, ...]:
        """Computed tests that detected a problem."""
        return tuple(t for t in self.tests() if t.computed and t.flag)

    def not_computed(self) -> tuple[DiagnosticTest, ...]:
        return tuple(t for t in self.tests() if not t.computed)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for cat in self.CATEGORIES:
            out[cat] = {
                t.name: {
                    'computed': t.computed,
                    'statistic': t.statistic,
                    'p_value': t.p_value,
                    'flag': t.flag,
                    'detail': t.detail,
                }
                for t in getattr(self, cat)
            }
        out['influential_observations'] = list(self.influential_observations)
        return out

    @classmethod
    def skipped(cls, reason: str) -> Diagnostics:
        """Every test marked not computed with the same reason."""
        return cls(**{
            cat: tuple(DiagnosticTest.not_computed(name, reason) for name in names)
            for cat, names in _TEST_NAMES.items()
        })


_TEST_NAMES = {
    'normality': ('jarque_bera', 'shapiro_wilk', 'kolmogorov_smirnov'),
    'heteroskedasticity': ('breusch_pagan', 'white', 'goldfeld_quandt'),
    'autocorrelation': ('durbin_watson', 'ljung_box', 'breusch_godfrey'),
    'multicollinearity': ('vif', 'condition_number'),
    'outliers': ('influence',),
    'specification': ('reset', 'link_test', 'omitted_variables'),
    'stability': ('chow', 'cusum', 'cusum_squared'),
}


def compute_diagnostics(
    design: DesignMatrix,
    params: RegressionParams,
    kind: EstimatorKind,
) -> Diagnostics:
    """
    Run every diagnostic applicable to a fitted model.

    Binary-choice models get the design-only tests (multicollinearity);
    residual-based tests are marked not computed for them. For 2SLS the
    tests that re-estimate by least squares are marked not computed. A
    test that cannot be evaluated on this sample (too few observations,
    singular auxiliary regression) is marked not computed with the reason.
    """
    X, y = design.X, design.y
    e, fitted = params.residuals, params.fitted_values

    multicollinearity = (
        _run('vif', variance_inflation, design),
        _run('condition_number', condition_number, design),
    )

    if kind.is_binary:
        return _design_only(multicollinearity, "not applicable to binary response models")
    if _is_zero(e, y):
        return _design_only(multicollinearity, "residuals are identically zero (perfect fit)")

    if kind is EstimatorKind.TSLS:
        refit = _not_for_iv
    else:
        refit = _run

    influence = refit('influence', influence_measures, design)

    return Diagnostics(
        normality=(
            _run('jarque_bera', jarque_bera, e),
            _run('shapiro_wilk', shapiro_wilk, e),
            _run('kolmogorov_smirnov', kolmogorov_smirnov, e),
        ),
        heteroskedasticity=(
            _run('breusch_pagan', breusch_pagan, design, e),
            _run('white', white, design, e),
            refit('goldfeld_quandt', goldfeld_quandt, X, y, fitted),
        ),
        autocorrelation=(
            _run('durbin_watson', durbin_watson, e),
            _run('ljung_box', ljung_box, e),
            _run('breusch_godfrey', breusch_godfrey, design, e),
        ),
        multicollinearity=multicollinearity,
        outliers=(influence,),
        specification=(
            refit('reset', reset, X, y),
            _run('link_test', link_test, y, fitted),
            DiagnosticTest.not_computed(
                'omitted_variables', "requires a set of candidate omitted variables",
            ),
        ),
        stability=(
            refit('chow', chow, X, y),
            refit('cusum', _cusum, X, y),
            refit('cusum_squared', _cusum_squared, X, y),
        ),
        influential_observations=tuple(influence.values.get('influential', ())),
    )


def _not_for_iv(name: str, func: Callable[..., DiagnosticTest], *args: Any) -> DiagnosticTest:
    return DiagnosticTest.not_computed(
        name, "re-estimates the model by least squares; not defined for 2SLS",
    )


def _design_only(multicollinearity: tuple[DiagnosticTest, ...], reason: str) -> Diagnostics:
    return Diagnostics(
        multicollinearity=multicollinearity,
        **{
            cat: tuple(DiagnosticTest.not_computed(name, reason) for name in names)
            for cat, names in _TEST_NAMES.items()
            if cat != 'multicollinearity'
        },
    )


def _run(name: str, func: Callable[..., DiagnosticTest], *args: Any) -> DiagnosticTest:
    try:
        return func(*args)
    except (PyEconometricsError, ValueError) as e:
        return DiagnosticTest.not_computed(name, f"{type(e).__name__}: {e}")


def _is_zero(e: NDArray, y: NDArray) -> bool:
    scale = max(1.0, float(np.max(np.abs(y))))
    return float(np.max(np.abs(e))) <= 1e-10 * scale


def _too_few(name: str, n: int, needed: int) -> DiagnosticTest:
    return DiagnosticTest.not_computed(
        name, f"requires at least {needed} observations, got {n}",
    )


def _lm_test(name: str, aux_y: NDArray, aux_X: NDArray, df: int, centered: bool) -> DiagnosticTest:
    """LM = n·R² of an auxiliary regression, χ²(df)."""
    n = len(aux_y)
    if df <= 0:
        return DiagnosticTest.not_computed(name, "auxiliary regression has no test regressors")
    if aux_X.shape[1] >= n:
        return _too_few(name, n, aux_X.shape[1] + 1)
    aux = least_squares(aux_X, aux_y, name=f"{name} auxiliary X'X")
    lm = n * r_squared(aux_y, aux.rss, centered=centered)
    p = chi2_p_value(lm, df)
    return DiagnosticTest(
        name=name, computed=True, statistic=lm, p_value=p, flag=p < ALPHA,
        detail=f"LM = n·R², chi2({df})", values={'df': df},
    )


# =====================================================================
# Normality
# =====================================================================

def jarque_bera(e: NDArray) -> DiagnosticTest:
    n = len(e)
    if n < 3:
        return _too_few('jarque_bera', n, 3)
    res = sp_stats.jarque_bera(e)
    return DiagnosticTest(
        name='jarque_bera', computed=True, statistic=float(res.statistic),
        p_value=float(res.pvalue), flag=bool(res.pvalue < ALPHA), detail="chi2(2)",
        values={
            'skewness': float(sp_stats.skew(e)),
            'kurtosis': float(sp_stats.kurtosis(e, fisher=False)),
        },
    )


def shapiro_wilk(e: NDArray) -> DiagnosticTest:
    n = len(e)
    if n < 3:
        return _too_few('shapiro_wilk', n, 3)
    res = sp_stats.shapiro(e)
    return DiagnosticTest(
        name='shapiro_wilk', computed=True, statistic=float(res.statistic),
        p_value=float(res.pvalue), flag=bool(res.pvalue < ALPHA),
    )


def kolmogorov_smirnov(e: NDArray) -> DiagnosticTest:
    n = len(e)
    if n < 3:
        return _too_few('kolmogorov_smirnov', n, 3)
    z = (e - np.mean(e)) / np.std(e, ddof=1)
    res = sp_stats.kstest(z, 'norm')
    return DiagnosticTest(
        name='kolmogorov_smirnov', computed=True, statistic=float(res.statistic),
        p_value=float(res.pvalue), flag=bool(res.pvalue < ALPHA),
        detail="standardized residuals against N(0, 1); parameters estimated",
    )


# =====================================================================
# Heteroskedasticity
# =====================================================================

def _slope_columns(design: DesignMatrix) -> NDArray:
    X = design.X
    return X[:, 1:] if design.has_intercept else X


def _variance_exog(design: DesignMatrix) -> NDArray:
    """Constant plus slope columns, the regressors of the variance equation."""
    return np.column_stack([np.ones(design.n), _slope_columns(design)])


def breusch_pagan(design: DesignMatrix, e: NDArray) -> DiagnosticTest:
    """Koenker's studentized form: n·R² of e² on the regressors."""
    exog = _variance_exog(design)
    n, k = exog.shape
    if k >= n:
        return _too_few('breusch_pagan', n, k + 1)
    lm, p, _, _ = het_breuschpagan(e, exog)
    return DiagnosticTest(
        name='breusch_pagan', computed=True, statistic=float(lm), p_value=float(p),
        flag=bool(p < ALPHA), detail=f"LM = n·R², chi2({k - 1})", values={'df': k - 1},
    )


def white(design: DesignMatrix, e: NDArray) -> DiagnosticTest:
    """n·R² of e² on regressors, their squares and cross products."""
    exog = _variance_exog(design)
    n, k = exog.shape
    n_terms = k * (k + 1) // 2
    if n_terms >= n:
        return _too_few('white', n, n_terms + 1)
    lm, p, _, _ = het_white(e, exog)
    return DiagnosticTest(
        name='white', computed=True, statistic=float(lm), p_value=float(p),
        flag=bool(p < ALPHA), detail="LM = n·R² on levels, squares and cross products",
    )


def goldfeld_quandt(X: NDArray, y: NDArray, fitted: NDArray) -> DiagnosticTest:
    """
    Sort by fitted value, drop the middle third, compare residual
    variances of the upper and lower thirds.
    """
    n, p = X.shape
    m = n // 3
    if m <= p:
        return _too_few('goldfeld_quandt', n, 3 * (p + 1))
    order = np.argsort(fitted, kind='stable')
    low, high = order[:m], order[-m:]
    rss_low = least_squares(X[low], y[low], name="X'X (low group)").rss
    rss_high = least_squares(X[high], y[high], name="X'X (high group)").rss
    df = m - p
    if rss_low == 0:
        return DiagnosticTest.not_computed('goldfeld_quandt', "zero residual variance in low group")
    f = (rss_high / df) / (rss_low / df)
    p_val = f_p_value(f, df, df)
    return DiagnosticTest(
        name='goldfeld_quandt', computed=True, statistic=f, p_value=p_val,
        flag=p_val < ALPHA, detail=f"F({df}, {df}), sorted by fitted value",
    )


# =====================================================================
# Autocorrelation
# =====================================================================

def durbin_watson(e: NDArray) -> DiagnosticTest:
    if len(e) < 2:
        return _too_few('durbin_watson', len(e), 2)
    dw = float(dw_statistic(e))
    lo, hi = DW_BOUNDS
    return DiagnosticTest(
        name='durbin_watson', computed=True, statistic=dw, p_value=None,
        flag=not (lo <= dw <= hi), detail=f"flagged outside [{lo}, {hi}]",
    )


def ljung_box(e: NDArray) -> DiagnosticTest:
    n = len(e)
    h = max(1, min(10, n // 5))
    if n <= h + 1:
        return _too_few('ljung_box', n, h + 2)
    res = acorr_ljungbox(e, lags=[h])
    q = float(res['lb_stat'].iloc[0])
    p = float(res['lb_pvalue'].iloc[0])
    return DiagnosticTest(
        name='ljung_box', computed=True, statistic=q, p_value=p, flag=p < ALPHA,
        detail=f"chi2({h})",
        values={'lags': h, 'autocorrelations': acf(e, nlags=h, fft=False)[1:]},
    )


def breusch_godfrey(design: DesignMatrix, e: NDArray) -> DiagnosticTest:
    """First-order LM test: n·R² of e_t on X_t and e_{t-1} (e_0 = 0)."""
    lagged = np.concatenate([[0.0], e[:-1]])
    aux_X = np.column_stack([design.X, lagged])
    return _lm_test('breusch_godfrey', e, aux_X, 1, centered=design.has_intercept)


# =====================================================================
# Multicollinearity
# =====================================================================

def variance_inflation(design: DesignMatrix) -> DiagnosticTest:
    """
    VIF_j = 1/(1 - R²_j) from regressing column j on the other columns.

    A perfectly explained column gets VIF = inf.
    """
    X = design.X
    names = design.column_names
    targets = [j for j, name in enumerate(names) if not (design.has_intercept and j == 0)]
    if not targets:
        return DiagnosticTest.not_computed('vif', "no regressors besides the intercept")

    vif: dict[str, float] = {}
    for j in targets:
        others = np.delete(X, j, axis=1)
        if others.shape[1] == 0 or (design.has_intercept and others.shape[1] == 1):
            vif[names[j]] = 1.0
            continue
        # statsmodels centers R² when `others` carries the intercept column
        r2 = float(sm.OLS(X[:, j], others).fit().rsquared)
        vif[names[j]] = 1.0 / (1.0 - r2) if r2 < 1.0 else math.inf

    worst = max(vif.values())
    return DiagnosticTest(
        name='vif', computed=True, statistic=worst, p_value=None,
        flag=worst > VIF_THRESHOLD, detail=f"flagged when any VIF > {VIF_THRESHOLD:g}",
        values={
            'vif': vif,
            'tolerance': {k: (0.0 if math.isinf(v) else 1.0 / v) for k, v in vif.items()},
        },
    )


def condition_number(design: DesignMatrix) -> DiagnosticTest:
    """Ratio of extreme singular values of X with unit-length columns."""
    X = design.X
    norms = np.linalg.norm(X, axis=0)
    if np.any(norms == 0):
        return DiagnosticTest.not_computed('condition_number', "design has an all-zero column")
    s = np.linalg.svd(X / norms, compute_uv=False)
    cond = math.inf if s[-1] == 0 else float(s[0] / s[-1])
    return DiagnosticTest(
        name='condition_number', computed=True, statistic=cond, p_value=None,
        flag=cond > CONDITION_THRESHOLD,
        detail=f"columns scaled to unit length; flagged above {CONDITION_THRESHOLD:g}",
        values={'singular_values': s},
    )


# =====================================================================
# Outliers and influence
# =====================================================================

def influence_measures(design: DesignMatrix) -> DiagnosticTest:
    """
    Leverage, internally studentized residuals, Cook's distance, DFFITS
    and DFBETAS from statsmodels' OLSInfluence. An observation is
    influential when Cook's D > 4/n.
    """
    X = design.X
    n, p = X.shape
    if n - p - 1 <= 0:
        return _too_few('influence', n, p + 2)

    infl = OLSInfluence(sm.OLS(design.y, X).fit())
    with np.errstate(divide='ignore', invalid='ignore'):
        h = infl.hat_matrix_diag
        r = infl.resid_studentized_internal
        cooks = infl.cooks_distance[0]
        dffits = infl.dffits[0]
        dfbetas = infl.dfbetas

    threshold = 4.0 / n
    influential = tuple(int(i) for i in np.flatnonzero(cooks > threshold))
    return DiagnosticTest(
        name='influence', computed=True, statistic=float(np.nanmax(cooks)),
        p_value=None, flag=bool(influential),
        detail=f"max Cook's distance; influential when D > 4/n = {threshold:.4g}",
        values={
            'leverage': h,
            'studentized_residuals': r,
            'cooks_distance': cooks,
            'dffits': dffits,
            'dfbetas': dfbetas,
            'threshold': threshold,
            'influential': influential,
        },
    )


# =====================================================================
# Specification
# =====================================================================

def reset(X: NDArray, y: NDArray) -> DiagnosticTest:
    """Ramsey RESET: F test on ŷ² and ŷ³ added to the OLS regression."""
    n, p = X.shape
    df2 = n - p - 2
    if df2 <= 0:
        return _too_few('reset', n, p + 3)
    restricted = least_squares(X, y)
    yhat = restricted.fitted_values
    scale = np.max(np.abs(yhat)) or 1.0
    aug = np.column_stack([X, (yhat / scale) ** 2, (yhat / scale) ** 3])
    unrestricted = least_squares(aug, y, name="RESET auxiliary X'X")
    if unrestricted.rss == 0:
        return DiagnosticTest.not_computed('reset', "augmented regression fits exactly")
    f = ((restricted.rss - unrestricted.rss) / 2.0) / (unrestricted.rss / df2)
    p_val = f_p_value(f, 2, df2)
    return DiagnosticTest(
        name='reset', computed=True, statistic=f, p_value=p_val,
        flag=p_val < ALPHA, detail=f"F(2, {df2}) on fitted powers 2 and 3",
    )


def link_test(y: NDArray, fitted: NDArray) -> DiagnosticTest:
    """Regress y on [1, ŷ, ŷ²]; a significant ŷ² suggests misspecification."""
    n = len(y)
    df = n - 3
    if df <= 0:
        return _too_few('link_test', n, 4)
    Z = np.column_stack([np.ones(n), fitted, fitted ** 2])
    aux = least_squares(Z, y, name="link test X'X")
    if aux.rss == 0:
        return DiagnosticTest.not_computed('link_test', "auxiliary regression fits exactly")
    se = math.sqrt(aux.rss / df * aux.XtX_inv[2, 2])
    t = float(aux.coefficients[2] / se)
    p = float(t_p_value(t, df))
    return DiagnosticTest(
        name='link_test', computed=True, statistic=t, p_value=p,
        flag=p < ALPHA, detail=f"t statistic of squared fitted value, df={df}",
    )


# =====================================================================
# Stability
# =====================================================================

def chow(X: NDArray, y: NDArray) -> DiagnosticTest:
    """Chow break test at the sample midpoint."""
    n, p = X.shape
    split = n // 2
    if split <= p or n - split <= p:
        return _too_few('chow', n, 2 * (p + 1))
    pooled = least_squares(X, y).rss
    rss1 = least_squares(X[:split], y[:split], name="X'X (first half)").rss
    rss2 = least_squares(X[split:], y[split:], name="X'X (second half)").rss
    df2 = n - 2 * p
    unrestricted = rss1 + rss2
    if unrestricted == 0:
        return DiagnosticTest.not_computed('chow', "sub-sample regressions fit exactly")
    f = ((pooled - unrestricted) / p) / (unrestricted / df2)
    p_val = f_p_value(f, p, df2)
    return DiagnosticTest(
        name='chow', computed=True, statistic=f, p_value=p_val,
        flag=p_val < ALPHA, detail=f"break at observation {split}, F({p}, {df2})",
        values={'break_point': split},
    )


def recursive_residuals(X: NDArray, y: NDArray) -> NDArray[np.floating[Any]]:
    """
    Standardized one-step-ahead prediction errors

        w_t = (y_t - x_t'β_{t-1}) / sqrt(1 + x_t'(X_{t-1}'X_{t-1})⁻¹x_t)

    for t = p..n-1, from statsmodels' recursive_olsresiduals. A singular
    leading block of p rows raises ValueError.
    """
    p = X.shape[1]
    rresid_scaled = recursive_olsresiduals(sm.OLS(y, X).fit(), skip=p)[4]
    return np.asarray(rresid_scaled[p:], dtype=np.float64)


def cusum_tests(X: NDArray, y: NDArray) -> tuple[DiagnosticTest, DiagnosticTest]:
    """
    CUSUM and CUSUM-of-squares tests on recursive residuals.

    CUSUM uses the Brown-Durbin-Evans 5% boundary
    ±a(√m + 2j/√m), a = 0.948; the statistic is the largest ratio of
    |W_j| to its boundary. CUSUM-squared compares the path to the line
    j/m with the asymptotic 5% band 1.358/√(m/2).
    """
    w = recursive_residuals(X, y)
    m = len(w)
    if m < 3:
        reason = f"requires at least 3 recursive residuals, got {m}"
        return (
            DiagnosticTest.not_computed('cusum', reason),
            DiagnosticTest.not_computed('cusum_squared', reason),
        )
    sigma = float(np.std(w, ddof=1))
    if sigma == 0:
        reason = "recursive residuals have zero variance"
        return (
            DiagnosticTest.not_computed('cusum', reason),
            DiagnosticTest.not_computed('cusum_squared', reason),
        )

    j = np.arange(1, m + 1)
    W = np.cumsum(w) / sigma
    bound = CUSUM_A * (math.sqrt(m) + 2.0 * j / math.sqrt(m))
    ratio = float(np.max(np.abs(W) / bound))
    cusum = DiagnosticTest(
        name='cusum', computed=True, statistic=ratio, p_value=None,
        flag=ratio > 1.0,
        detail="max |W_j| / 5% Brown-Durbin-Evans boundary; flagged above 1",
        values={'path': W, 'boundary': bound},
    )

    sq = np.cumsum(w ** 2) / float(w @ w)
    dev = float(np.max(np.abs(sq - j / m)))
    band = KS_CRITICAL_5 / math.sqrt(m / 2.0)
    cusum_sq = DiagnosticTest(
        name='cusum_squared', computed=True, statistic=dev, p_value=None,
        flag=dev > band,
        detail=f"max deviation from j/m; flagged above {band:.4f}",
        values={'path': sq, 'band': band},
    )
    return cusum, cusum_sq


def _cusum(X: NDArray, y: NDArray) -> DiagnosticTest:
    return cusum_tests(X, y)[0]


def _cusum_squared(X: NDArray, y: NDArray) -> DiagnosticTest:
    return cusum_tests(X, y)[1]
