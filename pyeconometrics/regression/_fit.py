"""
Coefficient tables and goodness-of-fit statistics.

Both are pure functions of an estimator's output and are computed once
per solution. Linear estimators (OLS, GLS, 2SLS) use the Gaussian
formulas; binary-choice estimators report likelihood-based analogues in
the same fields (see binary_fit_statistics).
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pyeconometrics.core.compute.distributions import (
    approx_critical_value,
    chi2_p_value,
    f_p_value,
    normal_p_value,
    t_critical_value,
    t_p_value,
)
from pyeconometrics.regression._common import Significance


@dataclass(frozen=True)
class Coefficient:
    """One row of the coefficient table."""
    variable: str
    estimate: float
    standard_error: float
    t_statistic: float
    p_value: float
    conf_int: tuple[float, float]
    significance: Significance

    @property
    def is_significant(self) -> bool:
        """True at the 5% level."""
        return self.significance in (
            Significance.HIGHLY_SIGNIFICANT, Significance.SIGNIFICANT,
        )


@dataclass(frozen=True)
class ModelFitStatistics:
    """
    Goodness-of-fit summary.

    For binary-choice models r_squared is McFadden's pseudo R²,
    adjusted_r_squared its parameter-penalized form, and f_statistic the
    likelihood-ratio χ² against the intercept-only model (p-value from
    χ² with p-1 degrees of freedom).
    """
    r_squared: float
    adjusted_r_squared: float
    f_statistic: float
    f_p_value: float
    residual_standard_error: float
    log_likelihood: float
    aic: float
    bic: float
    n_observations: int
    n_parameters: int
    df_residual: int


def classify_significance(p_value: float) -> Significance:
    """Map a p-value to its significance tier. NaN is not significant."""
    if p_value < 0.01:
        return Significance.HIGHLY_SIGNIFICANT
    if p_value < 0.05:
        return Significance.SIGNIFICANT
    if p_value < 0.10:
        return Significance.MARGINALLY_SIGNIFICANT
    return Significance.NOT_SIGNIFICANT


def critical_value(confidence_level: float, df: int, exact: bool) -> float:
    """Two-sided critical value: Student-t when exact, else tabulated normal."""
    if exact and df > 0:
        return t_critical_value(confidence_level, df)
    return approx_critical_value(confidence_level)


def p_values(t: NDArray, df: int, exact: bool) -> NDArray[np.floating[Any]]:
    if exact and df > 0:
        p = t_p_value(t, df)
        return np.where(np.isnan(t), np.nan, p)
    return normal_p_value(t)


def build_coefficients(
    names: tuple[str, ...],
    estimates: NDArray,
    covariance: NDArray,
    *,
    confidence_level: float,
    df_residual: int,
    exact: bool = False,
) -> tuple[Coefficient, ...]:
    """
    Assemble the coefficient table.

    Standard errors are the square roots of the covariance diagonal.
    A zero standard error gives an infinite t-statistic; 0/0 gives NaN.
    """
    se = np.sqrt(np.maximum(np.diag(covariance), 0.0))
    with np.errstate(divide='ignore', invalid='ignore'):
        t = estimates / se
    p = p_values(t, df_residual, exact)
    crit = critical_value(confidence_level, df_residual, exact)

    return tuple(
        Coefficient(
            variable=name,
            estimate=float(b),
            standard_error=float(s),
            t_statistic=float(ti),
            p_value=float(pi),
            conf_int=(float(b - crit * s), float(b + crit * s)),
            significance=classify_significance(pi),
        )
        for name, b, s, ti, pi in zip(names, estimates, se, t, p)
    )


def linear_fit_statistics(
    y: NDArray,
    rss: float,
    n_parameters: int,
    *,
    has_intercept: bool = True,
) -> ModelFitStatistics:
    """
    Fit statistics for a linear model.

        TSS = Σ(y - ȳ)²,  ESS = TSS - RSS
        R² = ESS/TSS,  adj R² = 1 - (RSS/(n-p)) / (TSS/(n-1))
        F = (ESS/(p-1)) / (RSS/(n-p))
        MSE = RSS/(n-p)
        ℓ = -(n/2)ln(2π) - (n/2)ln(MSE) - RSS/(2·MSE)
        AIC = 2p - 2ℓ,  BIC = ln(n)·p - 2ℓ

    Without an intercept the sums are uncentered: TSS = Σy², the
    adjusted R² uses TSS/n, and F has p numerator degrees of freedom.
    A perfect fit (RSS = 0) gives F = ∞ and ℓ = ∞.
    """
    n = len(y)
    p = n_parameters
    df = n - p
    if has_intercept:
        tss = float(np.sum((y - np.mean(y)) ** 2))
        df_total, df_model = n - 1, p - 1
    else:
        tss = float(y @ y)
        df_total, df_model = n, p
    ess = tss - rss
    mse = rss / df if df > 0 else float('nan')

    if tss == 0:
        r2 = 1.0 if rss == 0 else 0.0
        adj_r2 = r2
    else:
        r2 = ess / tss
        adj_r2 = 1.0 - mse / (tss / df_total) if df_total > 0 and df > 0 else r2

    if df_model > 0 and df > 0:
        f = ess / df_model / mse if mse > 0 else math.inf
        f_p = f_p_value(f, df_model, df)
    else:
        f, f_p = float('nan'), float('nan')

    if mse > 0:
        ll = -n / 2.0 * math.log(2.0 * math.pi) - n / 2.0 * math.log(mse) - rss / (2.0 * mse)
    elif mse == 0:
        ll = math.inf
    else:
        ll = float('nan')

    return ModelFitStatistics(
        r_squared=float(r2),
        adjusted_r_squared=float(adj_r2),
        f_statistic=float(f),
        f_p_value=float(f_p),
        residual_standard_error=math.sqrt(mse) if mse >= 0 else float('nan'),
        log_likelihood=float(ll),
        aic=2.0 * p - 2.0 * ll,
        bic=math.log(n) * p - 2.0 * ll,
        n_observations=n,
        n_parameters=p,
        df_residual=df,
    )


def binary_fit_statistics(
    y: NDArray,
    fitted_probabilities: NDArray,
    log_likelihood: float,
    null_log_likelihood: float,
    n_parameters: int,
) -> ModelFitStatistics:
    """
    Fit statistics for a binary-choice model.

        McFadden R² = 1 - ℓ/ℓ₀,  adjusted = 1 - (ℓ - p)/ℓ₀
        LR = 2(ℓ - ℓ₀) ~ χ²(p-1)
        residual standard error from response residuals y - μ̂
    """
    n = len(y)
    p = n_parameters
    df = n - p
    ll, ll0 = log_likelihood, null_log_likelihood

    if ll0 < 0:
        r2 = 1.0 - ll / ll0
        adj_r2 = 1.0 - (ll - p) / ll0
    else:
        r2 = adj_r2 = float('nan')

    lr = 2.0 * (ll - ll0)
    lr_p = chi2_p_value(max(lr, 0.0), p - 1) if p > 1 else float('nan')

    resid = y - fitted_probabilities
    rse = math.sqrt(float(resid @ resid) / df) if df > 0 else float('nan')

    return ModelFitStatistics(
        r_squared=float(r2),
        adjusted_r_squared=float(adj_r2),
        f_statistic=float(lr) if p > 1 else float('nan'),
        f_p_value=lr_p,
        residual_standard_error=rse,
        log_likelihood=float(ll),
        aic=2.0 * p - 2.0 * ll,
        bic=math.log(n) * p - 2.0 * ll,
        n_observations=n,
        n_parameters=p,
        df_residual=df,
    )
