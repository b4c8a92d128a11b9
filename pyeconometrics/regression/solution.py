"""
Regression solution types.

Contains the parameter payloads produced by estimators and the
user-facing solution wrappers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pyeconometrics.core.exceptions import ValidationError
from pyeconometrics.core.result import Result
from pyeconometrics.regression._common import EstimatorKind, RegressionConfig
from pyeconometrics.regression._fit import (
    Coefficient,
    ModelFitStatistics,
    binary_fit_statistics,
    build_coefficients,
    linear_fit_statistics,
)
from pyeconometrics.regression.links import Link, resolve_link

if TYPE_CHECKING:
    from pyeconometrics.regression.design import DesignMatrix
    from pyeconometrics.regression.diagnostics import Diagnostics


@dataclass(frozen=True)
class RegressionParams:
    """
    Parameter payload for a single-equation estimator.

    This is the immutable data computed by estimators. Residuals are
    always y - fitted_values on the response scale; for 2SLS they use the
    original (not first-stage fitted) regressors.
    """
    coefficients: NDArray[np.floating[Any]]
    covariance: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    rss: float
    tss: float
    df_residual: int
    covariance_type: str = 'classical'
    log_likelihood: float | None = None
    null_log_likelihood: float | None = None
    linear_predictor: NDArray[np.floating[Any]] | None = None
    n_iter: int | None = None
    converged: bool | None = None


@dataclass
class RegressionSolution:
    """
    User-facing regression results.

    Wraps the estimator Result and provides accessors for coefficients,
    fit statistics and diagnostics. Immutable from the caller's point of
    view; derived tables are computed on first access and cached.
    """
    _result: Result[RegressionParams]
    _design: 'DesignMatrix'
    _config: RegressionConfig
    _diagnostics: 'Diagnostics'
    _timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # Cached computations
    _coefficients: tuple[Coefficient, ...] | None = None
    _fit: ModelFitStatistics | None = None

    # === Specification ===

    @property
    def config(self) -> RegressionConfig:
        return self._config

    @property
    def kind(self) -> EstimatorKind:
        return self._config.kind

    @property
    def design(self) -> 'DesignMatrix':
        return self._design

    @property
    def column_names(self) -> tuple[str, ...]:
        return self._design.column_names

    @property
    def link(self) -> Link:
        """Link mapping the linear predictor to the response scale."""
        if self.kind.is_binary:
            return resolve_link(self.kind.value)
        return resolve_link('identity')

    # === Estimates ===

    @property
    def params(self) -> NDArray[np.floating[Any]]:
        """Coefficient estimates in design-column order."""
        return self._result.params.coefficients

    @property
    def covariance(self) -> NDArray[np.floating[Any]]:
        """Coefficient covariance matrix (classical, HC1, CR1 or inverse information)."""
        return self._result.params.covariance

    @property
    def covariance_type(self) -> str:
        return self._result.params.covariance_type

    @property
    def coefficients(self) -> tuple[Coefficient, ...]:
        """Coefficient table, one entry per design column."""
        if self._coefficients is None:
            self._coefficients = build_coefficients(
                self.column_names,
                self.params,
                self.covariance,
                confidence_level=self._config.confidence_level,
                df_residual=self.df_residual,
                exact=self._config.exact_inference,
            )
        return self._coefficients

    def coefficient(self, variable: str) -> Coefficient:
        """Look up a coefficient by variable name."""
        for coef in self.coefficients:
            if coef.variable == variable:
                return coef
        raise KeyError(
            f"No coefficient named {variable!r}. Available: {', '.join(self.column_names)}"
        )

    @property
    def standard_errors(self) -> NDArray[np.floating[Any]]:
        return np.array([c.standard_error for c in self.coefficients])

    @property
    def t_statistics(self) -> NDArray[np.floating[Any]]:
        return np.array([c.t_statistic for c in self.coefficients])

    @property
    def p_values(self) -> NDArray[np.floating[Any]]:
        return np.array([c.p_value for c in self.coefficients])

    # === Fit ===

    @property
    def fit(self) -> ModelFitStatistics:
        if self._fit is None:
            params = self._result.params
            if self.kind.is_binary:
                self._fit = binary_fit_statistics(
                    self._design.y,
                    params.fitted_values,
                    params.log_likelihood,
                    params.null_log_likelihood,
                    self._design.p,
                )
            else:
                self._fit = linear_fit_statistics(
                    self._design.y, params.rss, self._design.p,
                    has_intercept=self._design.has_intercept,
                )
        return self._fit

    @property
    def r_squared(self) -> float:
        return self.fit.r_squared

    @property
    def adjusted_r_squared(self) -> float:
        return self.fit.adjusted_r_squared

    @property
    def log_likelihood(self) -> float:
        return self.fit.log_likelihood

    @property
    def aic(self) -> float:
        return self.fit.aic

    @property
    def bic(self) -> float:
        return self.fit.bic

    @property
    def residual_std_error(self) -> float:
        return self.fit.residual_standard_error

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self._result.params.residuals

    @property
    def fitted_values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.fitted_values

    @property
    def rss(self) -> float:
        return self._result.params.rss

    @property
    def df_residual(self) -> int:
        return self._result.params.df_residual

    @property
    def n_observations(self) -> int:
        return self._design.n

    @property
    def diagnostics(self) -> 'Diagnostics':
        return self._diagnostics

    # === Provenance ===

    @property
    def timestamp(self) -> datetime:
        """UTC time at which the model was estimated."""
        return self._timestamp

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def to_dict(self) -> dict[str, Any]:
        """Plain-data record of the estimate, suitable for serialization."""
        fit = self.fit
        return {
            'model': self._config.describe(),
            'kind': self.kind.value,
            'backend': self.backend_name,
            'timestamp': self._timestamp.isoformat(),
            'n_observations': self.n_observations,
            'coefficients': [
                {
                    'variable': c.variable,
                    'estimate': c.estimate,
                    'standard_error': c.standard_error,
                    't_statistic': c.t_statistic,
                    'p_value': c.p_value,
                    'conf_int': list(c.conf_int),
                    'significance': c.significance.value,
                }
                for c in self.coefficients
            ],
            'fit': {
                'r_squared': fit.r_squared,
                'adjusted_r_squared': fit.adjusted_r_squared,
                'f_statistic': fit.f_statistic,
                'f_p_value': fit.f_p_value,
                'residual_standard_error': fit.residual_standard_error,
                'log_likelihood': fit.log_likelihood,
                'aic': fit.aic,
                'bic': fit.bic,
            },
            'diagnostics': self._diagnostics.to_dict(),
            'warnings': list(self.warnings),
        }

    def summary(self) -> str:
        """Generate R-style summary output."""
        fit = self.fit
        stat_label = "LR chi2" if self.kind.is_binary else "F-statistic"
        r2_label = "McFadden R-squared" if self.kind.is_binary else "R-squared"
        lines = [
            f"{_TITLES[self.kind]} Results",
            "=" * 72,
            f"Model: {self._config.describe()}",
            f"Observations: {self.n_observations}",
            f"Covariance: {self.covariance_type}",
            "",
            "Coefficients:",
            "-" * 72,
            f"{'':<16} {'Estimate':>12} {'Std.Error':>12} {'t value':>9} {'Pr(>|t|)':>11}",
        ]
        for c in self.coefficients:
            lines.append(
                f"{c.variable[:16]:<16} {c.estimate:12.6f} {c.standard_error:12.6f} "
                f"{c.t_statistic:9.3f} {_format_pvalue(c.p_value):>11} {c.significance.stars}"
            )
        lines.extend([
            "-" * 72,
            "Signif. codes: 0 '***' 0.01 '**' 0.05 '*' 0.1 ' ' 1",
            "",
            f"Residual Std. Error: {fit.residual_standard_error:.6f} on {fit.df_residual} DF",
            f"{r2_label}: {fit.r_squared:.6f}, Adjusted: {fit.adjusted_r_squared:.6f}",
            f"{stat_label}: {fit.f_statistic:.4f}, p-value: {_format_pvalue(fit.f_p_value)}",
            f"Log-Likelihood: {fit.log_likelihood:.4f}  AIC: {fit.aic:.4f}  BIC: {fit.bic:.4f}",
        ])

        flagged = self._diagnostics.flagged()
        if flagged:
            lines.append("")
            lines.append("Diagnostics flagged: " + ", ".join(t.name for t in flagged))

        for w in self.warnings:
            lines.append(f"Warning: {w}")

        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"RegressionSolution(kind={self.kind.value!r}, n={self.n_observations}, "
            f"p={self._design.p}, r_squared={self.r_squared:.4f})"
        )


_TITLES = {
    EstimatorKind.OLS: "Linear Regression",
    EstimatorKind.GLS: "Generalized Least Squares",
    EstimatorKind.TSLS: "Two-Stage Least Squares",
    EstimatorKind.LOGIT: "Logit",
    EstimatorKind.PROBIT: "Probit",
}


# =====================================================================
# Vector autoregression
# =====================================================================

@dataclass(frozen=True)
class VARParams:
    """
    Parameter payload for a VAR(p) system.

    Every equation shares one lagged design whose columns are the
    intercept (optional) followed by, for each lag l = 1..p, each
    endogenous variable at lag l (named '<var>.L<l>').
    """
    variables: tuple[str, ...]
    lag_order: int
    intercept: bool
    column_names: tuple[str, ...]
    equations: dict[str, Result[RegressionParams]]
    designs: dict[str, 'DesignMatrix']
    residual_covariance: NDArray[np.floating[Any]]
    log_likelihood: float
    aic: float
    bic: float
    n_observations: int
    history: NDArray[np.floating[Any]]


@dataclass
class VARSolution:
    """
    User-facing VAR results.

    Holds one RegressionSolution per endogenous variable plus
    system-level statistics, and produces iterated forecasts.
    """
    _result: Result[VARParams]
    _config: RegressionConfig
    _equations: dict[str, RegressionSolution]
    _timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def config(self) -> RegressionConfig:
        return self._config

    @property
    def kind(self) -> EstimatorKind:
        return EstimatorKind.VAR

    @property
    def variables(self) -> tuple[str, ...]:
        return self._result.params.variables

    @property
    def lag_order(self) -> int:
        return self._result.params.lag_order

    @property
    def equations(self) -> dict[str, RegressionSolution]:
        return dict(self._equations)

    def equation(self, variable: str) -> RegressionSolution:
        """Return the equation whose dependent variable is ``variable``."""
        try:
            return self._equations[variable]
        except KeyError:
            raise KeyError(
                f"No equation for {variable!r}. Available: {', '.join(self.variables)}"
            ) from None

    @property
    def residual_covariance(self) -> NDArray[np.floating[Any]]:
        """Σ̂ = E'E / T across equations."""
        return self._result.params.residual_covariance

    @property
    def log_likelihood(self) -> float:
        return self._result.params.log_likelihood

    @property
    def aic(self) -> float:
        return self._result.params.aic

    @property
    def bic(self) -> float:
        return self._result.params.bic

    @property
    def n_observations(self) -> int:
        """Effective sample size T = n - p."""
        return self._result.params.n_observations

    @property
    def intercepts(self) -> NDArray[np.floating[Any]]:
        """Intercept vector c (k,), zeros when fitted without intercept."""
        k = len(self.variables)
        if not self._result.params.intercept:
            return np.zeros(k)
        return np.array([self._equations[v].params[0] for v in self.variables])

    @property
    def coefficient_matrices(self) -> tuple[NDArray[np.floating[Any]], ...]:
        """Lag matrices A_1..A_p with y_t = c + Σ A_l y_{t-l} + e_t."""
        k = len(self.variables)
        offset = 1 if self._result.params.intercept else 0
        B = np.vstack([self._equations[v].params[offset:] for v in self.variables])
        return tuple(B[:, l * k:(l + 1) * k] for l in range(self.lag_order))

    def forecast(self, steps: int) -> NDArray[np.floating[Any]]:
        """
        Iterated point forecasts for ``steps`` periods past the sample.

        Returns:
            Array of shape (steps, k), columns in variable order
        """
        if not isinstance(steps, int) or steps < 1:
            raise ValidationError(f"steps: must be a positive integer, got {steps!r}")

        c = self.intercepts
        A = self.coefficient_matrices
        # history rows are oldest-first; window[-l] is y_{t-l}
        window = [row for row in self._result.params.history]
        out = np.empty((steps, len(self.variables)))
        for h in range(steps):
            y_next = c.copy()
            for l, A_l in enumerate(A, start=1):
                y_next = y_next + A_l @ window[-l]
            out[h] = y_next
            window.append(y_next)
        return out

    @property
    def timestamp(self) -> datetime:
        return self._timestamp

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        lines = [
            f"VAR({self.lag_order}) Results",
            "=" * 72,
            f"Variables: {', '.join(self.variables)}",
            f"Effective observations: {self.n_observations}",
            f"Log-Likelihood: {self.log_likelihood:.4f}  AIC: {self.aic:.4f}  BIC: {self.bic:.4f}",
        ]
        for v in self.variables:
            eq = self._equations[v]
            lines.append("")
            lines.append(f"Equation: {v}  (R-squared {eq.r_squared:.4f})")
            lines.append("-" * 72)
            for c in eq.coefficients:
                lines.append(
                    f"{c.variable[:16]:<16} {c.estimate:12.6f} {c.standard_error:12.6f} "
                    f"{c.t_statistic:9.3f} {_format_pvalue(c.p_value):>11} {c.significance.stars}"
                )
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"VARSolution(variables={self.variables}, p={self.lag_order}, "
            f"T={self.n_observations})"
        )


def _format_pvalue(p: float) -> str:
    """Format p-value like R does."""
    if np.isnan(p):
        return "NA"
    if p < 2.2e-16:
        return "< 2.2e-16"
    if p < 0.001:
        return f"{p:.4e}"
    return f"{p:.4g}"
