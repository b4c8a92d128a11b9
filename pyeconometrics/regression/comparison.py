"""
Fit several model specifications on one dataset and compare them.

A specification that fails to estimate is recorded with its error and
skipped; the comparison itself only fails when no specification
succeeds. The best model is the one with the smallest AIC (first one
wins a tie).

A VAR system's AIC is a joint criterion over k equations on the n - p
rows left after lagging, so it is not on the scale of a single-equation
AIC. VAR systems are listed with their AIC but only compete for best
when no single-equation model was estimated.

Likelihood-ratio tests are run for every nested pair: same estimator
family (2SLS and VAR excluded), same dependent variable, same
intercept choice, and the restricted model's regressors a strict
subset of the unrestricted model's.

    LR = 2(ℓ_u - ℓ_r) ~ χ²(p_u - p_r)

For linear models ℓ is the log-likelihood reported in the fit
statistics, which plugs in RSS/(n-p) for σ²; LR is then approximate and
can come out slightly negative for nearly equivalent models. Its p-value
is computed from max(LR, 0).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pyeconometrics.core.compute.distributions import chi2_p_value
from pyeconometrics.core.exceptions import PyEconometricsError, ValidationError
from pyeconometrics.regression._common import EstimatorKind, RegressionConfig
from pyeconometrics.regression.solution import RegressionSolution, VARSolution
from pyeconometrics.regression.solvers import fit


@dataclass(frozen=True)
class ModelFailure:
    """A specification that could not be estimated."""
    config: RegressionConfig
    error: PyEconometricsError

    @property
    def label(self) -> str:
        return self.config.describe()


@dataclass(frozen=True)
class LikelihoodRatioTest:
    """LR test of a restricted model against a nesting unrestricted model."""
    restricted_model: int
    unrestricted_model: int
    lr_statistic: float
    degrees_of_freedom: int
    p_value: float


@dataclass(frozen=True)
class ModelComparison:
    """
    Comparison of successfully fitted models.

    aic, bic, r_squared and adjusted_r_squared are parallel to
    ``models``. Likelihood-ratio tests refer to models by index. VAR
    systems report NaN for both R² measures.
    """
    models: tuple[RegressionSolution | VARSolution, ...]
    failures: tuple[ModelFailure, ...]
    best_index: int
    aic: NDArray[np.floating[Any]]
    bic: NDArray[np.floating[Any]]
    r_squared: NDArray[np.floating[Any]]
    adjusted_r_squared: NDArray[np.floating[Any]]
    likelihood_ratio_tests: tuple[LikelihoodRatioTest, ...]

    @property
    def best(self) -> RegressionSolution | VARSolution:
        """The model with the smallest AIC."""
        return self.models[self.best_index]

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(m.config.describe() for m in self.models)

    def summary(self) -> str:
        lines = [
            "Model Comparison",
            "=" * 72,
            f"{'#':<3} {'Model':<36} {'AIC':>10} {'BIC':>10} {'Adj.R2':>9}",
            "-" * 72,
        ]
        for i, label in enumerate(self.labels):
            marker = '*' if i == self.best_index else ' '
            lines.append(
                f"{i:<2}{marker} {label[:36]:<36} {self.aic[i]:10.3f} "
                f"{self.bic[i]:10.3f} {self.adjusted_r_squared[i]:9.4f}"
            )
        if self.likelihood_ratio_tests:
            lines.append("")
            lines.append("Likelihood-ratio tests:")
            for t in self.likelihood_ratio_tests:
                lines.append(
                    f"  {t.restricted_model} vs {t.unrestricted_model}: "
                    f"LR = {t.lr_statistic:.4f}, df = {t.degrees_of_freedom}, "
                    f"p = {t.p_value:.4g}"
                )
        for f in self.failures:
            lines.append(f"Failed: {f.label}: {type(f.error).__name__}: {f.error}")
        return "\n".join(lines)


def compare_models(
    data: Any,
    configs: Sequence[RegressionConfig],
) -> ModelComparison:
    """
    Fit every configuration on the same data and rank by AIC.

    Raises:
        ValidationError: If configs is empty or no configuration could be
            estimated (the message lists each failure)
    """
    if len(configs) == 0:
        raise ValidationError("compare_models requires at least one configuration")

    models: list[RegressionSolution | VARSolution] = []
    failures: list[ModelFailure] = []
    for config in configs:
        try:
            models.append(fit(data, config))
        except PyEconometricsError as e:
            failures.append(ModelFailure(config=config, error=e))

    if not models:
        details = "; ".join(f"{f.label}: {f.error}" for f in failures)
        raise ValidationError(f"No model could be estimated ({details})")

    aic = np.array([m.aic for m in models], dtype=np.float64)
    bic = np.array([m.bic for m in models], dtype=np.float64)
    r2 = np.array([_r_squared(m, adjusted=False) for m in models], dtype=np.float64)
    adj_r2 = np.array([_r_squared(m, adjusted=True) for m in models], dtype=np.float64)

    return ModelComparison(
        models=tuple(models),
        failures=tuple(failures),
        best_index=_best_index(models, aic),
        aic=aic,
        bic=bic,
        r_squared=r2,
        adjusted_r_squared=adj_r2,
        likelihood_ratio_tests=_likelihood_ratio_tests(models),
    )


def _r_squared(model: RegressionSolution | VARSolution, *, adjusted: bool) -> float:
    if isinstance(model, VARSolution):
        return float('nan')
    return model.adjusted_r_squared if adjusted else model.r_squared


def _best_index(models: list, aic: NDArray) -> int:
    """
    Smallest AIC among single-equation models, or among VAR systems when
    nothing else was estimated. NaN is ignored; a first candidate with
    all-NaN AIC wins.
    """
    candidates = [i for i, m in enumerate(models) if not isinstance(m, VARSolution)]
    if not candidates:
        candidates = list(range(len(models)))
    values = aic[candidates]
    if np.all(np.isnan(values)):
        return candidates[0]
    return candidates[int(np.nanargmin(values))]


def _family(kind: EstimatorKind) -> str:
    if kind in (EstimatorKind.OLS, EstimatorKind.GLS):
        return 'least_squares'
    return kind.value


def _nests(restricted: RegressionSolution, unrestricted: RegressionSolution) -> bool:
    r, u = restricted.config, unrestricted.config
    return (
        _family(r.kind) == _family(u.kind)
        and r.kind not in (EstimatorKind.VAR, EstimatorKind.TSLS)
        and r.dependent == u.dependent
        and r.intercept == u.intercept
        and restricted.n_observations == unrestricted.n_observations
        and set(r.independent) < set(u.independent)
    )


def _likelihood_ratio_tests(models: list) -> tuple[LikelihoodRatioTest, ...]:
    tests = []
    singles = [(i, m) for i, m in enumerate(models) if isinstance(m, RegressionSolution)]
    for i, restricted in singles:
        for j, unrestricted in singles:
            if i == j or not _nests(restricted, unrestricted):
                continue
            lr = 2.0 * (unrestricted.log_likelihood - restricted.log_likelihood)
            df = len(unrestricted.params) - len(restricted.params)
            tests.append(LikelihoodRatioTest(
                restricted_model=i,
                unrestricted_model=j,
                lr_statistic=float(lr),
                degrees_of_freedom=df,
                p_value=chi2_p_value(max(lr, 0.0), df),
            ))
    return tuple(tests)
