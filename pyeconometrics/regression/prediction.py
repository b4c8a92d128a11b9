"""
Point predictions and intervals from a fitted single-equation model.

For a new row with regressor vector x (intercept prepended when the
model has one):

    ŷ = x'β
    SE(ŷ) = sqrt(x' Σ̂ x)                         Σ̂ = coefficient covariance
    confidence interval  ŷ ± c · SE(ŷ)
    prediction interval  ŷ ± c · sqrt(SE(ŷ)² + s²)  s = residual std. error

c is the tabulated normal critical value (1.96 / 2.58), or the Student-t
quantile when the model was fitted with exact inference.

Binary-choice models predict probabilities. Intervals are formed on the
linear predictor and mapped through the link, so they stay inside
[0, 1]; a binary response has no additive error term, so the prediction
interval equals the confidence interval. Standard errors are reported on
the probability scale by the delta method.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pyeconometrics.core.datasource import DataSource
from pyeconometrics.core.exceptions import EmptyDatasetError, ValidationError
from pyeconometrics.core.validation import check_nonempty, check_variables_present
from pyeconometrics.regression._common import PredictionConfig
from pyeconometrics.regression._fit import critical_value
from pyeconometrics.regression.solution import RegressionSolution, VARSolution


@dataclass(frozen=True)
class PredictionResult:
    """
    Predictions for m new rows.

    Attributes:
        predictions: (m,) point predictions on the response scale
        standard_errors: (m,) standard errors of the predictions
        confidence_intervals: (m, 2) lower/upper bounds, or None if not requested
        prediction_intervals: (m, 2) lower/upper bounds, or None if not requested
        confidence_level: Level used for both intervals
    """
    predictions: NDArray[np.floating[Any]]
    standard_errors: NDArray[np.floating[Any]]
    confidence_intervals: NDArray[np.floating[Any]] | None
    prediction_intervals: NDArray[np.floating[Any]] | None
    confidence_level: float

    def __len__(self) -> int:
        return len(self.predictions)


def predict(
    solution: RegressionSolution,
    new_data: Any,
    config: PredictionConfig | None = None,
) -> PredictionResult:
    """
    Predict the response for new observations.

    Args:
        solution: A fitted single-equation model
        new_data: Sequence of row mappings, DataSource or pandas DataFrame
            holding every independent variable of the model
        config: Interval options. Defaults to PredictionConfig().

    Returns:
        PredictionResult

    Raises:
        ValidationError: If solution is a VAR system
        EmptyDatasetError: If new_data has no rows
        MissingVariableError: If a row lacks an independent variable
    """
    if isinstance(solution, VARSolution):
        raise ValidationError(
            "predict() applies to single-equation models; use VARSolution.forecast()"
        )
    if config is None:
        config = PredictionConfig()

    X_new = _new_design(solution, new_data)
    beta = solution.params
    cov = solution.covariance

    eta = X_new @ beta
    se_eta = np.sqrt(np.maximum(np.einsum('ij,jk,ik->i', X_new, cov, X_new), 0.0))
    crit = critical_value(
        config.confidence_level,
        solution.df_residual,
        solution.config.exact_inference,
    )

    link = solution.link
    lo_eta, hi_eta = eta - crit * se_eta, eta + crit * se_eta
    ci = None
    pi = None

    if solution.kind.is_binary:
        predictions = link.linkinv(eta)
        standard_errors = link.mu_eta(eta) * se_eta
        bounds = np.column_stack([link.linkinv(lo_eta), link.linkinv(hi_eta)])
        if config.include_confidence_interval:
            ci = bounds
        if config.include_prediction_interval:
            pi = bounds.copy()
    else:
        predictions = eta
        standard_errors = se_eta
        if config.include_confidence_interval:
            ci = np.column_stack([lo_eta, hi_eta])
        if config.include_prediction_interval:
            s = solution.residual_std_error
            margin = crit * np.sqrt(se_eta ** 2 + s ** 2)
            pi = np.column_stack([eta - margin, eta + margin])

    return PredictionResult(
        predictions=predictions,
        standard_errors=standard_errors,
        confidence_intervals=ci,
        prediction_intervals=pi,
        confidence_level=config.confidence_level,
    )


def _new_design(solution: RegressionSolution, new_data: Any) -> NDArray[np.floating[Any]]:
    """Assemble the new-row design matrix in the model's column order."""
    variables = solution.config.independent

    if isinstance(new_data, Sequence) and not isinstance(new_data, str):
        check_nonempty(new_data, 'new_data')
        source = DataSource.from_rows(new_data, columns=variables)
    else:
        source = DataSource.build(new_data)
        if source.n_observations == 0:
            raise EmptyDatasetError("new_data: dataset contains no observations")
        check_variables_present(dict.fromkeys(source.keys()), variables)

    X = np.column_stack([source[v] for v in variables])
    if solution.design.has_intercept:
        X = np.hstack([np.ones((X.shape[0], 1)), X])
    return X
