"""
Forecast evaluation and series preprocessing.

Public API:
    evaluate_accuracy(actual, forecast) -> ForecastAccuracy
    drop_missing(values) -> ndarray
    quantile(values, q) -> float
    iqr_bounds(values) -> (lower, upper)
    filter_iqr_outliers(values) -> ndarray
    log_transform(values, floor=0.001) -> ndarray

Point forecasts themselves come from VARSolution.forecast() or
regression.predict().
"""

from pyeconometrics.forecasting.accuracy import ForecastAccuracy, evaluate_accuracy
from pyeconometrics.forecasting.preprocessing import (
    drop_missing,
    filter_iqr_outliers,
    iqr_bounds,
    log_transform,
    quantile,
)

__all__ = [
    "ForecastAccuracy",
    "evaluate_accuracy",
    "drop_missing",
    "quantile",
    "iqr_bounds",
    "filter_iqr_outliers",
    "log_transform",
]
