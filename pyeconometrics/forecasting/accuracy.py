"""
Forecast accuracy measures.

Given paired actual values a and forecasts f of length n:

    MAE   = Σ|a - f| / n
    MAPE  = 100 · Σ_{a≠0} |(a - f)/a| / n      zero actuals contribute 0
    RMSE  = sqrt(Σ(a - f)² / n)
    Theil's U = RMSE / (sqrt(Σa²/n) + sqrt(Σf²/n))
    direction accuracy = 100 · #{i ≥ 1 : (a_i > a_{i-1}) == (f_i > f_{i-1})} / (n - 1)

MAPE keeps n in the denominator even when zero actuals are skipped.
Theil's U is in [0, 1]; 0 is a perfect forecast.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyeconometrics.core.exceptions import EmptyDatasetError, LengthMismatchError
from pyeconometrics.core.validation import check_1d, check_array, check_finite


@dataclass(frozen=True)
class ForecastAccuracy:
    """Accuracy of a forecast path against realized values."""
    mae: float
    mape: float
    rmse: float
    theils_u: float
    direction_accuracy: float
    n: int

    def to_dict(self) -> dict[str, float]:
        return {
            'mae': self.mae,
            'mape': self.mape,
            'rmse': self.rmse,
            'theils_u': self.theils_u,
            'direction_accuracy': self.direction_accuracy,
        }


def evaluate_accuracy(actual: ArrayLike, forecast: ArrayLike) -> ForecastAccuracy:
    """
    Compare forecasts with realized values.

    Raises:
        LengthMismatchError: If the two series differ in length
        EmptyDatasetError: If both series are empty
        ValidationError: If either series is non-numeric or non-finite
    """
    a = _series(actual, 'actual')
    f = _series(forecast, 'forecast')
    if len(a) != len(f):
        raise LengthMismatchError(
            f"actual has {len(a)} values but forecast has {len(f)}",
            expected=len(a),
            actual=len(f),
        )
    n = len(a)
    if n == 0:
        raise EmptyDatasetError("actual/forecast: no values to evaluate")

    err = a - f
    rmse = math.sqrt(float(np.mean(err ** 2)))
    return ForecastAccuracy(
        mae=float(np.mean(np.abs(err))),
        mape=_mape(a, f),
        rmse=rmse,
        theils_u=_theils_u(a, f, rmse),
        direction_accuracy=_direction_accuracy(a, f),
        n=n,
    )


def _series(values: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    arr = check_array(values, name)
    check_1d(arr, name)
    check_finite(arr, name)
    return arr


def _mape(a: NDArray, f: NDArray) -> float:
    nonzero = a != 0
    total = float(np.sum(np.abs((a[nonzero] - f[nonzero]) / a[nonzero])))
    return total / len(a) * 100.0


def _theils_u(a: NDArray, f: NDArray, rmse: float) -> float:
    denom = math.sqrt(float(np.mean(a ** 2))) + math.sqrt(float(np.mean(f ** 2)))
    if denom == 0:
        return 0.0 if rmse == 0 else float('nan')
    return rmse / denom


def _direction_accuracy(a: NDArray, f: NDArray) -> float:
    if len(a) < 2:
        return float('nan')
    same = (np.diff(a) > 0) == (np.diff(f) > 0)
    return float(np.mean(same)) * 100.0
