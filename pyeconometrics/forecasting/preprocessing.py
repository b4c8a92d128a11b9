"""
Series preprocessing helpers used before estimation or evaluation.

    drop_missing         remove NaN and ±Inf
    quantile             linear interpolation at index q·(n-1) of the sorted values
    iqr_bounds           [Q1 - k·IQR, Q3 + k·IQR], k = 1.5 by default
    filter_iqr_outliers  keep values inside iqr_bounds (inclusive)
    log_transform        log(max(v, floor)), floor = 0.001 by default
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyeconometrics.core.exceptions import EmptyDatasetError, ValidationError
from pyeconometrics.core.validation import check_1d, check_array

IQR_MULTIPLIER = 1.5
LOG_FLOOR = 0.001


def _vector(values: ArrayLike, name: str = 'values') -> NDArray[np.floating[Any]]:
    arr = check_array(values, name)
    check_1d(arr, name)
    return arr


def drop_missing(values: ArrayLike) -> NDArray[np.floating[Any]]:
    """Return the finite values, in order."""
    arr = _vector(values)
    return arr[np.isfinite(arr)]


def quantile(values: ArrayLike, q: float) -> float:
    """
    Sample quantile by linear interpolation between order statistics.

    Raises:
        EmptyDatasetError: If values is empty
        ValidationError: If q is outside [0, 1]
    """
    if not 0.0 <= q <= 1.0:
        raise ValidationError(f"q: must be in [0, 1], got {q}")
    arr = _vector(values)
    if len(arr) == 0:
        raise EmptyDatasetError("values: cannot take a quantile of an empty series")
    return float(np.quantile(arr, q, method='linear'))


def iqr_bounds(values: ArrayLike, multiplier: float = IQR_MULTIPLIER) -> tuple[float, float]:
    """Tukey fences (Q1 - k·IQR, Q3 + k·IQR)."""
    q1 = quantile(values, 0.25)
    q3 = quantile(values, 0.75)
    iqr = q3 - q1
    return q1 - multiplier * iqr, q3 + multiplier * iqr


def filter_iqr_outliers(
    values: ArrayLike,
    multiplier: float = IQR_MULTIPLIER,
) -> NDArray[np.floating[Any]]:
    """Drop values outside the Tukey fences. Order is preserved."""
    arr = _vector(values)
    lower, upper = iqr_bounds(arr, multiplier)
    return arr[(arr >= lower) & (arr <= upper)]


def log_transform(values: ArrayLike, floor: float = LOG_FLOOR) -> NDArray[np.floating[Any]]:
    """Natural log with values below ``floor`` raised to ``floor``."""
    if floor <= 0:
        raise ValidationError(f"floor: must be positive, got {floor}")
    return np.log(np.maximum(_vector(values), floor))
