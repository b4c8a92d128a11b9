"""
Reference distributions used for inference.

Two families of helpers:

Approximate (default for coefficient inference and intervals):
    normal_cdf()           Φ(x) via the Abramowitz & Stegun 7.1.26 erf
                           approximation, |error| <= 1.5e-7
    normal_p_value()       2·(1 − Φ(|t|))
    approx_critical_value() 1.96 for 95%, 2.58 for 99%, 1.96 otherwise

    Treating t-statistics as standard normal ignores the extra spread of
    Student's t. For small residual degrees of freedom the p-values are
    too small and the intervals too narrow.

Exact (scipy.stats):
    t_p_value(), t_critical_value()  Student-t with df residual dof
    f_p_value(), chi2_p_value()      upper-tail survival functions
"""

from __future__ import annotations

import math
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import stats as sp_stats

# Abramowitz & Stegun 7.1.26
_ERF_P = 0.3275911
_ERF_A = (0.254829592, -0.284496736, 1.421413741, -1.453152027, 1.061405429)

_APPROX_CRITICAL_VALUES = {
    0.95: 1.96,
    0.99: 2.58,
}


def erf(x: ArrayLike) -> NDArray[np.floating[Any]]:
    """Error function, Abramowitz & Stegun 7.1.26 (|error| <= 1.5e-7)."""
    x = np.asarray(x, dtype=np.float64)
    sign = np.where(x >= 0, 1.0, -1.0)
    ax = np.abs(x)
    t = 1.0 / (1.0 + _ERF_P * ax)
    a1, a2, a3, a4, a5 = _ERF_A
    poly = ((((a5 * t + a4) * t + a3) * t + a2) * t + a1) * t
    return sign * (1.0 - poly * np.exp(-ax * ax))


def normal_cdf(x: ArrayLike) -> NDArray[np.floating[Any]]:
    """Standard normal CDF Φ(x) = ½(1 + erf(x/√2))."""
    x = np.asarray(x, dtype=np.float64)
    return 0.5 * (1.0 + erf(x / math.sqrt(2.0)))


def normal_p_value(t: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    Two-sided p-value treating t as standard normal.

    NaN statistics give NaN p-values. Clipped to [0, 1] since the erf
    approximation can overshoot by ~1e-7.
    """
    t = np.asarray(t, dtype=np.float64)
    p = 2.0 * (1.0 - normal_cdf(np.abs(t)))
    return np.where(np.isnan(t), np.nan, np.clip(p, 0.0, 1.0))


def approx_critical_value(confidence_level: float) -> float:
    """
    Fixed two-sided critical value for a confidence level.

    Only 0.95 (1.96) and 0.99 (2.58) are tabulated; any other level
    falls back to the 95% value.
    """
    for level, value in _APPROX_CRITICAL_VALUES.items():
        if math.isclose(confidence_level, level):
            return value
    return _APPROX_CRITICAL_VALUES[0.95]


def t_p_value(t: ArrayLike, df: float) -> NDArray[np.floating[Any]]:
    """Two-sided p-value from Student's t with df degrees of freedom."""
    t = np.asarray(t, dtype=np.float64)
    return 2.0 * sp_stats.t.sf(np.abs(t), df)


def t_critical_value(confidence_level: float, df: float) -> float:
    """Two-sided Student-t quantile for the given confidence level."""
    return float(sp_stats.t.ppf(0.5 + confidence_level / 2.0, df))


def f_p_value(f: float, df1: float, df2: float) -> float:
    """Upper-tail probability of the F distribution."""
    if np.isnan(f) or df1 <= 0 or df2 <= 0:
        return float('nan')
    if np.isinf(f):
        return 0.0
    return float(sp_stats.f.sf(f, df1, df2))


def chi2_p_value(x: float, df: float) -> float:
    """Upper-tail probability of the chi-squared distribution."""
    if np.isnan(x) or df <= 0:
        return float('nan')
    if np.isinf(x):
        return 0.0
    return float(sp_stats.chi2.sf(x, df))
