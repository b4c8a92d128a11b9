"""
Regression estimators.

Available estimators:
    OLSEstimator: Ordinary least squares via the normal equations
    GLSPassthroughEstimator: GLS with identity weighting (equals OLS)
    TwoStageLeastSquaresEstimator: Instrumental-variables 2SLS
    LogitEstimator, ProbitEstimator: Newton-Raphson binary choice
    VAREstimator: VAR(p) by equation-wise OLS
"""

from pyeconometrics.regression.backends.ols import OLSEstimator, GLSPassthroughEstimator
from pyeconometrics.regression.backends.iv import TwoStageLeastSquaresEstimator
from pyeconometrics.regression.backends.binary import (
    BinaryChoiceEstimator,
    LogitEstimator,
    ProbitEstimator,
)
from pyeconometrics.regression.backends.var import VAREstimator

__all__ = [
    "OLSEstimator",
    "GLSPassthroughEstimator",
    "TwoStageLeastSquaresEstimator",
    "BinaryChoiceEstimator",
    "LogitEstimator",
    "ProbitEstimator",
    "VAREstimator",
]
