"""
PyEconometrics: regression and forecasting for economic data.

Estimates OLS, GLS, 2SLS, Logit, Probit and VAR models from tabular
observations, with coefficient inference, goodness-of-fit statistics,
post-estimation diagnostics, prediction intervals and model comparison.

Submodules:
    core: Data sources, exceptions, result envelope, matrix kernel
    regression: Estimation, diagnostics, prediction, model comparison
    forecasting: Forecast accuracy measures and series preprocessing
"""

__version__ = "0.1.0"
__author__ = "Hai-Shuo"
__email__ = "contact@sgcx.org"

from pyeconometrics import regression
from pyeconometrics import forecasting

__all__ = [
    "__version__",
    "regression",
    "forecasting",
]
