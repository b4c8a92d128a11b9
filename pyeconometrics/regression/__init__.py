"""
Regression estimation, diagnostics, prediction and model comparison.

Estimators: OLS, GLS (identity weighting), 2SLS, Logit, Probit, VAR(p).

Public API:
    fit(data, config, ...) -> RegressionSolution | VARSolution
    predict(solution, new_data, config=None) -> PredictionResult
    compare_models(data, configs) -> ModelComparison

fit() is the single entry point for estimation. It handles:
    - Input validation
    - Design construction
    - Estimator selection
    - Diagnostics
    - Result wrapping

Example:
    >>> from pyeconometrics.regression import fit, RegressionConfig
    >>> config = RegressionConfig(kind='ols', dependent='y', independent=('x1', 'x2'))
    >>> solution = fit(rows, config)
    >>> print(solution.summary())
"""

from pyeconometrics.regression._common import (
    EstimatorKind,
    PredictionConfig,
    RegressionConfig,
    Significance,
)
from pyeconometrics.regression._fit import Coefficient, ModelFitStatistics
from pyeconometrics.regression.design import DesignMatrix
from pyeconometrics.regression.diagnostics import DiagnosticTest, Diagnostics
from pyeconometrics.regression.solution import (
    RegressionParams,
    RegressionSolution,
    VARParams,
    VARSolution,
)
from pyeconometrics.regression.solvers import fit
from pyeconometrics.regression.prediction import PredictionResult, predict
from pyeconometrics.regression.comparison import (
    LikelihoodRatioTest,
    ModelComparison,
    ModelFailure,
    compare_models,
)

__all__ = [
    # Entry points
    "fit",
    "predict",
    "compare_models",
    # Configuration
    "EstimatorKind",
    "RegressionConfig",
    "PredictionConfig",
    # Results
    "Coefficient",
    "Significance",
    "ModelFitStatistics",
    "DesignMatrix",
    "DiagnosticTest",
    "Diagnostics",
    "RegressionParams",
    "RegressionSolution",
    "VARParams",
    "VARSolution",
    "PredictionResult",
    "LikelihoodRatioTest",
    "ModelComparison",
    "ModelFailure",
]
