"""
Solver dispatch for regression.

This module provides the fit() function (public API) and estimator
selection.
"""

from __future__ import annotations

from typing import Any

from pyeconometrics.core.datasource import DataSource
from pyeconometrics.regression._common import EstimatorKind, RegressionConfig
from pyeconometrics.regression.backends.binary import LogitEstimator, ProbitEstimator
from pyeconometrics.regression.backends.iv import TwoStageLeastSquaresEstimator
from pyeconometrics.regression.backends.ols import GLSPassthroughEstimator, OLSEstimator
from pyeconometrics.regression.backends.var import VAREstimator, equation_config
from pyeconometrics.regression.design import DesignMatrix, load_source
from pyeconometrics.regression.diagnostics import Diagnostics, compute_diagnostics
from pyeconometrics.regression.solution import RegressionSolution, VARSolution


_ESTIMATORS = {
    EstimatorKind.OLS: OLSEstimator,
    EstimatorKind.GLS: GLSPassthroughEstimator,
    EstimatorKind.TSLS: TwoStageLeastSquaresEstimator,
    EstimatorKind.LOGIT: LogitEstimator,
    EstimatorKind.PROBIT: ProbitEstimator,
}


def fit(
    data: Any,
    config: RegressionConfig,
    *,
    diagnostics: bool = True,
) -> RegressionSolution | VARSolution:
    """
    Estimate a model.

    This is the primary public API for regression. Input validation,
    estimator selection, diagnostics and result wrapping all happen here.

    Args:
        data: Sequence of row mappings (variable name -> number),
            DataSource, pandas DataFrame, or path to a CSV/TSV file
        config: Model specification
        diagnostics: Run post-estimation diagnostics. When False every
            test is reported as not computed.

    Returns:
        RegressionSolution, or VARSolution when config.kind is 'var'

    Raises:
        EmptyDatasetError: If data has no rows
        NoIndependentVariablesError: If config lists no regressors
        MissingInstrumentsError: If a 2SLS config lists no instruments
        MissingVariableError: If a named variable is absent from the data
        SingularMatrixError: If X'X (or the information matrix) is singular
        EquationError: If a VAR equation fails
        ValidationError: For any other invalid input

    Example:
        >>> from pyeconometrics.regression import fit, RegressionConfig
        >>> rows = [{'x': 1, 'y': 2}, {'x': 2, 'y': 4}, {'x': 3, 'y': 6}, {'x': 4, 'y': 8}]
        >>> sol = fit(rows, RegressionConfig(kind='ols', dependent='y', independent=('x',)))
        >>> round(sol.coefficient('x').estimate, 6)
        2.0
    """
    # This is the boundary - validate here, trust everywhere else
    source = load_source(data, config)

    if config.kind is EstimatorKind.VAR:
        return _fit_var(source, config, diagnostics)

    design = DesignMatrix.from_datasource(source, config)
    estimator = _get_estimator(config.kind)
    result = estimator.fit(design, config)
    return _wrap(result, design, config, diagnostics)


def _get_estimator(kind: EstimatorKind):
    """
    Instantiate the estimator for a kind.

    Raises:
        ValueError: If no single-equation estimator exists for kind
    """
    try:
        return _ESTIMATORS[kind]()
    except KeyError:
        raise ValueError(f"No single-equation estimator for kind {kind.value!r}") from None


def _wrap(result, design, config, diagnostics: bool) -> RegressionSolution:
    if diagnostics:
        diag = compute_diagnostics(design, result.params, config.kind)
    else:
        diag = Diagnostics.skipped("diagnostics disabled")
    return RegressionSolution(
        _result=result,
        _design=design,
        _config=config,
        _diagnostics=diag,
    )


def _fit_var(source: DataSource, config: RegressionConfig, diagnostics: bool) -> VARSolution:
    result = VAREstimator().fit(source, config)
    params = result.params
    equations = {
        var: _wrap(
            params.equations[var],
            params.designs[var],
            equation_config(config, var, params.column_names),
            diagnostics,
        )
        for var in params.variables
    }
    return VARSolution(_result=result, _config=config, _equations=equations)
