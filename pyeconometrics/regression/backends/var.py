"""
Vector autoregression, VAR(p), equation by equation.

Endogenous variables are the dependent variable followed by the
independent variables. Rows are taken in dataset order as consecutive
time periods. For t = p..n-1 every equation regresses y_{j,t} on the
same lagged design

    [1?, y_{1,t-1}, ..., y_{k,t-1}, ..., y_{1,t-p}, ..., y_{k,t-p}]

by OLS. A failing equation aborts the whole system with EquationError
naming the variable.

System statistics (T = n - p effective observations, m columns per
equation):
    Σ̂ = E'E / T
    ℓ = -(T/2) [k ln(2π) + ln|Σ̂| + k]
    AIC = -2ℓ + 2km,  BIC = -2ℓ + ln(T)km

Reference:
    Lütkepohl, H. (2005). New Introduction to Multiple Time Series
    Analysis, ch. 3
"""

from __future__ import annotations

from dataclasses import replace
import math
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pyeconometrics.core.compute.timing import Timer
from pyeconometrics.core.datasource import DataSource
from pyeconometrics.core.exceptions import (
    EquationError,
    PyEconometricsError,
    ValidationError,
)
from pyeconometrics.core.result import Result
from pyeconometrics.regression._common import (
    EstimatorKind,
    INTERCEPT_NAME,
    RegressionConfig,
)
from pyeconometrics.regression.backends.ols import OLSEstimator
from pyeconometrics.regression.design import DesignMatrix
from pyeconometrics.regression.solution import VARParams


def endogenous_variables(config: RegressionConfig) -> tuple[str, ...]:
    """Dependent variable first, then the independent variables, without repeats."""
    return tuple(dict.fromkeys((config.dependent, *config.independent)))


def lag_name(variable: str, lag: int) -> str:
    return f"{variable}.L{lag}"


def build_lagged_design(
    source: DataSource,
    variables: tuple[str, ...],
    lag_order: int,
    intercept: bool,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]], tuple[str, ...]]:
    """
    Build the shared lagged regressor matrix and the stacked responses.

    Returns:
        (X, Y, column_names) with X of shape (n-p, m) and Y of shape
        (n-p, k)

    Raises:
        ValidationError: If the dataset has no more rows than lag_order
    """
    data = np.column_stack([source[v] for v in variables])
    n, k = data.shape
    p = lag_order
    if n <= p:
        raise ValidationError(
            f"lag_order={p} requires more than {p} observations, got {n}"
        )

    blocks = [data[p - l:n - l] for l in range(1, p + 1)]
    names = [lag_name(v, l) for l in range(1, p + 1) for v in variables]
    X = np.hstack(blocks)
    if intercept:
        X = np.hstack([np.ones((n - p, 1)), X])
        names.insert(0, INTERCEPT_NAME)
    return X, data[p:], tuple(names)


def equation_config(config: RegressionConfig, variable: str, column_names: tuple[str, ...]) -> RegressionConfig:
    """Single-equation OLS configuration for one VAR equation."""
    regressors = tuple(c for c in column_names if c != INTERCEPT_NAME)
    return RegressionConfig(
        kind=EstimatorKind.OLS,
        dependent=variable,
        independent=regressors,
        intercept=config.intercept,
        confidence_level=config.confidence_level,
        robust_standard_errors=config.robust_standard_errors,
        exact_inference=config.exact_inference,
    )


class VAREstimator:
    """VAR(p) by per-equation OLS. DataSource + config -> VARParams."""

    def __init__(self) -> None:
        self._ols = OLSEstimator()

    @property
    def name(self) -> str:
        return 'var_ols'

    def fit(self, source: DataSource, config: RegressionConfig) -> Result[VARParams]:
        """
        Estimate every equation of the system.

        Raises:
            ValidationError: If the sample is too short for the lag order,
                or a cluster variable is configured
            EquationError: If any equation fails to estimate
        """
        if config.cluster_variable is not None:
            raise ValidationError("cluster_variable is not supported for VAR models")

        timer = Timer()
        timer.start()

        variables = endogenous_variables(config)
        p = config.lags
        X, Y, names = build_lagged_design(source, variables, p, config.intercept)
        T, k = Y.shape
        m = X.shape[1]

        equations = {}
        designs = {}
        with timer.section('equations'):
            for j, var in enumerate(variables):
                try:
                    design = DesignMatrix.from_arrays(X, Y[:, j], names, intercept=config.intercept)
                    result = self._ols.fit(design, equation_config(config, var, names))
                except PyEconometricsError as e:
                    raise EquationError(var, e) from e
                designs[var] = design
                equations[var] = replace(result, backend_name=self.name)

        with timer.section('system'):
            E = np.column_stack([equations[v].params.residuals for v in variables])
            sigma = E.T @ E / T
            ll = _system_log_likelihood(sigma, T, k)
            n_params = k * m
            aic = -2.0 * ll + 2.0 * n_params
            bic = -2.0 * ll + math.log(T) * n_params

        timer.stop()

        params = VARParams(
            variables=variables,
            lag_order=p,
            intercept=config.intercept,
            column_names=names,
            equations=equations,
            designs=designs,
            residual_covariance=sigma,
            log_likelihood=ll,
            aic=aic,
            bic=bic,
            n_observations=T,
            history=np.column_stack([source[v] for v in variables])[-p:],
        )

        return Result(
            params=params,
            info={
                'method': 'equation_by_equation_ols',
                'lag_order': p,
                'n_equations': k,
                'parameters_per_equation': m,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=(),
        )


def _system_log_likelihood(sigma: NDArray, T: int, k: int) -> float:
    sign, logdet = np.linalg.slogdet(sigma)
    if sign < 0:
        return float('nan')
    if sign == 0:
        return math.inf
    return -T / 2.0 * (k * math.log(2.0 * math.pi) + logdet + k)
