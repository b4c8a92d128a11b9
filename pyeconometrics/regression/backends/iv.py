"""
Two-stage least squares.

Regressors listed among the instruments are exogenous; every other
regressor is endogenous. Instruments not among the regressors are the
excluded instruments.

Algorithm:
    Z = [1?, exogenous regressors, excluded instruments]
    Stage 1: for each endogenous regressor x_j, x̂_j = Z (Z'Z)⁻¹ Z' x_j
    Stage 2: X̂ = X with endogenous columns replaced by x̂_j
             β = (X̂'X̂)⁻¹ X̂'y
    Structural residuals: e = y - Xβ (original X, not X̂)
    Covariance: σ²(X̂'X̂)⁻¹ with σ² = e'e/(n-p), or the HC1/CR1
    sandwich built on X̂ and e

Reference:
    Wooldridge, J. M. (2010). Econometric Analysis of Cross Section and
    Panel Data (2nd ed.), ch. 5
"""

from __future__ import annotations

import numpy as np

from pyeconometrics.core.compute.timing import Timer
from pyeconometrics.core.exceptions import ValidationError
from pyeconometrics.core.result import Result
from pyeconometrics.core.validation import check_min_samples
from pyeconometrics.regression._common import RegressionConfig
from pyeconometrics.regression.backends.ols import (
    coefficient_covariance,
    least_squares,
    r_squared,
)
from pyeconometrics.regression.design import DesignMatrix
from pyeconometrics.regression.solution import RegressionParams


class TwoStageLeastSquaresEstimator:
    """2SLS estimator for DesignMatrix -> RegressionParams."""

    @property
    def name(self) -> str:
        return 'tsls'

    def fit(self, design: DesignMatrix, config: RegressionConfig) -> Result[RegressionParams]:
        """
        Solve 2SLS.

        Raises:
            ValidationError: If there are fewer excluded instruments than
                endogenous regressors (order condition)
            SingularMatrixError: If Z'Z or X̂'X̂ is singular
        """
        timer = Timer()
        timer.start()

        if design.source is None:
            raise ValidationError("2SLS requires a design built from a DataSource")

        instruments = set(config.instruments)
        endogenous = [v for v in config.independent if v not in instruments]
        exogenous = [v for v in config.independent if v in instruments]
        excluded = [v for v in config.instruments if v not in config.independent]

        if len(excluded) < len(endogenous):
            raise ValidationError(
                f"2SLS order condition fails: {len(endogenous)} endogenous regressor(s) "
                f"({', '.join(endogenous)}) but only {len(excluded)} excluded instrument(s)"
            )

        X, y = design.X, design.y
        n, p = design.n, design.p

        columns = [design.source[v] for v in exogenous + excluded]
        if design.has_intercept:
            columns.insert(0, np.ones(n))
        Z = np.column_stack(columns)

        X_hat = X.copy()
        first_stage_r2: dict[str, float] = {}
        with timer.section('first_stage'):
            for var in endogenous:
                x_j = design.column(var)
                stage = least_squares(Z, x_j, name="Z'Z")
                X_hat[:, design.column_names.index(var)] = stage.fitted_values
                first_stage_r2[var] = r_squared(x_j, stage.rss, centered=design.has_intercept)

        with timer.section('second_stage'):
            stage2 = least_squares(X_hat, y, name="X̂'X̂")
            beta = stage2.coefficients

        check_min_samples(n, p, 'design')
        df = n - p

        with timer.section('covariance'):
            fitted = X @ beta
            residuals = y - fitted
            rss = float(residuals @ residuals)
            sigma_sq = rss / df
            covariance, cov_type = coefficient_covariance(
                design, config, X_hat, residuals, stage2.XtX_inv, sigma_sq,
            )

        tss = float(np.sum((y - np.mean(y)) ** 2))
        timer.stop()

        params = RegressionParams(
            coefficients=beta,
            covariance=covariance,
            residuals=residuals,
            fitted_values=fitted,
            rss=rss,
            tss=tss,
            df_residual=df,
            covariance_type=cov_type,
        )

        return Result(
            params=params,
            info={
                'method': 'two_stage_least_squares',
                'endogenous': tuple(endogenous),
                'exogenous': tuple(exogenous),
                'excluded_instruments': tuple(excluded),
                'first_stage_r_squared': first_stage_r2,
                'sigma_squared': sigma_sq,
                'covariance_type': cov_type,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=(),
        )
