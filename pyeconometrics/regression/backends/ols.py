"""
Least-squares estimators: OLS and the GLS passthrough.

Solves the normal equations with the Gauss-Jordan kernel:

    β = (X'X)⁻¹ X'y

No QR or SVD fallback exists; a numerically singular X'X (collinear
regressors, fewer observations than parameters) raises
SingularMatrixError.

Covariance options:
    classical  σ²(X'X)⁻¹, σ² = RSS/(n-p)
    hc1        n/(n-p) · (X'X)⁻¹ X' diag(e²) X (X'X)⁻¹
    cr1        G/(G-1) · (n-1)/(n-p) · (X'X)⁻¹ (Σ_g X_g'e_g e_g'X_g) (X'X)⁻¹
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any
import warnings
import numpy as np
from numpy.typing import NDArray

from pyeconometrics.core.compute.linalg import inverse, multiply, transpose
from pyeconometrics.core.compute.timing import Timer
from pyeconometrics.core.exceptions import ValidationError
from pyeconometrics.core.result import Result
from pyeconometrics.core.validation import check_min_samples
from pyeconometrics.regression._common import RegressionConfig
from pyeconometrics.regression.design import DesignMatrix
from pyeconometrics.regression.solution import RegressionParams


@dataclass(frozen=True)
class LeastSquaresFit:
    """Raw output of one normal-equations solve."""
    coefficients: NDArray[np.floating[Any]]
    XtX_inv: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    rss: float


def least_squares(X: NDArray, y: NDArray, *, name: str = "X'X") -> LeastSquaresFit:
    """
    Solve min_β ||y - Xβ||² via (X'X)⁻¹X'y.

    Shared by every estimator and every auxiliary regression
    (first stage, VIF, Breusch-Pagan, RESET, recursive residuals).

    Raises:
        SingularMatrixError: If X'X has no inverse
    """
    Xt = transpose(X)
    XtX_inv = inverse(multiply(Xt, X), name=name)
    beta = multiply(XtX_inv, multiply(Xt, y.reshape(-1, 1))).ravel()
    fitted = multiply(X, beta.reshape(-1, 1)).ravel()
    residuals = y - fitted
    return LeastSquaresFit(
        coefficients=beta,
        XtX_inv=XtX_inv,
        fitted_values=fitted,
        residuals=residuals,
        rss=float(residuals @ residuals),
    )


def r_squared(y: NDArray, rss: float, *, centered: bool = True) -> float:
    """R² of an auxiliary regression; uncentered when the model has no constant."""
    tss = float(np.sum((y - np.mean(y)) ** 2)) if centered else float(y @ y)
    if tss == 0:
        return 1.0 if rss == 0 else 0.0
    return 1.0 - rss / tss


def robust_covariance(
    X: NDArray,
    residuals: NDArray,
    XtX_inv: NDArray,
) -> NDArray[np.floating[Any]]:
    """HC1 sandwich: bread @ meat @ bread · n/(n-k)."""
    n, k = X.shape
    meat = multiply(transpose(X * residuals[:, np.newaxis] ** 2), X)
    return multiply(multiply(XtX_inv, meat), XtX_inv) * n / (n - k)


def cluster_covariance(
    X: NDArray,
    residuals: NDArray,
    XtX_inv: NDArray,
    clusters: NDArray,
) -> NDArray[np.floating[Any]]:
    """
    CR1 cluster-robust sandwich.

    Raises:
        ValidationError: If there are fewer than two clusters
    """
    n, k = X.shape
    labels = np.unique(clusters)
    G = len(labels)
    if G < 2:
        raise ValidationError(
            f"cluster_variable: at least 2 clusters are required, got {G}"
        )
    meat = np.zeros((k, k))
    for g in labels:
        idx = clusters == g
        score = transpose(X[idx]) @ residuals[idx]
        meat += np.outer(score, score)
    scale = G / (G - 1) * (n - 1) / (n - k)
    return multiply(multiply(XtX_inv, meat), XtX_inv) * scale


def coefficient_covariance(
    design: DesignMatrix,
    config: RegressionConfig,
    X: NDArray,
    residuals: NDArray,
    XtX_inv: NDArray,
    sigma_sq: float,
) -> tuple[NDArray[np.floating[Any]], str]:
    """Select the covariance estimator requested by the configuration."""
    if config.cluster_variable is not None and design.clusters is not None:
        return cluster_covariance(X, residuals, XtX_inv, design.clusters), 'cr1'
    if config.robust_standard_errors:
        return robust_covariance(X, residuals, XtX_inv), 'hc1'
    return sigma_sq * XtX_inv, 'classical'


class OLSEstimator:
    """
    Ordinary least squares via the normal equations.

    Implements the Estimator protocol for DesignMatrix -> RegressionParams.
    """

    @property
    def name(self) -> str:
        return 'ols'

    def fit(self, design: DesignMatrix, config: RegressionConfig) -> Result[RegressionParams]:
        """
        Solve OLS.

        Raises:
            SingularMatrixError: If X'X is singular
            ValidationError: If n <= p (no residual degrees of freedom)
        """
        timer = Timer()
        timer.start()

        X, y = design.X, design.y
        n, p = design.n, design.p

        with timer.section('normal_equations'):
            ls = least_squares(X, y)

        check_min_samples(n, p, 'design')
        df = n - p

        with timer.section('covariance'):
            sigma_sq = ls.rss / df
            covariance, cov_type = coefficient_covariance(
                design, config, X, ls.residuals, ls.XtX_inv, sigma_sq,
            )

        tss = float(np.sum((y - np.mean(y)) ** 2))
        timer.stop()

        params = RegressionParams(
            coefficients=ls.coefficients,
            covariance=covariance,
            residuals=ls.residuals,
            fitted_values=ls.fitted_values,
            rss=ls.rss,
            tss=tss,
            df_residual=df,
            covariance_type=cov_type,
        )

        return Result(
            params=params,
            info={
                'method': 'normal_equations',
                'sigma_squared': sigma_sq,
                'covariance_type': cov_type,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=(),
        )


class GLSPassthroughEstimator(OLSEstimator):
    """
    GLS with identity weighting.

    No error covariance structure is estimated, so the estimates are
    identical to OLS. The result carries a warning saying so.
    """

    WARNING = "GLS uses identity weighting; estimates are identical to OLS"

    @property
    def name(self) -> str:
        return 'gls_passthrough'

    def fit(self, design: DesignMatrix, config: RegressionConfig) -> Result[RegressionParams]:
        result = super().fit(design, config)
        warnings.warn(self.WARNING, RuntimeWarning, stacklevel=2)
        return replace(
            result,
            info={**result.info, 'weighting': 'identity'},
            backend_name=self.name,
            warnings=result.warnings + (self.WARNING,),
        )
