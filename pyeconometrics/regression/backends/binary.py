"""
Binary-choice estimators: Logit and Probit via Newton-Raphson.

Maximizes the Bernoulli log-likelihood

    ℓ(β) = Σ y log μ + (1-y) log(1-μ),   μ = g⁻¹(Xβ)

with the scoring update

    w = (dμ/dη)² / (μ(1-μ))
    score = X' [(y - μ) · (dμ/dη) / (μ(1-μ))]
    I = X' diag(w) X
    β ← β + I⁻¹ score

For the logit link dμ/dη = μ(1-μ), so this is exactly Newton-Raphson;
for probit it is Fisher scoring. Iteration starts at β = 0 and stops
when max|Δβ| < tol or after max_iter updates, whichever comes first.
Hitting the cap is reported as a warning, not an error; a step that
leaves β non-finite raises ConvergenceError.

Covariance is the inverse information at the final β. On a perfectly
separated sample the slope grows without bound; the clipped
probabilities keep the information matrix invertible, so the fit stops
at the iteration cap with converged=False, a warning, and very large
standard errors.
"""

from __future__ import annotations

import warnings
import numpy as np
from numpy.typing import NDArray

from pyeconometrics.core.compute.linalg import inverse, multiply, transpose
from pyeconometrics.core.compute.timing import Timer
from pyeconometrics.core.compute.tolerances import PROBABILITY_EPS
from pyeconometrics.core.exceptions import ConvergenceError
from pyeconometrics.core.result import Result
from pyeconometrics.core.validation import check_binary, check_min_samples
from pyeconometrics.regression._common import RegressionConfig
from pyeconometrics.regression.backends.ols import cluster_covariance, robust_covariance
from pyeconometrics.regression.design import DesignMatrix
from pyeconometrics.regression.links import (
    Link,
    LogitLink,
    ProbitLink,
    bernoulli_log_likelihood,
)
from pyeconometrics.regression.solution import RegressionParams


class BinaryChoiceEstimator:
    """Newton-Raphson maximum likelihood for a Bernoulli response."""

    def __init__(self, link: Link):
        self._link = link

    @property
    def name(self) -> str:
        return f'{self._link.name}_newton'

    @property
    def link(self) -> Link:
        return self._link

    def fit(self, design: DesignMatrix, config: RegressionConfig) -> Result[RegressionParams]:
        """
        Maximize the likelihood.

        Raises:
            ValidationError: If y is not coded 0/1, or n <= p
            SingularMatrixError: If the information matrix is singular
            ConvergenceError: If an update produces non-finite coefficients
        """
        timer = Timer()
        timer.start()

        X, y = design.X, design.y
        n, p = design.n, design.p
        check_binary(y, config.dependent)
        check_min_samples(n, p, 'design')

        link = self._link
        warnings_list: list[str] = []

        beta = np.zeros(p, dtype=np.float64)
        converged = False
        max_change = float('inf')
        n_iter = 0

        with timer.section('newton_raphson'):
            for iteration in range(1, config.max_iter + 1):
                n_iter = iteration
                info_matrix, score = self._score_and_information(X, y, beta)
                step = multiply(
                    inverse(info_matrix, name='information matrix'),
                    score.reshape(-1, 1),
                ).ravel()
                beta = beta + step
                if not np.all(np.isfinite(beta)):
                    raise ConvergenceError(
                        f"Newton-Raphson diverged at iteration {iteration}: "
                        f"non-finite coefficients",
                        iterations=iteration,
                        reason='diverging',
                        threshold=config.tol,
                    )
                max_change = float(np.max(np.abs(step)))
                if max_change < config.tol:
                    converged = True
                    break

        if not converged:
            msg = (
                f"Newton-Raphson did not converge in {config.max_iter} iterations "
                f"(max |Δβ| = {max_change:.3e}, tol = {config.tol:.0e})"
            )
            warnings_list.append(msg)
            warnings.warn(msg, RuntimeWarning, stacklevel=2)

        with timer.section('covariance'):
            info_matrix, _ = self._score_and_information(X, y, beta)
            info_inv = inverse(info_matrix, name='information matrix')
            eta = X @ beta
            mu = link.linkinv(eta)
            residuals = y - mu
            covariance, cov_type = info_inv, 'inverse_information'
            if config.cluster_variable is not None and design.clusters is not None:
                covariance = cluster_covariance(X, self._generalized_residuals(y, eta), info_inv, design.clusters)
                cov_type = 'cr1'
            elif config.robust_standard_errors:
                covariance = robust_covariance(X, self._generalized_residuals(y, eta), info_inv)
                cov_type = 'hc1'

        with timer.section('likelihood'):
            ll = bernoulli_log_likelihood(y, mu)
            mu_null = np.full(n, np.mean(y) if design.has_intercept else 0.5)
            ll_null = bernoulli_log_likelihood(y, mu_null)

        timer.stop()

        params = RegressionParams(
            coefficients=beta,
            covariance=covariance,
            residuals=residuals,
            fitted_values=mu,
            rss=float(residuals @ residuals),
            tss=float(np.sum((y - np.mean(y)) ** 2)),
            df_residual=n - p,
            covariance_type=cov_type,
            log_likelihood=ll,
            null_log_likelihood=ll_null,
            linear_predictor=eta,
            n_iter=n_iter,
            converged=converged,
        )

        return Result(
            params=params,
            info={
                'method': 'newton_raphson',
                'link': link.name,
                'iterations': n_iter,
                'converged': converged,
                'final_change': max_change,
                'covariance_type': cov_type,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )

    def _score_and_information(
        self, X: NDArray, y: NDArray, beta: NDArray,
    ) -> tuple[NDArray, NDArray]:
        eta = X @ beta
        mu = np.clip(self._link.linkinv(eta), PROBABILITY_EPS, 1 - PROBABILITY_EPS)
        d = self._link.mu_eta(eta)
        var = mu * (1.0 - mu)
        w = d ** 2 / var
        score = transpose(X) @ ((y - mu) * d / var)
        info_matrix = multiply(transpose(X * w[:, np.newaxis]), X)
        return info_matrix, score

    def _generalized_residuals(self, y: NDArray, eta: NDArray) -> NDArray:
        """Per-observation score contributions (y - μ)·(dμ/dη)/(μ(1-μ))."""
        mu = np.clip(self._link.linkinv(eta), PROBABILITY_EPS, 1 - PROBABILITY_EPS)
        return (y - mu) * self._link.mu_eta(eta) / (mu * (1.0 - mu))


class LogitEstimator(BinaryChoiceEstimator):
    def __init__(self) -> None:
        super().__init__(LogitLink())


class ProbitEstimator(BinaryChoiceEstimator):
    def __init__(self) -> None:
        super().__init__(ProbitLink())
