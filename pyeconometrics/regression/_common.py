"""
Common types for regression.

Defines the estimator kinds, significance tiers, and the two immutable
configuration objects: RegressionConfig (one per estimation request) and
PredictionConfig (one per prediction request).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pyeconometrics.core.exceptions import ValidationError
from pyeconometrics.core.validation import check_confidence_level
from pyeconometrics.core.compute.tolerances import MLE_MAX_ITER, MLE_TOLERANCE


INTERCEPT_NAME = "(Intercept)"


class EstimatorKind(str, Enum):
    """Estimation strategy selected by RegressionConfig.kind."""
    OLS = "ols"
    GLS = "gls"
    TSLS = "2sls"
    LOGIT = "logit"
    PROBIT = "probit"
    VAR = "var"

    @classmethod
    def parse(cls, value: EstimatorKind | str) -> EstimatorKind:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for kind in cls:
                if kind.value == key or kind.name.lower() == key:
                    return kind
        valid = ', '.join(k.value for k in cls)
        raise ValidationError(f"Unknown estimator kind: {value!r}. Valid kinds: {valid}")

    @property
    def is_binary(self) -> bool:
        return self in (EstimatorKind.LOGIT, EstimatorKind.PROBIT)

    @property
    def is_linear(self) -> bool:
        return self in (EstimatorKind.OLS, EstimatorKind.GLS, EstimatorKind.TSLS)


class Significance(str, Enum):
    """Significance tier of a coefficient p-value."""
    HIGHLY_SIGNIFICANT = "highly_significant"          # p < 0.01
    SIGNIFICANT = "significant"                        # p < 0.05
    MARGINALLY_SIGNIFICANT = "marginally_significant"  # p < 0.10
    NOT_SIGNIFICANT = "not_significant"

    @property
    def stars(self) -> str:
        return {
            Significance.HIGHLY_SIGNIFICANT: "***",
            Significance.SIGNIFICANT: "**",
            Significance.MARGINALLY_SIGNIFICANT: "*",
            Significance.NOT_SIGNIFICANT: "",
        }[self]


@dataclass(frozen=True)
class RegressionConfig:
    """
    Model specification for a single estimation request.

    Attributes
    ----------
    kind : EstimatorKind or str
        'ols', 'gls', '2sls', 'logit', 'probit' or 'var'.
    dependent : str
        Response variable. For VAR, the first endogenous variable.
    independent : tuple of str
        Regressors, in design-matrix column order. For VAR, the remaining
        endogenous variables.
    intercept : bool
        Prepend a constant column. Default True.
    instruments : tuple of str
        Instrument variables for 2SLS. Instruments that also appear in
        ``independent`` are treated as exogenous regressors; the rest are
        excluded instruments. Regressors not listed here are endogenous.
    lag_order : int or None
        VAR lag order p. Defaults to 1 when None.
    confidence_level : float
        Level for coefficient intervals, in (0, 1). Default 0.95.
    robust_standard_errors : bool
        Use HC1 heteroskedasticity-consistent covariance.
    cluster_variable : str or None
        Use cluster-robust (CR1) covariance grouped by this variable.
        Takes precedence over ``robust_standard_errors``.
    exact_inference : bool
        Use Student-t p-values and critical values (scipy) instead of the
        standard normal approximation. Default False.
    max_iter, tol : int, float
        Newton-Raphson iteration cap and convergence threshold for
        Logit/Probit.
    """
    kind: EstimatorKind | str
    dependent: str
    independent: tuple[str, ...] = ()
    intercept: bool = True
    instruments: tuple[str, ...] = ()
    lag_order: int | None = None
    confidence_level: float = 0.95
    robust_standard_errors: bool = False
    cluster_variable: str | None = None
    exact_inference: bool = False
    max_iter: int = MLE_MAX_ITER
    tol: float = MLE_TOLERANCE

    def __post_init__(self) -> None:
        # Frozen: normalize through object.__setattr__
        object.__setattr__(self, 'kind', EstimatorKind.parse(self.kind))
        object.__setattr__(self, 'independent', _as_names(self.independent, 'independent'))
        object.__setattr__(self, 'instruments', _as_names(self.instruments, 'instruments'))

        if not isinstance(self.dependent, str) or not self.dependent:
            raise ValidationError("dependent: a variable name is required")
        check_confidence_level(self.confidence_level)
        if self.lag_order is not None and (
            not isinstance(self.lag_order, int) or self.lag_order < 1
        ):
            raise ValidationError(f"lag_order: must be a positive integer, got {self.lag_order!r}")
        if self.max_iter < 1:
            raise ValidationError(f"max_iter: must be >= 1, got {self.max_iter}")
        if self.tol <= 0:
            raise ValidationError(f"tol: must be positive, got {self.tol}")

    @property
    def lags(self) -> int:
        """Effective VAR lag order."""
        return self.lag_order if self.lag_order is not None else 1

    @property
    def uses_robust_covariance(self) -> bool:
        return self.robust_standard_errors or self.cluster_variable is not None

    def required_variables(self) -> tuple[str, ...]:
        """Every variable name this configuration reads, in first-use order."""
        names = [self.dependent, *self.independent]
        if self.kind is EstimatorKind.TSLS:
            names.extend(self.instruments)
        if self.cluster_variable is not None:
            names.append(self.cluster_variable)
        return tuple(dict.fromkeys(names))

    def describe(self) -> str:
        """Short model label, e.g. 'ols: y ~ x1 + x2'."""
        rhs = ' + '.join(self.independent) if self.independent else '1'
        if not self.intercept:
            rhs += ' - 1'
        label = f"{self.kind.value}: {self.dependent} ~ {rhs}"
        if self.kind is EstimatorKind.TSLS and self.instruments:
            label += f" | {' + '.join(self.instruments)}"
        if self.kind is EstimatorKind.VAR:
            label += f" (p={self.lags})"
        return label


@dataclass(frozen=True)
class PredictionConfig:
    """
    Options for predict().

    Attributes
    ----------
    include_confidence_interval : bool
        Report an interval for the expected response.
    include_prediction_interval : bool
        Report an interval for a new observation (adds residual variance).
    confidence_level : float
        Interval level, in (0, 1). Only 0.95 and 0.99 have tabulated
        critical values unless the model used exact inference; other
        levels fall back to the 95% value.
    """
    include_confidence_interval: bool = True
    include_prediction_interval: bool = True
    confidence_level: float = 0.95

    def __post_init__(self) -> None:
        check_confidence_level(self.confidence_level)


def _as_names(names, field_name: str) -> tuple[str, ...]:
    if names is None:
        return ()
    if isinstance(names, str):
        return (names,)
    names = tuple(names)
    for name in names:
        if not isinstance(name, str) or not name:
            raise ValidationError(f"{field_name}: variable names must be non-empty strings, got {name!r}")
    return names
