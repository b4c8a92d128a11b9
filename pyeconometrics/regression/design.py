"""
Regression Design.

DesignMatrix wraps a DataSource and extracts X (design matrix) and y
(response) for one model specification. It knows it's building a
regression; DataSource doesn't.

Input checks run in a fixed order so the same bad input always produces
the same error:

    1. empty dataset            -> EmptyDatasetError
    2. no independent variables -> NoIndependentVariablesError
    3. unknown variable name    -> MissingVariableError
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pyeconometrics.core.datasource import DataSource
from pyeconometrics.core.exceptions import (
    EmptyDatasetError,
    MissingInstrumentsError,
    NoIndependentVariablesError,
)
from pyeconometrics.core.validation import (
    check_1d,
    check_2d,
    check_consistent_length,
    check_finite,
    check_nonempty,
    check_variables_present,
)
from pyeconometrics.regression._common import (
    EstimatorKind,
    INTERCEPT_NAME,
    RegressionConfig,
)


def load_source(data: Any, config: RegressionConfig) -> DataSource:
    """
    Validate raw input against a configuration and return a DataSource.

    Args:
        data: Sequence of row mappings, DataSource, pandas DataFrame or
            path to a CSV/TSV file
        config: The model specification

    Raises:
        EmptyDatasetError: If data has no observations
        NoIndependentVariablesError: If config lists no regressors
        MissingInstrumentsError: If a 2SLS config lists no instruments
        MissingVariableError: If a named variable is absent from the data
    """
    if isinstance(data, DataSource):
        if data.n_observations == 0:
            raise EmptyDatasetError()
        _check_config(config)
        check_variables_present(dict.fromkeys(data.keys()), config.required_variables())
        return data

    if isinstance(data, Sequence) and not isinstance(data, str):
        check_nonempty(data)
        _check_config(config)
        check_variables_present(data[0], config.required_variables())
        return DataSource.from_rows(data, columns=config.required_variables())

    source = DataSource.build(data)
    _check_config(config)
    check_variables_present(dict.fromkeys(source.keys()), config.required_variables())
    return source


def _check_config(config: RegressionConfig) -> None:
    if not config.independent:
        raise NoIndependentVariablesError()
    if config.kind is EstimatorKind.TSLS and not config.instruments:
        raise MissingInstrumentsError()


@dataclass(frozen=True)
class DesignMatrix:
    """
    Regression design matrix.

    Immutable after construction. Column order is the intercept (when
    requested, named '(Intercept)') followed by the regressors in
    configuration order.

    Construction:
        DesignMatrix.from_datasource(ds, config)
        DesignMatrix.from_arrays(X, y, column_names)
    """
    _X: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _column_names: tuple[str, ...]
    _intercept: bool
    _source: DataSource | None = None
    _clusters: NDArray[np.floating[Any]] | None = None

    @classmethod
    def from_datasource(cls, source: DataSource, config: RegressionConfig) -> DesignMatrix:
        """
        Build the design for a configuration from a validated DataSource.

        Rows whose dependent or regressor values are not finite are
        rejected rather than dropped.
        """
        y = np.asarray(source[config.dependent], dtype=np.float64)
        X = _get_columns(source, config.independent)
        names = list(config.independent)
        if config.intercept:
            X = np.hstack([np.ones((X.shape[0], 1)), X])
            names.insert(0, INTERCEPT_NAME)

        clusters = None
        if config.cluster_variable is not None:
            clusters = np.asarray(source[config.cluster_variable], dtype=np.float64)

        return cls._build(X, y, tuple(names), config.intercept, source, clusters)

    @classmethod
    def from_arrays(
        cls,
        X: NDArray,
        y: NDArray,
        column_names: Sequence[str] | None = None,
        *,
        intercept: bool = False,
    ) -> DesignMatrix:
        """
        Build a design directly from arrays.

        X is used as given; when ``intercept`` is True its first column is
        taken to be the constant.
        """
        X = np.asarray(X, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        if X.ndim == 1:
            X = X.reshape(-1, 1)
        if column_names is None:
            column_names = [f"x{j}" for j in range(X.shape[1])]
            if intercept:
                column_names[0] = INTERCEPT_NAME
        return cls._build(X, y, tuple(column_names), intercept, None, None)

    @classmethod
    def _build(
        cls,
        X: NDArray,
        y: NDArray,
        names: tuple[str, ...],
        intercept: bool,
        source: DataSource | None,
        clusters: NDArray | None,
    ) -> DesignMatrix:
        """Internal builder with validation."""
        if y.ndim == 2 and y.shape[1] == 1:
            y = y.ravel()

        check_2d(X, 'X')
        check_1d(y, 'y')
        check_finite(X, 'X')
        check_finite(y, 'y')
        check_consistent_length(X, y, names=('X', 'y'))
        if len(names) != X.shape[1]:
            raise ValueError(
                f"column_names has {len(names)} entries, X has {X.shape[1]} columns"
            )

        return cls(
            _X=X,
            _y=y,
            _column_names=names,
            _intercept=intercept,
            _source=source,
            _clusters=clusters,
        )

    # === Properties ===

    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Design matrix (n x p)."""
        return self._X

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Response vector (n,)."""
        return self._y

    @property
    def n(self) -> int:
        """Number of observations."""
        return self._X.shape[0]

    @property
    def p(self) -> int:
        """Number of columns, intercept included."""
        return self._X.shape[1]

    @property
    def column_names(self) -> tuple[str, ...]:
        return self._column_names

    @property
    def has_intercept(self) -> bool:
        return self._intercept

    @property
    def source(self) -> DataSource | None:
        """Original DataSource, if available."""
        return self._source

    @property
    def clusters(self) -> NDArray[np.floating[Any]] | None:
        """Cluster labels, when a cluster variable was configured."""
        return self._clusters

    def column(self, name: str) -> NDArray[np.floating[Any]]:
        """Return the design column with the given name."""
        return self._X[:, self._column_names.index(name)]


def _get_columns(source: DataSource, names: Sequence[str]) -> NDArray:
    """Stack multiple columns from DataSource into a matrix."""
    arrays = [np.asarray(source[name], dtype=np.float64).reshape(-1, 1) for name in names]
    return np.hstack(arrays)
