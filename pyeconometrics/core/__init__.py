"""
Core infrastructure for pyeconometrics.

This module provides shared abstractions, utilities, and compute kernels
used by the domain packages (regression, forecasting).

Key components:
    protocols: Estimator protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    datasource: Immutable column store built from rows, arrays or pandas
    compute: Matrix kernel, distributions, timing, tolerances
"""

from pyeconometrics.core.protocols import Estimator
from pyeconometrics.core.result import Result
from pyeconometrics.core.datasource import DataSource
from pyeconometrics.core.exceptions import (
    PyEconometricsError,
    ValidationError,
    EmptyDatasetError,
    MissingVariableError,
    NoIndependentVariablesError,
    MissingInstrumentsError,
    DimensionError,
    LengthMismatchError,
    NumericalError,
    SingularMatrixError,
    ConvergenceError,
    EquationError,
)

__all__ = [
    # Protocols
    "Estimator",
    # Result
    "Result",
    # Data
    "DataSource",
    # Exceptions
    "PyEconometricsError",
    "ValidationError",
    "EmptyDatasetError",
    "MissingVariableError",
    "NoIndependentVariablesError",
    "MissingInstrumentsError",
    "DimensionError",
    "LengthMismatchError",
    "NumericalError",
    "SingularMatrixError",
    "ConvergenceError",
    "EquationError",
]
