"""
Exception hierarchy for pyeconometrics.

All exceptions inherit from PyEconometricsError to allow catching any
library-specific error. Each failure mode of the engine has its own class
so callers can tell a missing variable from a singular design without
parsing messages.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""

from __future__ import annotations


class PyEconometricsError(Exception):
    """Base exception for all pyeconometrics errors."""
    pass


class ValidationError(PyEconometricsError):
    """
    Input validation failed.

    Raised when user-provided inputs or configuration fail validation checks.
    """
    pass


class EmptyDatasetError(ValidationError):
    """No observation rows were supplied."""

    def __init__(self, message: str = "Dataset contains no observations"):
        super().__init__(message)


class MissingVariableError(ValidationError):
    """
    A configured variable is absent from the data.

    Attributes:
        variable: Name of the variable that could not be found
        available: Variable names that were present, if known
    """

    def __init__(
        self,
        variable: str,
        available: tuple[str, ...] | None = None,
        message: str | None = None,
    ):
        if message is None:
            message = f"Variable '{variable}' is not present in the data"
            if available:
                message += f". Available: {sorted(available)}"
        super().__init__(message)
        self.variable = variable
        self.available = available


class NoIndependentVariablesError(ValidationError):
    """The configuration names no independent variables."""

    def __init__(self, message: str = "At least one independent variable is required"):
        super().__init__(message)


class MissingInstrumentsError(ValidationError):
    """Two-stage least squares was requested without instruments."""

    def __init__(self, message: str = "2SLS requires at least one instrument variable"):
        super().__init__(message)


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Inside the matrix kernel this signals a programming defect rather than
    bad user input: estimators always build conformable operands.

    Attributes:
        expected: Expected shape or length, if known
        actual: Actual shape or length, if known
    """

    def __init__(self, message: str, expected=None, actual=None):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class LengthMismatchError(DimensionError):
    """Forecast and actual vectors have different lengths."""
    pass


class NumericalError(PyEconometricsError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when a matrix must be inverted but a Gauss-Jordan pivot falls
    below tolerance. Typical causes: perfectly collinear regressors, fewer
    effective observations than parameters, or a degenerate information
    matrix in maximum likelihood estimation.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot_index: Column at which elimination broke down
        pivot_value: Largest absolute candidate pivot in that column
        tolerance: Threshold the pivot failed to clear
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        pivot_index: int | None = None,
        pivot_value: float | None = None,
        tolerance: float | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.pivot_index = pivot_index
        self.pivot_value = pivot_value
        self.tolerance = tolerance


class ConvergenceError(PyEconometricsError):
    """
    Iterative algorithm failed to converge.

    Attributes:
        iterations: Number of iterations completed
        final_change: Final parameter change
        reason: Why convergence failed (e.g., 'max_iterations', 'diverging')
        threshold: The convergence threshold that was not met
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        final_change: float | None = None,
        reason: str | None = None,
        threshold: float | None = None,
    ):
        super().__init__(message)
        self.iterations = iterations
        self.final_change = final_change
        self.reason = reason
        self.threshold = threshold


class EquationError(PyEconometricsError):
    """
    One equation of a multi-equation system failed to estimate.

    The original error is available both as ``cause`` and as
    ``__cause__`` (the error is raised ``from`` it).

    Attributes:
        equation: Name of the dependent variable of the failing equation
        cause: The underlying pyeconometrics error
    """

    def __init__(self, equation: str, cause: PyEconometricsError):
        super().__init__(
            f"Equation for '{equation}' failed: {type(cause).__name__}: {cause}"
        )
        self.equation = equation
        self.cause = cause
