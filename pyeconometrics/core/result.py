"""
Generic result container for all pyeconometrics computations.

Every estimator returns a Result envelope around its own parameter
payload. This keeps timing, warnings and method metadata uniform across
OLS, 2SLS, Logit/Probit and VAR while letting each define its own payload.

Design decisions:
    - Generic over parameter payload P
    - info dict for flexible metadata (converged, iterations, method)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) so a fit is reproducible from its record
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for an estimation call.

    Attributes:
        params: Estimator-specific payload (coefficients, residuals, ...)
        info: Structured metadata (method, convergence, iterations)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the estimator that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=RegressionParams(...),
        ...     info={'method': 'normal_equations'},
        ...     timing={'total_seconds': 0.01},
        ...     backend_name='ols',
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
