"""
Core protocols for pyeconometrics.

These define structural interfaces that estimators must satisfy. We use
Protocol (structural typing) rather than ABC (nominal typing) so that a
new estimator only has to provide the right methods to be dispatchable.

Design Principles:
    - Minimal contracts: prescribe only what's truly universal
    - Type-safe: generics preserve the payload type through the pipeline
"""

from typing import Protocol, TypeVar, runtime_checkable, TYPE_CHECKING

if TYPE_CHECKING:
    from pyeconometrics.core.result import Result

D = TypeVar('D', contravariant=True)  # Design type
C = TypeVar('C', contravariant=True)  # Configuration type
P = TypeVar('P', covariant=True)      # Parameter payload type


@runtime_checkable
class Estimator(Protocol[D, C, P]):
    """
    Protocol for estimation strategies.

    Each estimator takes a design (regressors + response) and the
    configuration that produced it, and returns a Result envelope around
    its parameter payload.

    Estimators are stateless: all configuration arrives via the config
    argument. This makes them easy to test in isolation and to swap.

    Type Parameters:
        D: The design type this estimator accepts
        C: The configuration type
        P: The parameter payload type this estimator produces
    """

    @property
    def name(self) -> str:
        """
        Estimator identifier.

        Examples: 'ols', 'gls_passthrough', 'tsls', 'logit_newton'
        """
        ...

    def fit(self, design: D, config: C) -> 'Result[P]':
        """
        Run the estimation.

        Raises:
            SingularMatrixError: If a required inverse does not exist
            ValidationError: If design/config are invalid for this estimator
        """
        ...
