"""
Every estimator satisfies the Estimator protocol.
"""

import pytest

from pyeconometrics.core.protocols import Estimator
from pyeconometrics.regression.backends import (
    GLSPassthroughEstimator,
    LogitEstimator,
    OLSEstimator,
    ProbitEstimator,
    TwoStageLeastSquaresEstimator,
    VAREstimator,
)


@pytest.mark.parametrize("cls, name", [
    (OLSEstimator, 'ols'),
    (GLSPassthroughEstimator, 'gls_passthrough'),
    (TwoStageLeastSquaresEstimator, 'tsls'),
    (LogitEstimator, 'logit_newton'),
    (ProbitEstimator, 'probit_newton'),
    (VAREstimator, 'var_ols'),
])
def test_estimator_protocol(cls, name):
    estimator = cls()
    assert isinstance(estimator, Estimator)
    assert estimator.name == name


def test_non_estimator_rejected():
    assert not isinstance(object(), Estimator)
