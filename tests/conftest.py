"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


def to_rows(**columns):
    """Turn equal-length columns into a list of row dicts."""
    names = list(columns)
    n = len(columns[names[0]])
    return [{name: float(columns[name][i]) for name in names} for i in range(n)]


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def make_rows():
    """The to_rows helper, for tests that build their own datasets."""
    return to_rows


@pytest.fixture
def exact_line_rows():
    """y = 2x exactly, four observations."""
    return [{'x': 1.0, 'y': 2.0}, {'x': 2.0, 'y': 4.0}, {'x': 3.0, 'y': 6.0}, {'x': 4.0, 'y': 8.0}]


@pytest.fixture
def regression_rows(rng):
    """y = 1 + 2·x1 - 0.5·x2 + N(0, 0.1²), n = 200."""
    n = 200
    x1 = rng.standard_normal(n)
    x2 = rng.standard_normal(n)
    y = 1.0 + 2.0 * x1 - 0.5 * x2 + rng.standard_normal(n) * 0.1
    return to_rows(x1=x1, x2=x2, y=y)


@pytest.fixture
def collinear_rows(rng):
    """x2 = 2·x1 exactly (should fail)."""
    n = 50
    x1 = rng.standard_normal(n)
    y = x1 + rng.standard_normal(n)
    return to_rows(x1=x1, x2=2.0 * x1, y=y)


@pytest.fixture
def logit_rows(rng):
    """Bernoulli response with P(y=1) = logistic(-0.5 + 1.5·x), n = 500."""
    n = 500
    x = rng.standard_normal(n)
    p = 1.0 / (1.0 + np.exp(-(-0.5 + 1.5 * x)))
    y = (rng.uniform(size=n) < p).astype(float)
    return to_rows(x=x, y=y)


@pytest.fixture
def iv_rows(rng):
    """
    Endogenous regressor x correlated with the error u; instrument z
    drives x but not y. True structural slope 2, intercept 1.
    """
    n = 1000
    z = rng.standard_normal(n)
    u = rng.standard_normal(n)
    x = 0.8 * z + 0.5 * u + rng.standard_normal(n) * 0.3
    y = 1.0 + 2.0 * x + u
    return to_rows(x=x, z=z, y=y)


@pytest.fixture
def var_rows(rng):
    """
    Bivariate VAR(1):
        a_t = 0.5 + 0.6·a_{t-1} + 0.1·b_{t-1} + e
        b_t = -0.2 + 0.2·a_{t-1} + 0.3·b_{t-1} + e
    """
    n = 400
    a = np.zeros(n)
    b = np.zeros(n)
    for t in range(1, n):
        a[t] = 0.5 + 0.6 * a[t - 1] + 0.1 * b[t - 1] + rng.standard_normal() * 0.1
        b[t] = -0.2 + 0.2 * a[t - 1] + 0.3 * b[t - 1] + rng.standard_normal() * 0.1
    return to_rows(a=a, b=b)
