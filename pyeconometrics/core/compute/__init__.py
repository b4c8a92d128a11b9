"""
Shared compute infrastructure for pyeconometrics.

This module provides the matrix kernel, reference distributions, timing
utilities and numerical tolerances shared by all estimators.

IMPORTANT: This is NOT where estimators live. Those go in
regression/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    linalg: Dense matrix kernel (multiply, transpose, Gauss-Jordan inverse)
    distributions: Normal (erf approximation), t, F and chi-squared tails
    timing: Execution timing utilities
    tolerances: Pivot and convergence thresholds
"""

from pyeconometrics.core.compute.timing import Timer
from pyeconometrics.core.compute.linalg import multiply, transpose, inverse

__all__ = [
    # Timing
    "Timer",
    # Matrix kernel
    "multiply",
    "transpose",
    "inverse",
]
