"""
Numerical tolerances shared across the engine.

Algorithmic thresholds used by the kernel and the iterative
estimators: pivot tolerance, Newton-Raphson convergence and iteration
cap, probability clipping.
"""

# Gauss-Jordan: a pivot whose absolute value falls below this after
# partial pivoting means the matrix is treated as singular.
PIVOT_TOLERANCE = 1e-10

# Newton-Raphson for Logit/Probit: stop when max |Δβ| < tol.
MLE_TOLERANCE = 1e-8

# Newton-Raphson iteration cap; estimation never loops past this.
MLE_MAX_ITER = 25

# Fitted probabilities are clipped to [eps, 1 - eps] inside log-likelihoods.
PROBABILITY_EPS = 1e-10

