"""
Link functions for binary-choice models.

Each Link defines:
- g(μ) → η  (link)
- g⁻¹(η) → μ  (inverse link)
- dμ/dη  (derivative of inverse link, for the score and information)

Logit and Probit share one Newton-Raphson estimator and differ only in
the link. Identity is the link of every linear estimator and is used to
map linear predictions back to the response scale.

References:
    McCullagh, P., & Nelder, J. A. (1989). Generalized Linear Models (2nd ed.)
    Greene, W. H. (2018). Econometric Analysis (8th ed.), ch. 17
"""

from __future__ import annotations

from abc import ABC, abstractmethod
import numpy as np
from numpy.typing import NDArray
from scipy import stats as sp_stats

from pyeconometrics.core.compute.tolerances import PROBABILITY_EPS


class Link(ABC):
    """Abstract link function g(μ) mapping mean to linear predictor."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def link(self, mu: NDArray) -> NDArray:
        """g(μ) → η."""
        ...

    @abstractmethod
    def linkinv(self, eta: NDArray) -> NDArray:
        """g⁻¹(η) → μ."""
        ...

    @abstractmethod
    def mu_eta(self, eta: NDArray) -> NDArray:
        """dμ/dη = (g⁻¹)'(η)."""
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class IdentityLink(Link):
    """Identity link: g(μ) = μ."""

    @property
    def name(self) -> str:
        return 'identity'

    def link(self, mu: NDArray) -> NDArray:
        return np.array(mu, dtype=np.float64)

    def linkinv(self, eta: NDArray) -> NDArray:
        return np.array(eta, dtype=np.float64)

    def mu_eta(self, eta: NDArray) -> NDArray:
        return np.ones_like(np.asarray(eta, dtype=np.float64))


class LogitLink(Link):
    """Logit link: g(μ) = log(μ/(1-μ))."""

    @property
    def name(self) -> str:
        return 'logit'

    def link(self, mu: NDArray) -> NDArray:
        mu = np.clip(mu, PROBABILITY_EPS, 1 - PROBABILITY_EPS)
        return np.log(mu / (1 - mu))

    def linkinv(self, eta: NDArray) -> NDArray:
        # Clip to prevent overflow in exp
        eta = np.clip(eta, -500, 500)
        return 1.0 / (1.0 + np.exp(-eta))

    def mu_eta(self, eta: NDArray) -> NDArray:
        p = self.linkinv(eta)
        return np.maximum(p * (1.0 - p), PROBABILITY_EPS)


class ProbitLink(Link):
    """Probit link: g(μ) = Φ⁻¹(μ)."""

    @property
    def name(self) -> str:
        return 'probit'

    def link(self, mu: NDArray) -> NDArray:
        mu = np.clip(mu, PROBABILITY_EPS, 1 - PROBABILITY_EPS)
        return sp_stats.norm.ppf(mu)

    def linkinv(self, eta: NDArray) -> NDArray:
        return sp_stats.norm.cdf(eta)

    def mu_eta(self, eta: NDArray) -> NDArray:
        return np.maximum(sp_stats.norm.pdf(eta), PROBABILITY_EPS)


_LINK_CLASSES: dict[str, type[Link]] = {
    'identity': IdentityLink,
    'logit': LogitLink,
    'probit': ProbitLink,
}


def resolve_link(link: str | Link) -> Link:
    """Resolve a link argument to a Link instance."""
    if isinstance(link, Link):
        return link
    if isinstance(link, str):
        cls = _LINK_CLASSES.get(link.lower())
        if cls is None:
            valid = ', '.join(sorted(_LINK_CLASSES))
            raise ValueError(f"Unknown link: {link!r}. Valid links: {valid}")
        return cls()
    raise TypeError(f"link must be str or Link, got {type(link).__name__}")


def bernoulli_log_likelihood(y: NDArray, mu: NDArray) -> float:
    """Σ y log μ + (1-y) log(1-μ), with μ clipped away from 0 and 1."""
    mu = np.clip(mu, PROBABILITY_EPS, 1 - PROBABILITY_EPS)
    return float(np.sum(y * np.log(mu) + (1.0 - y) * np.log(1.0 - mu)))
