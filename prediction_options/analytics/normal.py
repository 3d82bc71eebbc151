"""Standard normal distribution functions used by the pricer.

The CDF uses the Abramowitz-Stegun 26.2.17 polynomial approximation
(absolute error below 7.5e-8), evaluated on |x| and reflected so that
cdf(-x) == 1 - cdf(x) holds by construction. The density is
scipy.stats.norm.pdf.
"""

import math

from scipy.stats import norm

# Abramowitz & Stegun 26.2.17 coefficients
_P = 0.2316419
_B1 = 0.319381530
_B2 = -0.356563782
_B3 = 1.781477937
_B4 = -1.821255978
_B5 = 1.330274429


def pdf(x: float) -> float:
    """Standard normal probability density function."""
    return float(norm.pdf(x))


def cdf(x: float) -> float:
    """Standard normal cumulative distribution function.

    Args:
        x: Point at which to evaluate. +/-inf are accepted.

    Returns:
        P(Z <= x) in [0, 1]

    Raises:
        ValueError: If x is NaN
    """
    if math.isnan(x):
        raise ValueError("cdf is undefined for NaN")
    if x == 0.0:
        return 0.5

    tail = _upper_tail(abs(x))
    return 1.0 - tail if x > 0 else tail


def _upper_tail(z: float) -> float:
    """P(Z > z) for z >= 0."""
    if math.isinf(z):
        return 0.0
    t = 1.0 / (1.0 + _P * z)
    poly = t * (_B1 + t * (_B2 + t * (_B3 + t * (_B4 + t * _B5))))
    return pdf(z) * poly
