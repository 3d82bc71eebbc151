"""Implied volatility from a quoted premium.

Inverts the Black-Scholes price with Brent's method on the unrounded
model price, so the result is in percent like every other IV in the engine.
"""

import logging
import math

from scipy.optimize import brentq

from .pricer import RISK_FREE_RATE, OptionPricer
from ..models.quote import ContractSide
from ..utils.error_handling import InvalidInputError, require_positive

logger = logging.getLogger("prediction_options.implied_vol")

MIN_IV_PERCENT = 0.01
MAX_IV_PERCENT = 1000.0


def implied_volatility(
    price: float,
    spot: float,
    strike: float,
    days_to_expiry: float,
    side: ContractSide,
    rate: float = RISK_FREE_RATE,
    tol: float = 1e-8,
    max_iter: int = 200,
) -> float:
    """Solve for the IV (percent) that reproduces a premium.

    Args:
        price: Observed premium in cents
        spot: Underlying price in cents
        strike: Strike in cents
        days_to_expiry: Calendar days to expiry
        side: 'CALL' or 'PUT'
        rate: Annualized risk-free rate
        tol: Absolute tolerance on IV (percent)
        max_iter: Iteration cap for the root finder

    Returns:
        Implied volatility in percent

    Raises:
        InvalidInputError: If the premium lies outside the prices reachable
            between MIN_IV_PERCENT and MAX_IV_PERCENT

    Example:
        >>> p = OptionPricer.price(50, 55, 30, 60, "CALL", round_result=False)
        >>> implied_volatility(p, 50, 55, 30, "CALL")  # ~60.0
    """
    price = require_positive("price", price)

    def objective(iv_percent: float) -> float:
        return OptionPricer.price(
            spot, strike, days_to_expiry, iv_percent, side, rate, round_result=False
        ) - price

    low = objective(MIN_IV_PERCENT)
    high = objective(MAX_IV_PERCENT)
    if low > 0 or high < 0:
        t = OptionPricer.time_to_expiry(days_to_expiry)
        forward_intrinsic = (spot - strike * math.exp(-rate * t)) if side == "CALL" \
            else (strike * math.exp(-rate * t) - spot)
        raise InvalidInputError(
            f"Premium {price} outside model bounds for {side} K={strike} "
            f"(discounted intrinsic {max(forward_intrinsic, 0.0):.4f})"
        )

    iv = brentq(objective, MIN_IV_PERCENT, MAX_IV_PERCENT, xtol=tol, maxiter=max_iter)
    logger.debug("Implied vol for %s K=%s price=%s: %.4f%%", side, strike, price, iv)
    return iv
