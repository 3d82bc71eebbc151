"""Black-Scholes valuation and Greeks for contracts on a probability.

The underlying is a market probability quoted in cents (0-100). Prices and
Greeks are returned at display precision: prices to the cent, delta, theta
and vega to 2 decimals, gamma to 3.
"""

import logging
import math
from dataclasses import dataclass

from . import normal
from ..models.quote import ContractSide
from ..utils.error_handling import InvalidInputError, require_non_negative, require_positive

logger = logging.getLogger("prediction_options.pricer")

RISK_FREE_RATE = 0.05
MIN_PRICE = 0.01
# Floor on time to expiry (years) so zero-DTE contracts still price
MIN_TIME_TO_EXPIRY = 0.001
DAYS_PER_YEAR = 365.0


@dataclass(frozen=True)
class Greeks:
    """Risk sensitivities for one contract.

    theta is per calendar day; vega is per 1 percentage point of IV.
    """

    delta: float
    gamma: float
    theta: float
    vega: float


class OptionPricer:
    """Black-Scholes pricer for European contracts.

    IV is passed in percent (55.0 = 55%), time as whole days to expiry.
    """

    @staticmethod
    def time_to_expiry(days_to_expiry: float) -> float:
        """Convert days to years, clamped to MIN_TIME_TO_EXPIRY.

        Raises:
            InvalidInputError: If days_to_expiry is negative
        """
        days = require_non_negative("days_to_expiry", days_to_expiry)
        years = days / DAYS_PER_YEAR
        if years < MIN_TIME_TO_EXPIRY:
            logger.debug("Clamping time to expiry %.5f to %.3f years", years, MIN_TIME_TO_EXPIRY)
            return MIN_TIME_TO_EXPIRY
        return years

    @staticmethod
    def d1_d2(
        spot: float,
        strike: float,
        days_to_expiry: float,
        iv_percent: float,
        rate: float = RISK_FREE_RATE,
    ) -> tuple[float, float]:
        """Calculate the d1 and d2 terms of the Black-Scholes formula."""
        spot = require_positive("spot", spot)
        strike = require_positive("strike", strike)
        sigma = require_positive("implied_vol", iv_percent) / 100.0
        t = OptionPricer.time_to_expiry(days_to_expiry)

        vol_sqrt_t = sigma * math.sqrt(t)
        d1 = (math.log(spot / strike) + (rate + 0.5 * sigma ** 2) * t) / vol_sqrt_t
        return d1, d1 - vol_sqrt_t

    @staticmethod
    def price(
        spot: float,
        strike: float,
        days_to_expiry: float,
        iv_percent: float,
        side: ContractSide,
        rate: float = RISK_FREE_RATE,
        round_result: bool = True,
    ) -> float:
        """Calculate the theoretical contract price.

        Args:
            spot: Underlying price in cents (> 0)
            strike: Strike in cents (> 0)
            days_to_expiry: Calendar days to expiry (>= 0, clamped internally)
            iv_percent: Implied volatility in percent (> 0)
            side: 'CALL' or 'PUT'
            rate: Annualized risk-free rate
            round_result: Round to the cent (display precision)

        Returns:
            Price floored at MIN_PRICE

        Raises:
            InvalidInputError: For non-positive spot/strike/IV, negative days
                or an unknown side

        Example:
            >>> price = OptionPricer.price(50, 50, 30, 55, "CALL")
            >>> # ~3.24 for a 30-day ATM call at 55% IV
        """
        _check_side(side)
        d1, d2 = OptionPricer.d1_d2(spot, strike, days_to_expiry, iv_percent, rate)
        t = OptionPricer.time_to_expiry(days_to_expiry)
        discounted_strike = strike * math.exp(-rate * t)

        if side == "CALL":
            value = spot * normal.cdf(d1) - discounted_strike * normal.cdf(d2)
        else:
            value = discounted_strike * normal.cdf(-d2) - spot * normal.cdf(-d1)

        value = max(value, MIN_PRICE)
        return round(value, 2) if round_result else value

    @staticmethod
    def greeks(
        spot: float,
        strike: float,
        days_to_expiry: float,
        iv_percent: float,
        side: ContractSide,
        rate: float = RISK_FREE_RATE,
        round_result: bool = True,
    ) -> Greeks:
        """Calculate delta, gamma, theta (per day) and vega (per vol point).

        Gamma and vega are identical for calls and puts.
        """
        _check_side(side)
        d1, d2 = OptionPricer.d1_d2(spot, strike, days_to_expiry, iv_percent, rate)
        t = OptionPricer.time_to_expiry(days_to_expiry)
        sigma = iv_percent / 100.0
        sqrt_t = math.sqrt(t)
        density = normal.pdf(d1)
        discounted_strike = strike * math.exp(-rate * t)

        call_delta = normal.cdf(d1)
        decay = -(spot * density * sigma) / (2 * sqrt_t)
        if side == "CALL":
            delta = call_delta
            theta = (decay - rate * discounted_strike * normal.cdf(d2)) / DAYS_PER_YEAR
        else:
            delta = call_delta - 1.0
            theta = (decay + rate * discounted_strike * normal.cdf(-d2)) / DAYS_PER_YEAR

        gamma = density / (spot * sigma * sqrt_t)
        vega = spot * sqrt_t * density / 100.0

        if not round_result:
            return Greeks(delta=delta, gamma=gamma, theta=theta, vega=vega)
        # Put delta is rounded through the call delta so call - put stays exactly 1
        rounded_call_delta = round(call_delta, 2)
        return Greeks(
            delta=rounded_call_delta if side == "CALL" else round(rounded_call_delta - 1.0, 2),
            gamma=round(gamma, 3),
            theta=round(theta, 2),
            vega=round(vega, 2),
        )


def _check_side(side: str) -> None:
    if side not in ("CALL", "PUT"):
        raise InvalidInputError(f"Invalid contract side: {side}")
