"""Profit and loss at expiration."""

from dataclasses import dataclass

import numpy as np

from .order_valuator import MAX_UNDERLYING
from ..models.order import OrderDirection, OrderValuation
from ..models.quote import ContractSide
from ..utils.error_handling import InvalidInputError, require_non_negative, require_positive

CURVE_POINTS = 101
CURVE_RANGE = 0.30


def payoff_at_expiry(
    underlying: float,
    strike: float,
    premium: float,
    side: ContractSide,
    direction: OrderDirection = "BUY",
    quantity: int = 1,
) -> float:
    """P&L of a position held to expiry with the underlying at `underlying`.

    Buyer: intrinsic * quantity - premium * quantity. Seller: the negative.

    Example:
        >>> payoff_at_expiry(70, strike=50, premium=3, side="CALL")
        17.0
    """
    underlying = require_non_negative("underlying", underlying)
    strike = require_positive("strike", strike)
    if direction not in ("BUY", "SELL"):
        raise InvalidInputError(f"Invalid order direction: {direction}")

    intrinsic = float(_intrinsic(np.asarray(underlying), strike, side))
    pnl = (intrinsic - premium) * quantity
    return pnl if direction == "BUY" else -pnl


@dataclass(frozen=True)
class PayoffCurve:
    """Sampled expiry P&L over a range of underlying prices."""

    prices: np.ndarray
    pnl: np.ndarray
    breakeven: float

    @property
    def max_pnl(self) -> float:
        return float(self.pnl.max())

    @property
    def min_pnl(self) -> float:
        return float(self.pnl.min())


def payoff_curve(
    spot: float,
    strike: float,
    valuation: OrderValuation,
    points: int = CURVE_POINTS,
) -> PayoffCurve:
    """Sample expiry P&L for a valued order around spot.

    Prices span [max(0, spot * 0.7), min(100, spot * 1.3)] in `points`
    evenly spaced steps.
    """
    spot = require_positive("spot", spot)
    if points < 2:
        raise InvalidInputError(f"points must be >= 2, got {points}")

    low = max(0.0, spot * (1 - CURVE_RANGE))
    high = min(MAX_UNDERLYING, spot * (1 + CURVE_RANGE))
    prices = np.linspace(low, high, points)

    intrinsic = _intrinsic(prices, strike, valuation.side)
    pnl = (intrinsic - valuation.premium) * valuation.quantity
    if not valuation.is_buying:
        pnl = -pnl

    return PayoffCurve(prices=prices, pnl=pnl, breakeven=valuation.breakeven)


def _intrinsic(prices: np.ndarray, strike: float, side: ContractSide) -> np.ndarray:
    if side == "CALL":
        return np.maximum(prices - strike, 0.0)
    if side == "PUT":
        return np.maximum(strike - prices, 0.0)
    raise InvalidInputError(f"Invalid contract side: {side}")
