"""Order selection and valuation data models."""

from dataclasses import dataclass
from typing import Literal

from .expiration import Expiration
from .quote import ContractSide

OrderDirection = Literal["BUY", "SELL"]


@dataclass(frozen=True)
class SelectedContract:
    """A (strike, expiration, side) triple chosen by the consumer."""

    strike: float
    expiration: Expiration
    side: ContractSide


@dataclass(frozen=True)
class OrderValuation:
    """Risk/reward summary for an order, all values in cents.

    Derived from (contract, quantity, direction); never reused across a
    different tuple.
    """

    premium: float
    total_premium: float
    max_profit: float
    max_loss: float
    breakeven: float
    is_buying: bool
    quantity: int
    side: ContractSide
    fee: float = 0.0

    @property
    def direction(self) -> OrderDirection:
        return "BUY" if self.is_buying else "SELL"

    @property
    def total_cost(self) -> float:
        """Cash out for a buyer (premium plus fee), cash in for a seller (premium minus fee)."""
        if self.is_buying:
            return round(self.total_premium + self.fee, 2)
        return round(self.total_premium - self.fee, 2)

    @property
    def reward_to_risk(self) -> float:
        """Max profit per unit of max loss, or infinity when max loss is zero."""
        if self.max_loss <= 0:
            return float('inf')
        return self.max_profit / self.max_loss

    def __repr__(self) -> str:
        return (f"OrderValuation({self.direction} {self.quantity}x {self.side} "
                f"prem={self.premium:.2f} total={self.total_premium:.2f} "
                f"maxP={self.max_profit:.2f} maxL={self.max_loss:.2f} BE={self.breakeven:.2f})")
