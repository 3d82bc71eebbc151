"""Order-level risk/reward for a selected contract.

Because the underlying is a probability bounded in [0, 100] cents, both
sides of every trade have a finite ceiling: a call can never pay more than
100 - strike, a put never more than strike.
"""

import logging
from typing import Any, Dict

from ..models.chain import ChainCell
from ..models.order import OrderDirection, OrderValuation
from ..models.quote import ContractSide
from ..utils.error_handling import (
    ConfigurationError,
    InvalidInputError,
    NoSelectionError,
    UnavailableContractError,
)

logger = logging.getLogger("prediction_options.order")

MAX_UNDERLYING = 100.0


class OrderConfig:
    """Configuration for order valuation."""

    def __init__(
        self,
        fee_bps: float = 5.0,
        min_quantity: int = 1,
        max_quantity: int = 1000,
    ):
        """Initialize order configuration.

        Args:
            fee_bps: Trading fee in basis points of total premium (5 = 0.05%)
            min_quantity: Smallest quantity clamp_quantity returns
            max_quantity: Largest quantity clamp_quantity returns
        """
        if fee_bps < 0:
            raise ConfigurationError(f"fee_bps must be non-negative, got {fee_bps}")
        if min_quantity < 1 or max_quantity < min_quantity:
            raise ConfigurationError(
                f"Quantity bounds [{min_quantity}, {max_quantity}] are invalid"
            )
        self.fee_bps = fee_bps
        self.min_quantity = min_quantity
        self.max_quantity = max_quantity

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "OrderConfig":
        """Create OrderConfig from dictionary (e.g., from YAML)."""
        return cls(
            fee_bps=config.get('fee_bps', 5.0),
            min_quantity=config.get('min_quantity', 1),
            max_quantity=config.get('max_quantity', 1000),
        )


def clamp_quantity(quantity: int, config: OrderConfig | None = None) -> int:
    """Bound a user-entered quantity to [min_quantity, max_quantity]."""
    config = config or OrderConfig()
    return max(config.min_quantity, min(config.max_quantity, int(quantity)))


def evaluate_order(
    cell: ChainCell | None,
    side: ContractSide,
    direction: OrderDirection,
    quantity: int,
    config: OrderConfig | None = None,
) -> OrderValuation:
    """Value an order against a chain row.

    Args:
        cell: Selected chain row (None means nothing is selected)
        side: 'CALL' or 'PUT'
        direction: 'BUY' (pay the ask) or 'SELL' (receive the bid)
        quantity: Number of contracts (> 0)
        config: Order configuration (fee)

    Returns:
        OrderValuation with cent-rounded values, profit/loss floored at 0

    Raises:
        NoSelectionError: If cell is None
        InvalidInputError: For a bad side, direction or quantity
        UnavailableContractError: If no writer has sold the contract

    Example:
        >>> valuation = evaluate_order(cell_50, "CALL", "BUY", 2)
        >>> # ask 3.00 -> total 6.00, max loss 6.00, max profit 94.00, breakeven 53.00
    """
    if cell is None:
        raise NoSelectionError("No contract selected")
    if side not in ("CALL", "PUT"):
        raise InvalidInputError(f"Invalid contract side: {side}")
    if direction not in ("BUY", "SELL"):
        raise InvalidInputError(f"Invalid order direction: {direction}")
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidInputError(f"quantity must be a positive integer, got {quantity!r}")

    quote = cell.quote(side)
    if not quote.available:
        raise UnavailableContractError(f"No writers for {side} {cell.strike:.2f}")

    config = config or OrderConfig()
    is_buying = direction == "BUY"
    premium = quote.ask if is_buying else quote.bid
    strike = cell.strike
    total_premium = premium * quantity

    # Buyer's payout ceiling equals the writer's loss ceiling
    if side == "CALL":
        ceiling = (MAX_UNDERLYING - strike - premium) * quantity
        breakeven = strike + premium
    else:
        ceiling = (strike - premium) * quantity
        breakeven = strike - premium

    if is_buying:
        max_profit, max_loss = ceiling, total_premium
    else:
        max_profit, max_loss = total_premium, ceiling

    valuation = OrderValuation(
        premium=round(premium, 2),
        total_premium=round(total_premium, 2),
        max_profit=round(max(0.0, max_profit), 2),
        max_loss=round(max(0.0, max_loss), 2),
        breakeven=round(breakeven, 2),
        is_buying=is_buying,
        quantity=quantity,
        side=side,
        fee=round(total_premium * config.fee_bps / 10000.0, 2),
    )
    logger.debug("Valued order: %r", valuation)
    return valuation
