"""Per-contract quote data model."""

from dataclasses import dataclass
from typing import Literal

ContractSide = Literal["CALL", "PUT"]

CONTRACT_SIDES: tuple[ContractSide, ...] = ("CALL", "PUT")


@dataclass(frozen=True)
class ContractQuote:
    """Synthesized market for one side (call or put) of a chain row.

    All prices in cents of the underlying probability. `last` is the
    theoretical Black-Scholes value; bid/ask straddle it. A contract nobody
    has written is quoted with available=False and bid=ask=0.
    """

    bid: float
    ask: float
    last: float
    volume: int
    open_interest: int
    available: bool

    # Greeks (display precision)
    delta: float
    gamma: float
    theta: float
    vega: float

    def __post_init__(self) -> None:
        """Validate quote invariants."""
        if self.bid < 0 or self.ask < 0:
            raise ValueError(f"Negative quote: bid={self.bid} ask={self.ask}")
        if self.bid > self.ask:
            raise ValueError(f"Bid {self.bid} > Ask {self.ask} (crossed market)")
        if self.available and self.ask <= 0:
            raise ValueError("Available contract must have a positive ask")
        if self.volume < 0 or self.open_interest < 0:
            raise ValueError("Volume and open interest must be non-negative")

    @property
    def mid(self) -> float:
        """Mid price between bid and ask."""
        return (self.bid + self.ask) / 2.0

    @property
    def spread(self) -> float:
        return self.ask - self.bid

    @property
    def spread_pct(self) -> float:
        """Bid-ask spread as a fraction of mid, or infinity if mid is zero."""
        if self.mid <= 0:
            return float('inf')
        return self.spread / self.mid
