"""Options chain data models."""

from dataclasses import dataclass
from typing import Iterator

from .expiration import Expiration
from .order import SelectedContract
from .quote import ContractQuote, ContractSide


@dataclass(frozen=True)
class ChainCell:
    """One strike row of the chain: a call and a put sharing strike and IV.

    Convention:
        - is_itm_call iff spot > strike
        - is_itm_put iff spot < strike
        - iv is in percent (55.0 = 55%)
    """

    strike: float
    is_atm: bool
    is_itm_call: bool
    is_itm_put: bool
    iv: float
    call: ContractQuote
    put: ContractQuote

    def quote(self, side: ContractSide) -> ContractQuote:
        """Return the call or put quote for this strike."""
        if side == "CALL":
            return self.call
        if side == "PUT":
            return self.put
        raise ValueError(f"Invalid contract side: {side}")

    def is_itm(self, side: ContractSide) -> bool:
        return self.is_itm_call if side == "CALL" else self.is_itm_put

    def is_high_iv(self, threshold: float = 100.0) -> bool:
        """True when the cell's IV is at or above threshold percent."""
        return self.iv >= threshold

    def __repr__(self) -> str:
        flag = " ATM" if self.is_atm else ""
        return (f"ChainCell(K={self.strike:.2f}{flag} IV={self.iv:.1f}% "
                f"C={self.call.bid:.2f}/{self.call.ask:.2f} "
                f"P={self.put.bid:.2f}/{self.put.ask:.2f})")


@dataclass(frozen=True)
class OptionsChain:
    """Full chain for one (spot, expiration) pair, strikes ascending.

    Never mutated: a spot or expiration change produces a new chain.
    """

    spot: float
    expiration: Expiration
    cells: tuple[ChainCell, ...]
    is_near_expiry: bool = False

    def __post_init__(self) -> None:
        strikes = [cell.strike for cell in self.cells]
        if any(b <= a for a, b in zip(strikes, strikes[1:])):
            raise ValueError("Chain cells must be ordered by strictly ascending strike")

    def __iter__(self) -> Iterator[ChainCell]:
        return iter(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    @property
    def strikes(self) -> list[float]:
        return [cell.strike for cell in self.cells]

    @property
    def atm_cell(self) -> ChainCell | None:
        """The at-the-money row, if any strike qualified."""
        for cell in self.cells:
            if cell.is_atm:
                return cell
        return None

    def find(self, strike: float) -> ChainCell | None:
        """Look up a row by strike (cent precision)."""
        key = round(strike, 2)
        for cell in self.cells:
            if round(cell.strike, 2) == key:
                return cell
        return None

    def select(self, strike: float, side: ContractSide) -> SelectedContract:
        """Build a selection for a strike on this chain's expiration.

        Raises:
            KeyError: If the strike is not listed on this chain
        """
        if self.find(strike) is None:
            raise KeyError(f"Strike {strike} not in chain")
        return SelectedContract(strike=round(strike, 2), expiration=self.expiration, side=side)

    def quote_for(self, selection: SelectedContract) -> ContractQuote | None:
        """Resolve a selection to its quote, or None if it is not on this chain."""
        if selection.expiration.date != self.expiration.date:
            return None
        cell = self.find(selection.strike)
        if cell is None:
            return None
        return cell.quote(selection.side)

    def available_count(self) -> int:
        """Number of written contracts across both sides."""
        return sum(int(cell.call.available) + int(cell.put.available) for cell in self.cells)
