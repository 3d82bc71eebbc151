"""Console output formatter for option chains and order valuations."""

from typing import List

from ..models.chain import ChainCell, OptionsChain
from ..models.expiration import Expiration
from ..models.order import OrderValuation
from ..models.quote import ContractQuote


def print_header(market: str, spot_price: float):
    """Print session header.

    Args:
        market: Market name or question
        spot_price: Current underlying price in cents
    """
    print("\n" + "=" * 100)
    print(f"  OPTIONS CHAIN - {market}")
    print(f"  Spot: {spot_price:.1f}¢")
    print("=" * 100)


def print_expirations(expirations: List[Expiration], near_expiry_days: int = 3):
    """Print the expiration schedule, flagging contracts close to expiry."""
    if not expirations:
        print("No expirations listed.")
        return

    print("\nExpirations:")
    for exp in expirations:
        kind = "weekly" if exp.is_weekly else "monthly"
        warning = "  ⚠ expires soon" if exp.is_near_expiry(near_expiry_days) else ""
        print(f"  {exp.label:<12} {exp.date.isoformat()}  {exp.days_to_expiry:>3}d  {kind}{warning}")


def print_chain(chain: OptionsChain):
    """Print the chain as a calls | strike | puts table.

    Output format:
        Unwritten contracts show '--' for bid/ask and volume.
    """
    if not len(chain):
        print("Empty chain.")
        return

    print(f"\nChain for {chain.expiration.label} ({chain.expiration.days_to_expiry} DTE), spot {chain.spot:.1f}¢")
    if chain.is_near_expiry:
        print("  ⚠ Near expiry: time value decays quickly")
    print("-" * 100)

    header = (
        f"{'Δ':>6} {'OI':>7} {'Vol':>6} {'Bid':>6} {'Ask':>6} | "
        f"{'Strike':^10} {'IV':>6} | "
        f"{'Bid':>6} {'Ask':>6} {'Vol':>6} {'OI':>7} {'Δ':>6}"
    )
    print(header)
    print("-" * 100)

    for cell in chain:
        print(_format_row(cell))

    print("-" * 100)
    print(f"  Written contracts: {chain.available_count()} of {2 * len(chain)}")


def print_order_valuation(valuation: OrderValuation, strike: float, expiration: Expiration):
    """Print the risk/reward panel for a valued order."""
    action = "Buy" if valuation.is_buying else "Sell"

    print(f"\n{'=' * 60}")
    print(f"{action} {valuation.quantity} x {valuation.side} {strike:.2f}¢  {expiration.label}")
    print(f"{'=' * 60}")
    print(f"  Premium:        {valuation.premium:.2f}¢")
    print(f"  Total Premium:  {valuation.total_premium:.2f}¢")
    print(f"  Fee:            {valuation.fee:.2f}¢")
    print(f"  Max Profit:     {valuation.max_profit:.2f}¢")
    print(f"  Max Loss:       {valuation.max_loss:.2f}¢")
    print(f"  Breakeven:      {valuation.breakeven:.2f}¢")
    print(f"{'=' * 60}\n")


def _format_row(cell: ChainCell) -> str:
    strike = f"{cell.strike:.2f}" + ("*" if cell.is_atm else "")
    call = _format_side(cell.call)
    put = _format_side(cell.put)
    return (
        f"{cell.call.delta:>6.2f} {call['oi']:>7} {call['vol']:>6} {call['bid']:>6} {call['ask']:>6} | "
        f"{strike:^10} {cell.iv:>5.1f}% | "
        f"{put['bid']:>6} {put['ask']:>6} {put['vol']:>6} {put['oi']:>7} {cell.put.delta:>6.2f}"
    )


def _format_side(quote: ContractQuote) -> dict:
    if not quote.available:
        return {'bid': "--", 'ask': "--", 'vol': "--", 'oi': "--"}
    return {
        'bid': f"{quote.bid:.2f}",
        'ask': f"{quote.ask:.2f}",
        'vol': f"{quote.volume:,}",
        'oi': f"{quote.open_interest:,}",
    }
