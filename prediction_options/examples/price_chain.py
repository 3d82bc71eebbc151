#!/usr/bin/env python3
"""Example: build an options chain on a prediction market and value an order.

This script demonstrates the complete pipeline:
1. Load parameters from YAML
2. Resolve spot from a market probability
3. Generate the expiration schedule
4. Build the chain for the nearest expiration
5. Value a buy order at the money
6. Display results
"""

import argparse

from prediction_options.builders.chain_builder import build_chain, spot_from_probability
from prediction_options.builders.expirations import generate_expirations
from prediction_options.builders.liquidity import LiquiditySynthesizer
from prediction_options.output.console import (
    print_chain,
    print_expirations,
    print_header,
    print_order_valuation,
)
from prediction_options.risk.order_valuator import clamp_quantity, evaluate_order
from prediction_options.risk.payoff import payoff_curve
from prediction_options.utils.cache import ChainCache
from prediction_options.utils.config import load_params
from prediction_options.utils.logging_config import setup_logging


def main():
    """Build and print a chain for a sample market."""
    parser = argparse.ArgumentParser(description="Price an options chain on a market probability")
    parser.add_argument("--probability", type=float, default=0.62, help="Market probability in [0, 1]")
    parser.add_argument("--params", default=None, help="YAML parameter file (defaults to packaged params)")
    parser.add_argument("--side", choices=["CALL", "PUT"], default="CALL")
    parser.add_argument("--direction", choices=["BUY", "SELL"], default="BUY")
    parser.add_argument("--quantity", type=int, default=1)
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    setup_logging(log_level=args.log_level)
    params = load_params(args.params)

    spot = spot_from_probability(args.probability)
    print_header("Sample market", spot)

    expirations = generate_expirations()
    print_expirations(expirations, params.chain.near_expiry_days)

    expiration = expirations[0]
    synthesizer = LiquiditySynthesizer(params.liquidity)
    cache = ChainCache()
    chain = cache.get_or_build(
        spot, expiration, lambda: build_chain(spot, expiration, params.chain, synthesizer)
    )
    print_chain(chain)

    cell = chain.atm_cell
    if cell is None:
        print("No at-the-money strike to trade.")
        return

    quantity = clamp_quantity(args.quantity, params.order)
    valuation = evaluate_order(cell, args.side, args.direction, quantity, params.order)
    print_order_valuation(valuation, cell.strike, expiration)

    curve = payoff_curve(spot, cell.strike, valuation)
    print(f"Payoff at expiry ranges from {curve.min_pnl:.2f}¢ to {curve.max_pnl:.2f}¢ "
          f"over {curve.prices[0]:.1f}-{curve.prices[-1]:.1f}¢")


if __name__ == "__main__":
    main()
