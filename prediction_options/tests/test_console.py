"""Tests for console output formatting."""

from datetime import date

from prediction_options.builders.chain_builder import build_chain
from prediction_options.builders.liquidity import LiquidityConfig, LiquiditySynthesizer
from prediction_options.models.chain import OptionsChain
from prediction_options.models.expiration import Expiration
from prediction_options.output.console import (
    print_chain,
    print_expirations,
    print_header,
    print_order_valuation,
)
from prediction_options.risk.order_valuator import evaluate_order


class TestConsoleOutput:
    """Test suite for console printers."""

    def test_header(self, capsys):
        print_header("Will it rain?", 62.0)
        out = capsys.readouterr().out
        assert "OPTIONS CHAIN - Will it rain?" in out
        assert "62.0¢" in out

    def test_chain_table(self, capsys, expiration):
        print_chain(build_chain(50.0, expiration))
        out = capsys.readouterr().out
        assert "Strike" in out
        assert "50.00*" in out
        assert "Written contracts:" in out

    def test_unwritten_contracts_shown_as_dashes(self, capsys, expiration):
        synthesizer = LiquiditySynthesizer(LiquidityConfig(base_availability=0.0))
        print_chain(build_chain(50.0, expiration, synthesizer=synthesizer))
        out = capsys.readouterr().out
        assert "--" in out
        assert "Written contracts: 2 of 22" in out

    def test_empty_chain(self, capsys, expiration):
        print_chain(OptionsChain(spot=50.0, expiration=expiration, cells=()))
        assert "Empty chain." in capsys.readouterr().out

    def test_near_expiry_warnings(self, capsys):
        soon = Expiration(date=date(2026, 10, 18), label="Oct 18", days_to_expiry=2, is_weekly=True)
        later = Expiration(date=date(2026, 10, 30), label="Oct 30", days_to_expiry=14, is_weekly=True)

        print_expirations([soon, later])
        out = capsys.readouterr().out
        assert out.count("expires soon") == 1

        print_chain(build_chain(50.0, soon))
        assert "Near expiry" in capsys.readouterr().out

    def test_no_expirations(self, capsys):
        print_expirations([])
        assert "No expirations listed." in capsys.readouterr().out

    def test_order_panel(self, capsys, atm_cell, expiration):
        valuation = evaluate_order(atm_cell, "CALL", "BUY", 2)
        print_order_valuation(valuation, atm_cell.strike, expiration)
        out = capsys.readouterr().out
        assert "Buy 2 x CALL 50.00¢" in out
        assert "Max Profit:     94.00¢" in out
        assert "Breakeven:      53.00¢" in out
