"""Tests for expiry P&L and payoff curves."""

import numpy as np
import pytest

from prediction_options.risk.order_valuator import evaluate_order
from prediction_options.risk.payoff import payoff_at_expiry, payoff_curve
from prediction_options.utils.error_handling import InvalidInputError


class TestPayoffAtExpiry:
    """Test suite for payoff_at_expiry."""

    def test_long_call_spot_moves_fifty_to_seventy(self):
        """Long 50 call bought for 3, underlying settles at 70: 20 - 3 = 17."""
        assert payoff_at_expiry(70.0, strike=50.0, premium=3.0, side="CALL") == pytest.approx(17.0)

    def test_long_call_expires_worthless(self):
        assert payoff_at_expiry(40.0, strike=50.0, premium=3.0, side="CALL") == pytest.approx(-3.0)

    def test_long_put_quantity(self):
        assert payoff_at_expiry(30.0, 50.0, 2.0, "PUT", quantity=2) == pytest.approx(36.0)

    def test_short_call_mirrors_long(self):
        assert payoff_at_expiry(70.0, 50.0, 3.0, "CALL", "SELL") == pytest.approx(-17.0)
        assert payoff_at_expiry(40.0, 50.0, 3.0, "CALL", "SELL") == pytest.approx(3.0)

    def test_settles_at_bounds(self):
        """Probability underlyings settle at 0 or 100."""
        assert payoff_at_expiry(100.0, 50.0, 3.0, "CALL") == pytest.approx(47.0)
        assert payoff_at_expiry(0.0, 50.0, 3.0, "PUT") == pytest.approx(47.0)

    def test_invalid_inputs(self):
        with pytest.raises(InvalidInputError):
            payoff_at_expiry(-1.0, 50.0, 3.0, "CALL")
        with pytest.raises(InvalidInputError):
            payoff_at_expiry(60.0, 50.0, 3.0, "STRADDLE")
        with pytest.raises(InvalidInputError):
            payoff_at_expiry(60.0, 50.0, 3.0, "CALL", "HOLD")


class TestPayoffCurve:
    """Test suite for payoff_curve."""

    def test_long_call_curve(self, atm_cell):
        valuation = evaluate_order(atm_cell, "CALL", "BUY", 2)
        curve = payoff_curve(50.0, atm_cell.strike, valuation)

        assert len(curve.prices) == 101
        assert curve.prices[0] == pytest.approx(35.0)
        assert curve.prices[-1] == pytest.approx(65.0)
        assert curve.min_pnl == pytest.approx(-valuation.total_premium)
        assert curve.max_pnl == pytest.approx((65.0 - 50.0 - 3.0) * 2)
        assert curve.breakeven == pytest.approx(53.0)

    def test_pnl_zero_at_breakeven(self, atm_cell):
        valuation = evaluate_order(atm_cell, "CALL", "BUY", 1)
        curve = payoff_curve(50.0, atm_cell.strike, valuation)
        pnl_at_breakeven = np.interp(curve.breakeven, curve.prices, curve.pnl)
        assert pnl_at_breakeven == pytest.approx(0.0, abs=1e-9)

    def test_short_put_curve_capped_at_premium(self, atm_cell):
        valuation = evaluate_order(atm_cell, "PUT", "SELL", 1)
        curve = payoff_curve(50.0, atm_cell.strike, valuation)
        assert curve.max_pnl == pytest.approx(valuation.total_premium)
        assert curve.min_pnl < 0

    def test_curve_range_capped_at_one_hundred(self, atm_cell):
        valuation = evaluate_order(atm_cell, "CALL", "BUY", 1)
        curve = payoff_curve(90.0, atm_cell.strike, valuation)
        assert curve.prices[-1] == pytest.approx(100.0)
        assert curve.prices[0] == pytest.approx(63.0)

    def test_curve_monotonic_for_long_call(self, atm_cell):
        valuation = evaluate_order(atm_cell, "CALL", "BUY", 1)
        curve = payoff_curve(50.0, atm_cell.strike, valuation)
        assert np.all(np.diff(curve.pnl) >= 0)

    def test_invalid_points(self, atm_cell):
        valuation = evaluate_order(atm_cell, "CALL", "BUY", 1)
        with pytest.raises(InvalidInputError):
            payoff_curve(50.0, atm_cell.strike, valuation, points=1)
