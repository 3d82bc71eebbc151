"""Shared fixtures for chain and order tests."""

from datetime import date

import pytest

from prediction_options.models.chain import ChainCell
from prediction_options.models.expiration import Expiration
from prediction_options.models.quote import ContractQuote


def _make_quote(bid: float, ask: float, available: bool = True, **overrides) -> ContractQuote:
    """Build a quote with plausible defaults for the fields a test does not care about."""
    fields = dict(
        bid=bid,
        ask=ask,
        last=round((bid + ask) / 2, 2),
        volume=120 if available else 0,
        open_interest=1500 if available else 0,
        available=available,
        delta=0.5,
        gamma=0.05,
        theta=-0.1,
        vega=0.04,
    )
    fields.update(overrides)
    return ContractQuote(**fields)


def _make_cell(strike: float, call: ContractQuote, put: ContractQuote, spot: float = 50.0) -> ChainCell:
    return ChainCell(
        strike=strike,
        is_atm=abs(spot / strike - 1) < 0.02,
        is_itm_call=spot > strike,
        is_itm_put=spot < strike,
        iv=55.0,
        call=call,
        put=put,
    )


@pytest.fixture
def expiration():
    """Seven-day weekly expiration."""
    return Expiration(date=date(2026, 10, 23), label="Oct 23", days_to_expiry=7, is_weekly=True)


@pytest.fixture
def atm_cell():
    """Strike 50 row: call 2.90/3.00, put 2.50/2.60."""
    return _make_cell(
        50.0,
        call=_make_quote(2.90, 3.00, delta=0.55),
        put=_make_quote(2.50, 2.60, delta=-0.45),
    )


@pytest.fixture
def make_quote():
    """Factory for ContractQuote objects."""
    return _make_quote


@pytest.fixture
def make_cell():
    """Factory for ChainCell objects."""
    return _make_cell
