"""Options chain builder.

Composes the strike lattice, the IV skew model, the pricer and the
liquidity synthesizer into an OptionsChain for one spot and expiration.
"""

import logging
import math
from typing import Any, Dict, List

from .liquidity import SALT_IV_JITTER, LiquiditySynthesizer, seeded_uniform
from .strikes import DEFAULT_STRIKE_COUNT, DEFAULT_STRIKE_STEP_PERCENT, generate_strikes
from ..analytics.pricer import MIN_PRICE, RISK_FREE_RATE, OptionPricer
from ..models.chain import ChainCell, OptionsChain
from ..models.expiration import Expiration
from ..models.quote import ContractQuote, ContractSide
from ..utils.error_handling import ConfigurationError, InvalidInputError, require_positive

logger = logging.getLogger("prediction_options.chain")

DEFAULT_SPOT = 50.0
DEFAULT_BASE_IV = 55.0


class ChainConfig:
    """Configuration for chain generation."""

    def __init__(
        self,
        strike_count: int = DEFAULT_STRIKE_COUNT,
        strike_step_percent: float = DEFAULT_STRIKE_STEP_PERCENT,
        base_iv: float = DEFAULT_BASE_IV,
        risk_free_rate: float = RISK_FREE_RATE,
        atm_tolerance: float = 0.02,
        near_expiry_days: int = 3,
        high_iv_threshold: float = 100.0,
        put_skew: float = 150.0,
        call_skew: float = 100.0,
        atm_discount: float = 2.0,
        term_boost: float = 0.10,
        term_reference_days: float = 30.0,
        iv_jitter: float = 1.5,
        min_iv: float = 5.0,
        base_spread: float = 0.02,
        term_spread: float = 0.03,
        moneyness_spread: float = 0.05,
    ):
        """Initialize chain configuration.

        Args:
            strike_count: Number of strikes in the lattice
            strike_step_percent: Strike spacing as a fraction of spot
            base_iv: ATM implied volatility in percent before skew
            risk_free_rate: Annualized risk-free rate
            atm_tolerance: |spot/strike - 1| below which a strike may be ATM
            near_expiry_days: Days at or under which a chain is flagged near expiry
            high_iv_threshold: IV percent at or above which a cell is high-IV
            put_skew: Vol points per unit (moneyness - 1)^2 when moneyness > 1
            call_skew: Vol points per unit (1 - moneyness)^2 when moneyness < 1
            atm_discount: Vol points removed right at the money
            term_boost: Multiplier slope of the inverse-sqrt term structure
            term_reference_days: Tenor at which the term boost vanishes
            iv_jitter: Max seeded per-cell IV noise in vol points (+/-)
            min_iv: IV floor in percent
            base_spread: Spread fraction for the shortest ATM contract
            term_spread: Extra spread fraction at 90+ days
            moneyness_spread: Extra spread fraction far from the money
        """
        if isinstance(strike_count, bool) or not isinstance(strike_count, int) or strike_count < 1:
            raise ConfigurationError(f"strike_count must be a positive integer, got {strike_count!r}")
        if strike_step_percent <= 0:
            raise ConfigurationError(f"strike_step_percent must be positive, got {strike_step_percent}")
        if base_iv <= 0 or min_iv <= 0:
            raise ConfigurationError("base_iv and min_iv must be positive")
        if atm_tolerance < 0 or near_expiry_days < 0:
            raise ConfigurationError("atm_tolerance and near_expiry_days must be non-negative")
        if min(base_spread, term_spread, moneyness_spread) < 0:
            raise ConfigurationError("Spread parameters must be non-negative")

        self.strike_count = strike_count
        self.strike_step_percent = strike_step_percent
        self.base_iv = base_iv
        self.risk_free_rate = risk_free_rate
        self.atm_tolerance = atm_tolerance
        self.near_expiry_days = near_expiry_days
        self.high_iv_threshold = high_iv_threshold
        self.put_skew = put_skew
        self.call_skew = call_skew
        self.atm_discount = atm_discount
        self.term_boost = term_boost
        self.term_reference_days = term_reference_days
        self.iv_jitter = iv_jitter
        self.min_iv = min_iv
        self.base_spread = base_spread
        self.term_spread = term_spread
        self.moneyness_spread = moneyness_spread

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "ChainConfig":
        """Create ChainConfig from dictionary (e.g., from YAML).

        Missing keys keep their defaults.
        """
        defaults = cls()
        return cls(**{key: config.get(key, value) for key, value in vars(defaults).items()})


def spot_from_probability(probability: float | None) -> float:
    """Convert a [0, 1] market probability to a spot in whole cents.

    Missing probabilities, and ones that round to zero cents, fall back to
    DEFAULT_SPOT, so callers never hand the builder a zero spot.

    Raises:
        InvalidInputError: If probability is outside [0, 1]
    """
    if probability is None:
        logger.warning("No market probability available, using default spot %.0f", DEFAULT_SPOT)
        return DEFAULT_SPOT
    if not 0.0 <= probability <= 1.0:
        raise InvalidInputError(f"probability must be in [0, 1], got {probability}")

    spot = float(round(probability * 100))
    if spot <= 0:
        logger.warning("Probability %s rounds to 0 cents, using default spot %.0f", probability, DEFAULT_SPOT)
        return DEFAULT_SPOT
    return spot


def implied_vol_for_strike(
    spot: float,
    strike: float,
    days_to_expiry: int,
    config: ChainConfig,
) -> float:
    """IV (percent, 1 decimal) for a strike under the skew/smile model.

    Components:
        - OTM puts (moneyness > 1) skew up quadratically: crash premium
        - OTM calls (moneyness < 1) skew up quadratically
        - a small discount right at the money
        - inverse-sqrt term-structure boost for tenors under term_reference_days
        - seeded per-cell jitter
    """
    moneyness = spot / strike
    deviation = moneyness - 1.0

    if deviation > 0:
        skew = config.put_skew * deviation ** 2
    else:
        skew = config.call_skew * deviation ** 2
    atm_discount = config.atm_discount * math.exp(-(deviation / 0.03) ** 2)

    tenor = max(days_to_expiry, 1)
    term_multiplier = 1.0 + config.term_boost * max(0.0, math.sqrt(config.term_reference_days / tenor) - 1.0)

    jitter = (seeded_uniform(strike, days_to_expiry, "CALL", SALT_IV_JITTER) - 0.5) * 2 * config.iv_jitter

    iv = (config.base_iv + skew - atm_discount) * term_multiplier + jitter
    return round(max(config.min_iv, iv), 1)


def spread_pct(moneyness: float, days_to_expiry: int, config: ChainConfig) -> float:
    """Bid/ask spread as a fraction of theoretical price.

    spread = base_spread(days) + (1 - liquidity_factor(moneyness)) * moneyness_spread
    """
    base = config.base_spread + config.term_spread * min(days_to_expiry, 90) / 90.0
    liquidity_factor = math.exp(-((moneyness - 1.0) / 0.15) ** 2)
    return base + (1.0 - liquidity_factor) * config.moneyness_spread


def build_chain(
    spot: float,
    expiration: Expiration,
    config: ChainConfig | None = None,
    synthesizer: LiquiditySynthesizer | None = None,
) -> OptionsChain:
    """Build the full chain for one spot and expiration.

    Args:
        spot: Underlying price in cents. Callers resolve a missing spot
            (see spot_from_probability); zero or negative is rejected.
        expiration: Expiration to price
        config: Chain configuration (defaults if None)
        synthesizer: Liquidity synthesizer (defaults if None)

    Returns:
        OptionsChain with one cell per strike, ascending

    Raises:
        InvalidInputError: If spot is not positive
    """
    spot = require_positive("spot", spot)
    config = config or ChainConfig()
    synthesizer = synthesizer or LiquiditySynthesizer()
    days = expiration.days_to_expiry

    strikes = generate_strikes(spot, config.strike_count, config.strike_step_percent)
    atm_index = _nearest_atm_index(spot, strikes, config.atm_tolerance)

    cells: List[ChainCell] = []
    for index, strike in enumerate(strikes):
        iv = implied_vol_for_strike(spot, strike, days, config)
        cells.append(ChainCell(
            strike=strike,
            is_atm=index == atm_index,
            is_itm_call=spot > strike,
            is_itm_put=spot < strike,
            iv=iv,
            call=_build_quote(spot, strike, days, iv, "CALL", config, synthesizer),
            put=_build_quote(spot, strike, days, iv, "PUT", config, synthesizer),
        ))

    context = {"spot": spot, "expiry": expiration.date.isoformat()}
    near_expiry = expiration.is_near_expiry(config.near_expiry_days)
    if near_expiry:
        logger.warning("Expiration %s is %d day(s) out", expiration.label, days, extra=context)

    chain = OptionsChain(spot=spot, expiration=expiration, cells=tuple(cells), is_near_expiry=near_expiry)
    logger.debug(
        "Built chain: %d strikes, %d written contracts",
        len(chain), chain.available_count(), extra=context
    )
    return chain


def _nearest_atm_index(spot: float, strikes: List[float], tolerance: float) -> int | None:
    """Index of the single closest strike within tolerance, or None."""
    if not strikes:
        return None
    distances = [abs(spot / strike - 1.0) for strike in strikes]
    best = min(range(len(strikes)), key=distances.__getitem__)
    return best if distances[best] < tolerance else None


def _build_quote(
    spot: float,
    strike: float,
    days: int,
    iv: float,
    side: ContractSide,
    config: ChainConfig,
    synthesizer: LiquiditySynthesizer,
) -> ContractQuote:
    last = OptionPricer.price(spot, strike, days, iv, side, config.risk_free_rate)
    greeks = OptionPricer.greeks(spot, strike, days, iv, side, config.risk_free_rate)
    moneyness = spot / strike

    if not synthesizer.is_available(strike, days, moneyness, side):
        return ContractQuote(
            bid=0.0, ask=0.0, last=last, volume=0, open_interest=0, available=False,
            delta=greeks.delta, gamma=greeks.gamma, theta=greeks.theta, vega=greeks.vega,
        )

    spread = spread_pct(moneyness, days, config)
    ask = max(round(last * (1 + spread / 2), 2), MIN_PRICE)
    bid = min(round(last * (1 - spread / 2), 2), ask)
    volume, open_interest = synthesizer.volume_and_open_interest(strike, days, moneyness, side)

    return ContractQuote(
        bid=bid, ask=ask, last=last, volume=volume, open_interest=open_interest, available=True,
        delta=greeks.delta, gamma=greeks.gamma, theta=greeks.theta, vega=greeks.vega,
    )
