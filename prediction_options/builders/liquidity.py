"""Deterministic liquidity synthesis for a freshly launched market.

Volume, open interest and "has anyone written this contract" are simulated
from a stable hash of (strike, days_to_expiry, side). The same inputs always
produce the same outputs, across calls and across processes, so a rebuilt
chain never flickers between available and unavailable.
"""

import logging
import math
from typing import Any, Dict, Tuple

from ..models.quote import ContractSide
from ..utils.error_handling import ConfigurationError, InvalidInputError, require_non_negative, require_positive

logger = logging.getLogger("prediction_options.liquidity")

_MASK64 = (1 << 64) - 1
_SIDE_CODES = {"CALL": 1, "PUT": 2}

# Independent streams per quantity
SALT_OPEN_INTEREST = 1
SALT_VOLUME = 2
SALT_AVAILABILITY = 3
SALT_WRITER_PENALTY_1 = 4
SALT_WRITER_PENALTY_2 = 5
SALT_IV_JITTER = 6


def _splitmix64(value: int) -> int:
    z = (value + 0x9E3779B97F4A7C15) & _MASK64
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & _MASK64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _MASK64
    return z ^ (z >> 31)


def seeded_uniform(strike: float, days_to_expiry: int, side: ContractSide, salt: int) -> float:
    """Uniform [0, 1) value keyed by (strike, days_to_expiry, side, salt).

    Strikes are keyed at cent precision.

    Example:
        >>> seeded_uniform(50.0, 7, "CALL", SALT_AVAILABILITY) == \\
        ...     seeded_uniform(50.0, 7, "CALL", SALT_AVAILABILITY)
        True
    """
    if side not in _SIDE_CODES:
        raise InvalidInputError(f"Invalid contract side: {side}")
    h = _splitmix64(int(round(strike * 100)) & _MASK64)
    h = _splitmix64(h ^ (int(days_to_expiry) & _MASK64))
    h = _splitmix64(h ^ _SIDE_CODES[side])
    h = _splitmix64(h ^ salt)
    # Top 53 bits give an exactly representable double in [0, 1)
    return (h >> 11) / float(1 << 53)


class LiquidityConfig:
    """Configuration for synthesized liquidity."""

    def __init__(
        self,
        open_interest_peak: int = 20000,
        open_interest_floor: int = 500,
        open_interest_width: float = 0.15,
        term_scale_days: float = 30.0,
        volume_fraction_min: float = 0.05,
        volume_fraction_max: float = 0.30,
        atm_band: float = 0.025,
        base_availability: float = 0.65,
        availability_decay: float = 6.0,
        writer_penalty_1: float = 0.20,
        writer_penalty_2: float = 0.15,
    ):
        """Initialize liquidity configuration.

        Args:
            open_interest_peak: Open interest scale at the money
            open_interest_floor: Minimum open interest on a written contract
            open_interest_width: Gaussian width of open interest in (moneyness - 1)
            term_scale_days: Decay scale of the near-term open interest boost
            volume_fraction_min: Lower bound of volume / open interest
            volume_fraction_max: Upper bound of volume / open interest
            atm_band: |moneyness - 1| inside which a contract is always written
            base_availability: Availability probability just outside the band
            availability_decay: Exponential decay of availability with distance
            writer_penalty_1: Probability the first "no writers" roll hits
            writer_penalty_2: Probability the second "no writers" roll hits
        """
        if open_interest_peak <= 0 or open_interest_floor < 0:
            raise ConfigurationError("Open interest peak must be positive and floor non-negative")
        if open_interest_width <= 0 or term_scale_days <= 0:
            raise ConfigurationError("open_interest_width and term_scale_days must be positive")
        if not 0 <= volume_fraction_min <= volume_fraction_max <= 1:
            raise ConfigurationError(
                f"Volume fraction band [{volume_fraction_min}, {volume_fraction_max}] is invalid"
            )
        for name, prob in (("base_availability", base_availability),
                           ("writer_penalty_1", writer_penalty_1),
                           ("writer_penalty_2", writer_penalty_2)):
            if not 0 <= prob <= 1:
                raise ConfigurationError(f"{name} must be a probability, got {prob}")
        if atm_band < 0 or availability_decay < 0:
            raise ConfigurationError("atm_band and availability_decay must be non-negative")

        self.open_interest_peak = open_interest_peak
        self.open_interest_floor = open_interest_floor
        self.open_interest_width = open_interest_width
        self.term_scale_days = term_scale_days
        self.volume_fraction_min = volume_fraction_min
        self.volume_fraction_max = volume_fraction_max
        self.atm_band = atm_band
        self.base_availability = base_availability
        self.availability_decay = availability_decay
        self.writer_penalty_1 = writer_penalty_1
        self.writer_penalty_2 = writer_penalty_2

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "LiquidityConfig":
        """Create LiquidityConfig from dictionary (e.g., from YAML)."""
        return cls(
            open_interest_peak=config.get('open_interest_peak', 20000),
            open_interest_floor=config.get('open_interest_floor', 500),
            open_interest_width=config.get('open_interest_width', 0.15),
            term_scale_days=config.get('term_scale_days', 30.0),
            volume_fraction_min=config.get('volume_fraction_min', 0.05),
            volume_fraction_max=config.get('volume_fraction_max', 0.30),
            atm_band=config.get('atm_band', 0.025),
            base_availability=config.get('base_availability', 0.65),
            availability_decay=config.get('availability_decay', 6.0),
            writer_penalty_1=config.get('writer_penalty_1', 0.20),
            writer_penalty_2=config.get('writer_penalty_2', 0.15),
        )


class LiquiditySynthesizer:
    """Simulated volume, open interest and writer availability.

    Holds configuration only; no random state.
    """

    def __init__(self, config: LiquidityConfig | None = None):
        self.config = config or LiquidityConfig()

    def volume_and_open_interest(
        self,
        strike: float,
        days_to_expiry: int,
        moneyness: float,
        side: ContractSide,
    ) -> Tuple[int, int]:
        """Synthesize (volume, open_interest) for a written contract.

        Args:
            strike: Strike in cents
            days_to_expiry: Calendar days to expiry
            moneyness: spot / strike
            side: 'CALL' or 'PUT'

        Returns:
            Tuple of (volume, open_interest)

        Shape:
            - Open interest peaks at the money with Gaussian falloff in
              (moneyness - 1) and is boosted up to 2x for near-term expiries
            - Volume is a seeded fraction of open interest within
              [volume_fraction_min, volume_fraction_max]
        """
        strike, days, moneyness = self._check(strike, days_to_expiry, moneyness, side)
        cfg = self.config

        atm_weight = math.exp(-((moneyness - 1.0) ** 2) / (2 * cfg.open_interest_width ** 2))
        term_factor = 1.0 + math.exp(-days / cfg.term_scale_days)
        noise = 0.5 + 0.5 * seeded_uniform(strike, days, side, SALT_OPEN_INTEREST)
        open_interest = int(round(
            cfg.open_interest_floor + cfg.open_interest_peak * atm_weight * term_factor * noise
        ))

        fraction_span = cfg.volume_fraction_max - cfg.volume_fraction_min
        fraction = cfg.volume_fraction_min + fraction_span * seeded_uniform(strike, days, side, SALT_VOLUME)
        volume = int(open_interest * fraction)

        return volume, open_interest

    def is_available(
        self,
        strike: float,
        days_to_expiry: int,
        moneyness: float,
        side: ContractSide,
    ) -> bool:
        """Whether any writer has sold this contract.

        The strike nearest the money (inside atm_band) is always written.
        Elsewhere availability decays with |moneyness - 1|, and two
        independent "no writers showed up" rolls can still knock it out.
        """
        strike, days, moneyness = self._check(strike, days_to_expiry, moneyness, side)
        cfg = self.config

        distance = abs(moneyness - 1.0)
        if distance < cfg.atm_band:
            return True

        probability = cfg.base_availability * math.exp(-cfg.availability_decay * distance)
        if seeded_uniform(strike, days, side, SALT_AVAILABILITY) >= probability:
            return False
        if seeded_uniform(strike, days, side, SALT_WRITER_PENALTY_1) < cfg.writer_penalty_1:
            return False
        if seeded_uniform(strike, days, side, SALT_WRITER_PENALTY_2) < cfg.writer_penalty_2:
            return False
        return True

    @staticmethod
    def _check(strike: float, days_to_expiry: int, moneyness: float, side: str) -> Tuple[float, int, float]:
        if side not in _SIDE_CODES:
            raise InvalidInputError(f"Invalid contract side: {side}")
        strike = require_positive("strike", strike)
        days = int(require_non_negative("days_to_expiry", days_to_expiry))
        moneyness = require_positive("moneyness", moneyness)
        return strike, days, moneyness
