"""Strike lattice generation.

Strikes form an evenly spaced ladder centered on spot, so the center strike
is exactly at the money for odd counts.
"""

import logging
from typing import List

from ..utils.error_handling import InvalidInputError, require_positive

logger = logging.getLogger("prediction_options.strikes")

DEFAULT_STRIKE_COUNT = 11
DEFAULT_STRIKE_STEP_PERCENT = 0.05


def generate_strikes(
    spot: float,
    count: int = DEFAULT_STRIKE_COUNT,
    step_percent: float = DEFAULT_STRIKE_STEP_PERCENT,
) -> List[float]:
    """Generate `count` strikes around spot, ascending.

    Args:
        spot: Underlying price in cents
        count: Number of strikes (odd for a symmetric ladder)
        step_percent: Spacing as a fraction of spot (0.05 = 5%)

    Returns:
        Strikes rounded to cents: spot + (i - count // 2) * spot * step_percent

    Raises:
        InvalidInputError: If spot or step_percent is not positive, or count < 1

    Note:
        Even counts are accepted. The center index is count // 2, which puts
        one more strike below spot than above it.

    Example:
        >>> generate_strikes(50.0, count=5, step_percent=0.05)
        [45.0, 47.5, 50.0, 52.5, 55.0]
    """
    spot = require_positive("spot", spot)
    step_percent = require_positive("step_percent", step_percent)
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise InvalidInputError(f"count must be a positive integer, got {count!r}")

    step = spot * step_percent
    center = count // 2
    strikes = [round(spot + (i - center) * step, 2) for i in range(count)]

    # Large steps can push the low end of the ladder to zero or below
    valid = [strike for strike in strikes if strike > 0]
    if len(valid) < len(strikes):
        logger.warning(
            "Dropped %d non-positive strikes (spot=%.2f, step=%.2f%%)",
            len(strikes) - len(valid), spot, step_percent * 100
        )
    return valid
