"""Error types and input guards for the pricing engine.

Every failure in the engine is a deterministic function of bad input, so
nothing here retries: callers fix their inputs and call again.
"""

import math


class PricingError(Exception):
    """Base exception for pricing and chain errors."""
    pass


class InvalidInputError(ValueError, PricingError):
    """Raised when a numeric input is out of its valid domain.

    Inherits from ValueError so generic callers can catch it as such.
    """
    pass


class NoSelectionError(PricingError):
    """Raised when an order is valued without a selected contract."""
    pass


class UnavailableContractError(PricingError):
    """Raised when an order is valued against a contract with no writers."""
    pass


class ConfigurationError(PricingError):
    """Raised when configuration is invalid."""
    pass


def require_positive(name: str, value: float) -> float:
    """Validate that a value is a finite number strictly greater than zero.

    Args:
        name: Parameter name used in the error message
        value: Value to check

    Returns:
        The value as a float

    Raises:
        InvalidInputError: If value is missing, non-numeric, NaN, infinite or <= 0

    Example:
        >>> require_positive("spot", 55.0)
        55.0
    """
    checked = _as_finite(name, value)
    if checked <= 0:
        raise InvalidInputError(f"{name} must be positive, got {value}")
    return checked


def require_non_negative(name: str, value: float) -> float:
    """Validate that a value is a finite number >= 0.

    Raises:
        InvalidInputError: If value is missing, non-numeric, NaN, infinite or < 0
    """
    checked = _as_finite(name, value)
    if checked < 0:
        raise InvalidInputError(f"{name} must be non-negative, got {value}")
    return checked


def _as_finite(name: str, value: float) -> float:
    if value is None or isinstance(value, bool):
        raise InvalidInputError(f"{name} is required, got {value!r}")
    try:
        checked = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"{name} must be a number, got {value!r}") from e
    if not math.isfinite(checked):
        raise InvalidInputError(f"{name} must be finite, got {value}")
    return checked
