"""Expiration date data model."""

from dataclasses import dataclass
from datetime import date

from ..utils.error_handling import InvalidInputError


@dataclass(frozen=True)
class Expiration:
    """A single listed expiration.

    Generated fresh from "today" each time the schedule is built, so the
    same calendar date carries a different days_to_expiry on another day.
    """

    date: date
    label: str
    days_to_expiry: int
    is_weekly: bool

    def __post_init__(self) -> None:
        if self.days_to_expiry < 0:
            raise InvalidInputError(f"days_to_expiry must be >= 0, got {self.days_to_expiry}")

    @property
    def is_monthly(self) -> bool:
        return not self.is_weekly

    @property
    def time_to_expiry(self) -> float:
        """Time to expiration in years (365-day count)."""
        return self.days_to_expiry / 365.0

    def is_near_expiry(self, threshold_days: int = 3) -> bool:
        """True when the contract expires within threshold_days."""
        return self.days_to_expiry <= threshold_days

    def __repr__(self) -> str:
        kind = "W" if self.is_weekly else "M"
        return f"Expiration({self.date.isoformat()} {kind} dte={self.days_to_expiry})"
