"""Tests for the expiration schedule."""

from datetime import date, datetime, timedelta, timezone

import pytest

from prediction_options.builders.expirations import format_expiration_label, generate_expirations
from prediction_options.models.expiration import Expiration
from prediction_options.utils.error_handling import InvalidInputError


class TestGenerateExpirations:
    """Test suite for generate_expirations."""

    @pytest.fixture
    def monday(self):
        """Monday 2026-10-19."""
        return date(2026, 10, 19)

    def test_known_schedule(self, monday):
        """The Nov 20 weekly collides with the November monthly and rolls to Nov 27."""
        expirations = generate_expirations(monday)

        assert [exp.date for exp in expirations] == [
            date(2026, 10, 30),
            date(2026, 11, 6),
            date(2026, 11, 13),
            date(2026, 11, 20),
            date(2026, 11, 27),
            date(2026, 12, 18),
        ]
        assert [exp.days_to_expiry for exp in expirations] == [11, 18, 25, 32, 39, 60]
        assert [exp.is_weekly for exp in expirations] == [True, True, True, False, True, False]

    def test_four_weekly_two_monthly(self, monday):
        expirations = generate_expirations(monday)
        assert sum(exp.is_weekly for exp in expirations) == 4
        assert sum(exp.is_monthly for exp in expirations) == 2

    def test_labels(self, monday):
        expirations = generate_expirations(monday)
        assert expirations[0].label == "Oct 30"
        assert expirations[3].label == "Nov 20 (M)"

    def test_all_fridays(self, monday):
        assert all(exp.date.weekday() == 4 for exp in generate_expirations(monday))

    def test_strictly_increasing_and_at_least_one_day(self):
        """Holds for every starting day over a full year."""
        start = date(2026, 1, 1)
        for offset in range(366):
            expirations = generate_expirations(start + timedelta(days=offset))
            days = [exp.days_to_expiry for exp in expirations]
            assert len(expirations) == 6
            assert days[0] >= 1
            assert all(b > a for a, b in zip(days, days[1:]))

    def test_friday_today_first_weekly_is_next_friday(self):
        expirations = generate_expirations(date(2026, 10, 23))
        assert expirations[0].date == date(2026, 10, 30)
        assert expirations[0].days_to_expiry == 7

    def test_year_rollover_monthlies(self):
        expirations = generate_expirations(date(2026, 12, 10))
        monthlies = [exp.date for exp in expirations if exp.is_monthly]
        assert monthlies == [date(2027, 1, 15), date(2027, 2, 19)]

    def test_aware_datetime_converted_to_utc(self):
        """23:30 at UTC-5 on Oct 19 is already Oct 20 in UTC."""
        today = datetime(2026, 10, 19, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
        expirations = generate_expirations(today)
        assert expirations[0].date == date(2026, 10, 30)
        assert expirations[0].days_to_expiry == 10

    def test_naive_datetime_read_as_utc(self):
        expirations = generate_expirations(datetime(2026, 10, 19, 23, 30))
        assert expirations[0].days_to_expiry == 11

    def test_default_today(self):
        expirations = generate_expirations()
        today = datetime.now(timezone.utc).date()
        assert expirations[0].date > today

    def test_custom_counts(self, monday):
        expirations = generate_expirations(monday, weekly_count=2, monthly_count=1)
        assert len(expirations) == 3


class TestFormatLabel:
    """Test suite for expiration labels."""

    def test_weekly_label(self):
        assert format_expiration_label(date(2026, 1, 2)) == "Jan 2"

    def test_monthly_label(self):
        assert format_expiration_label(date(2026, 1, 16), is_monthly=True) == "Jan 16 (M)"


class TestExpirationModel:
    """Test suite for the Expiration dataclass."""

    def test_negative_days_rejected(self):
        with pytest.raises(InvalidInputError):
            Expiration(date=date(2026, 1, 2), label="Jan 2", days_to_expiry=-1, is_weekly=True)

    def test_near_expiry(self):
        exp = Expiration(date=date(2026, 1, 2), label="Jan 2", days_to_expiry=3, is_weekly=True)
        assert exp.is_near_expiry()
        assert not exp.is_near_expiry(threshold_days=2)

    def test_time_to_expiry_years(self):
        exp = Expiration(date=date(2026, 3, 20), label="Mar 20 (M)", days_to_expiry=73, is_weekly=False)
        assert exp.time_to_expiry == pytest.approx(0.2)
        assert exp.is_monthly
