"""
Tests pour les conversions d'unites et l'arrondi half-up.
"""
from hydrosleep.domain.services.units import (
    hours_to_minutes,
    liters_to_ml,
    minutes_to_hours,
    ml_to_liters,
    progress_percent,
    round_half_up,
)


class TestRoundHalfUp:
    def test_half_rounds_up(self):
        assert round_half_up(2.5) == 3.0
        assert round_half_up(0.5) == 1.0

    def test_one_decimal(self):
        assert round_half_up(0.25, 1) == 0.3
        assert round_half_up(7.45, 1) == 7.5

    def test_two_decimals(self):
        assert round_half_up(7.125, 2) == 7.13


class TestConversions:
    def test_ml_to_liters(self):
        assert ml_to_liters(3000) == 3.0
        assert ml_to_liters(3250) == 3.3
        assert ml_to_liters(0) == 0.0

    def test_minutes_to_hours(self):
        assert minutes_to_hours(480) == 8.0
        assert minutes_to_hours(450) == 7.5
        assert minutes_to_hours(425) == 7.1

    def test_liters_to_ml(self):
        assert liters_to_ml(3) == 3000
        assert liters_to_ml(2.5) == 2500
        assert isinstance(liters_to_ml(2.5), int)

    def test_hours_to_minutes(self):
        assert hours_to_minutes(8) == 480


class TestProgressPercent:
    def test_partial(self):
        assert progress_percent(1500, 3000) == 50.0

    def test_capped_at_100(self):
        assert progress_percent(4500, 3000) == 100.0

    def test_zero_goal(self):
        assert progress_percent(0, 0) == 0.0
        assert progress_percent(200, 0) == 100.0
