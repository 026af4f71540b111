"""Tests for the day/night temperature curve."""

import pytest

from sunshift.curve import (
    TRANSITION_LOW,
    TRANSITION_HIGH,
    Period,
    TemperatureResult,
    calculate_temp,
    day_fraction,
    target_temperature,
)


class TestBreakpoints:
    """Tests for the band boundaries."""

    def test_transition_low_is_civil_twilight(self):
        """Transition starts at civil twilight."""
        assert TRANSITION_LOW == -6.0

    def test_transition_high(self):
        """Transition ends 3 degrees above the horizon."""
        assert TRANSITION_HIGH == 3.0

    def test_day_fraction_at_boundaries(self):
        """Day weight is 0 at the low and 1 at the high boundary."""
        assert day_fraction(TRANSITION_LOW) == 0.0
        assert day_fraction(TRANSITION_HIGH) == 1.0


class TestNight:
    """Tests for the night band."""

    @pytest.mark.parametrize("elevation", [-90.0, -45.0, -6.0001, -6.5])
    def test_night_temperature_exact(self, elevation):
        """Should return the night temperature exactly."""
        result = calculate_temp(elevation, 5500, 3700)
        assert result.temperature == 3700
        assert result.period == Period.NIGHT

    def test_night_label(self):
        """Should label the period as Night."""
        assert calculate_temp(-20.0, 5500, 3700).label == "Night"


class TestDaytime:
    """Tests for the daytime band."""

    @pytest.mark.parametrize("elevation", [3.0, 3.0001, 10.0, 45.0, 90.0])
    def test_day_temperature_exact(self, elevation):
        """Should return the day temperature exactly (boundary inclusive)."""
        result = calculate_temp(elevation, 5500, 3700)
        assert result.temperature == 5500
        assert result.period == Period.DAYTIME

    def test_daytime_label(self):
        """Should label the period as Daytime."""
        assert calculate_temp(30.0, 5500, 3700).label == "Daytime"


class TestTransition:
    """Tests for the twilight interpolation band."""

    def test_lower_boundary_is_pure_night(self):
        """At TRANSITION_LOW the day weight is zero."""
        result = calculate_temp(TRANSITION_LOW, 5500, 3700)
        assert result.period == Period.TRANSITION
        assert result.temperature == 3700

    def test_midpoint(self):
        """Halfway through the band gives the average temperature."""
        midpoint = (TRANSITION_LOW + TRANSITION_HIGH) / 2
        result = calculate_temp(midpoint, 5500, 3700)
        assert result.temperature == 4600
        assert result.day_fraction == pytest.approx(0.5)

    def test_interpolation_formula(self):
        """Should interpolate linearly from night to day, truncated."""
        elevation = -1.7
        a = (TRANSITION_LOW - elevation) / (TRANSITION_LOW - TRANSITION_HIGH)
        expected = int(3700 + (5500 - 3700) * a)
        assert calculate_temp(elevation, 5500, 3700).temperature == expected

    def test_label_shows_day_percentage(self):
        """Should label the transition with the day percentage."""
        midpoint = (TRANSITION_LOW + TRANSITION_HIGH) / 2
        assert calculate_temp(midpoint, 5500, 3700).label == "Transition (50.00% day)"

    def test_monotonic_increasing(self):
        """Result grows from night toward day as the sun rises."""
        values = [target_temperature(-6.0 + i * 0.1, 6500, 3000) for i in range(90)]
        for i in range(len(values) - 1):
            assert values[i] <= values[i + 1]
        assert values[0] == 3000
        assert values[-1] > values[0]

    def test_monotonic_with_day_warmer_than_night(self):
        """Result moves from night toward day when day < night too."""
        values = [target_temperature(-6.0 + i * 0.1, 2000, 8000) for i in range(90)]
        for i in range(len(values) - 1):
            assert values[i] >= values[i + 1]

    @pytest.mark.parametrize("day,night", [(5500, 3700), (3700, 5500), (1000, 9999), (9999, 1000)])
    def test_result_within_bounds(self, day, night):
        """Result always lies between the two temperatures."""
        for i in range(-100, 101):
            temp = target_temperature(i * 0.1, day, night)
            assert min(day, night) <= temp <= max(day, night)

    def test_equal_temperatures(self):
        """Equal day and night temperatures give a constant result."""
        for elevation in (-30.0, -6.0, -2.0, 2.9, 3.0, 30.0):
            assert target_temperature(elevation, 4500, 4500) == 4500


class TestTemperatureResult:
    """Tests for the tagged result type."""

    def test_immutable(self):
        """Should be immutable."""
        result = calculate_temp(10.0, 5500, 3700)
        with pytest.raises(Exception):
            result.temperature = 1

    def test_temperature_is_int(self):
        """Temperature is an integer Kelvin value."""
        assert isinstance(calculate_temp(-1.23, 5500, 3700).temperature, int)

    def test_target_temperature_shortcut(self):
        """target_temperature returns the same value as calculate_temp."""
        assert target_temperature(-2.5, 6000, 3400) == calculate_temp(-2.5, 6000, 3400).temperature

    def test_direct_construction(self):
        """Should label constructed results."""
        result = TemperatureResult(temperature=4000, period=Period.TRANSITION, day_fraction=0.25)
        assert result.label == "Transition (25.00% day)"
