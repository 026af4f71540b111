"""
Day/night color temperature curve.

Maps the sun's elevation to a target color temperature with three bands:
night below civil twilight, daytime from 3 degrees above the horizon, and
a linear transition in between.
"""

from dataclasses import dataclass
from enum import Enum

from sunshift.lighting_math import lerp
from sunshift.solar import SOLAR_CIVIL_TWILIGHT_ELEV

# Angular elevation of the sun at which the color temperature
# transition period starts and ends (degrees).
TRANSITION_LOW = SOLAR_CIVIL_TWILIGHT_ELEV
TRANSITION_HIGH = 3.0


class Period(str, Enum):
    """Period of the day as seen by the temperature curve."""
    NIGHT = "NIGHT"
    TRANSITION = "TRANSITION"
    DAYTIME = "DAYTIME"


@dataclass(frozen=True)
class TemperatureResult:
    """Target temperature plus the period it was derived in."""
    temperature: int
    period: Period
    day_fraction: float

    @property
    def label(self) -> str:
        """Human-readable period label for diagnostics."""
        if self.period == Period.NIGHT:
            return "Night"
        if self.period == Period.DAYTIME:
            return "Daytime"
        return f"Transition ({self.day_fraction * 100:.2f}% day)"


def day_fraction(elevation: float) -> float:
    """
    Weight of the day temperature at a given elevation.

    0.0 at TRANSITION_LOW, 1.0 at TRANSITION_HIGH. Not clamped.
    """
    return (TRANSITION_LOW - elevation) / (TRANSITION_LOW - TRANSITION_HIGH)


def calculate_temp(elevation: float, temp_day: int, temp_night: int) -> TemperatureResult:
    """
    Derive the target color temperature from the sun's elevation.

    Args:
        elevation: Solar elevation in degrees
        temp_day: Color temperature at daytime (Kelvin)
        temp_night: Color temperature at night (Kelvin)

    Returns:
        TemperatureResult; temperature always lies between temp_night and temp_day
    """
    if elevation < TRANSITION_LOW:
        return TemperatureResult(temperature=temp_night, period=Period.NIGHT, day_fraction=0.0)

    if elevation >= TRANSITION_HIGH:
        return TemperatureResult(temperature=temp_day, period=Period.DAYTIME, day_fraction=1.0)

    a = day_fraction(elevation)
    temp = int(lerp(temp_night, temp_day, a))
    return TemperatureResult(temperature=temp, period=Period.TRANSITION, day_fraction=a)


def target_temperature(elevation: float, temp_day: int, temp_night: int) -> int:
    """Shortcut returning only the integer temperature."""
    return calculate_temp(elevation, temp_day, temp_night).temperature
