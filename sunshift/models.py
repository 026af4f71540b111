"""
Validated configuration values.

All models are frozen: configuration is read-only once the adjustment
loop has started.
"""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from sunshift.config import (
    MIN_LAT, MAX_LAT, MIN_LON, MAX_LON,
    MIN_TEMP, MAX_TEMP, MIN_GAMMA, MAX_GAMMA,
)

DEG = "°"


class ConfigurationError(ValueError):
    """Missing or out-of-range configuration value."""


class FallbackPolicy(str, Enum):
    """When to fall back to the secondary display backend."""
    NEVER = "never"  # Only ever use the selected backend
    AUTO = "auto"  # Fall back only if no method was requested explicitly
    ALWAYS = "always"  # Fall back on any failure of the primary backend


class GeoCoordinate(BaseModel):
    """Observer location."""
    latitude: float = Field(..., ge=MIN_LAT, le=MAX_LAT, allow_inf_nan=False)
    longitude: float = Field(..., ge=MIN_LON, le=MAX_LON, allow_inf_nan=False)

    model_config = ConfigDict(frozen=True)


class TemperatureSetting(BaseModel):
    """Color temperatures at daytime and night (Kelvin)."""
    day_temp: int = Field(5500, ge=MIN_TEMP, lt=MAX_TEMP)
    night_temp: int = Field(3700, ge=MIN_TEMP, lt=MAX_TEMP)

    model_config = ConfigDict(frozen=True)


class GammaTriple(BaseModel):
    """Additional per-channel gamma correction."""
    red: float = Field(1.0, ge=MIN_GAMMA, le=MAX_GAMMA, allow_inf_nan=False)
    green: float = Field(1.0, ge=MIN_GAMMA, le=MAX_GAMMA, allow_inf_nan=False)
    blue: float = Field(1.0, ge=MIN_GAMMA, le=MAX_GAMMA, allow_inf_nan=False)

    model_config = ConfigDict(frozen=True)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.red, self.green, self.blue)


class Settings(BaseModel):
    """Complete runtime configuration."""
    location: GeoCoordinate
    temperatures: TemperatureSetting = TemperatureSetting()
    gamma: GammaTriple = GammaTriple()
    method: Optional[Literal["randr", "vidmode"]] = None
    screen: Optional[int] = None
    one_shot: bool = False
    startup_transition: bool = True
    verbose: bool = False
    fallback: FallbackPolicy = FallbackPolicy.AUTO
    mock: bool = False

    model_config = ConfigDict(frozen=True)


# Error message per (model, field) group, worded like the usage messages
_MESSAGES = {
    "latitude": f"Latitude must be between {MIN_LAT:.1f}{DEG} and {MAX_LAT:.1f}{DEG}.",
    "longitude": f"Longitude must be between {MIN_LON:.1f}{DEG} and {MAX_LON:.1f}{DEG}.",
    "day_temp": f"Temperature must be between {MIN_TEMP}K and {MAX_TEMP}K.",
    "night_temp": f"Temperature must be between {MIN_TEMP}K and {MAX_TEMP}K.",
    "red": f"Gamma value must be between {MIN_GAMMA:.1f} and {MAX_GAMMA:.1f}.",
    "green": f"Gamma value must be between {MIN_GAMMA:.1f} and {MAX_GAMMA:.1f}.",
    "blue": f"Gamma value must be between {MIN_GAMMA:.1f} and {MAX_GAMMA:.1f}.",
}


def describe_validation_error(error: ValidationError) -> str:
    """Turn the first pydantic error into a user-facing message."""
    first = error.errors()[0]
    for part in reversed(first["loc"]):
        if part in _MESSAGES:
            return _MESSAGES[part]
    location = ".".join(str(part) for part in first["loc"])
    return f"Invalid value for {location}: {first['msg']}"


def build_settings(
    latitude: Optional[float],
    longitude: Optional[float],
    day_temp: int = 5500,
    night_temp: int = 3700,
    gamma: tuple[float, float, float] = (1.0, 1.0, 1.0),
    **options,
) -> Settings:
    """
    Validate raw configuration values into Settings.

    Args:
        latitude: Latitude in degrees, None if not configured
        longitude: Longitude in degrees, None if not configured
        day_temp: Day color temperature (Kelvin)
        night_temp: Night color temperature (Kelvin)
        gamma: (red, green, blue) gamma correction
        **options: Remaining Settings fields (method, screen, one_shot, ...)

    Raises:
        ConfigurationError: If a value is missing or out of range
    """
    if latitude is None or longitude is None:
        raise ConfigurationError("Latitude and longitude must be set.")

    try:
        return Settings(
            location=GeoCoordinate(latitude=latitude, longitude=longitude),
            temperatures=TemperatureSetting(day_temp=day_temp, night_temp=night_temp),
            gamma=GammaTriple(red=gamma[0], green=gamma[1], blue=gamma[2]),
            **options,
        )
    except ValidationError as e:
        raise ConfigurationError(describe_validation_error(e)) from e
