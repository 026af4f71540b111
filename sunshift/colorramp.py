"""
Color temperature to per-channel gamma conversion.

The white point of a black body at a given temperature is approximated
with Tanner Helland's fit of the Planckian locus, normalized so that the
neutral 6500K reference maps to (1.0, 1.0, 1.0).

Backends can only set a gamma exponent per channel (ramp value is
x ** (1 / gamma)), not an arbitrary multiplier. The white point is folded
into the user's gamma so that the ramp at mid-grey is scaled by exactly the
white point factor:

    0.5 ** (1 / g') == w * 0.5 ** (1 / g)   =>   g' = 1 / (1 / g - log2(w))
"""

import math

from sunshift.config import MIN_GAMMA, MAX_GAMMA
from sunshift.lighting_math import clamp

NEUTRAL_TEMP = 6500

# Smallest white point factor taken into account (log2(0) is undefined)
MIN_WHITE_POINT = 0.001


def _blackbody_rgb(temp: float) -> tuple[float, float, float]:
    """Approximate black body color in 0-255 RGB."""
    t = temp / 100.0

    if t <= 66:
        red = 255.0
        green = 99.4708025861 * math.log(t) - 161.1195681661
    else:
        red = 329.698727446 * ((t - 60) ** -0.1332047592)
        green = 288.1221695283 * ((t - 60) ** -0.0755148492)

    if t >= 66:
        blue = 255.0
    elif t <= 19:
        blue = 0.0
    else:
        blue = 138.5177312231 * math.log(t - 10) - 305.0447927307

    return (
        clamp(red, 0.0, 255.0),
        clamp(green, 0.0, 255.0),
        clamp(blue, 0.0, 255.0),
    )


_NEUTRAL_RGB = _blackbody_rgb(NEUTRAL_TEMP)


def white_point(temp: int) -> tuple[float, float, float]:
    """
    Relative per-channel white point for a color temperature.

    Args:
        temp: Color temperature in Kelvin

    Returns:
        (r, g, b) factors in [0.0, 1.0]; (1.0, 1.0, 1.0) at 6500K
    """
    rgb = _blackbody_rgb(temp)
    return tuple(
        clamp(channel / neutral, 0.0, 1.0)
        for channel, neutral in zip(rgb, _NEUTRAL_RGB)
    )


def effective_gamma(gamma: float, white: float) -> float:
    """Fold a white point factor into a gamma exponent."""
    white = max(MIN_WHITE_POINT, white)
    inverse = 1.0 / gamma - math.log2(white)
    return clamp(1.0 / inverse, MIN_GAMMA, MAX_GAMMA)


def temperature_gamma(temp: int, gamma) -> tuple[float, float, float]:
    """
    Per-channel gamma that applies ``temp`` on top of the user's ``gamma``.

    Args:
        temp: Color temperature in Kelvin
        gamma: GammaTriple (or any object with red/green/blue attributes)

    Returns:
        (red, green, blue) gamma exponents
    """
    wr, wg, wb = white_point(temp)
    return (
        effective_gamma(gamma.red, wr),
        effective_gamma(gamma.green, wg),
        effective_gamma(gamma.blue, wb),
    )
