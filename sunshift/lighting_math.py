"""
Mathematical helpers shared by the temperature curve and the color ramp.
"""


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation."""
    return a + (b - a) * t


def clamp(value: float, low: float, high: float) -> float:
    """Limit value to the closed range [low, high]."""
    return max(low, min(high, value))
