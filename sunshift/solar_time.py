"""
Astronomical sunrise/sunset calculation using Astral.

Only used for verbose diagnostics; the temperature itself follows the
solar elevation computed in sunshift.solar.
"""

from datetime import date, datetime, timezone
from typing import Optional

from astral import LocationInfo
from astral.sun import sun


def get_sun_times(latitude: float, longitude: float, day: Optional[date] = None):
    """
    Today's sunrise and sunset (UTC).

    Returns:
        (sunrise, sunset) datetimes, or None when the sun does not rise
        or set on that day (polar day/night)
    """
    location = LocationInfo(latitude=latitude, longitude=longitude)
    if day is None:
        day = datetime.now(timezone.utc).date()
    try:
        s = sun(location.observer, date=day)
    except ValueError:
        return None
    return s["sunrise"], s["sunset"]
