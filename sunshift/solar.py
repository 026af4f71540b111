"""
Solar position calculation.

Low-precision solar ephemeris (Meeus, "Astronomical Algorithms", ch. 25)
good to a fraction of a degree, which is plenty to tell day, twilight
and night apart. Atmospheric refraction is not applied.
"""

import math

from sunshift.clock import TimePoint
from sunshift.models import GeoCoordinate

# Angular elevation of the sun at which civil twilight starts/ends (degrees)
SOLAR_CIVIL_TWILIGHT_ELEV = -6.0

UNIX_EPOCH_JD = 2440587.5
J2000_JD = 2451545.0
SECONDS_PER_DAY = 86400.0
DAYS_PER_CENTURY = 36525.0


def julian_day(timestamp: float) -> float:
    """Julian date of a Unix timestamp (seconds, UTC)."""
    return timestamp / SECONDS_PER_DAY + UNIX_EPOCH_JD


def julian_centuries(jd: float) -> float:
    """Julian centuries since J2000.0."""
    return (jd - J2000_JD) / DAYS_PER_CENTURY


def sun_mean_longitude(t: float) -> float:
    """Geometric mean longitude of the sun (degrees, 0-360)."""
    return (280.46646 + t * (36000.76983 + t * 0.0003032)) % 360.0


def sun_mean_anomaly(t: float) -> float:
    """Mean anomaly of the sun (degrees)."""
    return 357.52911 + t * (35999.05029 - t * 0.0001537)


def sun_equation_of_center(t: float) -> float:
    """Equation of center of the sun (degrees)."""
    m = math.radians(sun_mean_anomaly(t))
    return (math.sin(m) * (1.914602 - t * (0.004817 + 0.000014 * t))
            + math.sin(2 * m) * (0.019993 - 0.000101 * t)
            + math.sin(3 * m) * 0.000289)


def _ascending_node(t: float) -> float:
    # Longitude of the moon's ascending node, drives nutation terms
    return math.radians(125.04 - 1934.136 * t)


def sun_apparent_longitude(t: float) -> float:
    """Apparent ecliptic longitude, corrected for nutation and aberration."""
    true_longitude = sun_mean_longitude(t) + sun_equation_of_center(t)
    return true_longitude - 0.00569 - 0.00478 * math.sin(_ascending_node(t))


def obliquity_of_ecliptic(t: float) -> float:
    """Apparent obliquity of the ecliptic (degrees)."""
    seconds = 21.448 - t * (46.815 + t * (0.00059 - t * 0.001813))
    mean = 23.0 + (26.0 + seconds / 60.0) / 60.0
    return mean + 0.00256 * math.cos(_ascending_node(t))


def sun_equatorial_coordinates(t: float) -> tuple[float, float]:
    """
    Declination and right ascension of the sun.

    Returns:
        (declination, right_ascension) in degrees, right ascension in 0-360
    """
    lam = math.radians(sun_apparent_longitude(t))
    eps = math.radians(obliquity_of_ecliptic(t))

    declination = math.degrees(math.asin(math.sin(eps) * math.sin(lam)))
    right_ascension = math.degrees(
        math.atan2(math.cos(eps) * math.sin(lam), math.cos(lam))
    ) % 360.0
    return declination, right_ascension


def greenwich_mean_sidereal_time(jd: float) -> float:
    """Greenwich mean sidereal time (degrees, 0-360)."""
    t = julian_centuries(jd)
    gmst = (280.46061837
            + 360.98564736629 * (jd - J2000_JD)
            + t * t * (0.000387933 - t / 38710000.0))
    return gmst % 360.0


def hour_angle(jd: float, longitude: float, right_ascension: float) -> float:
    """Local hour angle of the sun (degrees, -180 to 180, positive west)."""
    h = (greenwich_mean_sidereal_time(jd) + longitude - right_ascension) % 360.0
    return h - 360.0 if h > 180.0 else h


def elevation_from_hour_angle(latitude: float, declination: float, ha: float) -> float:
    """Elevation above the horizon from spherical astronomy (all degrees)."""
    lat = math.radians(latitude)
    dec = math.radians(declination)
    sin_elev = (math.sin(lat) * math.sin(dec)
                + math.cos(lat) * math.cos(dec) * math.cos(math.radians(ha)))
    # Rounding can push the product just outside asin's domain
    sin_elev = max(-1.0, min(1.0, sin_elev))
    return math.degrees(math.asin(sin_elev))


def solar_elevation(timestamp: float, latitude: float, longitude: float) -> float:
    """
    Angular elevation of the sun.

    Args:
        timestamp: Seconds since the Unix epoch (UTC), fractional allowed
        latitude: Observer latitude in degrees (north positive)
        longitude: Observer longitude in degrees (east positive)

    Returns:
        Elevation in degrees; negative when the sun is below the horizon
    """
    jd = julian_day(timestamp)
    t = julian_centuries(jd)
    declination, right_ascension = sun_equatorial_coordinates(t)
    ha = hour_angle(jd, longitude, right_ascension)
    return elevation_from_hour_angle(latitude, declination, ha)


def elevation(time_point: TimePoint, location: GeoCoordinate) -> float:
    """Solar elevation at ``time_point`` for ``location``."""
    return solar_elevation(time_point.timestamp, location.latitude, location.longitude)
