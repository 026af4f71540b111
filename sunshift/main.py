"""
Command-line entry point.

Set color temperature of display according to time of day.

Usage:
    sunshift -l LAT:LON [-t DAY:NIGHT] [OPTIONS...]
    sunshift -l 55.7:12.6 -o          # Adjust once and exit
    sunshift -l 55.7:12.6 -m vidmode  # Use the VidMode extension
    sunshift -l=-33.9:18.4            # Negative latitude needs the = form

Every option has an environment variable default (see sunshift.config).
"""

import argparse
import signal
import sys
import time
from typing import Callable, Optional

from sunshift import config
from sunshift.clock import ClockError
from sunshift.display import DisplayAdjuster, DisplayAdjustmentError, create_backends
from sunshift.logger import logger, enable_verbose
from sunshift.models import DEG, ConfigurationError, FallbackPolicy, Settings, build_settings
from sunshift.solar_time import get_sun_times
from sunshift.transition import TransitionController


# ============================================================================
# Argument parsing
# ============================================================================

def _split(value: str, parts: int, usage: str) -> list[str]:
    fields = value.split(":")
    if len(fields) != parts:
        raise argparse.ArgumentTypeError(f"expected {usage}, got '{value}'")
    return fields


def parse_location(value: str) -> tuple[float, float]:
    """Parse "LAT:LON" into floats."""
    lat, lon = _split(value, 2, "LAT:LON")
    try:
        return float(lat), float(lon)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid location '{value}'")


def parse_temperatures(value: str) -> tuple[int, int]:
    """Parse "DAY:NIGHT" into integer Kelvin values."""
    day, night = _split(value, 2, "DAY:NIGHT")
    try:
        return int(day), int(night)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid temperatures '{value}'")


def parse_gamma(value: str) -> tuple[float, float, float]:
    """Parse "G" (all channels) or "R:G:B"."""
    try:
        if ":" not in value:
            g = float(value)
            return g, g, g
        r, g, b = _split(value, 3, "R:G:B")
        return float(r), float(g), float(b)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid gamma '{value}'")


def parse_method(value: str) -> str:
    """Accept randr/RANDR and vidmode/VidMode."""
    methods = {"randr": "randr", "RANDR": "randr", "vidmode": "vidmode", "VidMode": "vidmode"}
    if value not in methods:
        raise argparse.ArgumentTypeError(f"Unknown method `{value}'.")
    return methods[value]


def _env_default(parser: Callable, value: Optional[str], name: str):
    """Parse an environment default, reporting bad values as configuration errors."""
    if value is None:
        return None
    try:
        return parser(value)
    except argparse.ArgumentTypeError as e:
        raise ConfigurationError(f"{name}: {e}") from e


def _env_location() -> Optional[tuple[float, float]]:
    if config.LATITUDE is None or config.LONGITUDE is None:
        return None
    return _env_default(parse_location, f"{config.LATITUDE}:{config.LONGITUDE}", "LATITUDE/LONGITUDE")


def build_parser() -> argparse.ArgumentParser:
    """Command-line parser; unset options fall back to the environment."""
    parser = argparse.ArgumentParser(
        prog="sunshift",
        description="Set color temperature of display according to time of day.",
    )
    parser.add_argument("-g", dest="gamma", metavar="R:G:B", type=parse_gamma,
                        help="Additional gamma correction to apply")
    parser.add_argument("-l", dest="location", metavar="LAT:LON", type=parse_location,
                        help="Your current location")
    parser.add_argument("-m", dest="method", metavar="METHOD", type=parse_method,
                        help="Method to use to set color temperature (randr or vidmode)")
    parser.add_argument("-o", dest="one_shot", action="store_true",
                        help="One shot mode (do not continuously adjust color temperature)")
    parser.add_argument("-r", dest="startup_transition", action="store_false",
                        help="Disable initial temperature transition")
    parser.add_argument("-s", dest="screen", metavar="SCREEN", type=int,
                        help="X screen to apply adjustments to")
    parser.add_argument("-t", dest="temperatures", metavar="DAY:NIGHT", type=parse_temperatures,
                        help="Color temperature to set at daytime/night")
    parser.add_argument("-v", dest="verbose", action="store_true",
                        help="Verbose output")
    parser.add_argument("--fallback", dest="fallback", choices=[p.value for p in FallbackPolicy],
                        help="When to fall back to the other adjustment method (default: auto)")
    return parser


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def settings_from_args(args: argparse.Namespace) -> Settings:
    """
    Merge command-line values over environment defaults and validate.

    Raises:
        ConfigurationError: If a value is missing or out of range
    """
    location = args.location or _env_location()
    temperatures = args.temperatures or _env_default(
        parse_temperatures, f"{config.DAY_TEMP}:{config.NIGHT_TEMP}", "DAY_TEMP/NIGHT_TEMP"
    )
    gamma = args.gamma or _env_default(parse_gamma, config.GAMMA, "GAMMA")
    method = args.method or _env_default(parse_method, config.ADJUSTMENT_METHOD, "ADJUSTMENT_METHOD")

    screen = args.screen
    if screen is None and config.SCREEN is not None:
        try:
            screen = int(config.SCREEN)
        except ValueError as e:
            raise ConfigurationError(f"SCREEN: invalid screen number '{config.SCREEN}'") from e

    try:
        fallback = FallbackPolicy(args.fallback or config.FALLBACK_POLICY)
    except ValueError as e:
        raise ConfigurationError(f"FALLBACK_POLICY: unknown policy '{config.FALLBACK_POLICY}'") from e

    latitude, longitude = location if location else (None, None)

    return build_settings(
        latitude,
        longitude,
        day_temp=temperatures[0],
        night_temp=temperatures[1],
        gamma=gamma,
        method=method,
        screen=screen,
        one_shot=args.one_shot,
        startup_transition=args.startup_transition and config.STARTUP_TRANSITION,
        verbose=args.verbose,
        fallback=fallback,
        mock=config.MOCK_MODE,
    )


# ============================================================================
# Run
# ============================================================================

def log_settings(settings: Settings) -> None:
    """Verbose startup diagnostics."""
    loc = settings.location
    g = settings.gamma
    logger.info(f"Location: {loc.latitude:f}{DEG}, {loc.longitude:f}{DEG}")
    logger.info(f"Gamma: {g.red:.3f}, {g.green:.3f}, {g.blue:.3f}")

    sun_times = get_sun_times(loc.latitude, loc.longitude)
    if sun_times is None:
        logger.info("Sun does not rise or set today")
    else:
        sunrise, sunset = sun_times
        logger.info(f"Sunrise: {sunrise:%H:%M} UTC, sunset: {sunset:%H:%M} UTC")


def shutdown_handler(signum, frame):
    """Handle SIGTERM by leaving the adjustment loop."""
    logger.info(f"Received signal {signum}, exiting")
    raise SystemExit(0)


def run(settings: Settings, backends=None, clock=None, sleep: Callable[[float], None] = time.sleep) -> int:
    """
    Adjust the display according to settings.

    Args:
        settings: Validated configuration
        backends: Backend chain (default: selected from settings)
        clock: Clock collaborator (default: system clock)
        sleep: Sleep function for the adjustment loop

    Returns:
        Process exit status
    """
    if settings.verbose:
        enable_verbose(logger)
        log_settings(settings)

    if backends is None:
        backends = create_backends(settings.method, settings.fallback, mock=settings.mock)
    adjuster = DisplayAdjuster(backends, screen=settings.screen)

    try:
        controller = TransitionController(settings, adjuster, clock=clock, sleep=sleep)
        if settings.one_shot:
            controller.one_shot()
        else:
            controller.run()
    except ClockError as e:
        logger.error(f"{e}")
        return 1
    except DisplayAdjustmentError as e:
        logger.error(f"{e}")
        logger.error("Temperature adjustment failed.")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted, exiting")

    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)

    try:
        settings = settings_from_args(args)
    except ConfigurationError as e:
        logger.error(f"{e}")
        return 1

    signal.signal(signal.SIGTERM, shutdown_handler)
    return run(settings)


if __name__ == "__main__":
    sys.exit(main())
