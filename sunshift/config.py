"""
Configuration management with environment variable support.

Every command-line flag has an environment variable default.
Automatically loads .env file if present.
"""

import os
from pathlib import Path
from typing import Literal
from dotenv import load_dotenv

# Load .env file from project root (one level up from sunshift/)
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Logging configuration
LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = os.getenv("LOG_LEVEL", "INFO")

# Mock display mode (for running without an X server)
MOCK_MODE: bool = os.getenv("MOCK_MODE", "false").lower() == "true"

# Location (unset = must be given with -l)
LATITUDE: str | None = os.getenv("LATITUDE")
LONGITUDE: str | None = os.getenv("LONGITUDE")

# Color temperature at daytime / night (Kelvin)
DAY_TEMP: str = os.getenv("DAY_TEMP", "5500")
NIGHT_TEMP: str = os.getenv("NIGHT_TEMP", "3700")

# Gamma correction: "G" for all channels or "R:G:B"
GAMMA: str = os.getenv("GAMMA", "1.0")

# Adjustment method: "randr", "vidmode" or unset (randr with vidmode fallback)
ADJUSTMENT_METHOD: str | None = os.getenv("ADJUSTMENT_METHOD") or None

# X screen to apply adjustments to (unset = default screen)
SCREEN: str | None = os.getenv("SCREEN") or None

# Startup transition from neutral white
STARTUP_TRANSITION: bool = os.getenv("STARTUP_TRANSITION", "true").lower() == "true"

# Backend fallback: "never", "auto" or "always"
FALLBACK_POLICY: Literal["never", "auto", "always"] = os.getenv("FALLBACK_POLICY", "auto").lower()

# Bounds for parameters
MIN_LAT: float = -90.0
MAX_LAT: float = 90.0
MIN_LON: float = -180.0
MAX_LON: float = 180.0
MIN_TEMP: int = 1000
MAX_TEMP: int = 10000
MIN_GAMMA: float = 0.1
MAX_GAMMA: float = 10.0

# Polling cadence (seconds)
TRANSITION_POLL_INTERVAL: float = 0.1
STEADY_POLL_INTERVAL: float = 5.0
