"""
VidMode display backend.

Drives the xgamma utility, which talks to the XFree86-VidModeExtension.
Gamma is per X screen, there is no per-output control.
"""

import subprocess
from typing import Optional

from sunshift.colorramp import temperature_gamma
from sunshift.display import DisplayBackend, BackendUnavailableError, AdjustmentFailedError
from sunshift.logger import logger


def _screen_args(screen: Optional[int]) -> list[str]:
    return ["-screen", str(screen)] if screen is not None and screen >= 0 else []


class VidModeBackend(DisplayBackend):
    """Color temperature via the X VidMode extension."""

    name = "VidMode"

    def _run(self, args: list[str]) -> subprocess.CompletedProcess:
        return subprocess.run(
            ["xgamma", *args],
            capture_output=True,
            text=True,
            check=True,
        )

    def check_extension(self) -> None:
        # Without arguments xgamma only queries the current gamma
        try:
            self._run([])
        except (OSError, subprocess.CalledProcessError) as e:
            raise BackendUnavailableError("VidMode extension is not available.") from e

    def set_temperature(self, screen: Optional[int], temperature: int, gamma) -> None:
        r, g, b = temperature_gamma(temperature, gamma)
        args = [
            *_screen_args(screen),
            "-quiet",
            "-rgamma", f"{r:.4f}",
            "-ggamma", f"{g:.4f}",
            "-bgamma", f"{b:.4f}",
        ]

        try:
            self._run(args)
        except (OSError, subprocess.CalledProcessError) as e:
            raise AdjustmentFailedError(f"xgamma failed: {e}") from e

        logger.debug(f"VidMode: gamma {r:.4f}:{g:.4f}:{b:.4f} ({temperature}K)")
