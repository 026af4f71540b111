"""
RANDR display backend.

Drives the xrandr utility:
- Extension check via `xrandr --version` (RandR 1.3 or newer required)
- Connected outputs discovered per screen via `xrandr --query`
- Per-output gamma via `xrandr --output NAME --gamma R:G:B`
"""

import re
import subprocess
from typing import Optional

from sunshift.colorramp import temperature_gamma
from sunshift.display import DisplayBackend, BackendUnavailableError, AdjustmentFailedError
from sunshift.logger import logger

MIN_RANDR_VERSION = (1, 3)

_VERSION_RE = re.compile(r"RandR version (\d+)\.(\d+)")
_OUTPUT_RE = re.compile(r"^(\S+)\s+connected", re.MULTILINE)


def _screen_args(screen: Optional[int]) -> list[str]:
    return ["--screen", str(screen)] if screen is not None and screen >= 0 else []


class RandrBackend(DisplayBackend):
    """Color temperature via the X RandR extension."""

    name = "RANDR"

    def _run(self, args: list[str]) -> str:
        result = subprocess.run(
            ["xrandr", *args],
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout

    def check_extension(self) -> None:
        try:
            output = self._run(["--version"])
        except (OSError, subprocess.CalledProcessError) as e:
            raise BackendUnavailableError("RANDR 1.3 extension is not available.") from e

        match = _VERSION_RE.search(output)
        if not match:
            raise BackendUnavailableError("RANDR 1.3 extension is not available.")

        version = (int(match.group(1)), int(match.group(2)))
        if version < MIN_RANDR_VERSION:
            raise BackendUnavailableError(
                f"RANDR 1.3 extension is not available (server reports {version[0]}.{version[1]})."
            )
        logger.debug(f"RandR version {version[0]}.{version[1]} available")

    def connected_outputs(self, screen: Optional[int]) -> list[str]:
        """Names of the connected outputs on a screen."""
        try:
            output = self._run([*_screen_args(screen), "--query"])
        except (OSError, subprocess.CalledProcessError) as e:
            raise AdjustmentFailedError(f"Unable to query outputs: {e}") from e
        return _OUTPUT_RE.findall(output)

    def set_temperature(self, screen: Optional[int], temperature: int, gamma) -> None:
        outputs = self.connected_outputs(screen)
        if not outputs:
            raise AdjustmentFailedError("No connected outputs found.")

        r, g, b = temperature_gamma(temperature, gamma)
        gamma_value = f"{r:.4f}:{g:.4f}:{b:.4f}"

        for output in outputs:
            try:
                self._run([*_screen_args(screen), "--output", output, "--gamma", gamma_value])
            except (OSError, subprocess.CalledProcessError) as e:
                raise AdjustmentFailedError(f"Unable to set gamma on {output}: {e}") from e
            logger.debug(f"RANDR: {output} gamma {gamma_value} ({temperature}K)")
