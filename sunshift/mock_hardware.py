"""
Mock display backend for running without an X server.

Enable mock mode by setting MOCK_MODE=true in .env

Features:
- Records every adjustment for inspection
- Can simulate a missing extension or a failing set operation
- Compatible interface with the real backends
"""

from dataclasses import dataclass
from typing import Optional

from sunshift.colorramp import temperature_gamma
from sunshift.display import DisplayBackend, BackendUnavailableError, AdjustmentFailedError
from sunshift.logger import logger


@dataclass
class MockAdjustment:
    """Single recorded set_temperature call"""
    screen: Optional[int]
    temperature: int
    gamma: tuple[float, float, float]
    channel_gamma: tuple[float, float, float]


class MockDisplayBackend(DisplayBackend):
    """
    Mock display backend.

    Drop-in replacement for RandrBackend / VidModeBackend when MOCK_MODE=true
    """

    def __init__(self, name: str = "Mock", available: bool = True, fail: bool = False):
        """
        Initialize mock backend.

        Args:
            name: Backend name used in log messages
            available: False to simulate a missing extension
            fail: True to make every set_temperature call fail
        """
        self.name = name
        self.available = available
        self.fail = fail
        self.check_calls = 0
        self.adjustments: list[MockAdjustment] = []
        logger.info(f"[MOCK] Created display backend '{name}'")

    def check_extension(self) -> None:
        """Simulate the extension check"""
        self.check_calls += 1
        if not self.available:
            raise BackendUnavailableError(f"{self.name} extension is not available.")

    def set_temperature(self, screen: Optional[int], temperature: int, gamma) -> None:
        """Record the adjustment (log for mock)"""
        if self.fail:
            raise AdjustmentFailedError(f"{self.name} set operation failed")

        channel_gamma = temperature_gamma(temperature, gamma)
        self.adjustments.append(MockAdjustment(
            screen=screen,
            temperature=temperature,
            gamma=gamma.as_tuple(),
            channel_gamma=channel_gamma,
        ))
        logger.debug(
            f"[MOCK] Set temperature {temperature}K on screen {screen}, "
            f"gamma={channel_gamma[0]:.3f}:{channel_gamma[1]:.3f}:{channel_gamma[2]:.3f}"
        )

    @property
    def temperatures(self) -> list[int]:
        """Temperatures applied so far, oldest first"""
        return [a.temperature for a in self.adjustments]
