"""
Color temperature transition controller.

Features:
- Periodic sampling loop (clock -> solar elevation -> curve -> display)
- Short startup ramp from neutral white to the computed temperature
- Fast polling while the ramp runs, slow polling afterwards
- One-shot mode (single adjustment, no loop)
- Injectable clock and sleep for testing
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from sunshift.clock import SystemClock, TimePoint
from sunshift.config import TRANSITION_POLL_INTERVAL, STEADY_POLL_INTERVAL
from sunshift.curve import calculate_temp
from sunshift.display import DisplayAdjuster
from sunshift.logger import logger
from sunshift.models import DEG, Settings
from sunshift.solar import elevation

# Neutral white the startup ramp starts from (Kelvin)
NEUTRAL_TEMP = 6500

# Length of the startup ramp (seconds)
STARTUP_TRANSITION_DURATION = 10


class ControllerState(str, Enum):
    """Transition controller state."""
    STARTUP_BLENDING = "STARTUP_BLENDING"
    STEADY = "STEADY"


@dataclass
class TransitionState:
    """Startup ramp bookkeeping, the only state kept across ticks."""
    enabled: bool
    start_time: TimePoint
    end_time: TimePoint
    duration_seconds: float = STARTUP_TRANSITION_DURATION

    @classmethod
    def starting_at(cls, start: TimePoint, enabled: bool = True,
                    duration: float = STARTUP_TRANSITION_DURATION) -> "TransitionState":
        return cls(
            enabled=enabled,
            start_time=start,
            end_time=start.add_seconds(duration),
            duration_seconds=duration,
        )

    def alpha(self, now: TimePoint) -> float:
        """Weight of the neutral temperature; negative once the ramp is over."""
        return now.seconds_until(self.end_time) / self.duration_seconds


@dataclass(frozen=True)
class TickResult:
    """Outcome of one sample/compute/adjust cycle."""
    time: TimePoint
    elevation: float
    period: str
    raw_temperature: int
    temperature: int
    state: ControllerState


class TransitionController:
    """
    Drives periodic color temperature adjustment.

    Starts in STARTUP_BLENDING when the startup transition is enabled and
    moves to STEADY for good once the ramp has run out.
    """

    def __init__(
        self,
        settings: Settings,
        adjuster: DisplayAdjuster,
        clock=None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize controller.

        Args:
            settings: Validated configuration
            adjuster: DisplayAdjuster applying temperatures
            clock: Object with now() -> TimePoint (default: system clock)
            sleep: Function used to wait between ticks
        """
        self.settings = settings
        self.adjuster = adjuster
        self.clock = clock or SystemClock()
        self.sleep = sleep
        self.tick_count = 0

        start = self.clock.now()
        self.transition = TransitionState.starting_at(start, enabled=settings.startup_transition)

        logger.info(
            f"Transition controller initialized (state={self.state.value}, "
            f"day={settings.temperatures.day_temp}K, night={settings.temperatures.night_temp}K)"
        )

    @property
    def state(self) -> ControllerState:
        if self.transition.enabled:
            return ControllerState.STARTUP_BLENDING
        return ControllerState.STEADY

    @property
    def poll_interval(self) -> float:
        """Seconds to wait before the next tick."""
        if self.state == ControllerState.STARTUP_BLENDING:
            return TRANSITION_POLL_INTERVAL
        return STEADY_POLL_INTERVAL

    def blend(self, raw_temp: int, now: TimePoint) -> int:
        """
        Apply the startup ramp to a raw curve temperature.

        Args:
            raw_temp: Temperature from the curve (Kelvin)
            now: Current time

        Returns:
            Temperature to display
        """
        if not self.transition.enabled:
            return raw_temp

        alpha = self.transition.alpha(now)
        if alpha < 0:
            self.transition.enabled = False
            logger.info("Startup transition complete")
            return raw_temp

        return int(alpha * NEUTRAL_TEMP + (1.0 - alpha) * raw_temp)

    def compute(self, now: TimePoint, blending: bool = True) -> TickResult:
        """Elevation, curve and (optionally) startup blend for one instant."""
        temps = self.settings.temperatures
        elev = elevation(now, self.settings.location)
        result = calculate_temp(elev, temps.day_temp, temps.night_temp)

        temperature = self.blend(result.temperature, now) if blending else result.temperature

        return TickResult(
            time=now,
            elevation=elev,
            period=result.label,
            raw_temperature=result.temperature,
            temperature=temperature,
            state=self.state,
        )

    def _report(self, tick: TickResult) -> None:
        if self.settings.verbose:
            logger.info(f"Solar elevation: {tick.elevation:f}{DEG}")
            logger.info(f"Period: {tick.period}")
            logger.info(f"Color temperature: {tick.temperature}K")
        else:
            logger.debug(
                f"Tick: elevation={tick.elevation:.3f}, period={tick.period}, "
                f"temperature={tick.temperature}K ({tick.state.value})"
            )

    def tick(self) -> TickResult:
        """
        Run one read-time/compute/adjust cycle.

        Raises:
            ClockError: If the clock cannot be read
            AdjustmentFailedError: If the display could not be adjusted
        """
        now = self.clock.now()
        result = self.compute(now)
        self._report(result)
        self.adjuster.apply(result.temperature, self.settings.gamma)
        self.tick_count += 1
        return result

    def one_shot(self) -> TickResult:
        """Single adjustment from the instantaneous elevation, no ramp, no sleep."""
        now = self.clock.now()
        result = self.compute(now, blending=False)
        self._report(result)
        self.adjuster.apply(result.temperature, self.settings.gamma)
        self.tick_count += 1
        return result

    def run(self, max_ticks: Optional[int] = None) -> None:
        """
        Main adjustment loop.

        Runs until the process is stopped, or for max_ticks ticks. Errors
        from the clock or the display propagate and end the loop.
        """
        logger.info("Adjustment loop started")

        while max_ticks is None or self.tick_count < max_ticks:
            self.tick()
            if max_ticks is not None and self.tick_count >= max_ticks:
                break
            self.sleep(self.poll_interval)

        logger.info("Adjustment loop stopped")
