"""
Wall clock access.

TimePoint keeps whole seconds and nanoseconds separately so that
sub-second precision survives arithmetic on large epoch values.
"""

import time
from dataclasses import dataclass

NANOSECONDS_PER_SECOND = 1_000_000_000


class ClockError(RuntimeError):
    """The system clock could not be read."""


@dataclass(frozen=True, order=True)
class TimePoint:
    """Instant in time, UTC-referenced, since the Unix epoch."""
    seconds: int
    nanoseconds: int = 0

    @classmethod
    def from_ns(cls, total_ns: int) -> "TimePoint":
        seconds, nanoseconds = divmod(total_ns, NANOSECONDS_PER_SECOND)
        return cls(seconds=seconds, nanoseconds=nanoseconds)

    @classmethod
    def from_timestamp(cls, timestamp: float) -> "TimePoint":
        return cls.from_ns(round(timestamp * NANOSECONDS_PER_SECOND))

    @property
    def timestamp(self) -> float:
        """Fractional seconds since the epoch."""
        return self.seconds + self.nanoseconds / NANOSECONDS_PER_SECOND

    def add_seconds(self, seconds: float) -> "TimePoint":
        total_ns = self.seconds * NANOSECONDS_PER_SECOND + self.nanoseconds
        return TimePoint.from_ns(total_ns + round(seconds * NANOSECONDS_PER_SECOND))

    def seconds_until(self, other: "TimePoint") -> float:
        """Signed number of seconds from this instant to ``other``."""
        delta_s = other.seconds - self.seconds
        delta_ns = other.nanoseconds - self.nanoseconds
        return delta_s + delta_ns / NANOSECONDS_PER_SECOND


class SystemClock:
    """Clock collaborator backed by the real-time system clock."""

    def now(self) -> TimePoint:
        try:
            return TimePoint.from_ns(time.time_ns())
        except OSError as e:
            raise ClockError(f"Unable to read system clock: {e}") from e
