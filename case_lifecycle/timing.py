"""Timestamps, elapsed-time arithmetic and a simple stopwatch."""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar

log = logging.getLogger(__name__)

US_PER_SECOND = 1_000_000
US_PER_MS = 1_000


@dataclass(frozen=True, kw_only=True)
class Timestamp:
    """A (seconds, microseconds) reading; all zeros means "never stamped"."""

    ZERO: ClassVar["Timestamp"]

    seconds: int = 0
    microseconds: int = 0

    @property
    def is_zero(self) -> bool:
        """Whether this timestamp was never set."""
        return self.seconds == 0 and self.microseconds == 0

    @classmethod
    def from_ns(cls, ns: int) -> "Timestamp":
        """Build a timestamp from a nanosecond counter value."""
        seconds, remainder = divmod(ns // 1_000, US_PER_SECOND)
        return cls(seconds=seconds, microseconds=remainder)

    def total_microseconds(self) -> int:
        """Return the reading as a single microsecond count."""
        return self.seconds * US_PER_SECOND + self.microseconds


Timestamp.ZERO = Timestamp()


class TimeSource(ABC):
    """Source of timestamps for case timing."""

    @abstractmethod
    def now(self) -> Timestamp:
        """Return the current reading."""


class SystemTimeSource(TimeSource):
    """Monotonic clock of the running process."""

    def now(self) -> Timestamp:
        """Read the monotonic clock."""
        return Timestamp.from_ns(time.monotonic_ns())


def time_difference_ms(earlier: Timestamp, later: Timestamp) -> float:
    """Return the whole milliseconds elapsed between two timestamps.

    A negative difference means the readings came out of order. It is
    logged and returned unchanged so the caller can decide what to do.
    """
    delta_us = later.total_microseconds() - earlier.total_microseconds()
    result = float(int(delta_us / US_PER_MS))
    if result < 0:
        log.warning("Backwards time difference: %.0f ms", result)
    return result


@dataclass(kw_only=True)
class Stopwatch:
    """Measures total and lap durations in milliseconds."""

    clock: TimeSource = field(default_factory=SystemTimeSource)
    _start: Timestamp | None = field(default=None, init=False, repr=False)
    _lap: Timestamp | None = field(default=None, init=False, repr=False)

    @property
    def started(self) -> bool:
        """Whether start() has been called."""
        return self._start is not None

    def start(self) -> None:
        """Start (or restart) the stopwatch."""
        self._start = self.clock.now()
        self._lap = self._start

    def duration(self) -> float:
        """Milliseconds since start(), or 0.0 if never started."""
        if self._start is None:
            return 0.0
        return time_difference_ms(self._start, self.clock.now())

    def lap(self) -> float:
        """Milliseconds since the previous lap (or start), then begin a new lap."""
        if self._lap is None:
            return 0.0
        now = self.clock.now()
        result = time_difference_ms(self._lap, now)
        self._lap = now
        return result
