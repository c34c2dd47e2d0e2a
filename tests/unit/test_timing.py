"""Tests for timestamps, time differences and the stopwatch."""

import logging

import pytest

from case_lifecycle.testing.clock import ManualTimeSource
from case_lifecycle.timing import (
    Stopwatch,
    SystemTimeSource,
    Timestamp,
    time_difference_ms,
)


def test_zero_timestamp_means_unset() -> None:
    """Only the all-zero timestamp counts as never stamped."""
    assert Timestamp.ZERO.is_zero
    assert not Timestamp(seconds=0, microseconds=1).is_zero
    assert not Timestamp(seconds=1).is_zero


def test_from_ns_splits_seconds_and_microseconds() -> None:
    """Nanosecond readings are split into seconds and microseconds."""
    stamp = Timestamp.from_ns(1_500_000_999)

    assert stamp == Timestamp(seconds=1, microseconds=500_000)


def test_system_time_source_is_monotonic() -> None:
    """Consecutive system readings never go backwards."""
    source = SystemTimeSource()

    first = source.now()
    second = source.now()

    assert second.total_microseconds() >= first.total_microseconds()
    assert not first.is_zero


def test_time_difference_is_whole_milliseconds() -> None:
    """Differences are truncated to whole milliseconds across second borders."""
    earlier = Timestamp(seconds=10, microseconds=999_500)
    later = Timestamp(seconds=12, microseconds=1_400)

    assert time_difference_ms(earlier, later) == 1001.0


def test_negative_time_difference_is_reported(
    caplog: pytest.LogCaptureFixture,
) -> None:
    """A backwards difference is logged and returned, not raised."""
    earlier = Timestamp(seconds=20)
    later = Timestamp(seconds=19, microseconds=750_000)

    with caplog.at_level(logging.WARNING):
        result = time_difference_ms(earlier, later)

    assert result == -250.0
    assert "Backwards time difference" in caplog.text


class TestStopwatch:
    """Tests for Stopwatch."""

    def test_reports_zero_before_start(self) -> None:
        """An unstarted stopwatch measures nothing."""
        stopwatch = Stopwatch(clock=ManualTimeSource())

        assert not stopwatch.started
        assert stopwatch.duration() == 0.0
        assert stopwatch.lap() == 0.0

    def test_measures_duration_and_laps(self) -> None:
        """Laps restart from the previous lap, duration from the start."""
        clock = ManualTimeSource()
        stopwatch = Stopwatch(clock=clock)
        stopwatch.start()

        clock.advance(100)
        assert stopwatch.lap() == 100.0

        clock.advance(50)
        assert stopwatch.lap() == 50.0
        assert stopwatch.duration() == 150.0

    def test_restart_resets_both_marks(self) -> None:
        """Calling start() again measures from the new start."""
        clock = ManualTimeSource()
        stopwatch = Stopwatch(clock=clock)
        stopwatch.start()
        clock.advance(500)

        stopwatch.start()
        clock.advance(20)

        assert stopwatch.duration() == 20.0
        assert stopwatch.lap() == 20.0
