"""Fake Time implementation for testing.

FakeTime records sleep calls instead of blocking and returns a fixed clock,
enabling fast and deterministic tests of retry logic.
"""

from datetime import datetime, timedelta

from cursor_setup.gateway.time.abc import Time


class FakeTime(Time):
    """In-memory fake that tracks sleep calls.

    This class has NO public setup methods. All state is provided via constructor.
    Each sleep advances the fake clock by the slept amount.
    """

    def __init__(self, *, current_time: datetime | None = None) -> None:
        """Create FakeTime with an optional starting clock.

        Args:
            current_time: Initial clock value (defaults to 2025-01-01 12:00:00)
        """
        self._current_time = (
            current_time if current_time is not None else datetime(2025, 1, 1, 12, 0, 0)
        )
        self._sleep_calls: list[float] = []

    @property
    def sleep_calls(self) -> list[float]:
        """Get the list of sleep durations requested.

        Returns a copy to prevent accidental mutation by tests.

        This property is for test assertions only.
        """
        return self._sleep_calls.copy()

    def sleep(self, seconds: float) -> None:
        """Record the sleep and advance the fake clock."""
        self._sleep_calls.append(seconds)
        self._current_time = self._current_time + timedelta(seconds=seconds)

    def now(self) -> datetime:
        """Return the fake clock value."""
        return self._current_time
