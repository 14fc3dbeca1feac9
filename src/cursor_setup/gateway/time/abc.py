"""Time operations abstraction for testing.

This module provides an ABC for sleeping and reading the clock so that
retry loops and timestamped file names can be tested without real waits.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class Time(ABC):
    """Abstract time operations for dependency injection."""

    @abstractmethod
    def sleep(self, seconds: float) -> None:
        """Block for the given number of seconds.

        Args:
            seconds: Number of seconds to sleep
        """
        ...

    @abstractmethod
    def now(self) -> datetime:
        """Get the current local time.

        Returns:
            Current datetime
        """
        ...
