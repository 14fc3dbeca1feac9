"""Real time implementation using time.sleep() and datetime.now()."""

import time
from datetime import datetime

from cursor_setup.gateway.time.abc import Time


class RealTime(Time):
    """Production implementation using the system clock."""

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)

    def now(self) -> datetime:
        return datetime.now()
