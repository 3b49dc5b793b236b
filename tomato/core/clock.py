from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    def now(self) -> float:
        """Current instant in seconds."""


class MonotonicClock:
    """Reads `time.monotonic()`, immune to wall-clock adjustments."""

    def now(self) -> float:
        return time.monotonic()
