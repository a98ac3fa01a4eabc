"""Time source used by the acquire polling loop."""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Source of "now" plus a blocking sleep primitive."""

    def now(self) -> float:
        """Seconds from an arbitrary, non-decreasing reference point."""

    def sleep(self, seconds: float) -> None:
        """Block the calling thread for ``seconds``."""


class SystemClock:
    """Clock backed by ``time.monotonic`` and ``time.sleep``.

    Monotonic time keeps deadlines stable when the wall clock is adjusted.
    """

    def now(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)
