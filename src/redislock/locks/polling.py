"""Delay policy for the acquire polling loop."""

from __future__ import annotations

import random

from redislock.core.config import PollConfig

# Beyond this the delay is long since capped; avoids float overflow.
_MAX_EXPONENT = 64


class PollPolicy:
    """Compute the sleep between acquire attempts.

    Backoff Formula:
        delay = interval
        if backoff: delay = min(interval * (exponential_base ** attempt), max_interval)
        if jitter: delay = delay * rng.uniform(0.5, 1.5)

    With the default ``PollConfig`` every delay is exactly 70ms, which keeps
    timing reproducible for compatibility tests.
    """

    def __init__(self, config: PollConfig | None = None, rng: random.Random | None = None):
        self.config = config or PollConfig()
        self._rng = rng or random.Random()

    def delay(self, attempt: int) -> float:
        """Seconds to sleep after the zero-based ``attempt`` failed."""
        cfg = self.config
        delay = cfg.interval_seconds
        if cfg.backoff:
            exponent = min(attempt, _MAX_EXPONENT)
            delay = min(cfg.interval_seconds * (cfg.exponential_base**exponent), cfg.max_interval_seconds)
        if cfg.jitter:
            delay = delay * self._rng.uniform(0.5, 1.5)
        return max(0.0, delay)
