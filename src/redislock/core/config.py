"""Configuration dataclasses for redislock.

These dataclasses centralize all tunables for type safety and easy testing.
They can be built directly in code or from environment variables via
``LockSettings.from_env``.
"""

from __future__ import annotations

import logging
import math
import os
from collections.abc import Callable, Mapping
from dataclasses import asdict, dataclass, field
from typing import Any

from redislock.core.constants import (
    DEFAULT_ACQUIRE_TIMEOUT_SECONDS,
    DEFAULT_LEASE_SECONDS,
    DEFAULT_POLL_EXPONENTIAL_BASE,
    DEFAULT_POLL_INTERVAL_SECONDS,
    DEFAULT_POLL_MAX_INTERVAL_SECONDS,
    DEFAULT_REDIS_URL,
    DEFAULT_SOCKET_TIMEOUT_SECONDS,
    ENV_VAR_MAPPING,
)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class LockConfig:
    """Configuration for a lock handle.

    Attributes:
        prefix: Namespace prepended to every lock name (default: "")
        lease_seconds: Lease granted on each acquire, before tolerance (default: 3)
        acquire_timeout_seconds: Deadline used by the context manager (default: 5.0)
    """

    prefix: str = ""
    lease_seconds: int = DEFAULT_LEASE_SECONDS
    acquire_timeout_seconds: float = DEFAULT_ACQUIRE_TIMEOUT_SECONDS

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class PollConfig:
    """Configuration for the acquire polling loop.

    The default is a fixed 70ms interval. Backoff and jitter are opt-in and
    spread out waiters that would otherwise poll in lockstep.

    Attributes:
        interval_seconds: Base delay between attempts (default: 0.07)
        backoff: Grow the delay exponentially per attempt (default: False)
        exponential_base: Multiplier for exponential backoff (default: 2)
        max_interval_seconds: Cap on the delay when backoff is on (default: 1.0)
        jitter: Multiply each delay by a random factor in [0.5, 1.5] (default: False)
    """

    interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS
    backoff: bool = False
    exponential_base: int = DEFAULT_POLL_EXPONENTIAL_BASE
    max_interval_seconds: float = DEFAULT_POLL_MAX_INTERVAL_SECONDS
    jitter: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class LockSettings:
    """Master configuration for locks sharing one Redis deployment."""

    lock: LockConfig = field(default_factory=LockConfig)
    poll: PollConfig = field(default_factory=PollConfig)
    redis_url: str = DEFAULT_REDIS_URL
    socket_timeout_seconds: float = DEFAULT_SOCKET_TIMEOUT_SECONDS

    def to_dict(self) -> dict[str, Any]:
        return {
            "lock": self.lock.to_dict(),
            "poll": self.poll.to_dict(),
            "redis_url": self.redis_url,
            "socket_timeout_seconds": self.socket_timeout_seconds,
        }

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        logger: logging.Logger | None = None,
    ) -> LockSettings:
        """Create settings with environment overrides applied.

        Invalid values are logged and ignored so a typo in one variable does
        not take the whole process down.
        """
        env = os.environ if environ is None else environ
        log = logger or logging.getLogger(__name__)
        settings = cls()

        for env_name, path in ENV_VAR_MAPPING.items():
            raw = env.get(env_name)
            if raw is None:
                continue
            target, attr = _resolve_target(settings, path)
            current = getattr(target, attr)
            parsed = _parse_env_value(raw, current)
            if parsed is None:
                log.warning(f"Ignoring invalid {env_name}={raw!r}; using default {current!r}")
                continue
            setattr(target, attr, parsed)

        if settings.poll.max_interval_seconds < settings.poll.interval_seconds:
            log.warning(
                f"Ignoring invalid poll window (max_interval={settings.poll.max_interval_seconds} < "
                f"interval={settings.poll.interval_seconds}); using max_interval={settings.poll.interval_seconds}"
            )
            settings.poll.max_interval_seconds = settings.poll.interval_seconds

        return settings


def _resolve_target(settings: LockSettings, path: str) -> tuple[object, str]:
    target: object = settings
    *parents, attr = path.split(".")
    for parent in parents:
        target = getattr(target, parent)
    return target, attr


def _parse_numeric(value: str, cast: Callable[[str], Any]) -> Any | None:
    try:
        parsed = cast(value)
    except (TypeError, ValueError):
        return None
    if isinstance(parsed, float) and not math.isfinite(parsed):
        return None
    if parsed < 0:
        return None
    return parsed


def _parse_env_value(raw: str, current: object) -> object | None:
    """Parse ``raw`` into the type of ``current``; None when invalid."""
    value = raw.strip()
    if isinstance(current, bool):
        lowered = value.lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        return None
    if isinstance(current, int):
        return _parse_numeric(value, int)
    if isinstance(current, float):
        return _parse_numeric(value, float)
    return raw
