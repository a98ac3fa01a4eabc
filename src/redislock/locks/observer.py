"""Observer hooks for lock activity.

Retry visibility and protocol anomalies are reported through these hooks
instead of being printed, so operators can route them to logs or metrics and
tests can count them directly.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from redislock.locks.redis_lock import AcquireResult


class LockObserver(Protocol):
    """Receives lock lifecycle events. Implementations must be thread-safe."""

    def on_acquired(self, key: str, extended: bool) -> None: ...

    def on_contended(self, key: str) -> None: ...

    def on_retry(self, key: str, attempt: int, elapsed_seconds: float, result: AcquireResult) -> None: ...

    def on_unexpected_reply(self, key: str, operation: str, reply: object) -> None: ...

    def on_released(self, key: str, released: bool) -> None: ...

    def on_timeout(self, key: str, timeout_seconds: float, attempts: int) -> None: ...


class NullLockObserver:
    """Observer that ignores every event."""

    def on_acquired(self, key: str, extended: bool) -> None:
        pass

    def on_contended(self, key: str) -> None:
        pass

    def on_retry(self, key: str, attempt: int, elapsed_seconds: float, result: AcquireResult) -> None:
        pass

    def on_unexpected_reply(self, key: str, operation: str, reply: object) -> None:
        pass

    def on_released(self, key: str, released: bool) -> None:
        pass

    def on_timeout(self, key: str, timeout_seconds: float, attempts: int) -> None:
        pass


class LoggingLockObserver:
    """Observer that writes events to a logger.

    Retries are frequent and logged at DEBUG; anomalies and timeouts are
    logged at WARNING.
    """

    def __init__(self, logger: logging.Logger | logging.LoggerAdapter | None = None):
        self.logger = logger or logging.getLogger(__name__)

    def on_acquired(self, key: str, extended: bool) -> None:
        self.logger.debug(f"Lock {key} {'extended' if extended else 'acquired'}", extra={"key": key})

    def on_contended(self, key: str) -> None:
        self.logger.debug(f"Lock {key} is held by another owner", extra={"key": key})

    def on_retry(self, key: str, attempt: int, elapsed_seconds: float, result: AcquireResult) -> None:
        if result.error is not None:
            self.logger.debug(
                f"Lock {key} attempt {attempt} failed after {elapsed_seconds:.3f}s: {result.error}",
                extra={"key": key},
            )
        else:
            self.logger.debug(
                f"Lock {key} attempt {attempt} contended after {elapsed_seconds:.3f}s, retrying",
                extra={"key": key},
            )

    def on_unexpected_reply(self, key: str, operation: str, reply: object) -> None:
        self.logger.warning(f"Unknown reply during {operation} for {key}: {reply!r}", extra={"key": key})

    def on_released(self, key: str, released: bool) -> None:
        if released:
            self.logger.debug(f"Lock {key} released", extra={"key": key})
        else:
            self.logger.debug(f"Lock {key} not released (not the current owner)", extra={"key": key})

    def on_timeout(self, key: str, timeout_seconds: float, attempts: int) -> None:
        self.logger.warning(
            f"Gave up on lock {key} after {attempts} attempt(s) within {timeout_seconds:.3f}s",
            extra={"key": key},
        )


class CountingLockObserver:
    """Thread-safe observer that tallies events for tests and metrics export."""

    def __init__(self):
        self._lock = threading.Lock()
        self._acquired = 0
        self._extended = 0
        self._contended = 0
        self._retries = 0
        self._retry_errors = 0
        self._unexpected_replies = 0
        self._released = 0
        self._release_misses = 0
        self._timeouts = 0

    def on_acquired(self, key: str, extended: bool) -> None:
        with self._lock:
            self._acquired += 1
            if extended:
                self._extended += 1

    def on_contended(self, key: str) -> None:
        with self._lock:
            self._contended += 1

    def on_retry(self, key: str, attempt: int, elapsed_seconds: float, result: AcquireResult) -> None:
        with self._lock:
            self._retries += 1
            if result.error is not None:
                self._retry_errors += 1

    def on_unexpected_reply(self, key: str, operation: str, reply: object) -> None:
        with self._lock:
            self._unexpected_replies += 1

    def on_released(self, key: str, released: bool) -> None:
        with self._lock:
            if released:
                self._released += 1
            else:
                self._release_misses += 1

    def on_timeout(self, key: str, timeout_seconds: float, attempts: int) -> None:
        with self._lock:
            self._timeouts += 1

    def get_statistics(self) -> dict[str, Any]:
        """
        Get event counts.

        Returns:
            Dict of counters keyed by event name
        """
        with self._lock:
            return {
                "acquired": self._acquired,
                "extended": self._extended,
                "contended": self._contended,
                "retries": self._retries,
                "retry_errors": self._retry_errors,
                "unexpected_replies": self._unexpected_replies,
                "released": self._released,
                "release_misses": self._release_misses,
                "timeouts": self._timeouts,
            }


class CompositeLockObserver:
    """Fan each event out to several observers, in order."""

    def __init__(self, observers: Iterable[LockObserver]):
        self.observers = list(observers)

    def on_acquired(self, key: str, extended: bool) -> None:
        for observer in self.observers:
            observer.on_acquired(key, extended)

    def on_contended(self, key: str) -> None:
        for observer in self.observers:
            observer.on_contended(key)

    def on_retry(self, key: str, attempt: int, elapsed_seconds: float, result: AcquireResult) -> None:
        for observer in self.observers:
            observer.on_retry(key, attempt, elapsed_seconds, result)

    def on_unexpected_reply(self, key: str, operation: str, reply: object) -> None:
        for observer in self.observers:
            observer.on_unexpected_reply(key, operation, reply)

    def on_released(self, key: str, released: bool) -> None:
        for observer in self.observers:
            observer.on_released(key, released)

    def on_timeout(self, key: str, timeout_seconds: float, attempts: int) -> None:
        for observer in self.observers:
            observer.on_timeout(key, timeout_seconds, attempts)
