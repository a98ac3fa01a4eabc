"""Redis-backed distributed lock handle.

Design principles:
- Ownership is the key's value: a live key holds the token of exactly one handle.
- Every write to the key goes through one of the two Lua scripts, so
  compare-then-write never interleaves with another client.
- Contention is an ordinary ``False``; only store failures raise.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum

import redis
from redis.exceptions import RedisError

from redislock.core.clock import Clock, SystemClock
from redislock.core.config import LockConfig, LockSettings, PollConfig
from redislock.core.constants import ACQUIRE_OK_REPLY, MILLIS_PER_SECOND, TOLERANCE_MILLIS
from redislock.core.exceptions import (
    AcquireTimeoutError,
    ConfigurationError,
    LockStoreError,
    UnexpectedReplyError,
)
from redislock.core.logging import with_log_context
from redislock.core.tokens import TokenGenerator
from redislock.locks.observer import LockObserver, LoggingLockObserver
from redislock.locks.polling import PollPolicy
from redislock.locks.scripts import ACQUIRE_SCRIPT, RELEASE_SCRIPT


class AcquireStatus(Enum):
    """Outcome of a single acquire round trip."""

    ACQUIRED = "acquired"
    CONTENDED = "contended"
    UNEXPECTED_REPLY = "unexpected_reply"
    STORE_ERROR = "store_error"


@dataclass(frozen=True)
class AcquireResult:
    status: AcquireStatus
    reply: object = None
    error: Exception | None = None

    @property
    def acquired(self) -> bool:
        return self.status is AcquireStatus.ACQUIRED


def _as_text(value: object) -> object:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


def _validate_lease_seconds(seconds: object) -> int:
    if isinstance(seconds, bool) or not isinstance(seconds, int) or seconds < 0:
        raise ConfigurationError(
            "Lease seconds must be a non-negative integer",
            field="lease_seconds",
            details=f"got {seconds!r}",
        )
    return seconds


class RedisLock:
    """Advisory mutual-exclusion lock on one Redis key.

    One handle is meant to be built per lock use-site and reused across
    acquire/release cycles. The token is fixed for the handle's lifetime, so
    acquiring again while still holding the key extends the lease instead of
    failing.

    Example:
        lock = RedisLock(client, "job:42", prefix="lock:")
        if lock.acquire():
            try:
                run_job()
            finally:
                lock.release()

        with RedisLock(client, "job:42", prefix="lock:"):
            run_job()
    """

    def __init__(
        self,
        client: redis.Redis,
        name: str,
        prefix: str | None = None,
        *,
        config: LockConfig | None = None,
        token_generator: TokenGenerator | None = None,
        clock: Clock | None = None,
        observer: LockObserver | None = None,
        poll_config: PollConfig | None = None,
        poll_policy: PollPolicy | None = None,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ):
        self.config = config or LockConfig()
        resolved_prefix = prefix if prefix is not None else self.config.prefix

        self._client = client
        self._key = f"{resolved_prefix}{name}"
        self._token = (token_generator or TokenGenerator()).generate()
        self._lease_seconds = _validate_lease_seconds(self.config.lease_seconds)
        # Guards the lease and the observed ownership flag.
        self._state_lock = threading.Lock()
        # Last ownership state this handle observed; only used to label events.
        self._believes_held = False

        self.clock = clock or SystemClock()
        self.poll_policy = poll_policy or PollPolicy(poll_config)
        self.logger = with_log_context(logger or logging.getLogger(__name__), key=self._key)
        self.observer = observer or LoggingLockObserver(self.logger)

        self._acquire_script = client.register_script(ACQUIRE_SCRIPT)
        self._release_script = client.register_script(RELEASE_SCRIPT)

    @classmethod
    def from_settings(
        cls,
        client: redis.Redis,
        name: str,
        settings: LockSettings,
        **kwargs,
    ) -> RedisLock:
        """Build a handle using the lock and poll sections of ``settings``."""
        kwargs.setdefault("poll_config", settings.poll)
        return cls(client, name, config=settings.lock, **kwargs)

    @property
    def key(self) -> str:
        return self._key

    @property
    def token(self) -> str:
        return self._token

    @property
    def lease_seconds(self) -> int:
        with self._state_lock:
            return self._lease_seconds

    def set_lease_seconds(self, seconds: int) -> None:
        """Set the lease used by subsequent acquires.

        An already granted lease keeps its expiry until the next acquire
        extends it.
        """
        value = _validate_lease_seconds(seconds)
        with self._state_lock:
            self._lease_seconds = value

    def acquire_result(self) -> AcquireResult:
        """Claim or extend the lock in one atomic round trip."""
        ttl_millis = self.lease_seconds * MILLIS_PER_SECOND + TOLERANCE_MILLIS
        try:
            reply = self._acquire_script(keys=[self._key], args=[self._token, ttl_millis])
        except RedisError as e:
            error = LockStoreError(
                "Error acquiring lock",
                key=self._key,
                operation="acquire",
                details=str(e),
                original_error=e,
            )
            error.__cause__ = e
            self.logger.debug(f"Store error acquiring lock {self._key}: {e}")
            return AcquireResult(status=AcquireStatus.STORE_ERROR, error=error)

        if reply is None:
            with self._state_lock:
                self._believes_held = False
            self.observer.on_contended(self._key)
            return AcquireResult(status=AcquireStatus.CONTENDED)

        if _as_text(reply) == ACQUIRE_OK_REPLY:
            with self._state_lock:
                extended = self._believes_held
                self._believes_held = True
            self.observer.on_acquired(self._key, extended)
            return AcquireResult(status=AcquireStatus.ACQUIRED, reply=reply)

        self.observer.on_unexpected_reply(self._key, "acquire", reply)
        return AcquireResult(
            status=AcquireStatus.UNEXPECTED_REPLY,
            reply=reply,
            error=UnexpectedReplyError(self._key, "acquire", reply),
        )

    def acquire(self) -> bool:
        """Try once to acquire the lock.

        Returns:
            True if this handle now owns the key, False on contention or an
            unrecognized reply

        Raises:
            LockStoreError: If Redis could not be reached
        """
        result = self.acquire_result()
        if result.status is AcquireStatus.STORE_ERROR:
            raise result.error
        return result.acquired

    def try_acquire_within(self, timeout_seconds: float) -> bool:
        """Poll ``acquire`` until it succeeds or ``timeout_seconds`` elapses.

        Store errors are treated like contention while polling; the last one
        is attached to the timeout error.

        Raises:
            AcquireTimeoutError: If the deadline passes without acquiring
        """
        start = self.clock.now()
        attempts = 0
        last_error: Exception | None = None

        while True:
            elapsed = self.clock.now() - start
            # "not <" also stops on a NaN timeout.
            if not elapsed < timeout_seconds:
                break
            result = self.acquire_result()
            attempts += 1
            if result.acquired:
                return True
            if result.status is AcquireStatus.STORE_ERROR:
                last_error = result.error
            self.observer.on_retry(self._key, attempts, elapsed, result)
            self.clock.sleep(self.poll_policy.delay(attempts - 1))

        self.observer.on_timeout(self._key, timeout_seconds, attempts)
        raise AcquireTimeoutError(self._key, timeout_seconds, attempts=attempts, last_error=last_error)

    def release(self) -> bool:
        """Delete the key if this handle still owns it.

        Returns:
            True if the key was deleted, False if another owner holds it or
            it already expired

        Raises:
            LockStoreError: If Redis could not be reached
        """
        try:
            reply = self._release_script(keys=[self._key], args=[self._token])
        except RedisError as e:
            raise LockStoreError(
                "Error releasing lock",
                key=self._key,
                operation="release",
                details=str(e),
                original_error=e,
            ) from e

        if isinstance(reply, int) and not isinstance(reply, bool):
            released = reply == 1
        else:
            self.observer.on_unexpected_reply(self._key, "release", reply)
            released = False

        with self._state_lock:
            self._believes_held = False
        self.observer.on_released(self._key, released)
        return released

    def locked(self) -> bool:
        """Whether the key currently holds this handle's token. Read-only."""
        try:
            value = self._client.get(self._key)
        except RedisError as e:
            raise LockStoreError(
                "Error reading lock",
                key=self._key,
                operation="locked",
                details=str(e),
                original_error=e,
            ) from e
        return _as_text(value) == self._token

    def __enter__(self) -> RedisLock:
        self.try_acquire_within(self.config.acquire_timeout_seconds)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.release()
            return
        # The body's exception wins; a failed release is only logged.
        try:
            self.release()
        except LockStoreError as e:
            self.logger.warning(f"Failed to release lock {self._key} after {exc_type.__name__}: {e}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key={self._key!r}, lease_seconds={self.lease_seconds})"
