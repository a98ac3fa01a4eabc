"""Custom exceptions for redislock.

Contention is deliberately absent from this module: a lock held by someone
else is an ordinary outcome, reported as ``False`` rather than raised.
"""

from __future__ import annotations


class RedisLockError(Exception):
    """Base exception for all redislock errors."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ConfigurationError(RedisLockError):
    """Exception raised for invalid lock configuration.

    Examples:
        - Negative lease seconds
        - Non-numeric environment override
        - Empty token alphabet
    """

    def __init__(self, message: str, field: str | None = None, details: str | None = None):
        self.field = field
        super().__init__(message, details)


class LockStoreError(RedisLockError):
    """Exception raised when the store cannot be reached or rejects a command.

    Wraps the client library error with the lock key and the operation that
    failed. Callers should treat it as possibly transient.
    """

    def __init__(
        self,
        message: str,
        key: str | None = None,
        operation: str | None = None,
        details: str | None = None,
        original_error: Exception | None = None,
    ):
        self.key = key
        self.operation = operation
        self.original_error = original_error
        super().__init__(message, details)

    def __str__(self) -> str:
        parts = [self.message]
        if self.operation:
            parts.append(f"during {self.operation}")
        if self.key:
            parts.append(f"key={self.key}")
        if self.details:
            parts.append(self.details)
        return " - ".join(parts)


class UnexpectedReplyError(RedisLockError):
    """A store reply the lock protocol does not recognize.

    Never raised by ``acquire()``; it travels inside ``AcquireResult.error``
    and through ``LockObserver.on_unexpected_reply``.
    """

    def __init__(self, key: str, operation: str, reply: object):
        self.key = key
        self.operation = operation
        self.reply = reply
        super().__init__(f"Unknown reply during {operation} for {key}", details=repr(reply))


class AcquireTimeoutError(RedisLockError):
    """Exception raised when a lock cannot be acquired before the deadline.

    Attributes:
        key: Namespaced lock key
        timeout_seconds: Deadline that was requested
        attempts: Number of acquire attempts made
        last_error: Last store error seen while polling, if any
    """

    def __init__(
        self,
        key: str,
        timeout_seconds: float,
        attempts: int = 0,
        last_error: Exception | None = None,
    ):
        self.key = key
        self.timeout_seconds = timeout_seconds
        self.attempts = attempts
        self.last_error = last_error

        details = f"key {key}, {attempts} attempt(s)"
        if last_error is not None:
            details += f", last store error: {last_error}"
        super().__init__(f"Can't acquire lock within {timeout_seconds:.3f}s", details)
