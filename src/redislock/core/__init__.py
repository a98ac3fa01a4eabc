"""Core module - Foundation components with no dependency on Redis.

This module provides the basic building blocks used by the lock:
- Custom exceptions
- Configuration dataclasses
- Protocol constants and defaults
- Logging helpers
- Clock and token sources
"""

from redislock.core.clock import Clock, SystemClock
from redislock.core.config import LockConfig, LockSettings, PollConfig
from redislock.core.constants import (
    DEFAULT_LEASE_SECONDS,
    DEFAULT_POLL_INTERVAL_SECONDS,
    TOKEN_ALPHABET,
    TOKEN_LENGTH,
    TOLERANCE_MILLIS,
)
from redislock.core.exceptions import (
    AcquireTimeoutError,
    ConfigurationError,
    LockStoreError,
    RedisLockError,
    UnexpectedReplyError,
)
from redislock.core.tokens import TokenGenerator, generate_token

__all__ = [
    # Exceptions
    'RedisLockError',
    'ConfigurationError',
    'LockStoreError',
    'UnexpectedReplyError',
    'AcquireTimeoutError',
    # Config dataclasses
    'LockConfig',
    'PollConfig',
    'LockSettings',
    # Constants
    'DEFAULT_LEASE_SECONDS',
    'DEFAULT_POLL_INTERVAL_SECONDS',
    'TOKEN_ALPHABET',
    'TOKEN_LENGTH',
    'TOLERANCE_MILLIS',
    # Time and tokens
    'Clock',
    'SystemClock',
    'TokenGenerator',
    'generate_token',
]
