"""
redislock - Distributed mutual-exclusion locks on Redis

Token-owned keys with atomic acquire/extend and guarded release, plus a
bounded polling wrapper for callers willing to wait.
"""

from redislock.core import (
    AcquireTimeoutError,
    ConfigurationError,
    LockConfig,
    LockSettings,
    LockStoreError,
    PollConfig,
    RedisLockError,
    TokenGenerator,
    UnexpectedReplyError,
)
from redislock.core.logging import setup_logging
from redislock.locks import (
    AcquireResult,
    AcquireStatus,
    CountingLockObserver,
    LockObserver,
    LoggingLockObserver,
    RedisLock,
    create_redis_client,
)

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "AcquireResult",
    "AcquireStatus",
    "AcquireTimeoutError",
    "ConfigurationError",
    "CountingLockObserver",
    "LockConfig",
    "LockObserver",
    "LockSettings",
    "LockStoreError",
    "LoggingLockObserver",
    "PollConfig",
    "RedisLock",
    "RedisLockError",
    "TokenGenerator",
    "UnexpectedReplyError",
    "create_redis_client",
    "setup_logging",
]
