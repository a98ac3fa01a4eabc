"""Locking subsystem for cross-process coordination through Redis.

This package keeps the lock protocol (Lua scripts, handle, polling, and
observer hooks) behind a small API so callers only deal with ``RedisLock``.
"""

from redislock.locks.client import create_redis_client
from redislock.locks.observer import (
    CompositeLockObserver,
    CountingLockObserver,
    LockObserver,
    LoggingLockObserver,
    NullLockObserver,
)
from redislock.locks.polling import PollPolicy
from redislock.locks.redis_lock import AcquireResult, AcquireStatus, RedisLock

__all__ = [
    "AcquireResult",
    "AcquireStatus",
    "CompositeLockObserver",
    "CountingLockObserver",
    "LockObserver",
    "LoggingLockObserver",
    "NullLockObserver",
    "PollPolicy",
    "RedisLock",
    "create_redis_client",
]
