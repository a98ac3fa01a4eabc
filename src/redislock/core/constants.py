"""Constants and default values for redislock.

This module centralizes the protocol constants shared by every handle that
talks to the same Redis keyspace. Interoperating implementations must agree
on these values.
"""

import string

# ==================== PROTOCOL CONSTANTS ====================

# Token alphabet: ASCII letters, lowercase first
TOKEN_ALPHABET: str = string.ascii_letters
TOKEN_LENGTH: int = 16

# Extra time added to every lease to absorb clock skew and network latency
TOLERANCE_MILLIS: int = 500
MILLIS_PER_SECOND: int = 1000

DEFAULT_LEASE_SECONDS: int = 3
DEFAULT_POLL_INTERVAL_SECONDS: float = 0.07  # 70ms between acquire attempts

# Reply returned by the acquire script when the caller now owns the key
ACQUIRE_OK_REPLY: str = "OK"

# ==================== CONFIG DEFAULTS ====================

DEFAULT_ACQUIRE_TIMEOUT_SECONDS: float = 5.0
DEFAULT_POLL_MAX_INTERVAL_SECONDS: float = 1.0
DEFAULT_POLL_EXPONENTIAL_BASE: int = 2
DEFAULT_REDIS_URL: str = "redis://localhost:6379/0"
DEFAULT_SOCKET_TIMEOUT_SECONDS: float = 5.0

# ==================== LOGGING DEFAULTS ====================

LOG_FILE_MAX_BYTES: int = 10 * 1024 * 1024  # 10MB max per log file
LOG_FILE_BACKUP_COUNT: int = 5  # Number of backup log files to keep

# ==================== ENVIRONMENT ====================

# Environment variable -> LockSettings attribute path
ENV_VAR_MAPPING: dict[str, str] = {
    "REDISLOCK_REDIS_URL": "redis_url",
    "REDISLOCK_SOCKET_TIMEOUT": "socket_timeout_seconds",
    "REDISLOCK_PREFIX": "lock.prefix",
    "REDISLOCK_LEASE_SECONDS": "lock.lease_seconds",
    "REDISLOCK_ACQUIRE_TIMEOUT": "lock.acquire_timeout_seconds",
    "REDISLOCK_POLL_INTERVAL": "poll.interval_seconds",
    "REDISLOCK_POLL_BACKOFF": "poll.backoff",
    "REDISLOCK_POLL_MAX_INTERVAL": "poll.max_interval_seconds",
    "REDISLOCK_POLL_JITTER": "poll.jitter",
}

LOG_LEVEL_ENV: str = "REDISLOCK_LOG_LEVEL"
