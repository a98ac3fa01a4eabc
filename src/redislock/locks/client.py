"""Redis client construction from lock settings."""

from __future__ import annotations

import logging

import redis

from redislock.core.config import LockSettings


def create_redis_client(
    settings: LockSettings | None = None,
    *,
    logger: logging.Logger | None = None,
) -> redis.Redis:
    """Create a Redis client for lock traffic.

    Connections are opened lazily by the client's pool; no round trip
    happens here.
    """
    cfg = settings or LockSettings.from_env()
    log = logger or logging.getLogger(__name__)
    log.debug(f"Creating Redis client for {cfg.redis_url}")
    return redis.Redis.from_url(
        cfg.redis_url,
        socket_timeout=cfg.socket_timeout_seconds,
        socket_connect_timeout=cfg.socket_timeout_seconds,
    )
