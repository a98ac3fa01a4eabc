"""
Tests for observer hooks and Redis client construction
"""

import logging
from unittest.mock import Mock

import redis

from redislock import LockSettings, RedisLock, create_redis_client
from redislock.core.exceptions import LockStoreError
from redislock.locks.observer import (
    CompositeLockObserver,
    CountingLockObserver,
    LoggingLockObserver,
    NullLockObserver,
)
from redislock.locks.redis_lock import AcquireResult, AcquireStatus


class TestObservers:
    """Test observer implementations"""

    def test_counting_observer_tracks_lock_lifecycle(self, redis_client, counting_observer):
        owner = RedisLock(redis_client, "job:1", "lock:", observer=counting_observer)
        other = RedisLock(redis_client, "job:1", "lock:", observer=counting_observer)

        owner.acquire()
        owner.acquire()
        other.acquire()
        other.release()
        owner.release()

        assert counting_observer.get_statistics() == {
            "acquired": 2,
            "extended": 1,
            "contended": 1,
            "retries": 0,
            "retry_errors": 0,
            "unexpected_replies": 0,
            "released": 1,
            "release_misses": 1,
            "timeouts": 0,
        }

    def test_composite_fans_out_in_order(self):
        calls = []
        first = Mock()
        first.on_timeout.side_effect = lambda *a: calls.append("first")
        second = Mock()
        second.on_timeout.side_effect = lambda *a: calls.append("second")

        CompositeLockObserver([first, second]).on_timeout("lock:a", 0.1, 2)

        assert calls == ["first", "second"]
        second.on_timeout.assert_called_once_with("lock:a", 0.1, 2)

    def test_composite_forwards_every_event(self):
        target = Mock()
        composite = CompositeLockObserver([target])
        result = AcquireResult(status=AcquireStatus.CONTENDED)

        composite.on_acquired("k", True)
        composite.on_contended("k")
        composite.on_retry("k", 1, 0.07, result)
        composite.on_unexpected_reply("k", "acquire", 42)
        composite.on_released("k", False)
        composite.on_timeout("k", 1.0, 3)

        target.on_acquired.assert_called_once_with("k", True)
        target.on_contended.assert_called_once_with("k")
        target.on_retry.assert_called_once_with("k", 1, 0.07, result)
        target.on_unexpected_reply.assert_called_once_with("k", "acquire", 42)
        target.on_released.assert_called_once_with("k", False)
        target.on_timeout.assert_called_once_with("k", 1.0, 3)

    def test_null_observer_accepts_all_events(self, redis_client):
        lock = RedisLock(redis_client, "job:1", observer=NullLockObserver())

        assert lock.acquire() is True
        assert lock.release() is True

    def test_logging_observer_levels(self, caplog):
        observer = LoggingLockObserver(logging.getLogger("redislock.test.observer"))
        store_error = LockStoreError("Error acquiring lock", key="lock:a", operation="acquire")

        with caplog.at_level(logging.DEBUG, logger="redislock.test.observer"):
            observer.on_retry("lock:a", 1, 0.0, AcquireResult(status=AcquireStatus.CONTENDED))
            observer.on_retry("lock:a", 2, 0.07, AcquireResult(status=AcquireStatus.STORE_ERROR, error=store_error))
            observer.on_timeout("lock:a", 0.1, 2)

        levels = [(r.levelno, r.getMessage()) for r in caplog.records]
        assert levels[0][0] == logging.DEBUG
        assert "contended" in levels[0][1]
        assert "Error acquiring lock" in levels[1][1]
        assert levels[2][0] == logging.WARNING
        assert "after 2 attempt(s)" in levels[2][1]
        assert all(r.key == "lock:a" for r in caplog.records)


class TestClientFactory:
    """Test create_redis_client"""

    def test_client_uses_settings(self):
        settings = LockSettings(redis_url="redis://cache.internal:6380/3", socket_timeout_seconds=1.5)

        client = create_redis_client(settings)

        assert isinstance(client, redis.Redis)
        kwargs = client.connection_pool.connection_kwargs
        assert kwargs["host"] == "cache.internal"
        assert kwargs["port"] == 6380
        assert kwargs["db"] == 3
        assert kwargs["socket_timeout"] == 1.5
        assert kwargs["socket_connect_timeout"] == 1.5

    def test_client_defaults_to_environment(self, monkeypatch):
        monkeypatch.setenv("REDISLOCK_REDIS_URL", "redis://envhost:6390/1")

        client = create_redis_client()

        assert client.connection_pool.connection_kwargs["host"] == "envhost"

    def test_lock_from_settings(self, redis_client):
        settings = LockSettings.from_env({"REDISLOCK_PREFIX": "svc:", "REDISLOCK_LEASE_SECONDS": "9"})

        lock = RedisLock.from_settings(redis_client, "job:7", settings)

        assert lock.key == "svc:job:7"
        assert lock.lease_seconds == 9
        assert lock.poll_policy.config is settings.poll
