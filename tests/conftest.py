"""Pytest configuration and fixtures for redislock tests"""

import random

import fakeredis
import pytest

from redislock.core.tokens import TokenGenerator
from redislock.locks.observer import CountingLockObserver


class FakeClock:
    """Clock double: ``sleep`` advances ``now`` instantly and is recorded."""

    def __init__(self, start: float = 1000.0):
        self.current = start
        self.sleeps: list[float] = []

    def now(self) -> float:
        return self.current

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.current += seconds


@pytest.fixture
def fake_server():
    """Shared in-process Redis server; clients on it see the same keyspace."""
    return fakeredis.FakeServer()


@pytest.fixture
def redis_client(fake_server):
    """Redis client backed by fakeredis (Lua scripting enabled)."""
    client = fakeredis.FakeRedis(server=fake_server)
    client.flushall()
    yield client
    client.flushall()


@pytest.fixture
def make_client(fake_server):
    """Factory for extra clients on the same server, one per simulated process."""

    def _make(**kwargs):
        return fakeredis.FakeRedis(server=fake_server, **kwargs)

    return _make


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def counting_observer():
    return CountingLockObserver()


@pytest.fixture
def seeded_tokens():
    """Deterministic token generator."""
    return TokenGenerator(random.Random(42))
