"""Tests for exception formatting"""

from redislock.core.exceptions import (
    AcquireTimeoutError,
    ConfigurationError,
    LockStoreError,
    RedisLockError,
    UnexpectedReplyError,
)


class TestExceptions:
    """Test exception messages and hierarchy"""

    def test_base_error_with_and_without_details(self):
        assert str(RedisLockError("failed")) == "failed"
        assert str(RedisLockError("failed", details="why")) == "failed: why"

    def test_all_errors_share_base(self):
        for cls in (ConfigurationError, LockStoreError, UnexpectedReplyError, AcquireTimeoutError):
            assert issubclass(cls, RedisLockError)

    def test_configuration_error_keeps_field(self):
        error = ConfigurationError("bad lease", field="lease_seconds", details="got -1")
        assert error.field == "lease_seconds"
        assert str(error) == "bad lease: got -1"

    def test_store_error_message_parts(self):
        error = LockStoreError("Error acquiring lock", key="lock:a", operation="acquire", details="refused")
        assert str(error) == "Error acquiring lock - during acquire - key=lock:a - refused"

    def test_unexpected_reply_carries_reply(self):
        error = UnexpectedReplyError("lock:a", "acquire", 42)
        assert error.reply == 42
        assert str(error) == "Unknown reply during acquire for lock:a: 42"

    def test_timeout_message(self):
        cause = LockStoreError("Error acquiring lock", operation="acquire")
        error = AcquireTimeoutError("lock:a", 0.25, attempts=4, last_error=cause)

        assert str(error).startswith("Can't acquire lock within 0.250s")
        assert "4 attempt(s)" in str(error)
        assert "last store error" in str(error)
        assert error.last_error is cause
