"""Tests for TokenBucket and CallPacer."""

from unittest.mock import AsyncMock, patch

import pytest

from newsquiz_system.llm.rate_limiter import CallPacer, TokenBucket


class TestTokenBucket:
    """Tests for token accounting."""

    def test_starts_full(self):
        bucket = TokenBucket(capacity=3, refill_rate=0.01)

        assert bucket.try_acquire()
        assert bucket.try_acquire()
        assert bucket.try_acquire()
        assert not bucket.try_acquire()

    def test_wait_time_when_empty(self):
        bucket = TokenBucket(capacity=1, refill_rate=0.5)
        bucket.try_acquire()

        wait = bucket.wait_time()
        assert 0 < wait <= 2.0

    def test_wait_time_zero_when_available(self):
        bucket = TokenBucket(capacity=2, refill_rate=1.0)
        assert bucket.wait_time() == 0.0

    @pytest.mark.asyncio
    async def test_acquire_with_tokens_available(self):
        bucket = TokenBucket(capacity=2, refill_rate=0.01)

        await bucket.acquire()

        assert bucket.tokens < 2


class TestCallPacer:
    """Tests for minimum-interval pacing."""

    @pytest.mark.asyncio
    async def test_first_call_not_delayed(self):
        pacer = CallPacer(min_interval=5.0)

        with patch("newsquiz_system.llm.rate_limiter.asyncio.sleep", new=AsyncMock()) as sleep:
            await pacer.wait()

        sleep.assert_not_awaited()
        assert pacer.calls == 1

    @pytest.mark.asyncio
    async def test_second_call_waits_for_interval(self):
        pacer = CallPacer(min_interval=5.0)

        with patch("newsquiz_system.llm.rate_limiter.asyncio.sleep", new=AsyncMock()) as sleep:
            await pacer.wait()
            await pacer.wait()

        sleep.assert_awaited_once()
        delay = sleep.await_args.args[0]
        assert 4.0 < delay <= 5.0
        assert pacer.calls == 2

    @pytest.mark.asyncio
    async def test_zero_interval_never_sleeps(self):
        pacer = CallPacer(min_interval=0)

        with patch("newsquiz_system.llm.rate_limiter.asyncio.sleep", new=AsyncMock()) as sleep:
            for _ in range(3):
                await pacer.wait()

        sleep.assert_not_awaited()
        assert pacer.calls == 3

    def test_rpm_bucket_optional(self):
        assert CallPacer(min_interval=0).rpm_bucket is None
        assert CallPacer(min_interval=0, max_rpm=15).rpm_bucket.capacity == 15
