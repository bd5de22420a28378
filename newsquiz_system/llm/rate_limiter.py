"""Rate limiting primitives for text-generation backend calls."""

import asyncio
import time
from typing import Optional

from loguru import logger


class TokenBucket:
    """
    Token bucket algorithm implementation for rate limiting.

    Tokens refill continuously at a fixed rate. Requests consume tokens.
    If insufficient tokens are available, the caller waits.

    Attributes:
        capacity: Maximum number of tokens the bucket can hold
        refill_rate: Tokens added per second
        tokens: Current number of tokens available
        last_refill: Monotonic timestamp of last token refill
    """

    def __init__(self, capacity: int, refill_rate: float):
        """
        Initialize token bucket with capacity and refill rate.

        Args:
            capacity: Maximum tokens (e.g., 15 for 15 RPM)
            refill_rate: Tokens per second (e.g., 0.25 = 15 per minute)
        """
        self.capacity = capacity
        self.refill_rate = refill_rate
        self.tokens = float(capacity)
        self.last_refill = time.monotonic()

        logger.debug(
            f"TokenBucket initialized: capacity={capacity}, "
            f"refill_rate={refill_rate}/s"
        )

    def _refill(self) -> None:
        now = time.monotonic()
        elapsed = now - self.last_refill
        self.tokens = min(self.capacity, self.tokens + elapsed * self.refill_rate)
        self.last_refill = now

    def try_acquire(self, tokens: int = 1) -> bool:
        """
        Attempt to take tokens without waiting.

        Returns:
            True if tokens were acquired, False if insufficient tokens available
        """
        self._refill()
        if self.tokens >= tokens:
            self.tokens -= tokens
            return True
        return False

    def wait_time(self, tokens: int = 1) -> float:
        """Seconds until ``tokens`` will be available."""
        self._refill()
        missing = tokens - self.tokens
        if missing <= 0:
            return 0.0
        return missing / self.refill_rate

    async def acquire(self, tokens: int = 1) -> None:
        """Wait until tokens are available, then take them."""
        while not self.try_acquire(tokens):
            delay = self.wait_time(tokens)
            logger.debug(f"Insufficient tokens, waiting {delay:.2f}s")
            await asyncio.sleep(delay)


class CallPacer:
    """
    Spaces consecutive backend calls by a minimum interval.

    An optional requests-per-minute bucket adds a second ceiling for
    backends with per-minute quotas. The pacer is owned by the pipeline
    orchestrator and shared by every stage it sequences, so pacing is
    enforced across fact extraction and claim synthesis alike.

    Attributes:
        min_interval: Minimum seconds between the start of two calls
        calls: Number of calls paced so far
    """

    def __init__(self, min_interval: float = 1.0, max_rpm: Optional[int] = None):
        """
        Initialize pacer.

        Args:
            min_interval: Minimum seconds between consecutive calls
            max_rpm: Optional requests-per-minute ceiling
        """
        self.min_interval = max(0.0, min_interval)
        self.rpm_bucket = TokenBucket(capacity=max_rpm, refill_rate=max_rpm / 60.0) if max_rpm else None
        self.calls = 0
        self._last_call: Optional[float] = None

    async def wait(self) -> None:
        """Block until the next call is allowed, then record it."""
        if self._last_call is not None:
            remaining = self.min_interval - (time.monotonic() - self._last_call)
            if remaining > 0:
                await asyncio.sleep(remaining)

        if self.rpm_bucket is not None:
            await self.rpm_bucket.acquire()

        self._last_call = time.monotonic()
        self.calls += 1
