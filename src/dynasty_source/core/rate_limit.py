"""Sliding-window rate limiter for outbound requests."""

import asyncio
import time
from collections import deque


class RateLimiter:
    """Allow at most `limit` acquisitions in any `period`-second window."""

    def __init__(self, limit: int = 5, period: float = 1.0):
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self.limit = limit
        self.period = period
        self._timestamps: deque[float] = deque()
        self._lock = asyncio.Lock()

    def _expire(self, now: float):
        while self._timestamps and now - self._timestamps[0] >= self.period:
            self._timestamps.popleft()

    async def acquire(self):
        """Wait until a request slot is free, then take it."""
        async with self._lock:
            now = time.monotonic()
            self._expire(now)

            if len(self._timestamps) >= self.limit:
                wait_time = self.period - (now - self._timestamps[0])
                if wait_time > 0:
                    await asyncio.sleep(wait_time)
                now = time.monotonic()
                self._expire(now)

            self._timestamps.append(now)

    @property
    def in_window(self) -> int:
        """Number of slots taken in the current window."""
        self._expire(time.monotonic())
        return len(self._timestamps)
