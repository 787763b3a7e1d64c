"""Minimum-spacing limiter shared by every outbound fetch."""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable

import structlog

Clock = Callable[[], float]
Sleeper = Callable[[float], Awaitable[None]]


class RateLimiter:
    """Enforce a minimum interval between consecutive ``wait()`` returns.

    The limiter starts in the "never fetched" state, so the first call returns
    immediately. The timestamp is read and updated under an ``asyncio.Lock``;
    concurrent callers are served in arrival order and each one observes the
    spacing relative to the caller before it.
    """

    def __init__(
        self,
        min_interval: float = 2.0,
        *,
        clock: Clock = time.monotonic,
        sleep: Sleeper = asyncio.sleep,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        if min_interval < 0:
            raise ValueError("min_interval must be non-negative")
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_request: float | None = None
        self._lock = asyncio.Lock()
        self.logger = logger or structlog.get_logger("trade_directory.rate_limiter")

    @property
    def last_request(self) -> float | None:
        return self._last_request

    async def wait(self) -> float:
        """Suspend until the interval has elapsed; return the seconds waited."""

        async with self._lock:
            waited = 0.0
            if self._last_request is not None:
                remaining = self.min_interval - (self._clock() - self._last_request)
                if remaining > 0:
                    self.logger.debug("rate_limit_wait", wait_seconds=round(remaining, 3))
                    await self._sleep(remaining)
                    waited = remaining
            self._last_request = self._clock()
            return waited

    def reset(self) -> None:
        self._last_request = None


__all__ = ["RateLimiter"]
