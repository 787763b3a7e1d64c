from __future__ import annotations

import asyncio

import pytest

from trade_directory.engine.rate_limiter import RateLimiter


def test_first_wait_returns_immediately(fake_clock) -> None:
    limiter = RateLimiter(2.0, clock=fake_clock, sleep=fake_clock.sleep)
    assert limiter.last_request is None

    waited = asyncio.run(limiter.wait())

    assert waited == 0.0
    assert fake_clock.sleeps == []
    assert limiter.last_request == fake_clock.now


def test_consecutive_waits_are_spaced(fake_clock) -> None:
    limiter = RateLimiter(2.0, clock=fake_clock, sleep=fake_clock.sleep)

    async def scenario() -> None:
        await limiter.wait()
        fake_clock.now += 0.5
        await limiter.wait()
        fake_clock.now += 5.0
        await limiter.wait()

    asyncio.run(scenario())

    assert fake_clock.sleeps == [pytest.approx(1.5)]


def test_concurrent_waiters_are_serialised(fake_clock) -> None:
    limiter = RateLimiter(2.0, clock=fake_clock, sleep=fake_clock.sleep)
    stamps: list[float] = []

    async def caller() -> None:
        await limiter.wait()
        stamps.append(fake_clock.now)

    async def scenario() -> None:
        await asyncio.gather(caller(), caller(), caller())

    asyncio.run(scenario())

    assert stamps == [100.0, 102.0, 104.0]
    assert fake_clock.sleeps == [2.0, 2.0]


def test_reset_forgets_last_request(fake_clock) -> None:
    limiter = RateLimiter(2.0, clock=fake_clock, sleep=fake_clock.sleep)
    asyncio.run(limiter.wait())
    limiter.reset()
    assert asyncio.run(limiter.wait()) == 0.0


def test_negative_interval_rejected() -> None:
    with pytest.raises(ValueError):
        RateLimiter(-1)
