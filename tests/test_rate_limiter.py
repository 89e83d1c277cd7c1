import asyncio

import pytest

from dugout.rate_limiter import RateLimiter


def test_rate_limiter_enforces_limit():
    async def _run():
        limiter = RateLimiter(limit=2, window_seconds=10)
        assert await limiter.try_acquire("10.0.0.1:coach@bulldogs.edu")
        assert await limiter.try_acquire("10.0.0.1:coach@bulldogs.edu")
        assert not await limiter.try_acquire("10.0.0.1:coach@bulldogs.edu")
        # other keys have their own budget
        assert await limiter.try_acquire("10.0.0.2:coach@bulldogs.edu")

    asyncio.run(_run())


def test_reset_clears_history():
    async def _run():
        limiter = RateLimiter(limit=1, window_seconds=10)
        assert await limiter.try_acquire("key")
        await limiter.reset("key")
        assert await limiter.try_acquire("key")

    asyncio.run(_run())


def test_window_expiry(monkeypatch):
    async def _run():
        clock = [100.0]
        monkeypatch.setattr("dugout.rate_limiter.time.monotonic", lambda: clock[0])
        limiter = RateLimiter(limit=1, window_seconds=5)
        assert await limiter.try_acquire("key")
        assert not await limiter.try_acquire("key")
        clock[0] += 5.5
        assert await limiter.try_acquire("key")

    asyncio.run(_run())


def test_invalid_configuration():
    with pytest.raises(ValueError):
        RateLimiter(limit=0, window_seconds=1)


def test_expired_keys_are_dropped(monkeypatch):
    async def _run():
        clock = [100.0]
        monkeypatch.setattr("dugout.rate_limiter.time.monotonic", lambda: clock[0])
        limiter = RateLimiter(limit=3, window_seconds=5)
        for n in range(50):
            assert await limiter.try_acquire(f"10.0.0.1:walkup{n}@bulldogs.edu")
        assert limiter.tracked_keys() == 50

        clock[0] += 6
        assert await limiter.try_acquire("10.0.0.1:coach@bulldogs.edu")
        assert limiter.tracked_keys() == 1

    asyncio.run(_run())
