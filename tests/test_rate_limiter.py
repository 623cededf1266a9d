import pytest

import src.utils.rate_limiter as rate_limiter_mod
from src.utils.rate_limiter import RateLimiter

from conftest import FakeClock


@pytest.mark.asyncio
async def test_requests_under_limit_do_not_wait(monkeypatch):
    sleeps = []

    async def fake_sleep(seconds):
        sleeps.append(seconds)

    monkeypatch.setattr(rate_limiter_mod.asyncio, "sleep", fake_sleep)
    limiter = RateLimiter(3, clock=FakeClock(0.0))

    for _ in range(3):
        await limiter.wait_if_needed()

    assert sleeps == []
    assert limiter.get_stats()["requests_in_last_minute"] == 3


@pytest.mark.asyncio
async def test_request_over_limit_waits_for_window(monkeypatch):
    clock = FakeClock(0.0)
    sleeps = []

    async def fake_sleep(seconds):
        sleeps.append(seconds)
        clock.advance(seconds)

    monkeypatch.setattr(rate_limiter_mod.asyncio, "sleep", fake_sleep)
    limiter = RateLimiter(2, clock=clock)

    await limiter.wait_if_needed()
    clock.advance(10)
    await limiter.wait_if_needed()
    await limiter.wait_if_needed()

    assert len(sleeps) == 1
    assert sleeps[0] == pytest.approx(50.1)
    assert limiter.get_stats()["requests_in_last_minute"] == 2
