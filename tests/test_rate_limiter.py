import asyncio

import pytest

from infrastructure.api import RateLimiter, RiotRateLimiter


class FakeClock:
    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    async def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


def _acquire(limiter, times, *args):
    async def go():
        for _ in range(times):
            await limiter.acquire(*args)
    asyncio.run(go())


@pytest.fixture
def clock():
    return FakeClock()


class TestRateLimiter:

    def test_waits_once_the_window_is_full(self, clock):
        limiter = RateLimiter([(2, 1.0)], clock=clock, sleep=clock.sleep)
        _acquire(limiter, 3)
        assert clock.sleeps == [pytest.approx(1.01)]

    def test_every_window_must_have_room(self, clock):
        limiter = RateLimiter([(10, 1.0), (3, 10.0)], clock=clock, sleep=clock.sleep)
        _acquire(limiter, 4)
        assert clock.sleeps == [pytest.approx(10.01)]

    def test_block_holds_requests_back(self, clock):
        limiter = RateLimiter([(100, 1.0)], clock=clock, sleep=clock.sleep)
        limiter.block(5)
        _acquire(limiter, 1)
        assert clock.sleeps == [5.0]


class TestRiotRateLimiter:

    @pytest.fixture
    def limiter(self, clock):
        def make(name):
            return RateLimiter([(100, 1.0)], name=name, clock=clock, sleep=clock.sleep)
        return RiotRateLimiter(make("app"), {"match": make("match"), "account": make("account")})

    @pytest.mark.parametrize("limit_type, app_wait, match_wait", [
        ("method", 0.0, 3.0),
        (None, 0.0, 3.0),
        ("application", 3.0, 0.0),
        ("service", 0.0, 0.0),
    ])
    def test_retry_after_goes_to_the_limit_that_was_hit(self, limiter, clock, limit_type, app_wait, match_wait):
        limiter.penalize("match", 3.0, limit_type)
        assert limiter.app.wait_time(clock.now) == app_wait
        assert limiter.methods["match"].wait_time(clock.now) == match_wait
        assert limiter.methods["account"].wait_time(clock.now) == 0.0

    def test_unknown_method_blocks_the_application(self, limiter, clock):
        limiter.penalize("default", 2.0)
        assert limiter.app.wait_time(clock.now) == 2.0

    def test_missing_retry_after_blocks_nothing(self, limiter, clock):
        limiter.penalize("match", None, "application")
        assert limiter.app.wait_time(clock.now) == 0.0

    def test_method_limits_come_from_settings(self, clock, monkeypatch):
        monkeypatch.setattr("infrastructure.api.rate_limiter.settings.MATCH_RATE_LIMIT_PER_10_SEC", 1)
        limiter = RiotRateLimiter.from_settings(clock=clock, sleep=clock.sleep)
        _acquire(limiter, 2, "match")
        assert clock.sleeps == [pytest.approx(10.01)]
        _acquire(limiter, 1, "account")
        assert len(clock.sleeps) == 1
