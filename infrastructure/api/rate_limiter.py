"""Client-side throttling for Riot's application and method rate limits."""
import asyncio
import logging
import time
from collections import deque
from typing import Awaitable, Callable, Deque, Dict, List, Optional, Sequence, Tuple

from config import settings

logger = logging.getLogger(__name__)

# (max requests, window seconds)
Window = Tuple[int, float]
Clock = Callable[[], float]
Sleep = Callable[[float], Awaitable[None]]


class RateLimiter:
    """
    Sliding-window limiter over one or more windows.

    A request is admitted only when every window has room. ``block()`` holds
    all callers back until a server-imposed Retry-After has passed.
    """

    def __init__(
        self,
        windows: Sequence[Window],
        name: str = "app",
        clock: Clock = time.monotonic,
        sleep: Sleep = asyncio.sleep,
    ):
        self.name = name
        self.windows = tuple(windows)
        self._times: List[Deque[float]] = [deque() for _ in self.windows]
        self._blocked_until = 0.0
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()

    def wait_time(self, now: float) -> float:
        """Seconds until one more request fits; 0 when it fits now."""
        wait = max(0.0, self._blocked_until - now)
        for (limit, seconds), times in zip(self.windows, self._times):
            while times and now - times[0] >= seconds:
                times.popleft()
            if times and len(times) >= limit:
                wait = max(wait, seconds - (now - times[0]) + 0.01)
        return wait

    async def acquire(self) -> None:
        async with self._lock:
            while True:
                now = self._clock()
                wait = self.wait_time(now)
                if wait <= 0:
                    for times in self._times:
                        times.append(now)
                    return
                logger.debug(f"{self.name} limit - waiting {wait:.2f}s")
                await self._sleep(wait)

    def block(self, seconds: float) -> None:
        self._blocked_until = max(self._blocked_until, self._clock() + seconds)


class RiotRateLimiter:
    """
    Riot enforces an application limit shared by every call and a method
    limit per endpoint family. A request waits for both.
    """

    def __init__(self, app: RateLimiter, methods: Optional[Dict[str, RateLimiter]] = None):
        self.app = app
        self.methods = dict(methods or {})

    @classmethod
    def from_settings(cls, clock: Clock = time.monotonic, sleep: Sleep = asyncio.sleep) -> 'RiotRateLimiter':
        def limiter(name: str, *windows: Window) -> RateLimiter:
            return RateLimiter(windows, name=name, clock=clock, sleep=sleep)

        return cls(
            app=limiter(
                "app",
                (settings.RATE_LIMIT_PER_1_SEC, 1.0),
                (settings.RATE_LIMIT_PER_2_MIN, 120.0),
            ),
            methods={
                "account": limiter("account", (settings.ACCOUNT_RATE_LIMIT_PER_MIN, 60.0)),
                "summoner": limiter("summoner", (settings.SUMMONER_RATE_LIMIT_PER_MIN, 60.0)),
                "match": limiter("match", (settings.MATCH_RATE_LIMIT_PER_10_SEC, 10.0)),
            },
        )

    async def acquire(self, method: str) -> None:
        limiter = self.methods.get(method)
        if limiter is not None:
            await limiter.acquire()
        await self.app.acquire()

    def penalize(self, method: str, retry_after_s: Optional[float], limit_type: Optional[str] = None) -> None:
        """Apply a 429's Retry-After to the limit Riot says was hit.

        ``limit_type`` is the ``X-Rate-Limit-Type`` header: ``application``,
        ``method`` or ``service``. Service limits are Riot-side load and
        block nothing here.
        """
        if not retry_after_s:
            return
        kind = (limit_type or "").lower()
        if kind == "service":
            return
        if kind == "application" or method not in self.methods:
            self.app.block(retry_after_s)
        else:
            self.methods[method].block(retry_after_s)
