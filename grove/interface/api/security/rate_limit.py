"""Sliding window rate limiting.

Each bucket keeps, per client, the timestamps of the requests accepted
within its window. A request is refused once the window already holds
``max_requests`` timestamps; the client may retry when the oldest of them
leaves the window.
"""

import math
import time
from collections import deque
from collections.abc import Callable
from typing import Literal, Optional

import logfire
from fastapi import Request

from grove.config import RateLimitRule, RateLimitSettings
from grove.interface.error import RateLimitedError

RateLimitBucket = Literal["auth", "posts", "comments", "edits", "deletes", "general"]

Clock = Callable[[], float]


class SlidingWindowRateLimiter:
    """Sliding window limiter for one bucket."""

    def __init__(
        self, rule: RateLimitRule, clock: Clock = time.monotonic, prune_every: int = 100
    ) -> None:
        """Initialize limiter.

        Args:
            rule: Window length, request budget and refusal message
            clock: Seconds source, injectable for tests
            prune_every: Drop idle clients after this many checks
        """
        self.rule = rule
        self.clock = clock
        self.prune_every = prune_every
        self._requests: dict[str, deque[float]] = {}
        self._checks = 0

    def hit(self, key: str) -> Optional[int]:
        """Record a request from ``key`` if it fits the window.

        Returns:
            None when accepted, otherwise seconds until a slot frees up
        """
        now = self.clock()
        window_start = now - self.rule.window_seconds

        requests = self._requests.setdefault(key, deque())
        while requests and requests[0] <= window_start:
            requests.popleft()

        if len(requests) >= self.rule.max_requests:
            oldest = requests[0]
            return max(math.ceil(oldest + self.rule.window_seconds - now), 1)

        requests.append(now)

        self._checks += 1
        if self._checks % self.prune_every == 0:
            self.prune(now)
        return None

    def prune(self, now: Optional[float] = None) -> None:
        """Forget clients with no request inside the window."""
        now = self.clock() if now is None else now
        window_start = now - self.rule.window_seconds
        idle = [
            key
            for key, requests in self._requests.items()
            if not requests or requests[-1] <= window_start
        ]
        for key in idle:
            del self._requests[key]

    def __len__(self) -> int:
        """Number of clients currently tracked."""
        return len(self._requests)


class RateLimiterRegistry:
    """One limiter per bucket, shared by the whole app."""

    def __init__(self, settings: RateLimitSettings, clock: Clock = time.monotonic):
        self._limiters: dict[str, SlidingWindowRateLimiter] = {
            bucket: SlidingWindowRateLimiter(getattr(settings, bucket), clock=clock)
            for bucket in RateLimitSettings.model_fields
        }

    def get(self, bucket: RateLimitBucket) -> SlidingWindowRateLimiter:
        return self._limiters[bucket]

    def check(self, bucket: RateLimitBucket, key: str) -> None:
        """Count a request against ``bucket``.

        Raises:
            RateLimitedError: If the client is over the limit
        """
        limiter = self._limiters[bucket]
        retry_after = limiter.hit(key)
        if retry_after is not None:
            logfire.warn(
                "Rate limit exceeded",
                bucket=bucket,
                client=key,
                retry_after=retry_after,
            )
            raise RateLimitedError(limiter.rule.message, retry_after=retry_after)


def client_id(request: Request) -> str:
    """Identify the caller: first X-Forwarded-For entry, else the peer host."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def rate_limit(bucket: RateLimitBucket):
    """FastAPI dependency counting the request against ``bucket``."""

    async def dependency(request: Request) -> None:
        registry = await request.state.dishka_container.get(RateLimiterRegistry)
        registry.check(bucket, client_id(request))

    return dependency
