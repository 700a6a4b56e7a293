from __future__ import annotations

import asyncio
import math
import time
from dataclasses import dataclass
from typing import Callable

from usg_api.core.constants import (
    ADMIN_RATE_LIMIT,
    AUTH_RATE_LIMIT,
    FEEDBACK_RATE_LIMIT,
    GENERAL_RATE_LIMIT,
    MAX_TRACKED_CLIENTS,
)
from usg_api.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RateLimitProfile:
    name: str
    max_requests: int
    window_seconds: int
    message: str
    # Requests answered below 400 are refunded.
    skip_successful: bool = False


@dataclass(frozen=True)
class AcquireResult:
    allowed: bool
    limit: int
    remaining: int
    reset_seconds: int


class FixedWindowRateLimiter:
    """Per-client fixed-window request counter.

    Each client key owns a window that starts with its first request and
    lasts ``window_seconds``.  The first ``max_requests`` requests inside a
    window are admitted; the rest are rejected until the window rolls over.
    There is no queuing.

    All timing uses :func:`time.monotonic` (overridable for tests).  The
    :meth:`acquire` method checks **and** counts inside a single lock
    acquisition.
    """

    def __init__(
        self,
        profile: RateLimitProfile,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._profile = profile
        self._clock = clock
        self._lock = asyncio.Lock()
        # client key -> (window start, request count)
        self._windows: dict[str, tuple[float, int]] = {}

    @property
    def profile(self) -> RateLimitProfile:
        return self._profile

    async def acquire(self, key: str) -> AcquireResult:
        """Count one request for *key* and report whether it is admitted."""
        async with self._lock:
            now = self._clock()
            window_seconds = self._profile.window_seconds
            limit = self._profile.max_requests

            start, count = self._windows.get(key, (now, 0))
            if now - start >= window_seconds:
                start, count = now, 0

            reset = max(int(math.ceil(window_seconds - (now - start))), 1)

            if count >= limit:
                self._windows[key] = (start, count)
                return AcquireResult(
                    allowed=False, limit=limit, remaining=0, reset_seconds=reset
                )

            count += 1
            self._windows[key] = (start, count)
            self._prune(now)
            return AcquireResult(
                allowed=True,
                limit=limit,
                remaining=limit - count,
                reset_seconds=reset,
            )

    async def release(self, key: str) -> None:
        """Give back one admitted request for *key* in its current window."""
        async with self._lock:
            entry = self._windows.get(key)
            if entry is None:
                return
            start, count = entry
            if self._clock() - start >= self._profile.window_seconds:
                return
            self._windows[key] = (start, max(count - 1, 0))

    def reset(self) -> None:
        self._windows.clear()

    def _prune(self, now: float) -> None:
        """Drop expired windows once the table grows past its cap."""
        if len(self._windows) <= MAX_TRACKED_CLIENTS:
            return
        window_seconds = self._profile.window_seconds
        expired = [k for k, (start, _) in self._windows.items() if now - start >= window_seconds]
        for key in expired:
            del self._windows[key]


# ======================================================================
# Factory
# ======================================================================


class RateLimiterFactory:
    """Creates the fixed set of request limiters used by the HTTP layer."""

    _PROFILES: dict[str, RateLimitProfile] = {
        "general": RateLimitProfile(
            name="general",
            max_requests=GENERAL_RATE_LIMIT[0],
            window_seconds=GENERAL_RATE_LIMIT[1],
            message="Too many requests, please try again later",
        ),
        "admin": RateLimitProfile(
            name="admin",
            max_requests=ADMIN_RATE_LIMIT[0],
            window_seconds=ADMIN_RATE_LIMIT[1],
            message="Too many admin requests, please slow down",
        ),
        "feedback": RateLimitProfile(
            name="feedback",
            max_requests=FEEDBACK_RATE_LIMIT[0],
            window_seconds=FEEDBACK_RATE_LIMIT[1],
            message="Too many submissions. Please wait before submitting again.",
        ),
        "auth": RateLimitProfile(
            name="auth",
            max_requests=AUTH_RATE_LIMIT[0],
            window_seconds=AUTH_RATE_LIMIT[1],
            message="Too many login attempts. Please try again later.",
            skip_successful=True,
        ),
    }

    @classmethod
    def create_all(
        cls,
        clock: Callable[[], float] = time.monotonic,
    ) -> dict[str, FixedWindowRateLimiter]:
        """Return a mapping of ``profile_name -> FixedWindowRateLimiter``."""
        limiters: dict[str, FixedWindowRateLimiter] = {}
        for name, profile in cls._PROFILES.items():
            limiters[name] = FixedWindowRateLimiter(profile, clock=clock)
            logger.info(
                "Rate limiter created for %s (%d requests / %ds)",
                name,
                profile.max_requests,
                profile.window_seconds,
            )
        return limiters
