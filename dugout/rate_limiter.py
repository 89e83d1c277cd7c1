"""In-memory sliding-window throttling for login attempts."""

from __future__ import annotations

import asyncio
import os
import time
from collections import deque
from typing import Deque, Dict, Optional


class RateLimiter:
    """Allow at most ``limit`` hits per key within any ``window_seconds`` span.

    State lives in process memory, so each worker counts separately.
    """

    def __init__(self, *, limit: int, window_seconds: float) -> None:
        if limit <= 0 or window_seconds <= 0:
            raise ValueError("limit and window_seconds must be positive")
        self.limit = limit
        self.window = window_seconds
        self._lock = asyncio.Lock()
        self._hits: Dict[str, Deque[float]] = {}
        self._last_sweep = time.monotonic()

    def _prune(self, key: str, now: float) -> Optional[Deque[float]]:
        recent = self._hits.get(key)
        if recent is None:
            return None
        while recent and now - recent[0] >= self.window:
            recent.popleft()
        if not recent:
            del self._hits[key]
            return None
        return recent

    def _sweep(self, now: float) -> None:
        # keys that are never retried would otherwise stay forever
        if now - self._last_sweep < self.window:
            return
        for key in list(self._hits):
            self._prune(key, now)
        self._last_sweep = now

    async def try_acquire(self, key: str) -> bool:
        """Record a hit for ``key`` and report whether it fits in the window."""
        now = time.monotonic()
        async with self._lock:
            self._sweep(now)
            recent = self._prune(key, now)
            if recent is None:
                recent = self._hits[key] = deque()
            if len(recent) >= self.limit:
                return False
            recent.append(now)
        return True

    def tracked_keys(self) -> int:
        return len(self._hits)

    async def reset(self, key: str) -> None:
        async with self._lock:
            self._hits.pop(key, None)


_login_limiter: Optional[RateLimiter] = None


def get_login_rate_limiter() -> Optional[RateLimiter]:
    """Shared limiter for ``POST /auth/login``; None when LOGIN_RATE_LIMIT is 0."""

    global _login_limiter
    if _login_limiter is None:
        try:
            limit = int(os.getenv("LOGIN_RATE_LIMIT", "10"))
            window = float(os.getenv("LOGIN_RATE_WINDOW", "900"))
        except ValueError:
            limit, window = 10, 900.0
        if limit <= 0:
            return None
        _login_limiter = RateLimiter(limit=limit, window_seconds=window)
    return _login_limiter


__all__ = ["RateLimiter", "get_login_rate_limiter"]
