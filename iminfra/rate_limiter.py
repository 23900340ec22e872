"""A thread-safe token bucket rate limiter."""

from __future__ import annotations

import threading
import time


def _now_ms() -> float:
    return time.monotonic_ns() / 1_000_000


class TokenBucketRateLimiter:
    """Token bucket refilled at ``rate`` tokens per second, capped at ``burst``."""

    def __init__(self, rate: float = 1.0, burst: float = 1.0) -> None:
        self._lock = threading.Lock()
        self._rate = rate
        self._burst = max(1.0, burst)
        self._tokens = self._burst
        self._last_refill_ms = _now_ms()

    def allow(self, tokens: float = 1.0) -> bool:
        """Take ``tokens`` from the bucket if enough are available."""
        with self._lock:
            self._refill()
            if self._tokens < tokens:
                return False
            self._tokens -= tokens
            return True

    def reset(self, rate: float, burst: float) -> None:
        """Apply new settings and fill the bucket."""
        with self._lock:
            self._rate = rate
            self._burst = max(1.0, burst)
            self._tokens = self._burst
            self._last_refill_ms = _now_ms()

    def _refill(self) -> None:
        now_ms = _now_ms()
        delta_ms = now_ms - self._last_refill_ms
        self._last_refill_ms = now_ms
        if delta_ms <= 0 or self._rate <= 0:
            return
        self._tokens = min(self._burst, self._tokens + delta_ms * (self._rate / 1000.0))